from uuid import uuid4
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from airsense.core.config import get_settings
from airsense.core.security import create_access_token, create_guest_token, hash_password, verify_password
from airsense.repositories.account_repo import create_account, get_account_by_email, touch_last_login
from airsense.repositories.profile_repo import ProfileStore
from airsense.schemas.account_schema import AuthResponse, LoginRequest, MeResponse, SignupRequest, TempLoginRequest
from airsense.schemas.profile_schema import CurrentUser, UserOut, UserProfile

GUEST_ID_PREFIX = "guest-"

TEMPLATE_USER = {
    "name": "Guest",
    "email": "guest@example.com",
    "healthData": {"sensitivity": "medium", "conditions": []},
    "preferences": {"alertsEnabled": True, "alertThreshold": "unhealthy_sensitive"},
}


def new_guest_user(**fields) -> dict:
    # Every guest gets its own id so stored profile edits stay with one token holder.
    return {**TEMPLATE_USER, "id": f"{GUEST_ID_PREFIX}{uuid4().hex}", **fields}


def _user_out(user_id: str, name: str, email: str, profile: UserProfile) -> UserOut:
    return UserOut(
        id=user_id,
        name=profile.name or name,
        email=email,
        health_data=profile.health_data,
        preferences=profile.preferences,
    )


def _stateless_response(message: str, user: dict) -> AuthResponse:
    token = create_guest_token(user)
    profile = UserProfile.model_validate(user)
    return AuthResponse(message=message, token=token, user=_user_out(user["id"], user["name"], user["email"], profile))


def _require_db(db: Session | None) -> Session:
    if db is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Account database is not configured")
    return db


def signup(db: Session | None, store: ProfileStore, data: SignupRequest) -> AuthResponse:
    if not get_settings().use_db:
        user = new_guest_user(name=data.name, email=data.email)
        return _stateless_response("Temp signup successful (stateless)", user)

    db = _require_db(db)
    if get_account_by_email(db, data.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists with this email")

    account = create_account(db, data.name, data.email, hash_password(data.password))
    user_id = str(account.account_id)
    stored = store.upsert_profile(user_id, UserProfile(name=account.name).model_dump(mode="json", by_alias=True))
    token = create_access_token(subject=user_id)
    profile = UserProfile.model_validate(stored)
    return AuthResponse(
        message="User created successfully",
        token=token,
        user=_user_out(user_id, account.name, account.email, profile),
    )


def login(db: Session | None, store: ProfileStore, data: LoginRequest) -> AuthResponse:
    if not get_settings().use_db:
        user = new_guest_user(email=data.email)
        return _stateless_response("Temp login successful (stateless)", user)

    db = _require_db(db)
    account = get_account_by_email(db, data.email)
    if not account or not account.is_active or not verify_password(data.password, account.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    touch_last_login(db, account)
    user_id = str(account.account_id)
    profile = UserProfile.model_validate({"name": account.name, **(store.get_profile(user_id) or {})})
    return AuthResponse(
        message="Login successful",
        token=create_access_token(subject=user_id),
        user=_user_out(user_id, account.name, account.email, profile),
    )


def me(user: CurrentUser) -> MeResponse:
    return MeResponse(user=_user_out(user.id, user.name, user.email, user.profile))


def temp_login(data: TempLoginRequest | None) -> AuthResponse:
    user = new_guest_user()
    if data is not None:
        if data.name:
            user["name"] = data.name
        if data.email:
            user["email"] = data.email
        if data.health_data is not None:
            user["healthData"] = data.health_data.model_dump(mode="json", by_alias=True)
        if data.preferences is not None:
            user["preferences"] = data.preferences.model_dump(mode="json", by_alias=True)
    return _stateless_response("Temp login successful", user)


def temp_token() -> AuthResponse:
    return _stateless_response("Temp token issued", new_guest_user())
