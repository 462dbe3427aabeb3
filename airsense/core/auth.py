from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.orm import Session
from jose import JWTError
from airsense.core.db import get_db
from airsense.core.security import USER_CLAIM, decode_access_token
from airsense.repositories.account_repo import get_account_by_id
from airsense.repositories.profile_repo import ProfileStore, get_profile_store
from airsense.schemas.profile_schema import CurrentUser, UserProfile

security = HTTPBearer()


def _invalid_token() -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token is not valid")


def _merge_profile(base: dict, stored: dict | None) -> UserProfile:
    return UserProfile.model_validate({**base, **(stored or {})})


def _user_from_claim(claim: dict, store: ProfileStore) -> CurrentUser:
    # Stateless tokens carry the whole guest user; stored edits take precedence.
    user_id = str(claim.get("id") or "")
    if not user_id:
        raise _invalid_token()
    base = {
        "name": claim.get("name"),
        "healthData": claim.get("healthData") or {},
        "preferences": claim.get("preferences") or {},
    }
    profile = _merge_profile(base, store.get_profile(user_id))
    return CurrentUser(
        id=user_id,
        name=profile.name or claim.get("name") or "Guest",
        email=str(claim.get("email") or ""),
        profile=profile,
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session | None = Depends(get_db),
    store: ProfileStore = Depends(get_profile_store),
) -> CurrentUser:
    token = credentials.credentials
    try:
        payload = decode_access_token(token)
    except JWTError:
        raise _invalid_token()

    claim = payload.get(USER_CLAIM)
    if isinstance(claim, dict):
        try:
            return _user_from_claim(claim, store)
        except ValidationError:
            raise _invalid_token()

    try:
        account_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise _invalid_token()

    if db is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Account database is not configured")

    account = get_account_by_id(db, account_id)
    if not account or not account.is_active:
        raise _invalid_token()

    profile = _merge_profile({"name": account.name}, store.get_profile(str(account.account_id)))
    return CurrentUser(
        id=str(account.account_id),
        name=profile.name or account.name,
        email=account.email,
        profile=profile,
    )
