from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session
from airsense.core.db import get_db
from airsense.core.auth import get_current_user
from airsense.controllers import auth_controller
from airsense.repositories.profile_repo import ProfileStore, get_profile_store
from airsense.schemas.account_schema import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    SignupRequest,
    TempLoginRequest,
)
from airsense.schemas.profile_schema import CurrentUser

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup_route(
    payload: SignupRequest,
    db: Session | None = Depends(get_db),
    store: ProfileStore = Depends(get_profile_store),
):
    return auth_controller.signup(db, store, payload)


@router.post("/login", response_model=AuthResponse)
def login_route(
    payload: LoginRequest,
    db: Session | None = Depends(get_db),
    store: ProfileStore = Depends(get_profile_store),
):
    return auth_controller.login(db, store, payload)


@router.get("/me", response_model=MeResponse)
def me_route(user: CurrentUser = Depends(get_current_user)):
    return auth_controller.me(user)


@router.post("/temp-login", response_model=AuthResponse)
def temp_login_route(payload: TempLoginRequest | None = Body(default=None)):
    """Stateless login that returns a guest JWT (no database required)"""
    return auth_controller.temp_login(payload)


@router.get("/temp-token", response_model=AuthResponse)
def temp_token_route():
    return auth_controller.temp_token()
