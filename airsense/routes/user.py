from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from airsense.core.db import get_db
from airsense.core.auth import get_current_user
from airsense.controllers import user_controller
from airsense.repositories.profile_repo import ProfileStore, get_profile_store
from airsense.schemas.profile_schema import CurrentUser, ProfileUpdate, ProfileUpdateResponse

router = APIRouter(prefix="/api/user", tags=["user"])


@router.put("/profile", response_model=ProfileUpdateResponse)
def update_profile_route(
    payload: ProfileUpdate,
    user: CurrentUser = Depends(get_current_user),
    store: ProfileStore = Depends(get_profile_store),
):
    return user_controller.update_profile(store, user, payload)


@router.delete("/account")
def delete_account_route(
    user: CurrentUser = Depends(get_current_user),
    db: Session | None = Depends(get_db),
    store: ProfileStore = Depends(get_profile_store),
):
    return user_controller.delete_account(db, store, user)
