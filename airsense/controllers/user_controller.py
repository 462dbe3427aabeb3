from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from airsense.core.config import get_settings
from airsense.repositories.account_repo import delete_account as delete_account_row, get_account_by_id
from airsense.repositories.profile_repo import ProfileStore
from airsense.schemas.profile_schema import CurrentUser, ProfileUpdate, ProfileUpdateResponse, UserOut, UserProfile


def update_profile(store: ProfileStore, user: CurrentUser, data: ProfileUpdate) -> ProfileUpdateResponse:
    patch = data.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude_none=True)
    if not patch:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No profile fields to update")

    stored = store.upsert_profile(user.id, patch)
    current = user.profile.model_dump(mode="json", by_alias=True)
    profile = UserProfile.model_validate({**current, **stored})
    return ProfileUpdateResponse(
        message="Profile updated successfully",
        user=UserOut(
            id=user.id,
            name=profile.name or user.name,
            email=user.email,
            health_data=profile.health_data,
            preferences=profile.preferences,
        ),
    )


def delete_account(db: Session | None, store: ProfileStore, user: CurrentUser) -> dict[str, str]:
    store.delete_profile(user.id)
    if get_settings().use_db and db is not None and user.id.isdigit():
        account = get_account_by_id(db, int(user.id))
        if not account:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        delete_account_row(db, account)
    return {"message": "Account deleted successfully"}
