import copy
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any

from airsense.core.config import get_settings
from airsense.core.mongo import get_profiles_collection


class ProfileStore(ABC):
    # upsert_profile replaces only the top-level keys present in the patch.

    @abstractmethod
    def get_profile(self, user_id: str) -> dict[str, Any] | None:
        ...

    @abstractmethod
    def upsert_profile(self, user_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        ...

    @abstractmethod
    def delete_profile(self, user_id: str) -> None:
        ...


class MongoProfileStore(ProfileStore):
    def __init__(self, collection):
        self.collection = collection

    def get_profile(self, user_id: str) -> dict[str, Any] | None:
        return self.collection.find_one({"_id": user_id}, {"_id": 0})

    def upsert_profile(self, user_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        if patch:
            self.collection.update_one({"_id": user_id}, {"$set": patch}, upsert=True)
        return self.get_profile(user_id) or {}

    def delete_profile(self, user_id: str) -> None:
        self.collection.delete_one({"_id": user_id})


class InMemoryProfileStore(ProfileStore):
    def __init__(self):
        self._profiles: dict[str, dict[str, Any]] = {}

    def get_profile(self, user_id: str) -> dict[str, Any] | None:
        profile = self._profiles.get(user_id)
        return copy.deepcopy(profile) if profile is not None else None

    def upsert_profile(self, user_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        profile = self._profiles.setdefault(user_id, {})
        profile.update(copy.deepcopy(patch))
        return copy.deepcopy(profile)

    def delete_profile(self, user_id: str) -> None:
        self._profiles.pop(user_id, None)


@lru_cache(maxsize=1)
def _stateless_store() -> InMemoryProfileStore:
    return InMemoryProfileStore()


def get_profile_store() -> ProfileStore:
    if get_settings().use_db:
        return MongoProfileStore(get_profiles_collection())
    return _stateless_store()
