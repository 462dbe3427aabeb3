from functools import lru_cache
from pymongo import MongoClient
from airsense.core.config import get_settings


@lru_cache(maxsize=1)
def _get_client() -> MongoClient:
    settings = get_settings()
    if not settings.mongo_uri:
        raise RuntimeError("MONGO_URI is not set")
    return MongoClient(settings.mongo_uri)


def get_profiles_collection():
    settings = get_settings()
    client = _get_client()
    return client[settings.mongo_db][settings.mongo_collection_profiles]
