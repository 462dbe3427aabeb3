from pydantic import BaseModel
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

DEFAULT_SAMPLE_DATA_PATH = str(Path(__file__).resolve().parent.parent / "data" / "air_quality_sample.json")


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() not in {"", "0", "false", "no", "off"}


class Settings(BaseModel):
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 7 * 24 * 60
    use_db: bool = False
    database_url: str = ""
    mongo_uri: str | None = None
    mongo_db: str = "airsense"
    mongo_collection_profiles: str = "profiles"
    pollutant_source: str = "openaq"
    openaq_api_key: str | None = None
    airnow_api_key: str | None = None
    upstream_timeout_seconds: float = 8.0
    default_latitude: float = 40.7128
    default_longitude: float = -74.0060
    sample_data_path: str = DEFAULT_SAMPLE_DATA_PATH
    frontend_origins: list[str] = ["http://localhost:3000"]
    environment: str = "development"
    log_level: str = "INFO"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        jwt_secret_key = os.getenv("JWT_SECRET_KEY", "")
        if not jwt_secret_key:
            raise RuntimeError("JWT_SECRET_KEY is not set")
        origins = os.getenv("FRONTEND_ORIGINS", "http://localhost:3000")
        _settings = Settings(
            jwt_secret_key=jwt_secret_key,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            jwt_expires_minutes=int(os.getenv("JWT_EXPIRES_MINUTES", str(7 * 24 * 60))),
            use_db=_env_bool("USE_DB"),
            database_url=os.getenv("DATABASE_URL", ""),
            mongo_uri=os.getenv("MONGO_URI"),
            mongo_db=os.getenv("MONGO_DB", "airsense"),
            mongo_collection_profiles=os.getenv("MONGO_COLLECTION_PROFILES", "profiles"),
            pollutant_source=os.getenv("POLLUTANT_SOURCE", "openaq").strip().lower(),
            openaq_api_key=os.getenv("OPENAQ_API_KEY"),
            airnow_api_key=os.getenv("AIRNOW_API_KEY"),
            upstream_timeout_seconds=float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "8")),
            default_latitude=float(os.getenv("DEFAULT_LATITUDE", "40.7128")),
            default_longitude=float(os.getenv("DEFAULT_LONGITUDE", "-74.0060")),
            sample_data_path=os.getenv("SAMPLE_DATA_PATH", DEFAULT_SAMPLE_DATA_PATH),
            frontend_origins=[o.strip() for o in origins.split(",") if o.strip()],
            environment=os.getenv("ENVIRONMENT", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
    return _settings
