from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from airsense.core.config import get_settings

settings = get_settings()

if not settings.database_url:
    # Stateless mode: routes that need accounts answer 503 until DATABASE_URL is set.
    _engine = None
    SessionLocal = None
else:
    _engine = create_engine(settings.database_url, pool_pre_ping=True)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)


def init_db():
    if _engine is not None:
        from airsense.models.base import Base
        from airsense.models import account_model  # noqa: F401

        Base.metadata.create_all(bind=_engine)


def get_db():
    if SessionLocal is None:
        yield None
        return
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
