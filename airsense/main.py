import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from airsense.core.config import get_settings
from airsense.core.db import init_db
from airsense.routes.health import router as health_router
from airsense.routes.auth import router as auth_router
from airsense.routes.air_quality import router as air_quality_router
from airsense.routes.user import router as user_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.use_db:
        init_db()
        logger.info("Database mode enabled")
    else:
        logger.info("Database is disabled (USE_DB=false). Running in stateless mode.")
    logger.info("Pollutant source: %s", settings.pollutant_source)
    yield


app = FastAPI(title="AirSense API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.frontend_origins,
    allow_origin_regex=r"^http://(localhost|127\.0\.0\.1)(:\d+)?$" if settings.environment != "production" else None,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(air_quality_router)
app.include_router(user_router)
