from fastapi import APIRouter
from airsense.controllers.health_controller import read_health
from airsense.schemas.health_schema import HealthStatus

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthStatus)
def health():
    return read_health()
