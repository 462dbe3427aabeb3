from fastapi import APIRouter, Depends, Query
from airsense.controllers import air_quality_controller
from airsense.core.auth import get_current_user
from airsense.repositories.pollutant_source_repo import PollutantSource, get_pollutant_source
from airsense.schemas.air_quality_schema import (
    AlertsResponse,
    CurrentReadingResponse,
    ForecastResponse,
    MapResponse,
)
from airsense.schemas.profile_schema import CurrentUser

router = APIRouter(prefix="/api/airquality", tags=["air-quality"])


@router.get("/current", response_model=CurrentReadingResponse)
async def current_reading(
    lat: float | None = Query(default=None, ge=-90, le=90),
    lng: float | None = Query(default=None, ge=-180, le=180),
    user: CurrentUser = Depends(get_current_user),
    source: PollutantSource = Depends(get_pollutant_source),
):
    return await air_quality_controller.get_current_reading(source, user, lat=lat, lng=lng)


@router.get("/forecast", response_model=ForecastResponse)
def forecast(user: CurrentUser = Depends(get_current_user)):
    return air_quality_controller.get_forecast()


@router.get("/map", response_model=MapResponse)
async def map_data(
    lat: float | None = Query(default=None, ge=-90, le=90),
    lng: float | None = Query(default=None, ge=-180, le=180),
    radius: float | None = Query(default=None, gt=0, description="Search radius in km, clamped to 1..25"),
    user: CurrentUser = Depends(get_current_user),
    source: PollutantSource = Depends(get_pollutant_source),
):
    return await air_quality_controller.get_map_data(source, user, lat=lat, lng=lng, radius_km=radius)


@router.get("/alerts", response_model=AlertsResponse)
def alerts(user: CurrentUser = Depends(get_current_user)):
    return air_quality_controller.get_alerts(user)
