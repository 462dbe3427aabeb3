import logging
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Optional

from airsense.core.aggregation import aggregate, compute_bounds, latest_by_parameter
from airsense.core.aqi import compute_aqi
from airsense.core.config import Settings, get_settings
from airsense.core.errors import PollutantSourceError
from airsense.models.enums import DataSource, HealthCondition, Parameter, Sensitivity
from airsense.repositories.pollutant_source_repo import DEFAULT_UNIT, PollutantSource
from airsense.repositories.sample_data_repo import load_sample_dataset
from airsense.schemas.profile_schema import CurrentUser, UserProfile

logger = logging.getLogger(__name__)

CURRENT_RADIUS_METERS = 15000
DEFAULT_MAP_RADIUS_KM = 10.0
MIN_MAP_RADIUS_KM = 1.0
MAX_MAP_RADIUS_KM = 25.0

FORECAST_MODEL = "placeholder_time_series"
FORECAST_ACCURACY = 0.75

POLLUTANT_DESCRIPTIONS = {
    Parameter.PM25: "Particulate Matter <2.5µm",
    Parameter.PM10: "Particulate Matter <10µm",
    Parameter.O3: "Ozone",
    Parameter.NO2: "Nitrogen Dioxide",
    Parameter.SO2: "Sulfur Dioxide",
    Parameter.CO: "Carbon Monoxide",
}

# No weather provider is wired in yet; the shape is fixed for the client.
PLACEHOLDER_WEATHER = {
    "temperature": 22,
    "humidity": 55,
    "wind_speed": 3.2,
    "visibility": 10,
    "uv_index": 4,
    "description": "Partly cloudy (placeholder)",
}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def resolve_coordinates(
    lat: Optional[float],
    lng: Optional[float],
    user: Optional[CurrentUser],
    settings: Settings,
) -> tuple[float, float]:
    """Query parameter, then the user's saved location, then the configured default."""
    location = user.location if user is not None else None
    if lat is None:
        lat = location.latitude if location and location.latitude is not None else settings.default_latitude
    if lng is None:
        lng = location.longitude if location and location.longitude is not None else settings.default_longitude
    return float(lat), float(lng)


def build_recommendations(profile: UserProfile, aqi_value: Optional[int]) -> list[dict[str, str]]:
    health = profile.health_data
    aqi = aqi_value or 0
    recommendations = []
    if (health.sensitivity == Sensitivity.HIGH or HealthCondition.ASTHMA in health.conditions) and aqi > 50:
        recommendations.append({
            "type": "health_warning",
            "message": "High sensitivity detected: consider limiting outdoor exposure",
            "severity": "high",
        })
    if HealthCondition.COPD in health.conditions and aqi > 100:
        recommendations.append({
            "type": "health_warning",
            "message": "COPD: Avoid outdoor activities due to poor air quality",
            "severity": "critical",
        })
    return recommendations


def _current_response(
    values: dict[Parameter, tuple[Optional[float], str]],
    timestamp: str,
    lat: float,
    lng: float,
    user: Optional[CurrentUser],
    data_source: str,
) -> dict[str, Any]:
    pm25 = values.get(Parameter.PM25, (None, DEFAULT_UNIT))[0]
    aqi = compute_aqi(pm25)
    pollutants = {}
    for parameter in Parameter:
        value, unit = values.get(parameter, (None, DEFAULT_UNIT))
        pollutants[parameter.value] = {
            "value": value,
            "unit": unit,
            "description": POLLUTANT_DESCRIPTIONS[parameter],
        }
    profile = user.profile if user is not None else UserProfile()
    return {
        "aqi": {"value": aqi.value, "category": aqi.category.value, "description": aqi.description},
        "pollutants": pollutants,
        "weather": dict(PLACEHOLDER_WEATHER),
        "timestamp": timestamp,
        "coordinates": {"latitude": lat, "longitude": lng},
        "personalized_recommendations": build_recommendations(profile, aqi.value),
        "last_updated": _now_iso(),
        "data_source": data_source,
    }


def _current_from_sample(lat: float, lng: float, user: Optional[CurrentUser], data_source: DataSource) -> dict[str, Any]:
    current = load_sample_dataset().current_data
    values = {}
    for name, reading in current.pollutants.items():
        try:
            parameter = Parameter(name)
        except ValueError:
            continue
        values[parameter] = (reading.value, reading.unit or DEFAULT_UNIT)
    return _current_response(values, current.timestamp, lat, lng, user, data_source.value)


async def get_current_reading(
    source: PollutantSource,
    user: Optional[CurrentUser],
    lat: Optional[float] = None,
    lng: Optional[float] = None,
) -> dict[str, Any]:
    lat, lng = resolve_coordinates(lat, lng, user, get_settings())
    try:
        measurements = await source.fetch_measurements(lat, lng, CURRENT_RADIUS_METERS)
    except PollutantSourceError as exc:
        logger.warning("Current reading at %s,%s falls back to sample data: %s", lat, lng, exc)
        return _current_from_sample(lat, lng, user, DataSource.SAMPLE_FALLBACK)

    latest = latest_by_parameter(measurements)
    if not latest:
        logger.warning("%s returned no usable readings at %s,%s; using sample data", source.name, lat, lng)
        return _current_from_sample(lat, lng, user, DataSource.SAMPLE_EMPTY)

    pm25 = latest.get(Parameter.PM25)
    timestamp = (pm25.timestamp if pm25 is not None else None) or _now_iso()
    values = {parameter: (m.value, m.unit) for parameter, m in latest.items()}
    logger.info("%s current reading at %s,%s with %d parameters", source.name, lat, lng, len(values))
    return _current_response(values, timestamp, lat, lng, user, source.name)


def _map_response(points: list[Any], data_source: str) -> dict[str, Any]:
    bounds = compute_bounds(points)
    return {
        "map_data": points,
        "bounds": asdict(bounds) if bounds is not None else None,
        "last_updated": _now_iso(),
        "data_source": data_source,
    }


def _map_from_sample(data_source: DataSource) -> dict[str, Any]:
    points = load_sample_dataset().map_data
    response = _map_response(points, data_source.value)
    response["map_data"] = [p.model_dump() for p in points]
    return response


def clamp_radius_km(radius_km: Optional[float]) -> float:
    if radius_km is None:
        return DEFAULT_MAP_RADIUS_KM
    return min(max(float(radius_km), MIN_MAP_RADIUS_KM), MAX_MAP_RADIUS_KM)


async def get_map_data(
    source: PollutantSource,
    user: Optional[CurrentUser],
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    radius_km: Optional[float] = None,
) -> dict[str, Any]:
    lat, lng = resolve_coordinates(lat, lng, user, get_settings())
    radius_meters = int(clamp_radius_km(radius_km) * 1000)
    try:
        measurements = await source.fetch_measurements(lat, lng, radius_meters)
    except PollutantSourceError as exc:
        logger.warning("Map data at %s,%s falls back to sample data: %s", lat, lng, exc)
        return _map_from_sample(DataSource.SAMPLE_FALLBACK)

    points = aggregate(measurements)
    if not points:
        logger.warning("%s returned no map points at %s,%s; using sample data", source.name, lat, lng)
        return _map_from_sample(DataSource.SAMPLE_EMPTY)

    logger.info("%s map data at %s,%s with %d points", source.name, lat, lng, len(points))
    response = _map_response(points, source.name)
    response["map_data"] = [asdict(p) for p in points]
    return response


def get_forecast() -> dict[str, Any]:
    sample = load_sample_dataset()
    return {
        "forecast": [item.model_dump() for item in sample.forecast],
        "model": FORECAST_MODEL,
        "accuracy": FORECAST_ACCURACY,
        "last_updated": _now_iso(),
    }


def get_alerts(user: Optional[CurrentUser]) -> dict[str, Any]:
    # Alerts are static and not filtered against live readings.
    sample = load_sample_dataset()
    profile = user.profile if user is not None else UserProfile()
    return {
        "alerts": [alert.model_dump() for alert in sample.alerts],
        "user_threshold": profile.preferences.alert_threshold.value,
        "last_checked": _now_iso(),
    }

