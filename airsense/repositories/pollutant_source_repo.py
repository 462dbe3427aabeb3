import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from airsense.core.aqi import pm25_from_aqi
from airsense.core.config import get_settings
from airsense.core.errors import MalformedProviderResponse, UpstreamError
from airsense.models.enums import Parameter
from airsense.models.measurement import Measurement

logger = logging.getLogger(__name__)

PARAM_ALIASES = {
    "pm25": Parameter.PM25,
    "pm2.5": Parameter.PM25,
    "pm2_5": Parameter.PM25,
    "pm10": Parameter.PM10,
    "o3": Parameter.O3,
    "ozone": Parameter.O3,
    "no2": Parameter.NO2,
    "so2": Parameter.SO2,
    "co": Parameter.CO,
}

DEFAULT_UNIT = "µg/m³"


def normalize_parameter(raw: Any) -> Optional[Parameter]:
    """Parameter names arrive either as a string or as an object with a ``name``."""
    if isinstance(raw, dict):
        raw = raw.get("name")
    if not isinstance(raw, str):
        return None
    return PARAM_ALIASES.get(raw.strip().lower())


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    # NaN and Infinity parse as floats but carry no reading
    return number if math.isfinite(number) else None


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


class PollutantSource(ABC):
    """Fetches raw readings around a coordinate and normalizes them to ``Measurement``."""

    name: str = "unknown"

    def __init__(self, timeout: float = 8.0, transport: httpx.AsyncBaseTransport | None = None):
        self.timeout = timeout
        self.transport = transport

    async def _get(self, url: str, params: dict[str, Any], headers: dict[str, str] | None = None) -> Any:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                res = await client.get(url, params=params, headers=headers or {})
        except httpx.HTTPError as exc:
            logger.warning("%s request failed: %s", self.name, exc)
            raise UpstreamError(None, str(exc) or exc.__class__.__name__, source=self.name) from exc

        if not res.is_success:
            logger.warning("%s responded with HTTP %s", self.name, res.status_code)
            raise UpstreamError(res.status_code, res.text, source=self.name)

        try:
            return res.json()
        except ValueError as exc:
            raise MalformedProviderResponse("body is not JSON", source=self.name) from exc

    @abstractmethod
    async def fetch_measurements(self, lat: float, lng: float, radius_meters: int) -> list[Measurement]:
        ...


class OpenAQSource(PollutantSource):
    name = "openaq_v3"

    URL = "https://api.openaq.org/v3/measurements"
    MAX_RADIUS_METERS = 25000
    LIMIT = 50
    # pm25, pm10, o3, no2, co, so2
    PARAMETER_IDS = ("2", "3", "7", "10", "1", "6")

    def __init__(self, api_key: str | None = None, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key

    def build_params(self, lat: float, lng: float, radius_meters: int) -> dict[str, Any]:
        return {
            "coordinates": f"{lat},{lng}",
            "radius": int(_clamp(int(radius_meters), 1, self.MAX_RADIUS_METERS)),
            "limit": self.LIMIT,
            "order_by": "datetime",
            "sort": "desc",
            "parameters_id": ",".join(self.PARAMETER_IDS),
        }

    async def fetch_measurements(self, lat: float, lng: float, radius_meters: int) -> list[Measurement]:
        headers = {"X-API-Key": self.api_key} if self.api_key else {}
        payload = await self._get(self.URL, self.build_params(lat, lng, radius_meters), headers)
        if not isinstance(payload, dict):
            raise MalformedProviderResponse("expected a JSON object", source=self.name)
        results = payload.get("results", [])
        if not isinstance(results, list):
            raise MalformedProviderResponse("'results' is not a list", source=self.name)
        return [m for m in (self.parse_record(r) for r in results) if m is not None]

    @staticmethod
    def parse_record(record: Any) -> Optional[Measurement]:
        if not isinstance(record, dict):
            return None
        parameter = normalize_parameter(record.get("parameter"))
        value = _as_float(record.get("value"))
        if parameter is None or value is None:
            return None

        raw_param = record.get("parameter")
        unit = record.get("unit") or (raw_param.get("units") if isinstance(raw_param, dict) else None)

        timestamp = None
        for key in ("datetime", "date"):
            stamp = record.get(key)
            if isinstance(stamp, dict):
                timestamp = stamp.get("utc") or stamp.get("local")
            elif isinstance(stamp, str):
                timestamp = stamp
            if timestamp:
                break

        coords = record.get("coordinates") or {}
        lat = _as_float(coords.get("latitude")) if isinstance(coords, dict) else None
        lng = _as_float(coords.get("longitude")) if isinstance(coords, dict) else None

        site_id = record.get("locationId") or record.get("location_id")
        location = record.get("location")
        if site_id is None and isinstance(location, dict):
            site_id = location.get("id")

        return Measurement(
            parameter=parameter,
            value=value,
            unit=unit or DEFAULT_UNIT,
            timestamp=timestamp,
            latitude=lat,
            longitude=lng,
            site_id=str(site_id) if site_id is not None else None,
        )


class AirNowSource(PollutantSource):
    """AirNow publishes per-parameter AQI; PM2.5 is converted back to a concentration."""

    name = "airnow"

    URL = "https://www.airnowapi.org/aq/observation/latLong/current/"
    METERS_PER_MILE = 1609.344
    MAX_DISTANCE_MILES = 100

    def __init__(self, api_key: str | None = None, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key

    def build_params(self, lat: float, lng: float, radius_meters: int) -> dict[str, Any]:
        miles = round(radius_meters / self.METERS_PER_MILE)
        return {
            "format": "application/json",
            "latitude": lat,
            "longitude": lng,
            "distance": int(_clamp(miles, 1, self.MAX_DISTANCE_MILES)),
            "API_KEY": self.api_key or "",
        }

    async def fetch_measurements(self, lat: float, lng: float, radius_meters: int) -> list[Measurement]:
        if not self.api_key:
            raise UpstreamError(None, "AIRNOW_API_KEY not configured", source=self.name)
        payload = await self._get(self.URL, self.build_params(lat, lng, radius_meters))
        if not isinstance(payload, list):
            raise MalformedProviderResponse("expected a JSON array", source=self.name)
        return [m for m in (self.parse_record(r) for r in payload) if m is not None]

    @staticmethod
    def parse_record(record: Any) -> Optional[Measurement]:
        if not isinstance(record, dict):
            return None
        parameter = normalize_parameter(record.get("ParameterName"))
        index = _as_float(record.get("AQI"))
        if parameter is None or index is None or index < 0:
            return None

        if parameter == Parameter.PM25:
            value, unit = pm25_from_aqi(index), DEFAULT_UNIT
        else:
            value, unit = index, "AQI"

        timestamp = None
        if record.get("DateObserved"):
            hour = _as_float(record.get("HourObserved"))
            timestamp = str(record["DateObserved"]).strip()
            if hour is not None and hour.is_integer() and 0 <= hour <= 23:
                timestamp = f"{timestamp} {int(hour):02d}:00"
            if record.get("LocalTimeZone"):
                timestamp = f"{timestamp} {record['LocalTimeZone']}"

        return Measurement(
            parameter=parameter,
            value=value,
            unit=unit,
            timestamp=timestamp,
            latitude=_as_float(record.get("Latitude")),
            longitude=_as_float(record.get("Longitude")),
            site_id=record.get("ReportingArea"),
        )


def get_pollutant_source() -> PollutantSource:
    settings = get_settings()
    if settings.pollutant_source == "airnow":
        return AirNowSource(api_key=settings.airnow_api_key, timeout=settings.upstream_timeout_seconds)
    return OpenAQSource(api_key=settings.openaq_api_key, timeout=settings.upstream_timeout_seconds)
