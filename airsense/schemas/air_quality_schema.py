from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AqiOut(CamelModel):
    value: Optional[int] = None
    category: str
    description: str


class PollutantReading(CamelModel):
    value: Optional[float] = None
    unit: str
    description: str


class Weather(CamelModel):
    temperature: float
    humidity: float
    wind_speed: float
    visibility: float
    uv_index: float
    description: str


class Recommendation(CamelModel):
    type: str
    message: str
    severity: str


class Coordinates(CamelModel):
    latitude: float
    longitude: float


class CurrentReadingResponse(CamelModel):
    aqi: AqiOut
    pollutants: dict[str, PollutantReading]
    weather: Weather
    timestamp: str
    coordinates: Coordinates
    personalized_recommendations: list[Recommendation] = []
    last_updated: str
    data_source: str


class MapPoint(CamelModel):
    latitude: float
    longitude: float
    aqi: int
    category: str
    color: str
    pm25: Optional[float] = None
    pm10: Optional[float] = None
    site_id: Optional[str] = None
    name: Optional[str] = None


class BoundsOut(CamelModel):
    north: float
    south: float
    east: float
    west: float


class MapResponse(CamelModel):
    map_data: list[MapPoint]
    bounds: Optional[BoundsOut] = None
    last_updated: str
    data_source: str


class ForecastAqi(CamelModel):
    value: int
    category: str


class ForecastItem(CamelModel):
    timestamp: str
    aqi: ForecastAqi
    pm25: Optional[float] = None
    confidence: float


class ForecastResponse(CamelModel):
    forecast: list[ForecastItem]
    model: str
    accuracy: float
    last_updated: str


class Alert(CamelModel):
    id: str
    type: str
    severity: str
    title: str
    message: str
    recommendations: list[str] = []
    timestamp: Optional[str] = None


class AlertsResponse(CamelModel):
    alerts: list[Alert]
    user_threshold: str
    last_checked: str


class SamplePollutant(CamelModel):
    value: Optional[float] = None
    unit: Optional[str] = None


class SampleCurrentData(CamelModel):
    timestamp: str
    location: Optional[dict] = None
    pollutants: dict[str, SamplePollutant]


class SampleDataset(CamelModel):
    version: Optional[str] = None
    current_data: SampleCurrentData
    forecast: list[ForecastItem]
    map_data: list[MapPoint]
    alerts: list[Alert]
