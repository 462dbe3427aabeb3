import math
from dataclasses import dataclass
from typing import Optional

from airsense.models.enums import Parameter


@dataclass(frozen=True)
class Measurement:
    parameter: Parameter
    value: float
    unit: str
    timestamp: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    site_id: Optional[str] = None

    @property
    def has_coordinates(self) -> bool:
        return all(
            isinstance(v, (int, float)) and math.isfinite(v) for v in (self.latitude, self.longitude)
        )


@dataclass(frozen=True)
class LocationPoint:
    latitude: float
    longitude: float
    aqi: int
    category: str
    color: str
    pm25: Optional[float] = None
    pm10: Optional[float] = None
    site_id: Optional[str] = None


@dataclass(frozen=True)
class Bounds:
    north: float
    south: float
    east: float
    west: float
