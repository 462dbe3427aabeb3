import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_DOWN
from typing import NamedTuple, Optional

from airsense.models.enums import AqiCategory


class BreakpointRange(NamedTuple):
    c_low: float
    c_high: float
    i_low: int
    i_high: int
    category: AqiCategory


# Lookups use concentrations truncated to one decimal, which closes the gaps between ranges.
PM25_BREAKPOINTS: tuple[BreakpointRange, ...] = (
    BreakpointRange(0.0, 12.0, 0, 50, AqiCategory.GOOD),
    BreakpointRange(12.1, 35.4, 51, 100, AqiCategory.MODERATE),
    BreakpointRange(35.5, 55.4, 101, 150, AqiCategory.UNHEALTHY_SENSITIVE),
    BreakpointRange(55.5, 150.4, 151, 200, AqiCategory.UNHEALTHY),
    BreakpointRange(150.5, 250.4, 201, 300, AqiCategory.VERY_UNHEALTHY),
    BreakpointRange(250.5, 500.4, 301, 500, AqiCategory.HAZARDOUS),
)

MAX_AQI = PM25_BREAKPOINTS[-1].i_high

_DESCRIPTIONS = {
    AqiCategory.GOOD: "Air quality is satisfactory and poses little or no risk",
    AqiCategory.MODERATE: "Acceptable; some pollutants may be a concern for a few",
    AqiCategory.UNHEALTHY_SENSITIVE: "Members of sensitive groups may experience health effects",
    AqiCategory.UNHEALTHY: "Everyone may begin to experience health effects",
    AqiCategory.VERY_UNHEALTHY: "Health alert: everyone may experience more serious effects",
    AqiCategory.HAZARDOUS: "Emergency conditions. The entire population is likely to be affected",
    AqiCategory.UNKNOWN: "No data",
}

# (upper AQI bound inclusive, color)
_COLOR_BANDS = (
    (50, "#00E400"),
    (100, "#FFFF00"),
    (150, "#FF8C00"),
    (200, "#FF0000"),
    (300, "#8F3F97"),
)
_TOP_COLOR = "#7E0023"


@dataclass(frozen=True)
class AqiResult:
    value: Optional[int]
    category: AqiCategory
    description: str


UNKNOWN_AQI = AqiResult(value=None, category=AqiCategory.UNKNOWN, description=_DESCRIPTIONS[AqiCategory.UNKNOWN])


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _truncate(concentration: float) -> float:
    # str() keeps 12.1 as 12.1 instead of its binary expansion
    return float(Decimal(str(concentration)).quantize(Decimal("0.1"), rounding=ROUND_DOWN))


def _as_concentration(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        c = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(c):
        return None
    return c


def description_for_category(category: AqiCategory) -> str:
    return _DESCRIPTIONS[AqiCategory(category)]


def compute_aqi(concentration) -> AqiResult:
    """PM2.5 concentration (ug/m3) to AQI. Unknown for missing input, clamped to 0..500."""
    c = _as_concentration(concentration)
    if c is None:
        return UNKNOWN_AQI
    if c > PM25_BREAKPOINTS[-1].c_high:
        return AqiResult(value=MAX_AQI, category=AqiCategory.HAZARDOUS, description=_DESCRIPTIONS[AqiCategory.HAZARDOUS])
    c = _truncate(max(0.0, c))

    for bp in PM25_BREAKPOINTS:
        if bp.c_low <= c <= bp.c_high:
            index = round_half_up((bp.i_high - bp.i_low) / (bp.c_high - bp.c_low) * (c - bp.c_low) + bp.i_low)
            return AqiResult(value=index, category=bp.category, description=_DESCRIPTIONS[bp.category])

    return AqiResult(value=MAX_AQI, category=AqiCategory.HAZARDOUS, description=_DESCRIPTIONS[AqiCategory.HAZARDOUS])


def category_for_aqi(aqi: int) -> AqiCategory:
    for bp in PM25_BREAKPOINTS:
        if aqi <= bp.i_high:
            return bp.category
    return AqiCategory.HAZARDOUS


def color_for_aqi(aqi: int) -> str:
    for upper, color in _COLOR_BANDS:
        if aqi <= upper:
            return color
    return _TOP_COLOR


def pm25_from_aqi(aqi) -> Optional[float]:
    """Inverse of :func:`compute_aqi`, for providers that only publish the index."""
    value = _as_concentration(aqi)
    if value is None:
        return None
    if value <= 0:
        return 0.0
    for bp in PM25_BREAKPOINTS:
        if value <= bp.i_high:
            value = max(value, bp.i_low)
            c = (value - bp.i_low) * (bp.c_high - bp.c_low) / (bp.i_high - bp.i_low) + bp.c_low
            return round(c, 1)
    return PM25_BREAKPOINTS[-1].c_high
