"""Merge multi-parameter sensor readings into one map point per site."""

import math
from typing import Iterable, Optional

from airsense.core.aqi import category_for_aqi, color_for_aqi, compute_aqi, round_half_up
from airsense.models.enums import Parameter
from airsense.models.measurement import Bounds, LocationPoint, Measurement

PM10_PLACEHOLDER_FACTOR = 0.5
PM10_PLACEHOLDER_CAP = 200


def has_usable_value(m: Measurement) -> bool:
    return isinstance(m.value, (int, float)) and math.isfinite(m.value)


def latest_by_parameter(measurements: Iterable[Measurement]) -> dict[Parameter, Measurement]:
    """Keep the first reading seen for each parameter.

    Input is expected newest-first, so first-seen is the most recent one.
    Readings without a finite value are ignored.
    """
    latest: dict[Parameter, Measurement] = {}
    for m in measurements:
        if has_usable_value(m) and m.parameter not in latest:
            latest[m.parameter] = m
    return latest


def pm10_placeholder_aqi(pm10: Optional[float]) -> int:
    # Rough scale, not the EPA PM10 table; capped so it never reads as very unhealthy.
    if not pm10 or not math.isfinite(pm10):
        return 0
    return min(round_half_up(pm10 * PM10_PLACEHOLDER_FACTOR), PM10_PLACEHOLDER_CAP)


def site_key(m: Measurement) -> str:
    if m.site_id:
        return f"site:{m.site_id}"
    return f"{m.latitude},{m.longitude}"


def _value(entry: dict[Parameter, Measurement], parameter: Parameter) -> Optional[float]:
    m = entry.get(parameter)
    return m.value if m is not None else None


def aggregate(measurements: Iterable[Measurement]) -> list[LocationPoint]:
    groups: dict[str, list[Measurement]] = {}
    for m in measurements:
        if not m.has_coordinates or not has_usable_value(m):
            continue
        groups.setdefault(site_key(m), []).append(m)

    points = []
    for group in groups.values():
        entry = latest_by_parameter(group)
        pm25 = _value(entry, Parameter.PM25)
        pm10 = _value(entry, Parameter.PM10)

        aqi = compute_aqi(pm25).value or pm10_placeholder_aqi(pm10)

        anchor = group[0]
        points.append(
            LocationPoint(
                latitude=anchor.latitude,
                longitude=anchor.longitude,
                aqi=aqi,
                category=category_for_aqi(aqi).value,
                color=color_for_aqi(aqi),
                pm25=pm25,
                pm10=pm10,
                site_id=anchor.site_id,
            )
        )
    return points


def compute_bounds(points: Iterable) -> Optional[Bounds]:
    """North/south/east/west extremes of anything with latitude and longitude."""
    points = list(points)
    if not points:
        return None
    lats = [p.latitude for p in points]
    lngs = [p.longitude for p in points]
    return Bounds(north=max(lats), south=min(lats), east=max(lngs), west=min(lngs))
