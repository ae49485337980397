"""Segment speed model.

Converts a single path segment (distance, free-flow duration) plus the query
time and weather into a predicted speed, a delay against the calibrated
baseline and a severity color.
"""

from __future__ import annotations

import hashlib
from datetime import datetime, timedelta
from typing import Optional

from routecast.domain.constants import (
    CALIBRATION_SECONDS_PER_METER,
    COLOR_DANGER,
    COLOR_NEUTRAL,
    COLOR_PRIMARY,
    COLOR_WARNING,
)
from routecast.domain.enums import RoadType, WeatherTier
from routecast.domain.models import SegmentMetrics, Weather
from routecast.planner.time_profile import time_traffic_factor, transition_multiplier

HIGHWAY_MIN_KMH = 80.0
MAIN_MIN_KMH = 50.0
LOCAL_MIN_KMH = 30.0

MIN_CONGESTION_REDUCTION = 0.05
DEGENERATE_SPEED = 0.1
INCIDENT_MIN_DISTANCE_M = 500.0

_SENSITIVITY = {
    RoadType.HIGHWAY: 0.4,
    RoadType.MAIN: 0.6,
    RoadType.LOCAL: 0.7,
    RoadType.NARROW: 0.7,
}

# Speed multiplier per weather tier (clear, drizzle, rain, storm).
_WEATHER_IMPACT = {
    RoadType.HIGHWAY: (1.0, 0.95, 0.85, 0.70),
    RoadType.MAIN: (1.0, 0.90, 0.80, 0.60),
    RoadType.LOCAL: (1.0, 0.90, 0.75, 0.50),
    RoadType.NARROW: (1.0, 0.85, 0.65, 0.40),
}

_FLOOR_SPEED_KMH = {
    RoadType.HIGHWAY: 20.0,
    RoadType.MAIN: 10.0,
    RoadType.LOCAL: 5.0,
    RoadType.NARROW: 5.0,
}

BOTTLENECK_PROBABILITY = 0.05
BOTTLENECK_SPEED_FACTOR = 0.6
ACCIDENT_PROBABILITY = 0.02
ACCIDENT_SPEED_FACTOR = 0.3
ACCIDENT_MIN_TIME_FACTOR = 0.6

BOTTLENECK_LABEL = "Bottleneck Delay"
ACCIDENT_LABEL = "Accident Reported"


def classify_road(speed_kmh: float) -> RoadType:
    if speed_kmh >= HIGHWAY_MIN_KMH:
        return RoadType.HIGHWAY
    if speed_kmh >= MAIN_MIN_KMH:
        return RoadType.MAIN
    if speed_kmh >= LOCAL_MIN_KMH:
        return RoadType.LOCAL
    return RoadType.NARROW


def floor_speed(road_type: RoadType) -> float:
    return _FLOOR_SPEED_KMH[road_type]


def weather_tier(weather: Optional[Weather]) -> WeatherTier:
    if weather is None:
        return WeatherTier.CLEAR
    if weather.code >= 95:
        return WeatherTier.STORM
    if weather.code >= 61 or weather.rain > 2.0:
        return WeatherTier.RAIN
    if weather.code >= 51 or weather.rain > 0.5:
        return WeatherTier.DRIZZLE
    return WeatherTier.CLEAR


def weather_impact(weather: Optional[Weather], road_type: RoadType) -> float:
    return _WEATHER_IMPACT[road_type][weather_tier(weather)]


def incident_roll(offset_minutes: float, distance_m: float) -> float:
    """Deterministic pseudo-random value in [0, 1) keyed on (offset, distance)."""
    key = f"{int(offset_minutes)}:{float(distance_m):.1f}"
    digest = hashlib.md5(key.encode("utf-8")).hexdigest()
    return int(digest[:8], 16) / 0x100000000


def calibrated_duration(distance_m: float) -> float:
    return max(0.0, distance_m) * CALIBRATION_SECONDS_PER_METER


def severity_color(predicted_speed: float, base_speed: float) -> str:
    if base_speed <= 0:
        return COLOR_PRIMARY
    ratio = predicted_speed / base_speed
    if ratio < 0.5:
        return COLOR_DANGER
    if ratio < 0.8:
        return COLOR_WARNING
    return COLOR_PRIMARY


def _degenerate(distance_m: float) -> SegmentMetrics:
    baseline = calibrated_duration(distance_m)
    return SegmentMetrics(
        predicted_speed=DEGENERATE_SPEED,
        base_speed=0.0,
        road_type=RoadType.NARROW,
        duration=baseline,
        calibrated_duration=baseline,
        delay=0.0,
        color=COLOR_NEUTRAL,
    )


def predict(
    distance_m: float,
    duration_s: float,
    weather: Optional[Weather] = None,
    query_time: Optional[datetime] = None,
    offset_minutes: float = 0,
) -> SegmentMetrics:
    if duration_s <= 0:
        return _degenerate(distance_m)

    base_speed = (max(0.0, distance_m) / duration_s) * 3.6
    road_type = classify_road(base_speed)

    when = (query_time or datetime.now()) + timedelta(minutes=offset_minutes)
    time_factor = time_traffic_factor(when)
    reduction = 1.0 - time_factor * _SENSITIVITY[road_type] * transition_multiplier(when)
    reduction = max(MIN_CONGESTION_REDUCTION, reduction)

    predicted = base_speed * reduction * weather_impact(weather, road_type)

    incident: Optional[str] = None
    if distance_m > INCIDENT_MIN_DISTANCE_M:
        roll = incident_roll(offset_minutes, distance_m)
        if road_type is RoadType.MAIN and roll < BOTTLENECK_PROBABILITY:
            predicted *= BOTTLENECK_SPEED_FACTOR
            incident = BOTTLENECK_LABEL
        elif (
            road_type is RoadType.HIGHWAY
            and time_factor > ACCIDENT_MIN_TIME_FACTOR
            and roll < ACCIDENT_PROBABILITY
        ):
            predicted *= ACCIDENT_SPEED_FACTOR
            incident = ACCIDENT_LABEL

    predicted = max(predicted, floor_speed(road_type))

    baseline = calibrated_duration(distance_m)
    duration = baseline * (base_speed / predicted)
    return SegmentMetrics(
        predicted_speed=predicted,
        base_speed=base_speed,
        road_type=road_type,
        duration=duration,
        calibrated_duration=baseline,
        delay=max(0.0, duration - baseline),
        color=severity_color(predicted, base_speed),
        incident=incident,
    )


__all__ = [
    "classify_road",
    "floor_speed",
    "weather_tier",
    "weather_impact",
    "incident_roll",
    "calibrated_duration",
    "severity_color",
    "predict",
]
