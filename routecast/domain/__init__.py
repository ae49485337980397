"""Domain package exports."""

from routecast.domain.enums import RoadType, RouteLabel, Severity, Trend, WeatherTier
from routecast.domain.models import (
    CandidateRoute,
    ColoredSegment,
    Coordinate,
    Corridor,
    CorridorRoute,
    CorridorWeight,
    Leg,
    PeakWindow,
    PredictionBucket,
    RankedRoute,
    RoadCondition,
    RouteSearchResult,
    SegmentMetrics,
    Step,
    Weather,
)

__all__ = [
    "CandidateRoute",
    "ColoredSegment",
    "Coordinate",
    "Corridor",
    "CorridorRoute",
    "CorridorWeight",
    "Leg",
    "PeakWindow",
    "PredictionBucket",
    "RankedRoute",
    "RoadCondition",
    "RouteSearchResult",
    "SegmentMetrics",
    "Step",
    "Weather",
    "RoadType",
    "RouteLabel",
    "Severity",
    "Trend",
    "WeatherTier",
]
