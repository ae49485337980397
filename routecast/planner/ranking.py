"""Route ranking pipeline.

score -> corridor weight adjustment -> sort -> top N -> per-departure buckets,
labels and reasons -> road conditions of the winner.
"""

from __future__ import annotations

from datetime import datetime
from typing import NamedTuple, Optional, Sequence

from routecast.domain.constants import (
    COLOR_DANGER,
    COLOR_PRIMARY,
    COLOR_WARNING,
    MAX_RANKED_ROUTES,
    PREDICTION_OFFSETS,
    UNNAMED_ROAD,
)
from routecast.domain.enums import RouteLabel, Severity, WeatherTier
from routecast.domain.models import (
    CandidateRoute,
    ColoredSegment,
    Corridor,
    PredictionBucket,
    RankedRoute,
    RoadCondition,
    SegmentMetrics,
    Step,
    Weather,
)
from routecast.planner.corridors import (
    KNOWN_CORRIDORS,
    find_corridor,
    is_in_peak_hours,
    match_route_to_corridor_route,
)
from routecast.planner.scoring import score_route, scoring_steps
from routecast.planner.segment_speed import predict, weather_tier
from routecast.planner.weights import CorridorWeightLearner

_RANK_STYLE: tuple[tuple[RouteLabel, str, str], ...] = (
    (RouteLabel.BEST, COLOR_PRIMARY, "Fastest route"),
    (RouteLabel.ALT, COLOR_WARNING, "Moderate traffic"),
    (RouteLabel.SLOW, COLOR_DANGER, "Heavier congestion"),
)

_WEATHER_NOTE = {
    WeatherTier.DRIZZLE: "light rain",
    WeatherTier.RAIN: "rain",
    WeatherTier.STORM: "storm",
}

_SEVERITY_BY_COLOR = {
    COLOR_DANGER: Severity.HEAVY,
    COLOR_WARNING: Severity.MODERATE,
}
_SEVERITY_RANK = {Severity.CLEAR: 0, Severity.MODERATE: 1, Severity.HEAVY: 2}


class RankingResult(NamedTuple):
    routes: list[RankedRoute]
    road_conditions: list[RoadCondition]
    corridor: Optional[Corridor]


def format_duration(seconds: float) -> str:
    minutes = round(seconds / 60)
    if minutes > 60:
        return f"{minutes // 60}h {minutes % 60}m"
    return f"{minutes} min"


def severity_for(color: str) -> Severity:
    return _SEVERITY_BY_COLOR.get(color, Severity.CLEAR)


def _step_metrics(
    route: CandidateRoute,
    weather: Optional[Weather],
    when: datetime,
    offset: int,
) -> list[tuple[Step, SegmentMetrics]]:
    return [
        (step, predict(step.distance, step.duration, weather, when, offset))
        for step in scoring_steps(route)
    ]


def build_bucket(
    route: CandidateRoute,
    weather: Optional[Weather],
    when: datetime,
    offset: int,
) -> PredictionBucket:
    pairs = _step_metrics(route, weather, when, offset)
    duration = sum(m.duration for _, m in pairs)
    segments = [
        ColoredSegment(coordinates=list(step.geometry), color=m.color)
        for step, m in pairs
    ]
    return PredictionBucket(
        duration=duration,
        formatted_duration=format_duration(duration),
        segments=segments,
        color=segments[0].color if segments else COLOR_PRIMARY,
    )


def summarize_road_conditions(
    route: CandidateRoute,
    weather: Optional[Weather],
    when: datetime,
) -> list[RoadCondition]:
    """Per-road summary at offset 0; steps sharing a name merge, worst severity shown."""
    merged: dict[str, dict] = {}
    for step, metrics in _step_metrics(route, weather, when, 0):
        name = step.name
        if not name or name == UNNAMED_ROAD:
            continue
        severity = severity_for(metrics.color)
        entry = merged.get(name)
        if entry is None:
            merged[name] = {
                "delay": metrics.delay,
                "distance": step.distance,
                "severity": severity,
                "metrics": metrics,
            }
            continue
        entry["delay"] += metrics.delay
        entry["distance"] += step.distance
        if _SEVERITY_RANK[severity] > _SEVERITY_RANK[entry["severity"]]:
            entry["severity"] = severity
            entry["metrics"] = metrics

    conditions = [
        RoadCondition(
            road_name=name,
            delay_minutes=round(entry["delay"] / 60.0, 2),
            severity=entry["severity"],
            predicted_speed=round(entry["metrics"].predicted_speed),
            base_speed=round(entry["metrics"].base_speed),
            distance=round(entry["distance"], 1),
        )
        for name, entry in merged.items()
    ]
    conditions.sort(key=lambda c: (-_SEVERITY_RANK[c.severity], -c.delay_minutes))
    return conditions


def build_reason(index: int, weather: Optional[Weather], in_peak: bool) -> str:
    base = _RANK_STYLE[min(index, len(_RANK_STYLE) - 1)][2]
    notes = []
    if in_peak:
        notes.append("peak hours")
    tier = weather_tier(weather)
    if tier in _WEATHER_NOTE:
        notes.append(_WEATHER_NOTE[tier])
    return f"{base} ({', '.join(notes)})" if notes else base


class RouteRanker:
    def __init__(
        self,
        learner: CorridorWeightLearner,
        *,
        corridors: Sequence[Corridor] = KNOWN_CORRIDORS,
        max_routes: int = MAX_RANKED_ROUTES,
        offsets: Sequence[int] = PREDICTION_OFFSETS,
    ) -> None:
        self._learner = learner
        self._corridors = corridors
        self._max_routes = max_routes
        self._offsets = tuple(offsets)

    def rank(
        self,
        raw_routes: Sequence[CandidateRoute],
        weather: Optional[Weather],
        origin_name: Optional[str] = None,
        dest_name: Optional[str] = None,
        query_time: Optional[datetime] = None,
    ) -> RankingResult:
        when = query_time or datetime.now()
        corridor = find_corridor(origin_name, dest_name, self._corridors)

        scored = []
        for route in raw_routes:
            raw_score = score_route(route, weather, when)
            matched = (
                match_route_to_corridor_route(route.road_names(), corridor.routes)
                if corridor is not None
                else None
            )
            name = matched.name if matched is not None else None
            adjustment = self._learner.apply_weight_adjustment(route, raw_score, name)
            scored.append((adjustment.score, adjustment.confidence, name, route))

        scored.sort(key=lambda item: item[0])
        in_peak = is_in_peak_hours(corridor, when)

        ranked: list[RankedRoute] = []
        for index, (score, confidence, name, route) in enumerate(scored[: self._max_routes]):
            label, color, _ = _RANK_STYLE[min(index, len(_RANK_STYLE) - 1)]
            ranked.append(
                RankedRoute(
                    route=route,
                    ui_label=label,
                    ui_color=color,
                    ui_reason=build_reason(index, weather, in_peak),
                    corridor_name=name,
                    score=score,
                    confidence=confidence,
                    distance_km=round(route.distance / 1000.0, 1),
                    predictions={
                        offset: build_bucket(route, weather, when, offset) for offset in self._offsets
                    },
                )
            )

        road_conditions = (
            summarize_road_conditions(ranked[0].route, weather, when) if ranked else []
        )
        return RankingResult(routes=ranked, road_conditions=road_conditions, corridor=corridor)


__all__ = [
    "RankingResult",
    "RouteRanker",
    "build_bucket",
    "build_reason",
    "format_duration",
    "severity_for",
    "summarize_road_conditions",
]
