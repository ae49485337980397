"""Route scoring: one scalar per candidate route, lower is better."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from routecast.domain.enums import WeatherTier
from routecast.domain.models import CandidateRoute, Step, Weather
from routecast.planner.segment_speed import calibrated_duration, predict, weather_tier

WEATHER_PENALTY_SECONDS = {
    WeatherTier.CLEAR: 0.0,
    WeatherTier.DRIZZLE: 40.0,
    WeatherTier.RAIN: 120.0,
    WeatherTier.STORM: 300.0,
}


def scoring_steps(route: CandidateRoute) -> list[Step]:
    """Route steps, or one synthetic step spanning the route when it has none."""
    steps = route.steps()
    if steps:
        return steps
    return [Step(distance=route.distance, duration=route.duration, geometry=route.geometry)]


def weather_penalty(weather: Optional[Weather]) -> float:
    return WEATHER_PENALTY_SECONDS[weather_tier(weather)]


def score_route(
    route: CandidateRoute,
    weather: Optional[Weather],
    query_time: Optional[datetime] = None,
    offset_minutes: float = 0,
) -> float:
    # Delays are taken under clear conditions; weather enters only through the flat tier.
    when = query_time or datetime.now()
    delay = sum(
        predict(step.distance, step.duration, None, when, offset_minutes).delay
        for step in scoring_steps(route)
    )
    return delay + calibrated_duration(route.distance) + weather_penalty(weather)


__all__ = ["WEATHER_PENALTY_SECONDS", "scoring_steps", "weather_penalty", "score_route"]
