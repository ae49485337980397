"""Plain-language traffic forecast for the top-ranked route.

Phrase choice is a pure function of an explicit seed (clock time plus the
departure offset), so the paragraph is stable within a minute and varies
across minutes.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Sequence

from routecast.domain.constants import COLOR_DANGER, COLOR_PRIMARY, COLOR_WARNING
from routecast.domain.enums import Trend, WeatherTier
from routecast.domain.models import RankedRoute, Weather
from routecast.planner.segment_speed import weather_tier
from routecast.planner.time_profile import time_traffic_factor, transition_multiplier

CURRENT_CLEAR = (
    "Traffic is moving freely with no significant delays.",
    "Roads are clear and flowing well right now.",
    "Conditions are good and vehicles are moving without obstruction.",
    "Traffic is light at the moment, so travel is smooth across the network.",
)

CURRENT_MODERATE = (
    "Moderate congestion is building on several roads right now.",
    "Traffic is fairly busy at the moment, with occasional slowdowns.",
    "Some key stretches are seeing delays under moderate flow.",
    "The network is active and causing minor delays.",
)

CURRENT_HEAVY = (
    "Heavy congestion is affecting most routes right now.",
    "Traffic is very busy at the moment, so expect significant delays.",
    "Heavy traffic is slowing movement considerably.",
    "High congestion across the network is causing substantial delays.",
)

FUTURE_RUSH_APPROACH = (
    "Congestion is expected to build sharply as rush hour begins.",
    "Traffic will likely worsen as the commute gets underway.",
    "Expect growing delays as peak-hour traffic ramps up.",
    "Rush hour is approaching and congestion will intensify.",
)

FUTURE_RUSH_PEAK = (
    "Full peak-hour congestion is expected by your departure time.",
    "Traffic will be at its heaviest when you plan to leave.",
    "Rush hour will be in full effect, so route times will rise considerably.",
    "Expect severe congestion in your departure window.",
)

FUTURE_CLEARING = (
    "Traffic is expected to ease noticeably by the time you leave.",
    "Conditions should improve by your planned departure.",
    "Congestion will likely thin out as rush hour winds down.",
    "The roads should be clearing by the time you set off.",
)

FUTURE_STABLE_CLEAR = (
    "No major changes are expected and traffic should stay clear.",
    "Conditions are forecast to remain light and unobstructed.",
    "Traffic levels should hold steady until you depart.",
    "Roads are projected to keep flowing freely through this period.",
)

FUTURE_STABLE_MODERATE = (
    "Conditions should stay close to current levels.",
    "Moderate traffic is forecast to continue without much change.",
    "Traffic density should hold at current levels for now.",
    "Neither a clear improvement nor a worsening is expected in the next window.",
)

WEATHER_RAIN_NOW = (
    "Rain is reducing speeds, particularly on narrower roads.",
    "Active rainfall is affecting driving conditions across the network.",
    "Wet surfaces are slowing vehicles, especially on local streets.",
)

WEATHER_RAIN_FUTURE = (
    "Rain is forecast around your departure time and may slow traffic further.",
    "Expect precipitation when you plan to leave, so allow extra time.",
    "Wet conditions are likely at departure and narrow roads will suffer most.",
)

WEATHER_STORM = (
    "Storm conditions are severely affecting all routes. Allow plenty of extra time.",
    "Dangerous weather is active and every route faces significant delays.",
    "Severe weather is disrupting the road network. Plan for major delays.",
)

WEATHER_CLEAR = (
    "Weather is good and is not adding to travel times.",
    "Clear skies mean no weather penalty on any route.",
    "Dry conditions are supporting normal traffic flow.",
)

ROUTE_REASON_BEST = (
    "This route uses major roads that absorb congestion better.",
    "This option stays on wider roads that resist peak-hour slowdowns.",
    "Major arterials on this route keep it less sensitive to peak traffic.",
    "This route suits both current and forecast conditions.",
)

ROUTE_REASON_IMPROVING = (
    "conditions on this route are projected to improve by the time you leave.",
    "traffic here is trending lighter toward your departure.",
    "this route gains the most from the expected easing of traffic.",
)

ROUTE_REASON_WORSENING = (
    "despite rising congestion it remains the most efficient choice at your departure time.",
    "even with heavier traffic it performs best at your planned departure.",
    "alternatives are expected to degrade more, so this option holds up best.",
)

APPROACH_TRANSITION = 1.2
LEAVING_TRANSITION = 1.1
PEAK_TRANSITION = 1.4
PEAK_FACTOR = 0.7
CLEARING_FACTOR_DROP = 0.15


def pick(pool: Sequence[str], seed: int) -> str:
    return pool[abs(int(seed)) % len(pool)]


def color_rank(color: Optional[str]) -> int:
    """0 best, 1 middle, 2 worst."""
    if color == COLOR_DANGER:
        return 2
    if color == COLOR_WARNING:
        return 1
    return 0


def nearest_offset(departure_minutes: int) -> int:
    if departure_minutes <= 7:
        return 0
    if departure_minutes <= 22:
        return 15
    return 30


def _bucket_color(route: RankedRoute, offset: int) -> Optional[str]:
    bucket = route.predictions.get(offset)
    return bucket.color if bucket is not None else None


def detect_trend(route: Optional[RankedRoute], departure_minutes: int) -> Trend:
    if route is None:
        return Trend.STABLE
    now_color = _bucket_color(route, 0)
    future_color = _bucket_color(route, nearest_offset(departure_minutes)) or now_color
    now_rank = color_rank(now_color)
    future_rank = color_rank(future_color)
    if future_rank < now_rank:
        return Trend.IMPROVING
    if future_rank > now_rank:
        return Trend.WORSENING
    return Trend.STABLE


def _current_phrase(color: str, seed: int) -> str:
    rank = color_rank(color)
    if rank == 0:
        return pick(CURRENT_CLEAR, seed)
    if rank == 1:
        return pick(CURRENT_MODERATE, seed)
    return pick(CURRENT_HEAVY, seed)


def _future_phrase(now: datetime, departure_minutes: int, future_color: str, seed: int) -> str:
    future = now + timedelta(minutes=departure_minutes)
    now_factor = time_traffic_factor(now)
    future_factor = time_traffic_factor(future)
    now_transition = transition_multiplier(now)
    future_transition = transition_multiplier(future)

    if future_transition >= PEAK_TRANSITION and future_factor > PEAK_FACTOR:
        return pick(FUTURE_RUSH_PEAK, seed + 1)
    if future_transition > APPROACH_TRANSITION and now_transition < APPROACH_TRANSITION:
        return pick(FUTURE_RUSH_APPROACH, seed + 2)
    if (
        now_transition > APPROACH_TRANSITION and future_transition < LEAVING_TRANSITION
    ) or future_factor < now_factor - CLEARING_FACTOR_DROP:
        return pick(FUTURE_CLEARING, seed + 3)
    if color_rank(future_color) == 0:
        return pick(FUTURE_STABLE_CLEAR, seed + 4)
    return pick(FUTURE_STABLE_MODERATE, seed + 5)


def weather_phrase(weather: Optional[Weather], departure_minutes: int, seed: int) -> str:
    tier = weather_tier(weather)
    if tier is WeatherTier.STORM:
        return pick(WEATHER_STORM, seed)
    if tier is WeatherTier.RAIN:
        pool = WEATHER_RAIN_FUTURE if departure_minutes > 5 else WEATHER_RAIN_NOW
        return pick(pool, seed)
    if tier is WeatherTier.DRIZZLE:
        return pick(WEATHER_RAIN_NOW, seed + 1)
    return pick(WEATHER_CLEAR, seed)


def narrate(
    top_route: Optional[RankedRoute],
    departure_minutes: int,
    weather: Optional[Weather],
    now: Optional[datetime] = None,
) -> str:
    """Forecast paragraph for ``top_route``; empty when there is no route."""
    if top_route is None:
        return ""

    now = now or datetime.now()
    seed = now.hour * 100 + now.minute + departure_minutes

    now_color = _bucket_color(top_route, 0) or COLOR_PRIMARY
    if departure_minutes <= 7:
        future_color = now_color
    else:
        future_color = _bucket_color(top_route, nearest_offset(departure_minutes)) or now_color

    sentences = [_current_phrase(now_color, seed)]
    if departure_minutes > 0:
        sentences.append(_future_phrase(now, departure_minutes, future_color, seed))
    sentences.append(weather_phrase(weather, departure_minutes, seed + 6))

    if departure_minutes > 0 and top_route.corridor_name:
        trend = detect_trend(top_route, departure_minutes)
        if trend is Trend.IMPROVING:
            reason = pick(ROUTE_REASON_IMPROVING, seed + 7)
        elif trend is Trend.WORSENING:
            reason = pick(ROUTE_REASON_WORSENING, seed + 8)
        else:
            reason = pick(ROUTE_REASON_BEST, seed + 9)
            reason = reason[0].lower() + reason[1:]
        sentences.append(f"The recommended route {top_route.corridor_name}: {reason}")
    elif departure_minutes == 0:
        sentences.append(pick(ROUTE_REASON_BEST, seed + 9))

    return " ".join(sentences)


__all__ = ["color_rank", "detect_trend", "narrate", "nearest_offset", "pick", "weather_phrase"]
