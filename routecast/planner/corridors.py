"""Known Bulawayo corridors and matching of routes onto them."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from routecast.domain.models import Corridor, CorridorRoute, PeakWindow

KNOWN_CORRIDORS: tuple[Corridor, ...] = (
    Corridor(
        origin="NUST University",
        destination="Bulawayo City Hall",
        routes=(
            CorridorRoute(
                name="via Cecil Ave",
                via_roads=("cecil", "fife"),
                typical_minutes=7,
                description="Cecil Avenue direct route through the suburbs",
            ),
            CorridorRoute(
                name="via Gwanda Rd",
                via_roads=("gwanda", "fort"),
                typical_minutes=8,
                description="Gwanda Road into the CBD from the south",
            ),
            CorridorRoute(
                name="via Central Avenues",
                via_roads=("3rd ave", "2nd ave", "lobengula"),
                typical_minutes=9,
                description="Through the central avenues grid",
            ),
        ),
        peak_hours=(PeakWindow(start=7, end=9), PeakWindow(start=16, end=18.5)),
        peak_delay_factor=1.4,
    ),
)


def _either_contains(a: str, b: str) -> bool:
    return a in b or b in a


def find_corridor(
    origin_name: Optional[str],
    dest_name: Optional[str],
    corridors: Sequence[Corridor] = KNOWN_CORRIDORS,
) -> Optional[Corridor]:
    """Corridor whose endpoints match the names, in either travel direction."""
    o = (origin_name or "").strip().lower()
    d = (dest_name or "").strip().lower()
    if not o or not d:
        return None
    for corridor in corridors:
        c_origin = corridor.origin.lower()
        c_dest = corridor.destination.lower()
        forward = _either_contains(o, c_origin) and _either_contains(d, c_dest)
        reverse = _either_contains(o, c_dest) and _either_contains(d, c_origin)
        if forward or reverse:
            return corridor
    return None


def match_route_to_corridor_route(
    road_names: Sequence[str],
    corridor_routes: Sequence[CorridorRoute],
) -> Optional[CorridorRoute]:
    """Sub-route sharing the most distinguishing road names; first wins ties."""
    if not road_names or not corridor_routes:
        return None
    names = [n.lower() for n in road_names]
    best: Optional[CorridorRoute] = None
    best_score = 0
    for candidate in corridor_routes:
        score = sum(
            1 for via in candidate.via_roads if any(via.lower() in name for name in names)
        )
        if score > best_score:
            best, best_score = candidate, score
    return best


def is_in_peak_hours(corridor: Optional[Corridor], when: datetime) -> bool:
    if corridor is None:
        return False
    hour = when.hour + when.minute / 60.0
    return any(window.start <= hour <= window.end for window in corridor.peak_hours)


__all__ = [
    "KNOWN_CORRIDORS",
    "find_corridor",
    "match_route_to_corridor_route",
    "is_in_peak_hours",
]
