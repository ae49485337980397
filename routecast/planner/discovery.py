"""Alternative-route discovery.

Fetches the provider's own alternatives, drops near-duplicates and, when fewer
than three distinct paths remain, probes offset waypoints around the trip
midpoint to synthesize geometrically diverse candidates.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor

from routecast.domain.constants import MAX_RANKED_ROUTES
from routecast.domain.models import CandidateRoute, Coordinate
from routecast.planner.geometry import is_distinct
from routecast.shared.exceptions import ToolError
from routecast.tools.interfaces import RouteQuery, RouteTool

COMPASS_BEARINGS = (0, 45, 90, 135, 180, 225, 270, 315)
OFFSET_SPAN_FRACTION = 0.3
MIN_OFFSET_DEG = 0.01
PROBE_BATCH_SIZE = 3

_logger = logging.getLogger("routecast.discovery")


def offset_waypoints(origin: Coordinate, destination: Coordinate) -> list[Coordinate]:
    """Eight probe points around the midpoint, scaled to the trip span."""
    mid_lat = (origin.lat + destination.lat) / 2.0
    mid_lon = (origin.lon + destination.lon) / 2.0
    span = max(abs(destination.lat - origin.lat), abs(destination.lon - origin.lon))
    offset = max(span * OFFSET_SPAN_FRACTION, MIN_OFFSET_DEG)
    return [
        Coordinate(
            lat=mid_lat + offset * math.cos(math.radians(bearing)),
            lon=mid_lon + offset * math.sin(math.radians(bearing)),
        )
        for bearing in COMPASS_BEARINGS
    ]


class RouteDiscoverer:
    def __init__(
        self,
        route_tool: RouteTool,
        *,
        max_routes: int = MAX_RANKED_ROUTES,
        batch_size: int = PROBE_BATCH_SIZE,
    ) -> None:
        self._route_tool = route_tool
        self._max_routes = max_routes
        self._batch_size = batch_size

    def _probe(self, query: RouteQuery) -> list[CandidateRoute]:
        try:
            return list(self._route_tool.fetch_via_waypoint(query))
        except (ToolError, ValueError) as exc:
            _logger.debug("waypoint probe via %s failed: %s", query.via, exc)
            return []

    def _accept(self, candidates: list[CandidateRoute], accepted: list[CandidateRoute]) -> None:
        for route in candidates:
            if len(accepted) >= self._max_routes:
                return
            if is_distinct(route, accepted):
                accepted.append(route)

    def discover(self, origin: Coordinate, destination: Coordinate) -> list[CandidateRoute]:
        """Up to ``max_routes`` distinct routes, fastest first.

        The primary request raises ToolError on failure; an empty list means the
        provider found no route at all.
        """
        primary = self._route_tool.fetch_routes(
            RouteQuery(origin=origin, destination=destination, alternatives=True)
        )
        if not primary:
            return []

        accepted: list[CandidateRoute] = []
        self._accept(sorted(primary, key=lambda r: r.duration), accepted)

        waypoints = offset_waypoints(origin, destination)
        for start in range(0, len(waypoints), self._batch_size):
            if len(accepted) >= self._max_routes:
                break
            queries = [
                RouteQuery(origin=origin, destination=destination, via=via, alternatives=False)
                for via in waypoints[start : start + self._batch_size]
            ]
            with ThreadPoolExecutor(max_workers=self._batch_size) as pool:
                batches = list(pool.map(self._probe, queries))
            for candidates in batches:
                self._accept(candidates, accepted)

        _logger.info(
            "discovered %d distinct route(s) (%d from provider)", len(accepted), len(primary)
        )
        return sorted(accepted, key=lambda r: r.duration)


__all__ = ["RouteDiscoverer", "offset_waypoints"]
