"""Route search use-case: discover, rank, narrate; plus geocoding and feedback."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from typing import Optional

from routecast.adapters.tool_factory import get_geocode_tool, get_route_tool, get_weather_tool
from routecast.config.settings import EngineSettings, load_settings
from routecast.domain.models import Coordinate, RouteSearchResult, Weather
from routecast.infrastructure.logging import StructuredLogger
from routecast.nlg.narrative import narrate
from routecast.persistence.weight_store import WeightStore, get_weight_store
from routecast.planner.discovery import RouteDiscoverer
from routecast.planner.ranking import RouteRanker
from routecast.planner.weights import CorridorWeightLearner
from routecast.tools.interfaces import (
    GeocodeQuery,
    GeocodeTool,
    RouteTool,
    ToolError,
    WeatherQuery,
    WeatherTool,
)

_logger = logging.getLogger("routecast.service")


class RouteService:
    def __init__(
        self,
        route_tool: RouteTool,
        weather_tool: WeatherTool,
        geocode_tool: GeocodeTool,
        store: WeightStore,
    ) -> None:
        self._route_tool = route_tool
        self._weather_tool = weather_tool
        self._geocode_tool = geocode_tool
        self._learner = CorridorWeightLearner(store)
        self._discoverer = RouteDiscoverer(route_tool)
        self._ranker = RouteRanker(self._learner)
        # One worker keeps weight updates serialized.
        self._training = ThreadPoolExecutor(max_workers=1, thread_name_prefix="routecast-train")

    @property
    def learner(self) -> CorridorWeightLearner:
        return self._learner

    def _fetch_weather(self, location: Coordinate) -> Weather:
        return self._weather_tool.get_weather(WeatherQuery(location=location))

    def get_route(
        self,
        origin: Coordinate,
        destination: Coordinate,
        origin_name: Optional[str] = None,
        dest_name: Optional[str] = None,
        departure_minutes: int = 0,
        now: Optional[datetime] = None,
    ) -> RouteSearchResult:
        """Ranked routes with 0/15/30-minute predictions, road conditions and a narrative.

        Provider failures degrade to an empty route list or missing weather; they
        are logged, never raised.
        """
        now = now or datetime.now()
        departure_minutes = max(0, int(departure_minutes))
        slog = StructuredLogger()

        slog.stage_start("fetch")
        with ThreadPoolExecutor(max_workers=2) as pool:
            routes_future = pool.submit(self._discoverer.discover, origin, destination)
            weather_future = pool.submit(self._fetch_weather, origin)

            try:
                raw_routes = routes_future.result()
            except ToolError as exc:
                slog.error("fetch", f"routing failed: {exc}")
                raw_routes = []

            weather: Optional[Weather]
            try:
                weather = weather_future.result()
            except ToolError as exc:
                slog.warning("fetch", f"weather unavailable: {exc}")
                weather = None
        slog.stage_end("fetch", candidates=len(raw_routes), weather=weather is not None)

        slog.stage_start("rank")
        ranking = self._ranker.rank(raw_routes, weather, origin_name, dest_name, query_time=now)
        slog.stage_end(
            "rank",
            routes=len(ranking.routes),
            corridor=ranking.corridor.origin if ranking.corridor else None,
        )

        top = ranking.routes[0] if ranking.routes else None
        narrative = narrate(top, departure_minutes, weather, now=now)
        slog.summary(
            routes=len(ranking.routes),
            top_score=round(top.score, 1) if top else None,
            departure_minutes=departure_minutes,
        )
        return RouteSearchResult(
            routes=ranking.routes,
            weather=weather,
            road_conditions=ranking.road_conditions,
            narrative=narrative,
            departure_minutes=departure_minutes,
        )

    def train_model_off_feedback(
        self, corridor_route_name: str, predicted_minutes: float, actual_minutes: float
    ) -> Future:
        """Queue a weight update and return immediately."""
        future = self._training.submit(
            self._learner.train, corridor_route_name, predicted_minutes, actual_minutes
        )
        future.add_done_callback(_log_training_failure)
        return future

    def geocode(self, query: str) -> Optional[Coordinate]:
        try:
            return self._geocode_tool.geocode(GeocodeQuery(text=query))
        except ToolError as exc:
            _logger.warning("geocode failed for %r: %s", query, exc)
            return None

    def shutdown(self) -> None:
        self._training.shutdown(wait=True)


def _log_training_failure(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        _logger.error("corridor weight training failed: %s", exc)


def build_route_service(settings: Optional[EngineSettings] = None) -> RouteService:
    settings = settings or load_settings()
    return RouteService(
        route_tool=get_route_tool(),
        weather_tool=get_weather_tool(),
        geocode_tool=get_geocode_tool(),
        store=get_weight_store(settings),
    )


__all__ = ["RouteService", "build_route_service"]
