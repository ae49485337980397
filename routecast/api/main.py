"""FastAPI application exposing the route ranking engine."""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from routecast import __version__
from routecast.api.schemas import (
    FeedbackRequest,
    FeedbackResponse,
    GeocodeResponse,
    HealthResponse,
    PredictionResponse,
    RankedRouteResponse,
    RouteRequest,
    RouteResponse,
    SegmentResponse,
)
from routecast.config.settings import load_settings, resolve_provider_snapshot
from routecast.domain.models import Coordinate, RankedRoute, RouteSearchResult
from routecast.infrastructure.cache import geocode_cache, weather_cache
from routecast.services.route_service import RouteService, build_route_service

_api_logger = logging.getLogger("routecast.api")

load_dotenv()

app = FastAPI(
    title="routecast",
    version=__version__,
    docs_url="/docs" if os.getenv("ENABLE_DOCS", "false").lower() == "true" else None,
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=load_settings().cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

_service: Optional[RouteService] = None


def get_service() -> RouteService:
    global _service
    if _service is None:
        _service = build_route_service()
    return _service


def reset_service(service: Optional[RouteService] = None) -> None:
    global _service
    _service = service


def _pairs(points: tuple[Coordinate, ...] | list[Coordinate]) -> list[list[float]]:
    return [[p.lat, p.lon] for p in points]


def _present_route(ranked: RankedRoute) -> RankedRouteResponse:
    return RankedRouteResponse(
        label=ranked.ui_label.value,
        color=ranked.ui_color,
        reason=ranked.ui_reason,
        corridor_name=ranked.corridor_name,
        score=round(ranked.score, 1),
        confidence=ranked.confidence,
        distance_km=ranked.distance_km,
        geometry=_pairs(ranked.route.geometry),
        predictions={
            offset: PredictionResponse(
                duration_seconds=round(bucket.duration, 1),
                formatted_duration=bucket.formatted_duration,
                color=bucket.color,
                segments=[
                    SegmentResponse(coordinates=_pairs(seg.coordinates), color=seg.color)
                    for seg in bucket.segments
                ],
            )
            for offset, bucket in ranked.predictions.items()
        },
    )


def _present(result: RouteSearchResult) -> RouteResponse:
    return RouteResponse(
        routes=[_present_route(r) for r in result.routes],
        weather=result.weather,
        road_conditions=result.road_conditions,
        narrative=result.narrative,
        departure_minutes=result.departure_minutes,
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok", version=__version__)


@app.get("/diagnostics")
def diagnostics():
    """Active providers, weight backend and cache sizes."""
    service = get_service()
    return {
        "providers": resolve_provider_snapshot().model_dump(),
        "weights": {
            "backend": getattr(service.learner.store, "backend", "unknown"),
            "corridor_routes": len(service.learner.store.all()),
        },
        "cache": {
            "geocode": geocode_cache.stats,
            "weather": weather_cache.stats,
        },
    }


@app.get("/geocode", response_model=GeocodeResponse)
def geocode(q: str = Query(min_length=1, max_length=200)):
    return GeocodeResponse(query=q, location=get_service().geocode(q))


@app.post("/routes", response_model=RouteResponse)
def routes(req: RouteRequest):
    result = get_service().get_route(
        req.origin,
        req.destination,
        origin_name=req.origin_name,
        dest_name=req.dest_name,
        departure_minutes=req.departure_minutes,
    )
    if not result.routes:
        _api_logger.info("no routes between %s and %s", req.origin, req.destination)
    return _present(result)


@app.post("/feedback", response_model=FeedbackResponse, status_code=202)
def feedback(req: FeedbackRequest):
    get_service().train_model_off_feedback(
        req.corridor_route_name, req.predicted_minutes, req.actual_minutes
    )
    return FeedbackResponse(corridor_route_name=req.corridor_route_name)
