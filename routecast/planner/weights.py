"""Per-corridor correction weights learned from trip feedback."""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional

from routecast.domain.models import CandidateRoute, CorridorWeight
from routecast.persistence.weight_store import WeightStore

SMOOTHING_ALPHA = 0.2
BASE_CONFIDENCE = 0.50
CONFIDENCE_PER_OBSERVATION = 0.05
MAX_CONFIDENCE = 0.95

# Chronic bottlenecks, applied whether or not a corridor matched.
ROAD_PENALTIES: dict[str, float] = {
    "Masiyephambili Drive": 1.15,
    "Leopold Takawira Avenue": 1.05,
}

_logger = logging.getLogger("routecast.weights")


class WeightAdjustment(NamedTuple):
    score: float
    confidence: int


class CorridorWeightLearner:
    def __init__(self, store: WeightStore) -> None:
        self._store = store

    @property
    def store(self) -> WeightStore:
        return self._store

    def apply_weight_adjustment(
        self,
        route: CandidateRoute,
        raw_score: float,
        corridor_route_name: Optional[str] = None,
    ) -> WeightAdjustment:
        score = raw_score
        confidence = BASE_CONFIDENCE

        if corridor_route_name:
            weight = self._store.get(corridor_route_name)
            if weight is not None:
                score = raw_score * weight.multiplier
                confidence = min(
                    MAX_CONFIDENCE, BASE_CONFIDENCE + weight.data_points * CONFIDENCE_PER_OBSERVATION
                )

        road_names = route.road_names()
        for road, penalty in ROAD_PENALTIES.items():
            if road in road_names:
                score *= penalty

        return WeightAdjustment(score=score, confidence=round(confidence * 100))

    def train(self, corridor_route_name: str, predicted_minutes: float, actual_minutes: float) -> None:
        """Nudge the corridor multiplier toward actual/predicted and persist the table."""
        if not corridor_route_name:
            return

        current = self._store.get(corridor_route_name) or CorridorWeight()
        error_ratio = actual_minutes / max(predicted_minutes, 1.0)
        updated = CorridorWeight(
            multiplier=current.multiplier * (1.0 - SMOOTHING_ALPHA) + error_ratio * SMOOTHING_ALPHA,
            data_points=current.data_points + 1,
        )
        self._store.set(corridor_route_name, updated)
        _logger.info(
            "corridor %r weight %.3f -> %.3f (n=%d)",
            corridor_route_name,
            current.multiplier,
            updated.multiplier,
            updated.data_points,
        )
        self._store.persist()


__all__ = ["CorridorWeightLearner", "WeightAdjustment", "ROAD_PENALTIES", "SMOOTHING_ALPHA"]
