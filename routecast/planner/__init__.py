"""Deterministic route ranking algorithms."""

from __future__ import annotations

from routecast.planner.discovery import RouteDiscoverer
from routecast.planner.ranking import RankingResult, RouteRanker
from routecast.planner.weights import CorridorWeightLearner

__all__ = ["CorridorWeightLearner", "RankingResult", "RouteDiscoverer", "RouteRanker"]
