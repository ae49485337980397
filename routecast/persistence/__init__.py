"""Persistence of learned corridor weights."""

from routecast.persistence.weight_store import (
    InMemoryWeightStore,
    JsonFileWeightStore,
    WeightStore,
    get_weight_store,
)

__all__ = ["InMemoryWeightStore", "JsonFileWeightStore", "WeightStore", "get_weight_store"]
