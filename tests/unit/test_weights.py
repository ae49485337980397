"""Corridor weight learning and weight store tests."""

import json

import pytest

from routecast.config.settings import EngineSettings
from routecast.domain.models import CorridorWeight
from routecast.persistence.weight_store import (
    InMemoryWeightStore,
    JsonFileWeightStore,
    get_weight_store,
)
from routecast.planner.weights import CorridorWeightLearner


def test_train_moves_multiplier_twenty_percent_toward_ratio():
    learner = CorridorWeightLearner(InMemoryWeightStore())

    learner.train("via Cecil Ave", 10.0, 15.0)
    weight = learner.store.get("via Cecil Ave")
    assert weight.multiplier == pytest.approx(1.1)
    assert weight.data_points == 1

    learner.train("via Cecil Ave", 10.0, 5.0)
    weight = learner.store.get("via Cecil Ave")
    assert weight.multiplier == pytest.approx(1.1 * 0.8 + 0.5 * 0.2)
    assert weight.data_points == 2


def test_train_guards_tiny_predictions():
    learner = CorridorWeightLearner(InMemoryWeightStore())
    learner.train("via Gwanda Rd", 0.0, 2.0)
    assert learner.store.get("via Gwanda Rd").multiplier == pytest.approx(0.8 + 2.0 * 0.2)


def test_train_without_name_is_a_noop():
    store = InMemoryWeightStore()
    CorridorWeightLearner(store).train("", 10.0, 20.0)
    assert store.all() == {}


def test_adjustment_without_weight(make_route):
    learner = CorridorWeightLearner(InMemoryWeightStore())
    route = make_route(5000.0, 400.0, names=("Cecil Avenue",))
    adjusted = learner.apply_weight_adjustment(route, 100.0, "via Cecil Ave")
    assert adjusted.score == pytest.approx(100.0)
    assert adjusted.confidence == 50


def test_adjustment_applies_multiplier_and_confidence(make_route):
    store = InMemoryWeightStore({"via Cecil Ave": CorridorWeight(multiplier=1.2, data_points=3)})
    learner = CorridorWeightLearner(store)
    route = make_route(5000.0, 400.0, names=("Cecil Avenue",))
    adjusted = learner.apply_weight_adjustment(route, 100.0, "via Cecil Ave")
    assert adjusted.score == pytest.approx(120.0)
    assert adjusted.confidence == 65


def test_confidence_is_capped(make_route):
    store = InMemoryWeightStore({"via Cecil Ave": CorridorWeight(multiplier=1.0, data_points=40)})
    route = make_route(5000.0, 400.0, names=("Cecil Avenue",))
    adjusted = CorridorWeightLearner(store).apply_weight_adjustment(route, 100.0, "via Cecil Ave")
    assert adjusted.confidence == 95


def test_known_bottleneck_roads_are_penalized(make_route):
    learner = CorridorWeightLearner(InMemoryWeightStore())
    one = make_route(5000.0, 400.0, names=("Masiyephambili Drive",))
    both = make_route(5000.0, 400.0, names=("Masiyephambili Drive", "Leopold Takawira Avenue"))
    assert learner.apply_weight_adjustment(one, 100.0).score == pytest.approx(115.0)
    assert learner.apply_weight_adjustment(both, 100.0).score == pytest.approx(100.0 * 1.15 * 1.05)


def test_json_store_round_trips_through_disk(tmp_path):
    path = tmp_path / "weights" / "corridor_weights.json"
    learner = CorridorWeightLearner(JsonFileWeightStore(path))
    learner.train("via Cecil Ave", 7.0, 14.0)

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["via Cecil Ave"]["dataPoints"] == 1

    reloaded = JsonFileWeightStore(path).get("via Cecil Ave")
    assert reloaded.multiplier == pytest.approx(0.8 + 2.0 * 0.2)
    assert reloaded.data_points == 1


def test_json_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "corridor_weights.json"
    path.write_text("not json", encoding="utf-8")
    assert JsonFileWeightStore(path).all() == {}


def test_persist_failure_keeps_memory_table(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonFileWeightStore(blocker / "corridor_weights.json")

    CorridorWeightLearner(store).train("via Cecil Ave", 10.0, 12.0)

    assert store.get("via Cecil Ave").data_points == 1


def test_weight_store_factory(tmp_path):
    assert get_weight_store(EngineSettings(weights_enabled=False)).backend == "memory"
    store = get_weight_store(EngineSettings(weights_path=tmp_path / "w.json"))
    assert store.backend == "json"
