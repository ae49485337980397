"""Route ranking pipeline tests."""

from datetime import datetime

import pytest

from routecast.domain.constants import COLOR_DANGER, COLOR_PRIMARY, COLOR_WARNING
from routecast.domain.enums import RouteLabel, Severity
from routecast.domain.models import CandidateRoute, CorridorWeight, Leg, Step, Weather
from routecast.persistence.weight_store import InMemoryWeightStore
from routecast.planner.ranking import RouteRanker, build_reason, format_duration
from routecast.planner.weights import CorridorWeightLearner

WED_8AM = datetime(2026, 10, 14, 8, 0)
WED_2PM = datetime(2026, 10, 14, 14, 0)
WED_4PM = datetime(2026, 10, 14, 16, 0)


@pytest.fixture
def ranker():
    return RouteRanker(CorridorWeightLearner(InMemoryWeightStore()))


def test_format_duration():
    assert format_duration(446.8) == "7 min"
    assert format_duration(3600.0) == "60 min"
    assert format_duration(3900.0) == "1h 5m"


def test_single_route_gets_all_departure_buckets(ranker, make_route, line):
    route = make_route(6600.0, 440.0, geometry=line(-20.17, 28.63, -20.16, 28.58), names=("Robert Mugabe Way",))
    result = ranker.rank([route], None, query_time=WED_2PM)

    assert len(result.routes) == 1
    best = result.routes[0]
    assert best.ui_label is RouteLabel.BEST
    assert best.ui_color == COLOR_PRIMARY
    assert set(best.predictions) == {0, 15, 30}
    assert best.distance_km == 6.6


def test_reference_trip_midday_is_about_seven_minutes(ranker, make_route):
    route = make_route(6600.0, 440.0, names=("Robert Mugabe Way",))
    bucket = ranker.rank([route], None, query_time=WED_2PM).routes[0].predictions[0]
    assert bucket.formatted_duration == "7 min"
    assert 6.5 * 60 <= bucket.duration <= 7.5 * 60


def test_later_departure_buckets_follow_the_curve(ranker, make_route):
    route = make_route(6600.0, 440.0, names=("Robert Mugabe Way",))
    predictions = ranker.rank([route], None, query_time=WED_2PM).routes[0].predictions
    assert predictions[0].duration < predictions[15].duration < predictions[30].duration


def test_bucket_segments_carry_step_geometry(ranker, make_route, line):
    geometry = line(0.0, 0.0, 0.05, 0.0, count=31)
    route = make_route(6000.0, 400.0, geometry=geometry, names=("Cecil Avenue", "Fife Street", "Fort Street"))
    bucket = ranker.rank([route], None, query_time=WED_2PM).routes[0].predictions[0]
    assert len(bucket.segments) == 3
    assert bucket.segments[0].coordinates[0] == geometry[0]
    assert bucket.color == bucket.segments[0].color


def test_empty_input_gives_empty_result(ranker):
    result = ranker.rank([], Weather(code=95), "NUST University", "Bulawayo City Hall", WED_8AM)
    assert result.routes == []
    assert result.road_conditions == []


def test_keeps_three_best_with_labels(ranker, make_route):
    routes = [make_route(3000.0 + 600.0 * i, 200.0 + 40.0 * i, names=("Main Street",)) for i in range(5)]
    result = ranker.rank(list(reversed(routes)), None, query_time=WED_2PM)

    assert [r.ui_label for r in result.routes] == [RouteLabel.BEST, RouteLabel.ALT, RouteLabel.SLOW]
    assert [r.ui_color for r in result.routes] == [COLOR_PRIMARY, COLOR_WARNING, COLOR_DANGER]
    scores = [r.score for r in result.routes]
    assert scores == sorted(scores)
    assert result.routes[0].route.distance == 3000.0


def test_corridor_binding_and_confidence(make_route):
    store = InMemoryWeightStore({"via Cecil Ave": CorridorWeight(multiplier=1.0, data_points=1)})
    ranker = RouteRanker(CorridorWeightLearner(store))
    route = make_route(6600.0, 440.0, names=("Cecil Avenue", "Fife Street"))

    result = ranker.rank([route], None, "NUST University", "Bulawayo City Hall", WED_2PM)

    assert result.corridor is not None
    assert result.routes[0].corridor_name == "via Cecil Ave"
    assert result.routes[0].confidence == 55


def test_learned_weight_can_reorder_routes(make_route):
    cecil = make_route(6600.0, 440.0, names=("Cecil Avenue",))
    gwanda = make_route(6700.0, 440.0, names=("Gwanda Road",))
    store = InMemoryWeightStore()
    ranker = RouteRanker(CorridorWeightLearner(store))

    first = ranker.rank([gwanda, cecil], None, "NUST University", "Bulawayo City Hall", WED_2PM)
    assert first.routes[0].corridor_name == "via Cecil Ave"

    store.set("via Cecil Ave", CorridorWeight(multiplier=1.5, data_points=4))
    second = ranker.rank([gwanda, cecil], None, "NUST University", "Bulawayo City Hall", WED_2PM)
    assert second.routes[0].corridor_name == "via Gwanda Rd"


def test_storm_adds_exactly_its_penalty_to_the_top_score(ranker, make_route):
    route = make_route(6600.0, 440.0, names=("Robert Mugabe Way",))
    clear = ranker.rank([route], None, query_time=WED_8AM).routes[0].score
    storm = ranker.rank([route], Weather(code=95), query_time=WED_8AM).routes[0].score
    assert storm - clear == pytest.approx(300.0)


def test_reason_mentions_peak_and_weather():
    assert build_reason(0, None, False) == "Fastest route"
    assert build_reason(0, Weather(code=95), True) == "Fastest route (peak hours, storm)"
    assert build_reason(2, Weather(code=63), False) == "Heavier congestion (rain)"


def test_road_conditions_merge_by_name_and_sort_by_severity(ranker):
    # 16:00 weekday: highway stretches moderate, the local street heavy
    steps = (
        Step(distance=2000.0, duration=72.0, name="Robert Mugabe Way"),
        Step(distance=2000.0, duration=180.0, name="Fife Street"),
        Step(distance=2000.0, duration=72.0, name="Robert Mugabe Way"),
        Step(distance=800.0, duration=60.0, name="Unnamed Road"),
        Step(distance=300.0, duration=30.0, name=""),
    )
    route = CandidateRoute(
        distance=7100.0,
        duration=414.0,
        legs=(Leg(distance=7100.0, duration=414.0, steps=steps),),
    )
    conditions = ranker.rank([route], None, query_time=WED_4PM).road_conditions

    assert [c.road_name for c in conditions] == ["Fife Street", "Robert Mugabe Way"]
    fife, mugabe = conditions
    assert fife.severity is Severity.HEAVY
    assert fife.delay_minutes > 0
    assert fife.base_speed == 40
    assert mugabe.severity is Severity.MODERATE
    assert mugabe.distance == 4000.0
    assert mugabe.base_speed == 100
