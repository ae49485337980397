"""Time-of-day congestion curve and rush-hour ramp tests."""

from datetime import datetime

import pytest

from routecast.planner.time_profile import is_weekend, time_traffic_factor, transition_multiplier

WED = (2026, 10, 14)
FRI = (2026, 10, 16)
SAT = (2026, 10, 17)


def test_weekday_peaks_and_midday():
    assert time_traffic_factor(datetime(*WED, 8, 0)) == pytest.approx(1.0)
    assert time_traffic_factor(datetime(*WED, 17, 0)) == pytest.approx(1.0)
    assert time_traffic_factor(datetime(*WED, 14, 0)) == pytest.approx(0.10)


def test_factor_interpolates_between_hours():
    assert time_traffic_factor(datetime(*WED, 14, 30)) == pytest.approx(0.225)


def test_interpolation_crosses_into_weekend_curve():
    # Friday 23:00 (weekday 0.05) toward Saturday 00:00 (weekend 0.10)
    assert time_traffic_factor(datetime(*FRI, 23, 30)) == pytest.approx(0.075)


def test_friday_afternoon_bonus_is_capped():
    assert time_traffic_factor(datetime(*FRI, 15, 0)) == pytest.approx(0.45)
    assert time_traffic_factor(datetime(*FRI, 17, 0)) == pytest.approx(1.0)


def test_weekend_curve():
    saturday = datetime(*SAT, 8, 0)
    assert is_weekend(saturday)
    assert not is_weekend(datetime(*WED, 8, 0))
    assert time_traffic_factor(saturday) == pytest.approx(0.40)


def test_transition_plateaus():
    assert transition_multiplier(datetime(*WED, 7, 30)) == pytest.approx(1.45)
    assert transition_multiplier(datetime(*WED, 17, 0)) == pytest.approx(1.40)


def test_transition_ramps_are_linear():
    assert transition_multiplier(datetime(*WED, 6, 52, 30)) == pytest.approx(1.225)
    assert transition_multiplier(datetime(*WED, 18, 0)) == pytest.approx(1.40 - 0.40 / 3)


def test_transition_neutral_outside_windows_and_weekends():
    assert transition_multiplier(datetime(*WED, 6, 0)) == 1.0
    assert transition_multiplier(datetime(*WED, 12, 0)) == 1.0
    assert transition_multiplier(datetime(*SAT, 7, 30)) == 1.0
