"""Time-of-day congestion curves and rush-hour transition ramps."""

from __future__ import annotations

from datetime import datetime, timedelta

# Hour of day -> congestion intensity in [0, 1].
WEEKDAY_CURVE: tuple[float, ...] = (
    0.05, 0.05, 0.05, 0.05, 0.10, 0.25,  # 00-05
    0.55, 0.90, 1.00, 0.75,              # 06-09 morning peak
    0.30, 0.15, 0.20, 0.15, 0.10, 0.35,  # 10-15
    0.80, 1.00, 0.90, 0.55,              # 16-19 evening peak
    0.30, 0.20, 0.10, 0.05,              # 20-23
)

WEEKEND_CURVE: tuple[float, ...] = (
    0.10, 0.10, 0.10, 0.10, 0.10, 0.10,
    0.20, 0.30, 0.40, 0.60,
    0.70, 0.80, 0.80, 0.80, 0.75, 0.70,
    0.60, 0.60, 0.50, 0.40,
    0.30, 0.20, 0.20, 0.10,
)

FRIDAY_BONUS = 0.1
_FRIDAY = 4
_FRIDAY_WINDOW = range(15, 20)

# (ramp_in_start, plateau_start, plateau_end, ramp_out_end) in minutes of day, peak multiplier
_TRANSITION_WINDOWS: tuple[tuple[int, int, int, int, float], ...] = (
    (6 * 60 + 30, 7 * 60 + 15, 8 * 60 + 15, 9 * 60, 1.45),
    (15 * 60 + 45, 16 * 60 + 30, 17 * 60 + 45, 18 * 60 + 30, 1.40),
)


def is_weekend(when: datetime) -> bool:
    return when.weekday() >= 5


def _curve_value(when: datetime) -> float:
    curve = WEEKEND_CURVE if is_weekend(when) else WEEKDAY_CURVE
    return curve[when.hour]


def time_traffic_factor(when: datetime) -> float:
    """Congestion intensity at ``when``, interpolated between hourly entries."""
    this_hour = when.replace(minute=0, second=0, microsecond=0)
    next_hour = this_hour + timedelta(hours=1)
    fraction = (when.minute + when.second / 60.0) / 60.0

    start = _curve_value(this_hour)
    end = _curve_value(next_hour)
    factor = start + (end - start) * fraction

    if when.weekday() == _FRIDAY and when.hour in _FRIDAY_WINDOW:
        factor = min(1.0, factor + FRIDAY_BONUS)
    return factor


def transition_multiplier(when: datetime) -> float:
    """Amplifier applied near rush-hour boundaries; 1.0 elsewhere and on weekends."""
    if is_weekend(when):
        return 1.0

    minutes = when.hour * 60 + when.minute + when.second / 60.0
    for ramp_in, plateau_start, plateau_end, ramp_out, peak in _TRANSITION_WINDOWS:
        if minutes < ramp_in or minutes > ramp_out:
            continue
        if minutes < plateau_start:
            return 1.0 + (peak - 1.0) * (minutes - ramp_in) / (plateau_start - ramp_in)
        if minutes <= plateau_end:
            return peak
        return peak - (peak - 1.0) * (minutes - plateau_end) / (ramp_out - plateau_end)
    return 1.0


__all__ = [
    "WEEKDAY_CURVE",
    "WEEKEND_CURVE",
    "is_weekend",
    "time_traffic_factor",
    "transition_multiplier",
]
