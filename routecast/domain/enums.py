"""Domain enums."""

from enum import Enum


class RoadType(str, Enum):
    HIGHWAY = "HIGHWAY"
    MAIN = "MAIN_ROAD"
    LOCAL = "LOCAL_ROAD"
    NARROW = "NARROW_ROAD"


class WeatherTier(int, Enum):
    CLEAR = 0
    DRIZZLE = 1
    RAIN = 2
    STORM = 3


class Severity(str, Enum):
    CLEAR = "clear"
    MODERATE = "moderate"
    HEAVY = "heavy"


class RouteLabel(str, Enum):
    BEST = "BEST"
    ALT = "ALT"
    SLOW = "SLOW"


class Trend(str, Enum):
    IMPROVING = "improving"
    WORSENING = "worsening"
    STABLE = "stable"
