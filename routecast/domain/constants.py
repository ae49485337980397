"""Domain constants."""

COLOR_PRIMARY = "#007AFF"
COLOR_WARNING = "#FF9800"
COLOR_DANGER = "#F44336"
COLOR_NEUTRAL = "#333333"

# Seconds per meter: a 6.6 km reference trip maps to a 7 minute baseline.
CALIBRATION_SECONDS_PER_METER = 420.0 / 6600.0

PREDICTION_OFFSETS: tuple[int, ...] = (0, 15, 30)
MAX_RANKED_ROUTES = 3

UNNAMED_ROAD = "Unnamed Road"
