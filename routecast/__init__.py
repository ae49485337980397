"""routecast: traffic-aware route ranking."""

__version__ = "0.3.0"
