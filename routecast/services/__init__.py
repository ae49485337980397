"""Service layer public exports."""

from routecast.services.route_service import RouteService, build_route_service

__all__ = ["RouteService", "build_route_service"]
