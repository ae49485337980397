"""Environment-driven engine settings and provider snapshot helpers."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "yes", "on"}
_PROVIDER_MODES = {"osrm", "mock"}
_DEFAULT_WEIGHTS_PATH = Path("data") / "corridor_weights.json"


def _is_enabled(value: str | None, default: bool = False) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def resolve_route_provider() -> str:
    mode = str(os.getenv("ROUTE_PROVIDER") or "").strip().lower()
    return mode if mode in _PROVIDER_MODES else "osrm"


class EngineSettings(BaseModel):
    route_provider: str = Field(default="osrm")
    osrm_base_url: str = Field(default="https://router.project-osrm.org")
    osrm_profile: str = Field(default="driving")
    geocode_base_url: str = Field(default="https://nominatim.openstreetmap.org")
    geocode_country_codes: str = Field(default="zw")
    geocode_user_agent: str = Field(default="routecast/0.3")
    weather_base_url: str = Field(default="https://api.open-meteo.com")
    http_timeout_seconds: float = Field(default=10.0, gt=0)
    route_max_attempts: int = Field(default=3, ge=1)
    weights_enabled: bool = Field(default=True)
    weights_path: Path = Field(default=_DEFAULT_WEIGHTS_PATH)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


def load_settings() -> EngineSettings:
    weights_path = os.getenv("CORRIDOR_WEIGHTS_PATH", "").strip()
    return EngineSettings(
        route_provider=resolve_route_provider(),
        osrm_base_url=os.getenv("OSRM_BASE_URL", "https://router.project-osrm.org").rstrip("/"),
        osrm_profile=os.getenv("OSRM_PROFILE", "driving"),
        geocode_base_url=os.getenv("GEOCODE_BASE_URL", "https://nominatim.openstreetmap.org").rstrip("/"),
        geocode_country_codes=os.getenv("GEOCODE_COUNTRY_CODES", "zw"),
        geocode_user_agent=os.getenv("GEOCODE_USER_AGENT", "routecast/0.3"),
        weather_base_url=os.getenv("WEATHER_BASE_URL", "https://api.open-meteo.com").rstrip("/"),
        http_timeout_seconds=_env_float("TOOL_HTTP_TIMEOUT_SECONDS", 10.0),
        route_max_attempts=max(1, int(_env_float("ROUTE_MAX_ATTEMPTS", 3))),
        weights_enabled=_is_enabled(os.getenv("CORRIDOR_WEIGHTS_ENABLED"), default=True),
        weights_path=Path(weights_path) if weights_path else _DEFAULT_WEIGHTS_PATH,
        cors_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()],
    )


class ProviderSnapshot(BaseModel):
    route_provider: str = Field(default="osrm")
    weather_provider: str = Field(default="open-meteo")
    geocode_provider: str = Field(default="nominatim")
    weights_backend: str = Field(default="json")


def resolve_provider_snapshot(settings: EngineSettings | None = None) -> ProviderSnapshot:
    settings = settings or load_settings()
    offline = settings.route_provider == "mock"
    return ProviderSnapshot(
        route_provider=settings.route_provider,
        weather_provider="mock" if offline else "open-meteo",
        geocode_provider="mock" if offline else "nominatim",
        weights_backend="json" if settings.weights_enabled else "memory",
    )


__all__ = [
    "EngineSettings",
    "ProviderSnapshot",
    "load_settings",
    "resolve_provider_snapshot",
    "resolve_route_provider",
]
