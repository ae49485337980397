"""Runtime configuration."""

from routecast.config.settings import EngineSettings, load_settings, resolve_provider_snapshot

__all__ = ["EngineSettings", "load_settings", "resolve_provider_snapshot"]
