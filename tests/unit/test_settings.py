"""Environment-driven settings tests."""

from pathlib import Path

from routecast.config.settings import load_settings, resolve_provider_snapshot, resolve_route_provider


def test_defaults(monkeypatch):
    for name in ("OSRM_PROFILE", "TOOL_HTTP_TIMEOUT_SECONDS", "CORRIDOR_WEIGHTS_PATH", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CORRIDOR_WEIGHTS_ENABLED", "")

    settings = load_settings()

    assert settings.osrm_base_url == "https://router.project-osrm.org"
    assert settings.osrm_profile == "driving"
    assert settings.http_timeout_seconds == 10.0
    assert settings.route_max_attempts == 3
    assert settings.weights_enabled is True
    assert settings.weights_path == Path("data") / "corridor_weights.json"
    assert settings.cors_origins == ["*"]


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TOOL_HTTP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("ROUTE_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.test, https://b.test")
    monkeypatch.setenv("CORRIDOR_WEIGHTS_PATH", "/tmp/w.json")

    settings = load_settings()

    assert settings.http_timeout_seconds == 2.5
    assert settings.route_max_attempts == 5
    assert settings.cors_origins == ["https://a.test", "https://b.test"]
    assert settings.weights_path == Path("/tmp/w.json")


def test_bad_numbers_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("TOOL_HTTP_TIMEOUT_SECONDS", "soon")
    assert load_settings().http_timeout_seconds == 10.0


def test_unknown_provider_falls_back_to_osrm(monkeypatch):
    monkeypatch.setenv("ROUTE_PROVIDER", "carrier-pigeon")
    assert resolve_route_provider() == "osrm"


def test_provider_snapshot_in_offline_mode():
    snapshot = resolve_provider_snapshot()
    assert snapshot.route_provider == "mock"
    assert snapshot.weather_provider == "mock"
    assert snapshot.weights_backend == "memory"


def test_non_positive_numbers_are_clamped(monkeypatch):
    monkeypatch.setenv("ROUTE_MAX_ATTEMPTS", "0")
    monkeypatch.setenv("TOOL_HTTP_TIMEOUT_SECONDS", "-1")
    settings = load_settings()
    assert settings.route_max_attempts == 3
    assert settings.http_timeout_seconds == 10.0

    monkeypatch.setenv("ROUTE_MAX_ATTEMPTS", "0.5")
    assert load_settings().route_max_attempts == 1
