from unittest.mock import patch

from app.core.config import Settings, settings
from app.core.monitoring import init_sentry


def test_sentry_disabled_without_dsn(monkeypatch):
    monkeypatch.setattr(settings, "SENTRY_DSN", None)
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")

    with patch("app.core.monitoring.sentry_sdk.init") as init:
        assert init_sentry() is False
    init.assert_not_called()


def test_sentry_disabled_outside_production(monkeypatch):
    monkeypatch.setattr(settings, "SENTRY_DSN", "https://key@o0.ingest.sentry.io/1")
    monkeypatch.setattr(settings, "ENVIRONMENT", "development")

    with patch("app.core.monitoring.sentry_sdk.init") as init:
        assert init_sentry() is False
    init.assert_not_called()


def test_sentry_enabled_in_production(monkeypatch):
    monkeypatch.setattr(settings, "SENTRY_DSN", "https://key@o0.ingest.sentry.io/1")
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    monkeypatch.setattr(settings, "SENTRY_TRACES_SAMPLE_RATE", 0.25)

    with patch("app.core.monitoring.sentry_sdk.init") as init:
        assert init_sentry() is True

    kwargs = init.call_args.kwargs
    assert kwargs["dsn"] == "https://key@o0.ingest.sentry.io/1"
    assert kwargs["environment"] == "production"
    assert kwargs["traces_sample_rate"] == 0.25


def test_cors_origins_accept_comma_separated_string():
    parsed = Settings(
        SECRET_KEY="x",
        DATABASE_URL="sqlite+aiosqlite://",
        BACKEND_CORS_ORIGINS="http://localhost:3000, https://dawai.app",
    )

    assert [str(o).rstrip("/") for o in parsed.BACKEND_CORS_ORIGINS] == ["http://localhost:3000", "https://dawai.app"]
