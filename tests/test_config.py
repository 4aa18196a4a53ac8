"""Tests for settings and logging setup."""

import structlog
from structlog.testing import capture_logs

from fieldcheck.config import Settings, get_settings
from fieldcheck.logging_config import configure_logging


def test_defaults() -> None:
    settings = Settings()

    assert settings.DEFAULT_VALID_MESSAGE == "This field is valid."
    assert settings.DEFAULT_DATE_FORMAT == "m/d/Y"
    assert settings.DEFAULT_TIME_FORMAT == "H:i"
    assert settings.CONTENT_INSPECTION is True


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("FIELDCHECK_INSPECTION_BYTES", "64")
    monkeypatch.setenv("FIELDCHECK_DEBUG", "true")

    settings = get_settings()

    assert settings.INSPECTION_BYTES == 64
    assert settings.DEBUG is True
    assert get_settings() is settings


def test_configure_logging_filters_below_level() -> None:
    try:
        configure_logging(debug=True, level="warning")
        logger = structlog.get_logger()

        with capture_logs() as logs:
            logger.info("ignored")
            logger.warning("kept", field="email")

        assert [entry["event"] for entry in logs] == ["kept"]
    finally:
        structlog.reset_defaults()
