"""Tests for settings and logging setup."""

import pytest
import structlog
from structlog.testing import capture_logs

from core.config import DEFAULT_SCORING_TABLE_REVISION, get_settings
from core.logging import get_logger, setup_logging
from engine.scoring.calculator import FitnessTestCalculator


def test_settings_defaults() -> None:
    settings = get_settings()

    assert settings.is_test
    assert not settings.is_production
    assert settings.scoring_table_revision == DEFAULT_SCORING_TABLE_REVISION


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.is_production
    assert settings.log_level == "debug"


@pytest.fixture
def reset_structlog():
    """Restore structlog defaults after a test configures it."""
    yield
    structlog.reset_defaults()


def test_setup_logging(reset_structlog: None) -> None:
    setup_logging()

    with capture_logs() as logs:
        get_logger("test").info("logging_configured")

    assert structlog.is_configured()
    assert logs == [{"event": "logging_configured", "log_level": "info"}]


def test_setup_logging_filters_debug(reset_structlog: None) -> None:
    setup_logging()

    with capture_logs() as logs:
        FitnessTestCalculator().compute_combat_test("male", 24, 158, 106, 134)

    assert logs == []


def test_calculator_logs_table_revision() -> None:
    with capture_logs() as logs:
        FitnessTestCalculator().compute_combat_test("male", 24, 158, 106, 134)

    assert logs == [
        {
            "event": "cft_score_calculated",
            "log_level": "debug",
            "table_revision": DEFAULT_SCORING_TABLE_REVISION,
            "age_bracket": "21-25",
            "total_points": 300,
            "classification": "First",
            "pass_status": "PASS",
        }
    ]
