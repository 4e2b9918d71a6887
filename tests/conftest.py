"""Pytest configuration and fixtures."""

import os

import pytest

# Set test environment before any app code runs
os.environ["ENV"] = "test"


@pytest.fixture(autouse=True)
def fresh_settings():
    """Clear cached settings so env changes in a test take effect."""
    from core.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def calculator():
    """Calculator bound to the default tables."""
    from engine.scoring.calculator import FitnessTestCalculator

    return FitnessTestCalculator()
