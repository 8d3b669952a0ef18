"""Shared fixtures for the milkplan test suite."""

import os
from pathlib import Path

import pytest

from milkplan.config import SimulationConfig
from milkplan.utils.logging import EFFECTIVE_LOG_LEVEL_ENV, LOG_LEVEL_ENV, LogLevel, PlannerLogger

ASSETS_DIR = Path(__file__).parent / "_assets" / "configs"


@pytest.fixture(autouse=True)
def _reset_logging_state():
    """Keep the process-wide log level from leaking between tests."""
    saved = {key: os.environ.get(key) for key in (LOG_LEVEL_ENV, EFFECTIVE_LOG_LEVEL_ENV)}
    yield
    PlannerLogger._current_level = LogLevel.NORMAL
    for key, value in saved.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


@pytest.fixture
def base_config():
    """The reference scenario: 26 t/day, three vehicles, 40 h trips."""
    return SimulationConfig(
        daily_production=26000,
        initial_storage=0,
        trip_duration_hours=40,
        weekly_work_hours=168,
        fleet_size=3,
    )


@pytest.fixture
def base_config_path():
    return ASSETS_DIR / "base_config.yaml"


@pytest.fixture
def minimal_config_path():
    return ASSETS_DIR / "minimal_config.yaml"
