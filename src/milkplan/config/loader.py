"""Utilities for loading milkplan configuration YAML files into the
parameter dataclass hierarchy.

Only the five planning figures are mandatory; ``vehicle_names``, ``constants``
and ``runtime`` fall back to their dataclass defaults.  Unknown keys are
rejected so that a typo never silently leaves a default in place.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from milkplan.exceptions import InvalidConfiguration
from milkplan.utils.logging import PlannerLogger

from .params import PlannerParams, PlanningConstants, RuntimeParams, SimulationConfig

logger = PlannerLogger.get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default_config.yaml"

_REQUIRED_KEYS = (
    "daily_production",
    "initial_storage",
    "trip_duration_hours",
    "weekly_work_hours",
    "fleet_size",
)
_CONSTANT_KEYS = {"collection_hours", "transport_capacity", "storage_capacity", "horizon_days"}
_RUNTIME_KEYS = {"verbose", "debug", "n_jobs"}

# ---------------------------------------------------------------------------
# Helper parsing routines
# ---------------------------------------------------------------------------


def _section(data: dict[str, Any], name: str, allowed: set[str]) -> dict[str, Any]:
    raw = data.pop(name, None) or {}
    if not isinstance(raw, dict):
        raise InvalidConfiguration(name, "must be a mapping")
    unknown = set(raw) - allowed
    if unknown:
        raise InvalidConfiguration(name, f"unknown keys: {', '.join(sorted(unknown))}")
    return dict(raw)


def _parse_constants(raw: dict[str, Any]) -> PlanningConstants:
    if "collection_hours" in raw:
        hours = raw["collection_hours"]
        if not isinstance(hours, list):
            raise InvalidConfiguration("collection_hours", "must be a list of hours")
        raw["collection_hours"] = tuple(hours)
    return PlanningConstants(**raw)


def _parse_vehicle_names(raw: Any) -> tuple[str, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise InvalidConfiguration("vehicle_names", "must be a list of names")
    return tuple("" if name is None else str(name) for name in raw)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_yaml(path: str | Path) -> PlannerParams:
    """Load a YAML configuration file into :class:`PlannerParams`."""

    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(cfg_path)

    try:
        with cfg_path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise InvalidConfiguration(
            "config", f"error parsing YAML configuration {cfg_path}: {exc}"
        ) from exc

    if not isinstance(data, dict):
        raise InvalidConfiguration("config", f"{cfg_path} must contain a mapping at top level")

    missing = [key for key in _REQUIRED_KEYS if key not in data]
    if missing:
        raise InvalidConfiguration(missing[0], f"missing from {cfg_path}")

    constants = _parse_constants(_section(data, "constants", _CONSTANT_KEYS))
    runtime = RuntimeParams(**_section(data, "runtime", _RUNTIME_KEYS))

    simulation = SimulationConfig(
        daily_production=data.pop("daily_production"),
        initial_storage=data.pop("initial_storage"),
        trip_duration_hours=data.pop("trip_duration_hours"),
        weekly_work_hours=data.pop("weekly_work_hours"),
        fleet_size=data.pop("fleet_size"),
        vehicle_names=_parse_vehicle_names(data.pop("vehicle_names", None)),
        constants=constants,
    )

    # Any remaining unknown keys will raise an error to avoid silent mistakes.
    if data:
        unknown_keys = ", ".join(sorted(data.keys()))
        raise InvalidConfiguration(
            "config", f"unknown top-level configuration keys in YAML: {unknown_keys}"
        )

    logger.debug("Loaded configuration – simulation: %s runtime: %s", simulation, runtime)

    return PlannerParams(simulation=simulation, runtime=runtime)


def load_default() -> PlannerParams:
    """Load the configuration file shipped with the package."""
    return load_yaml(DEFAULT_CONFIG_PATH)
