"""Configuration module for milkplan parameters."""

from .params import (
    PlannerParams,
    PlanningConstants,
    RuntimeParams,
    SimulationConfig,
    resize_vehicle_names,
)
from .loader import DEFAULT_CONFIG_PATH, load_default
from .loader import load_yaml as load_planner_params

__all__ = [
    "PlanningConstants",
    "SimulationConfig",
    "RuntimeParams",
    "PlannerParams",
    "resize_vehicle_names",
    "DEFAULT_CONFIG_PATH",
    "load_default",
    "load_planner_params",
]
