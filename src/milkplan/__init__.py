"""milkplan: Collection dispatch planner for a fixed vehicle fleet."""

__version__ = "0.1.0"

# Main API
from .api import PlanResult, plan

# Stage functions
from .advisor import assess_fleet, suggest_fleet_size
from .simulation import compare_fleet_sizes, simulate, simulate_many

# Core types
from .config import (
    PlannerParams,
    PlanningConstants,
    SimulationConfig,
    load_planner_params,
)
from .core_types import (
    DispatchSchedule,
    FleetAdvice,
    ReasonCode,
    ScheduleEntry,
    ScheduleSummary,
    SlotState,
    TimeSlot,
    timeline,
)
from .exceptions import InvalidConfiguration

__all__ = [
    # Version
    "__version__",
    # Main API
    "plan",
    "PlanResult",
    # Stage functions
    "suggest_fleet_size",
    "assess_fleet",
    "simulate",
    "simulate_many",
    "compare_fleet_sizes",
    # Configuration
    "SimulationConfig",
    "PlanningConstants",
    "PlannerParams",
    "load_planner_params",
    # Types
    "DispatchSchedule",
    "FleetAdvice",
    "ReasonCode",
    "ScheduleEntry",
    "ScheduleSummary",
    "SlotState",
    "TimeSlot",
    "timeline",
    # Errors
    "InvalidConfiguration",
]
