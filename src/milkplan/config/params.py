"""Parameter container dataclasses for the milkplan configuration system.

Planning inputs are immutable: a :class:`SimulationConfig` is validated once
when it is built and can then be handed to the advisor and the simulator as a
plain value.  Changing a field means building a new config (``dataclasses.replace``
or :meth:`SimulationConfig.with_fleet_size`).  A small mutable
:class:`RuntimeParams` bucket captures execution toggles that do not influence
the schedule.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from numbers import Real

from milkplan.exceptions import InvalidConfiguration

__all__ = [
    "COLLECTION_HOURS",
    "TRANSPORT_CAPACITY",
    "STORAGE_CAPACITY",
    "HORIZON_DAYS",
    "PlanningConstants",
    "SimulationConfig",
    "RuntimeParams",
    "PlannerParams",
    "default_vehicle_name",
    "resize_vehicle_names",
]


def _check_number(name: str, value, *, minimum: float, strict: bool) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidConfiguration(name, f"must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidConfiguration(name, f"must be finite, got {value!r}")
    if strict and value <= minimum:
        raise InvalidConfiguration(name, f"must be greater than {minimum}, got {value}")
    if not strict and value < minimum:
        raise InvalidConfiguration(name, f"must be at least {minimum}, got {value}")


def _check_integer(name: str, value, *, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfiguration(name, f"must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidConfiguration(name, f"must be at least {minimum}, got {value}")


def default_vehicle_name(index: int) -> str:
    return f"Vehicle {index + 1}"


def resize_vehicle_names(names: Sequence[str] | None, size: int) -> tuple[str, ...]:
    """Return exactly ``size`` names, keeping existing ones by position.

    Missing or blank entries get the default ``"Vehicle {i+1}"`` label and names
    beyond ``size`` are dropped.
    """
    names = list(names or ())
    resized = []
    for index in range(size):
        name = names[index] if index < len(names) else None
        if name is None or not str(name).strip():
            name = default_vehicle_name(index)
        resized.append(str(name))
    return tuple(resized)


# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------

COLLECTION_HOURS = (3, 7, 14)
TRANSPORT_CAPACITY = 14500
STORAGE_CAPACITY = 16000
HORIZON_DAYS = 10


@dataclass(frozen=True, slots=True)
class PlanningConstants:
    """Fixed facts about the site: collection times, capacities, horizon."""

    collection_hours: tuple[int, ...] = COLLECTION_HOURS
    transport_capacity: float = TRANSPORT_CAPACITY
    storage_capacity: float = STORAGE_CAPACITY
    horizon_days: int = HORIZON_DAYS

    def __post_init__(self):  # type: ignore[override]
        _check_number("transport_capacity", self.transport_capacity, minimum=0, strict=True)
        _check_number("storage_capacity", self.storage_capacity, minimum=0, strict=True)
        _check_integer("horizon_days", self.horizon_days, minimum=1)

        hours = tuple(self.collection_hours)
        if not hours:
            raise InvalidConfiguration("collection_hours", "at least one collection time is required")
        for hour in hours:
            if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour < 24:
                raise InvalidConfiguration(
                    "collection_hours", f"hours must be integers in [0, 24), got {hour!r}"
                )
        if any(later <= earlier for earlier, later in zip(hours, hours[1:])):
            raise InvalidConfiguration("collection_hours", f"must be strictly increasing, got {list(hours)}")
        object.__setattr__(self, "collection_hours", hours)

    @property
    def slots_per_day(self) -> int:
        return len(self.collection_hours)

    @property
    def slot_labels(self) -> tuple[str, ...]:
        """Clock labels such as ``"03:00"`` for each collection time."""
        return tuple(f"{hour:02d}:00" for hour in self.collection_hours)


# ---------------------------------------------------------------------------
# Simulation inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    """Everything a single planning run depends on."""

    daily_production: float
    initial_storage: float
    trip_duration_hours: float
    weekly_work_hours: float
    fleet_size: int
    vehicle_names: tuple[str, ...] | None = None
    constants: PlanningConstants = field(default_factory=PlanningConstants)

    def __post_init__(self):  # type: ignore[override]
        _check_number("daily_production", self.daily_production, minimum=0, strict=False)
        _check_number("initial_storage", self.initial_storage, minimum=0, strict=False)
        _check_number("trip_duration_hours", self.trip_duration_hours, minimum=0, strict=True)
        _check_number("weekly_work_hours", self.weekly_work_hours, minimum=0, strict=True)
        _check_integer("fleet_size", self.fleet_size, minimum=0)

        if not isinstance(self.constants, PlanningConstants):
            raise InvalidConfiguration("constants", "must be a PlanningConstants instance")

        if isinstance(self.vehicle_names, str):
            raise InvalidConfiguration("vehicle_names", "must be a sequence of names, not a single string")
        object.__setattr__(
            self, "vehicle_names", resize_vehicle_names(self.vehicle_names, self.fleet_size)
        )

    @property
    def production_per_slot(self) -> float:
        """Quantity arriving in the buffer before each collection time."""
        return self.daily_production / self.constants.slots_per_day

    def with_fleet_size(self, fleet_size: int) -> SimulationConfig:
        """Copy of this config with ``fleet_size`` changed and names resized."""
        return dataclasses.replace(self, fleet_size=fleet_size)


# ---------------------------------------------------------------------------
# Runtime parameters – toggles that never change the schedule
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class RuntimeParams:
    verbose: bool = False
    debug: bool = False
    n_jobs: int | None = None


# ---------------------------------------------------------------------------
# Aggregate container
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class PlannerParams:
    """Aggregate parameter object returned by the YAML loader."""

    simulation: SimulationConfig
    runtime: RuntimeParams = field(default_factory=RuntimeParams)
