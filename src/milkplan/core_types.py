from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum

import pandas as pd

from milkplan.config.params import PlanningConstants, SimulationConfig


class ReasonCode(Enum):
    """Why a pickup was scheduled in a slot."""

    OVER_CAPACITY = "over_capacity"  # buffer above storage capacity
    VEHICLE_AVAILABLE = "vehicle_available"  # buffer merely reached one load


@dataclass(frozen=True, order=True)
class TimeSlot:
    """One collection opportunity, ordered by day then slot index."""

    day: int
    slot_index: int
    hour_of_day: int = field(compare=False)

    @property
    def absolute_hour(self) -> int:
        return self.day * 24 + self.hour_of_day

    @property
    def key(self) -> tuple[int, int]:
        return (self.day, self.slot_index)

    @property
    def label(self) -> str:
        return f"Day {self.day + 1} {self.hour_of_day:02d}:00"


def timeline(constants: PlanningConstants | None = None) -> list[TimeSlot]:
    """All slots of the planning horizon in scheduling order."""
    constants = constants or PlanningConstants()
    return [
        TimeSlot(day=day, slot_index=index, hour_of_day=hour)
        for day in range(constants.horizon_days)
        for index, hour in enumerate(constants.collection_hours)
    ]


@dataclass
class Vehicle:
    """A vehicle as seen by one simulation run."""

    index: int
    name: str
    available_at_hour: float = 0

    def is_available(self, hour: float) -> bool:
        return self.available_at_hour <= hour


@dataclass(frozen=True)
class ScheduleEntry:
    """A pickup assigned to a slot."""

    slot: TimeSlot
    vehicle_index: int
    vehicle_name: str
    reason: ReasonCode
    quantity_remaining: int  # buffer left after the load, rounded up
    buffer_level: float  # buffer at assignment, before the load is removed


@dataclass(frozen=True)
class SlotState:
    """Buffer trace for a single slot, filled or not."""

    slot: TimeSlot
    buffer_before: float
    buffer_after: float
    entry: ScheduleEntry | None = None


@dataclass(frozen=True)
class FleetAdvice:
    """Advisory fleet sizing, never fed back into the simulator."""

    weekly_quantity: float
    trips_needed: int
    suggested_fleet_size: int
    fleet_size: int

    @property
    def sufficient(self) -> bool:
        return self.fleet_size >= self.suggested_fleet_size

    @property
    def message(self) -> str:
        if self.sufficient:
            return (
                f"Fleet is sufficient: at least {self.suggested_fleet_size} "
                f"vehicle(s) recommended, {self.fleet_size} configured"
            )
        return (
            f"Fleet is too small: at least {self.suggested_fleet_size} "
            f"vehicle(s) recommended, {self.fleet_size} configured"
        )


@dataclass(frozen=True)
class ScheduleSummary:
    """Aggregate figures for one schedule."""

    pickups: int
    over_capacity_pickups: int
    routine_pickups: int
    quantity_collected: float
    peak_buffer: float
    final_buffer: float
    idle_slots_with_backlog: int
    trips_per_vehicle: dict[str, int]

    def to_dict(self) -> dict:
        return {
            "pickups": self.pickups,
            "over_capacity_pickups": self.over_capacity_pickups,
            "routine_pickups": self.routine_pickups,
            "quantity_collected": self.quantity_collected,
            "peak_buffer": self.peak_buffer,
            "final_buffer": self.final_buffer,
            "idle_slots_with_backlog": self.idle_slots_with_backlog,
        }


class DispatchSchedule(Mapping):
    """Read-only mapping of filled :class:`TimeSlot` to :class:`ScheduleEntry`.

    Empty slots are absent from the mapping; the per-slot buffer trace for every
    slot, filled or not, is kept in :attr:`trace`.
    """

    def __init__(self, config: SimulationConfig, trace: list[SlotState]):
        self.config = config
        self.trace: tuple[SlotState, ...] = tuple(trace)
        self._entries: dict[TimeSlot, ScheduleEntry] = {
            state.slot: state.entry for state in self.trace if state.entry is not None
        }
        self._by_key = {slot.key: entry for slot, entry in self._entries.items()}

    def __getitem__(self, slot: TimeSlot) -> ScheduleEntry:
        return self._entries[slot]

    def __iter__(self) -> Iterator[TimeSlot]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DispatchSchedule):
            return NotImplemented
        return self.config == other.config and self.trace == other.trace

    __hash__ = None

    def __repr__(self) -> str:
        return f"DispatchSchedule(pickups={len(self)}, slots={len(self.trace)})"

    @property
    def entries(self) -> list[ScheduleEntry]:
        return list(self._entries.values())

    def entry_at(self, day: int, slot_index: int) -> ScheduleEntry | None:
        return self._by_key.get((day, slot_index))

    def vehicle_trips(self) -> dict[int, list[ScheduleEntry]]:
        """Entries grouped by vehicle index, every vehicle present."""
        trips: dict[int, list[ScheduleEntry]] = {
            index: [] for index in range(self.config.fleet_size)
        }
        for entry in self._entries.values():
            trips[entry.vehicle_index].append(entry)
        return trips

    def summary(self) -> ScheduleSummary:
        capacity = self.config.constants.transport_capacity
        over = sum(1 for e in self._entries.values() if e.reason is ReasonCode.OVER_CAPACITY)
        idle = sum(
            1
            for state in self.trace
            if state.entry is None and state.buffer_before >= capacity
        )
        levels = [self.config.initial_storage] + [s.buffer_before for s in self.trace]
        trips_per_vehicle: dict[str, int] = {}
        for index, trips in self.vehicle_trips().items():
            name = self.config.vehicle_names[index]
            trips_per_vehicle[name] = trips_per_vehicle.get(name, 0) + len(trips)
        return ScheduleSummary(
            pickups=len(self),
            over_capacity_pickups=over,
            routine_pickups=len(self) - over,
            quantity_collected=len(self) * capacity,
            peak_buffer=max(levels),
            final_buffer=self.trace[-1].buffer_after if self.trace else self.config.initial_storage,
            idle_slots_with_backlog=idle,
            trips_per_vehicle=trips_per_vehicle,
        )

    def to_dataframe(self) -> pd.DataFrame:
        """One row per slot, including slots without a pickup."""
        columns = [
            "Day",
            "Slot",
            "Time",
            "Hour",
            "Buffer_Before",
            "Buffer_After",
            "Vehicle",
            "Reason",
            "Remaining",
        ]
        rows = []
        for state in self.trace:
            entry = state.entry
            rows.append(
                {
                    "Day": state.slot.day + 1,
                    "Slot": state.slot.slot_index,
                    "Time": f"{state.slot.hour_of_day:02d}:00",
                    "Hour": state.slot.absolute_hour,
                    "Buffer_Before": state.buffer_before,
                    "Buffer_After": state.buffer_after,
                    "Vehicle": entry.vehicle_name if entry else None,
                    "Reason": entry.reason.value if entry else None,
                    "Remaining": entry.quantity_remaining if entry else None,
                }
            )
        return pd.DataFrame(rows, columns=columns)
