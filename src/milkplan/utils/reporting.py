"""
Tabular views of a dispatch schedule.

The grid view mirrors the operator's planning sheet: one row per day, one
column per collection time, each filled cell showing the vehicle and why it was
sent.  Empty cells carry a placeholder.
"""

import pandas as pd

from milkplan.core_types import DispatchSchedule, ReasonCode, ScheduleEntry

EMPTY_CELL = "–"

REASON_LABELS = {
    ReasonCode.OVER_CAPACITY: "Over capacity",
    ReasonCode.VEHICLE_AVAILABLE: "Vehicle available",
}


def format_reason(entry: ScheduleEntry) -> str:
    """E.g. ``"Over capacity, 2,834 kg left"``."""
    return f"{REASON_LABELS[entry.reason]}, {entry.quantity_remaining:,} kg left"


def format_cell(entry: ScheduleEntry | None) -> str:
    if entry is None:
        return EMPTY_CELL
    return f"{entry.vehicle_name}\n({format_reason(entry)})"


def schedule_grid(schedule: DispatchSchedule) -> pd.DataFrame:
    """Days by collection times, one formatted cell per slot."""
    constants = schedule.config.constants
    labels = constants.slot_labels
    index = [f"Day {day + 1}" for day in range(constants.horizon_days)]

    grid = pd.DataFrame(EMPTY_CELL, index=index, columns=list(labels))
    grid.index.name = "Day / Time"
    for state in schedule.trace:
        if state.entry is not None:
            grid.iat[state.slot.day, state.slot.slot_index] = format_cell(state.entry)
    return grid


def schedule_table(schedule: DispatchSchedule) -> pd.DataFrame:
    """One row per pickup, in timeline order."""
    columns = ["Day", "Time", "Vehicle", "Reason", "Buffer", "Remaining"]
    rows = [
        {
            "Day": entry.slot.day + 1,
            "Time": f"{entry.slot.hour_of_day:02d}:00",
            "Vehicle": entry.vehicle_name,
            "Reason": REASON_LABELS[entry.reason],
            "Buffer": entry.buffer_level,
            "Remaining": entry.quantity_remaining,
        }
        for entry in sorted(schedule.entries, key=lambda e: e.slot)
    ]
    return pd.DataFrame(rows, columns=columns)
