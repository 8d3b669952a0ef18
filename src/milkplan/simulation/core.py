"""
core.py

Greedy dispatch simulation over the fixed collection timeline.

The planning horizon is a sequence of collection slots (by default ten days
with collections at 03:00, 07:00 and 14:00).  Before each slot one installment
of the daily production lands in the storage buffer.  The slot is then offered
to the fleet in index order and the first vehicle that is back from its
previous trip takes one transport load, provided the buffer holds at least one
full load.  At most one pickup happens per slot, and there is no look-ahead or
backtracking.

Per-vehicle state
-----------------
A vehicle is AVAILABLE while ``available_at_hour <= slot hour`` and BUSY
otherwise.  Assignment moves it to BUSY until ``slot hour + trip duration``;
it becomes AVAILABLE again implicitly as the timeline advances.

Reason codes
------------
* ``OVER_CAPACITY``     – the buffer exceeded the storage capacity.
* ``VEHICLE_AVAILABLE`` – the buffer merely reached one transport load.

The buffer is never clamped.  Overflow is only reported through the reason
code, so a fleet that is too small shows up as a run of ``OVER_CAPACITY``
pickups and a growing buffer.

Typical usage
-------------
>>> from milkplan.config import SimulationConfig
>>> from milkplan.simulation import simulate
>>> schedule = simulate(SimulationConfig(26000, 0, 40, 168, 3))
>>> schedule.entry_at(0, 1).vehicle_name
'Vehicle 1'
"""

import math

from milkplan.config.params import SimulationConfig
from milkplan.core_types import (
    DispatchSchedule,
    ReasonCode,
    ScheduleEntry,
    SlotState,
    TimeSlot,
    Vehicle,
    timeline,
)
from milkplan.utils.logging import PlannerLogger

logger = PlannerLogger.get_logger(__name__)


def _classify(buffer: float, storage_capacity: float) -> ReasonCode:
    if buffer > storage_capacity:
        return ReasonCode.OVER_CAPACITY
    return ReasonCode.VEHICLE_AVAILABLE


def _pick_vehicle(
    fleet: list[Vehicle], slot: TimeSlot, buffer: float, transport_capacity: float
) -> Vehicle | None:
    """First available vehicle in index order, or None."""
    if buffer < transport_capacity:
        return None
    for vehicle in fleet:
        if vehicle.is_available(slot.absolute_hour):
            return vehicle
    return None


def simulate(config: SimulationConfig) -> DispatchSchedule:
    """Run the dispatch timeline once and return the resulting schedule.

    Args:
        config: Validated planning inputs.  Validation happens when the config
            is built, so the loop itself has no error states.

    Returns:
        DispatchSchedule: mapping of filled slots to their pickup, plus the
        buffer trace for every slot.
    """
    constants = config.constants
    transport_capacity = constants.transport_capacity
    production = config.production_per_slot

    fleet = [
        Vehicle(index=index, name=name)
        for index, name in enumerate(config.vehicle_names)
    ]
    buffer = config.initial_storage
    trace: list[SlotState] = []

    logger.debug(
        f"Simulating {constants.horizon_days} days x {constants.slots_per_day} slots "
        f"with {config.fleet_size} vehicle(s), {production:,.2f} per slot"
    )

    for slot in timeline(constants):
        buffer += production
        buffer_before = buffer
        entry = None

        vehicle = _pick_vehicle(fleet, slot, buffer, transport_capacity)
        if vehicle is not None:
            entry = ScheduleEntry(
                slot=slot,
                vehicle_index=vehicle.index,
                vehicle_name=vehicle.name,
                reason=_classify(buffer, constants.storage_capacity),
                quantity_remaining=math.ceil(buffer - transport_capacity),
                buffer_level=buffer,
            )
            buffer -= transport_capacity
            vehicle.available_at_hour = slot.absolute_hour + config.trip_duration_hours
            logger.debug(
                f"{slot.label}: {vehicle.name} collects ({entry.reason.value}), "
                f"{entry.quantity_remaining:,} left, back at hour "
                f"{vehicle.available_at_hour:g}"
            )
        elif buffer >= transport_capacity:
            logger.debug(f"{slot.label}: backlog {buffer:,.0f} but no vehicle available")

        trace.append(
            SlotState(slot=slot, buffer_before=buffer_before, buffer_after=buffer, entry=entry)
        )

    schedule = DispatchSchedule(config=config, trace=trace)
    logger.debug(f"Simulation finished: {len(schedule)} pickup(s), final buffer {buffer:,.0f}")
    return schedule
