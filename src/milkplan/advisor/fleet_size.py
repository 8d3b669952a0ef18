"""
fleet_size.py

Rule-of-thumb fleet sizing from aggregate weekly demand.

The weekly quantity is turned into whole trips (one trip moves at most one
transport load) and the trips are spread over the weekly working hours of a
single vehicle:

    trips     = ceil(7 * daily_production / transport_capacity)
    suggested = ceil(trips * trip_duration_hours / weekly_work_hours)

Both divisions round up: there are no partial trips and no partial vehicles.
The result is advisory; the dispatch simulator always runs with the fleet the
operator configured.
"""

import math
from numbers import Real

from milkplan.config.params import TRANSPORT_CAPACITY, SimulationConfig
from milkplan.core_types import FleetAdvice
from milkplan.exceptions import InvalidConfiguration
from milkplan.utils.logging import PlannerLogger

logger = PlannerLogger.get_logger(__name__)

DAYS_PER_WEEK = 7


def _validate(name: str, value: float, *, allow_zero: bool) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidConfiguration(name, f"must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidConfiguration(name, f"must be finite, got {value!r}")
    if value < 0 or (value == 0 and not allow_zero):
        bound = "non-negative" if allow_zero else "positive"
        raise InvalidConfiguration(name, f"must be {bound}, got {value}")


def _trips_needed(daily_production: float, transport_capacity: float) -> tuple[float, int]:
    weekly_quantity = daily_production * DAYS_PER_WEEK
    return weekly_quantity, math.ceil(weekly_quantity / transport_capacity)


def suggest_fleet_size(
    daily_production: float,
    trip_duration_hours: float,
    weekly_work_hours: float,
    transport_capacity: float = TRANSPORT_CAPACITY,
) -> int:
    """Minimum number of vehicles needed to move a week of production.

    Raises:
        InvalidConfiguration: if any input is negative or not finite, or if
            ``trip_duration_hours``, ``weekly_work_hours`` or
            ``transport_capacity`` is zero.

    Example:
        >>> suggest_fleet_size(26000, 40, 168)
        4
    """
    _validate("daily_production", daily_production, allow_zero=True)
    _validate("trip_duration_hours", trip_duration_hours, allow_zero=False)
    _validate("weekly_work_hours", weekly_work_hours, allow_zero=False)
    _validate("transport_capacity", transport_capacity, allow_zero=False)

    _, trips = _trips_needed(daily_production, transport_capacity)
    return math.ceil(trips * trip_duration_hours / weekly_work_hours)


def assess_fleet(config: SimulationConfig) -> FleetAdvice:
    """Compare the configured fleet with the suggested minimum."""
    capacity = config.constants.transport_capacity
    weekly_quantity, trips = _trips_needed(config.daily_production, capacity)
    weekly_quantity = float(weekly_quantity)
    suggested = suggest_fleet_size(
        config.daily_production,
        config.trip_duration_hours,
        config.weekly_work_hours,
        transport_capacity=capacity,
    )
    advice = FleetAdvice(
        weekly_quantity=weekly_quantity,
        trips_needed=trips,
        suggested_fleet_size=suggested,
        fleet_size=config.fleet_size,
    )

    logger.debug(
        f"Weekly quantity {weekly_quantity:,.0f} needs {trips} trips -> "
        f"{suggested} vehicle(s) suggested, {config.fleet_size} configured"
    )
    return advice
