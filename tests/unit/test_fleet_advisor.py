"""Test the advisory fleet sizing."""

import math
from fractions import Fraction

import pytest

from milkplan.advisor import assess_fleet, suggest_fleet_size
from milkplan.config import PlanningConstants, SimulationConfig
from milkplan.exceptions import InvalidConfiguration


def test_reference_suggestion():
    # 182000 kg/week -> 13 trips -> ceil(13 * 40 / 168) = 4
    assert suggest_fleet_size(26000, 40, 168) == 4


def test_no_production_needs_no_vehicles():
    assert suggest_fleet_size(0, 40, 168) == 0


def test_partial_trip_rounds_up():
    # 14501 kg/week is one kg over a single load.
    assert suggest_fleet_size(14501 / 7, 1, 168) == 1
    # Seven full loads a week: 7 * 24 h fits one vehicle exactly, 7 * 25 h does not.
    assert suggest_fleet_size(14500, 24, 168) == 1
    assert suggest_fleet_size(14500, 25, 168) == 2


def test_partial_vehicle_rounds_up():
    # 13 trips of 13 h fill 169 h, one hour beyond a single vehicle's week.
    assert suggest_fleet_size(26000, 13, 168) == 2


def test_custom_transport_capacity():
    assert suggest_fleet_size(1000, 10, 70, transport_capacity=1000) == 1
    assert suggest_fleet_size(1000, 10, 69, transport_capacity=1000) == 2


@pytest.mark.parametrize(
    "args, field",
    [
        ((26000, 40, 0), "weekly_work_hours"),
        ((26000, 40, -1), "weekly_work_hours"),
        ((26000, 0, 168), "trip_duration_hours"),
        ((26000, -5, 168), "trip_duration_hours"),
        ((-1, 40, 168), "daily_production"),
        ((math.nan, 40, 168), "daily_production"),
        ((26000, math.inf, 168), "trip_duration_hours"),
        (("26000", 40, 168), "daily_production"),
    ],
)
def test_invalid_inputs_are_rejected(args, field):
    with pytest.raises(InvalidConfiguration) as excinfo:
        suggest_fleet_size(*args)
    assert excinfo.value.field == field


def test_zero_transport_capacity_is_rejected():
    with pytest.raises(InvalidConfiguration, match="transport_capacity"):
        suggest_fleet_size(26000, 40, 168, transport_capacity=0)


def test_assess_fleet_reports_shortfall(base_config):
    advice = assess_fleet(base_config)

    assert advice.weekly_quantity == 182000
    assert advice.trips_needed == 13
    assert advice.suggested_fleet_size == 4
    assert advice.fleet_size == 3
    assert not advice.sufficient
    assert advice.weekly_quantity == 182000.0
    assert "at least 4" in advice.message


def test_assess_fleet_sufficient_when_fleet_matches(base_config):
    advice = assess_fleet(base_config.with_fleet_size(4))

    assert advice.sufficient
    assert advice.message.startswith("Fleet is sufficient")


def test_assess_fleet_uses_configured_capacity():
    config = SimulationConfig(
        daily_production=1000,
        initial_storage=0,
        trip_duration_hours=10,
        weekly_work_hours=70,
        fleet_size=1,
        constants=PlanningConstants(transport_capacity=1000, storage_capacity=1200),
    )

    advice = assess_fleet(config)
    assert advice.trips_needed == 7
    assert advice.suggested_fleet_size == 1


def test_fraction_inputs_are_accepted():
    assert suggest_fleet_size(Fraction(26000), Fraction(40), 168) == 4


def test_assess_fleet_accepts_what_the_config_accepts():
    config = SimulationConfig(
        daily_production=Fraction(26000),
        initial_storage=0,
        trip_duration_hours=Fraction(40),
        weekly_work_hours=168,
        fleet_size=3,
    )

    advice = assess_fleet(config)

    assert advice.suggested_fleet_size == 4
    assert not advice.sufficient
    assert advice.weekly_quantity == 182000.0
