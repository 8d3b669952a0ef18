"""Test the tabular schedule views."""

import pytest

from milkplan.config import SimulationConfig
from milkplan.core_types import ReasonCode
from milkplan.simulation import simulate
from milkplan.utils.reporting import (
    EMPTY_CELL,
    format_cell,
    format_reason,
    schedule_grid,
    schedule_table,
)


def test_grid_shape_and_labels(base_config):
    grid = schedule_grid(simulate(base_config))

    assert grid.shape == (10, 3)
    assert list(grid.columns) == ["03:00", "07:00", "14:00"]
    assert grid.index[0] == "Day 1"
    assert grid.index[-1] == "Day 10"
    assert grid.index.name == "Day / Time"


def test_grid_cells(base_config):
    grid = schedule_grid(simulate(base_config))

    assert grid.loc["Day 1", "03:00"] == EMPTY_CELL
    assert grid.loc["Day 1", "07:00"] == "Vehicle 1\n(Over capacity, 2,834 kg left)"
    assert grid.loc["Day 2", "03:00"].startswith("Vehicle 2\n(")


def test_routine_pickup_label():
    config = SimulationConfig(
        daily_production=0,
        initial_storage=15000,
        trip_duration_hours=40,
        weekly_work_hours=168,
        fleet_size=1,
        vehicle_names=("Tanker",),
    )
    entry = simulate(config).entry_at(0, 0)

    assert entry.reason is ReasonCode.VEHICLE_AVAILABLE
    assert format_reason(entry) == "Vehicle available, 500 kg left"
    assert format_cell(entry) == "Tanker\n(Vehicle available, 500 kg left)"


def test_empty_cell_placeholder():
    assert format_cell(None) == EMPTY_CELL


def test_schedule_table_lists_pickups_in_order(base_config):
    schedule = simulate(base_config)
    table = schedule_table(schedule)

    assert list(table.columns) == ["Day", "Time", "Vehicle", "Reason", "Buffer", "Remaining"]
    assert len(table) == len(schedule)
    first = table.iloc[0]
    assert first["Day"] == 1
    assert first["Time"] == "07:00"
    assert first["Vehicle"] == "Vehicle 1"
    assert first["Reason"] == "Over capacity"
    assert first["Buffer"] == pytest.approx(52000 / 3)
    assert first["Remaining"] == 2834
    assert table["Day"].is_monotonic_increasing


def test_schedule_table_without_pickups(base_config):
    table = schedule_table(simulate(base_config.with_fleet_size(0)))
    assert table.empty
    assert "Vehicle" in table.columns
