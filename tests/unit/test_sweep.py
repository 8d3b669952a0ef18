"""Test simulating several candidate configurations."""

import dataclasses

import pytest

from milkplan.exceptions import InvalidConfiguration
from milkplan.simulation import compare_fleet_sizes, simulate, simulate_many
from milkplan.simulation.sweep import N_JOBS_ENV, SWEEP_COLUMNS, _resolve_n_jobs


def test_simulate_many_preserves_order(base_config):
    configs = [base_config.with_fleet_size(size) for size in (3, 0, 1)]

    schedules = simulate_many(configs, n_jobs=1)

    assert [s.config.fleet_size for s in schedules] == [3, 0, 1]
    assert schedules[0] == simulate(configs[0])
    assert len(schedules[1]) == 0


def test_simulate_many_parallel_matches_serial(base_config):
    configs = [base_config.with_fleet_size(size) for size in (1, 2, 3)]
    assert simulate_many(configs, n_jobs=2) == simulate_many(configs, n_jobs=1)


def test_simulate_many_empty():
    assert simulate_many([]) == []


def test_compare_fleet_sizes(base_config):
    results = compare_fleet_sizes(base_config, [0, 1, 3, 4], n_jobs=1)

    assert list(results.columns) == SWEEP_COLUMNS
    assert results["fleet_size"].tolist() == [0, 1, 3, 4]
    assert results["suggested_fleet_size"].eq(4).all()
    assert results["meets_suggestion"].tolist() == [False, False, False, True]

    by_size = results.set_index("fleet_size")
    assert by_size.loc[0, "pickups"] == 0
    assert by_size.loc[0, "final_buffer"] == pytest.approx(260000)
    assert by_size.loc[1, "pickups"] < by_size.loc[3, "pickups"]
    assert (
        results["over_capacity_pickups"] + results["routine_pickups"] == results["pickups"]
    ).all()


def test_larger_candidates_keep_configured_names(base_config):
    named = dataclasses.replace(base_config, fleet_size=2, vehicle_names=("North", "South"))

    schedules = simulate_many([named.with_fleet_size(3)], n_jobs=1)

    assert schedules[0].config.vehicle_names == ("North", "South", "Vehicle 3")


def test_compare_fleet_sizes_requires_candidates(base_config):
    with pytest.raises(InvalidConfiguration, match="fleet_size"):
        compare_fleet_sizes(base_config, [])


class TestResolveNJobs:
    def test_explicit_value_wins(self, monkeypatch):
        monkeypatch.setenv(N_JOBS_ENV, "4")
        assert _resolve_n_jobs(1) == 1

    def test_environment_variable(self, monkeypatch):
        monkeypatch.setenv(N_JOBS_ENV, "2")
        assert _resolve_n_jobs(None) == 2

    def test_default_uses_all_cores(self, monkeypatch):
        monkeypatch.delenv(N_JOBS_ENV, raising=False)
        assert _resolve_n_jobs(None) == -1

    def test_invalid_environment_value(self, monkeypatch):
        monkeypatch.setenv(N_JOBS_ENV, "many")
        assert _resolve_n_jobs(None) == -1
