"""Test the public API surface of milkplan."""


def test_public_api_exports():
    """The package exports exactly what we expect."""
    import milkplan

    expected_exports = {
        "__version__",
        "plan",
        "PlanResult",
        "suggest_fleet_size",
        "assess_fleet",
        "simulate",
        "simulate_many",
        "compare_fleet_sizes",
        "SimulationConfig",
        "PlanningConstants",
        "PlannerParams",
        "load_planner_params",
        "DispatchSchedule",
        "FleetAdvice",
        "ReasonCode",
        "ScheduleEntry",
        "ScheduleSummary",
        "SlotState",
        "TimeSlot",
        "timeline",
        "InvalidConfiguration",
    }

    actual_exports = set(milkplan.__all__)

    assert actual_exports == expected_exports, (
        f"Unexpected exports. "
        f"Missing: {expected_exports - actual_exports}, "
        f"Extra: {actual_exports - expected_exports}"
    )


def test_can_import_all_public_symbols():
    from milkplan import (
        DispatchSchedule,
        InvalidConfiguration,
        PlanningConstants,
        SimulationConfig,
        __version__,
        assess_fleet,
        plan,
        simulate,
        suggest_fleet_size,
    )

    assert callable(plan)
    assert callable(simulate)
    assert callable(suggest_fleet_size)
    assert callable(assess_fleet)

    assert isinstance(SimulationConfig, type)
    assert isinstance(PlanningConstants, type)
    assert isinstance(DispatchSchedule, type)
    assert issubclass(InvalidConfiguration, ValueError)

    assert isinstance(__version__, str)


def test_public_types_structure():
    from milkplan import ReasonCode, SimulationConfig, simulate, suggest_fleet_size

    config = SimulationConfig(
        daily_production=26000,
        initial_storage=0,
        trip_duration_hours=40,
        weekly_work_hours=168,
        fleet_size=3,
    )
    assert suggest_fleet_size(26000, 40, 168) == 4

    schedule = simulate(config)
    entry = schedule.entry_at(0, 1)
    assert entry.vehicle_index == 0
    assert entry.reason is ReasonCode.OVER_CAPACITY
    assert entry.quantity_remaining == 2834
