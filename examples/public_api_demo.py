"""
Demo of the milkplan public API.

This example shows how to use the public API to:
1. Plan the horizon from the packaged configuration
2. Run the advisor and the simulator individually
3. Compare candidate fleet sizes
"""

from milkplan import (
    # Main function
    plan,
    # Stages
    assess_fleet,
    simulate,
    compare_fleet_sizes,
    # Core types
    SimulationConfig,
)
from milkplan.utils.reporting import schedule_grid, schedule_table


def main():
    """Run the planner on a few configurations."""

    # Example 1: full plan with the packaged defaults
    print("=== Example 1: Default Plan ===")

    result = plan(verbose=True)

    print(f"\n{result.advice.message}")
    print(schedule_grid(result.schedule).to_string())

    # Example 2: individual stages on a hand-built configuration
    print("\n\n=== Example 2: Advisor and Simulator ===")

    config = SimulationConfig(
        daily_production=26000,
        initial_storage=4000,
        trip_duration_hours=36,
        weekly_work_hours=120,
        fleet_size=4,
        vehicle_names=["North", "South", "East", "West"],
    )

    advice = assess_fleet(config)
    print(f"Weekly quantity: {advice.weekly_quantity:,.0f} kg")
    print(f"Trips needed: {advice.trips_needed}")
    print(f"Suggested fleet size: {advice.suggested_fleet_size}")

    schedule = simulate(config)
    print(schedule_table(schedule).to_string(index=False))

    summary = schedule.summary()
    print(f"\nPeak buffer: {summary.peak_buffer:,.0f} kg")
    for name, trips in summary.trips_per_vehicle.items():
        print(f"  {name}: {trips} trip(s)")

    # Example 3: fleet size comparison
    print("\n\n=== Example 3: Fleet Size Comparison ===")

    comparison = compare_fleet_sizes(config, range(1, advice.suggested_fleet_size + 3))
    print(comparison.to_string(index=False))


if __name__ == "__main__":
    main()
