"""
Command-line interface for milkplan using Typer.
"""

import dataclasses
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from milkplan import __version__
from milkplan.advisor import assess_fleet
from milkplan.api import plan as api_plan
from milkplan.config import (
    PlannerParams,
    RuntimeParams,
    load_default,
    load_planner_params,
)
from milkplan.core_types import DispatchSchedule, FleetAdvice
from milkplan.exceptions import InvalidConfiguration
from milkplan.simulation import compare_fleet_sizes
from milkplan.utils.logging import (
    LogLevel,
    log_detail,
    log_error,
    log_progress,
    log_success,
    log_warning,
    setup_logging,
)
from milkplan.utils.reporting import format_cell

app = typer.Typer(
    help="milkplan: collection dispatch planner for a fixed vehicle fleet",
    add_completion=False,
)
console = Console()

# Shared options
ConfigOption = typer.Option(None, "--config", "-c", help="Path to configuration YAML file")
DailyProductionOption = typer.Option(None, "--daily-production", help="Production per day (kg)")
InitialStorageOption = typer.Option(None, "--initial-storage", help="Buffer content at hour 0 (kg)")
TripDurationOption = typer.Option(None, "--trip-duration", help="Round trip duration (hours)")
WeeklyHoursOption = typer.Option(None, "--weekly-hours", help="Weekly work hours per vehicle")
FleetSizeOption = typer.Option(None, "--fleet-size", "-n", help="Number of vehicles")


def _load_params(config: Path | None) -> PlannerParams:
    if config is None:
        return load_default()
    if not config.exists():
        raise FileNotFoundError(f"Config file not found: {config}")
    return load_planner_params(config)


def _load_config(
    config: Path | None,
    daily_production: float | None = None,
    initial_storage: float | None = None,
    trip_duration: float | None = None,
    weekly_hours: float | None = None,
    fleet_size: int | None = None,
    vehicle_names: list[str] | None = None,
) -> PlannerParams:
    """Load the base configuration and apply command line overrides."""
    params = _load_params(config)

    overrides = {
        "daily_production": daily_production,
        "initial_storage": initial_storage,
        "trip_duration_hours": trip_duration,
        "weekly_work_hours": weekly_hours,
        "fleet_size": fleet_size,
        "vehicle_names": tuple(vehicle_names) if vehicle_names else None,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}

    if not overrides:
        return params
    return PlannerParams(
        simulation=dataclasses.replace(params.simulation, **overrides),
        runtime=params.runtime,
    )


def _load_config_or_exit(config: Path | None, **overrides) -> PlannerParams:
    try:
        return _load_config(config, **overrides)
    except FileNotFoundError as e:
        log_error(str(e))
        raise typer.Exit(1)
    except InvalidConfiguration as e:
        log_error(f"Invalid configuration – {e}")
        raise typer.Exit(1)


def _apply_runtime_flags(
    runtime: RuntimeParams, verbose: bool = False, quiet: bool = False, debug: bool = False
) -> None:
    """Let ``runtime.verbose`` and ``runtime.debug`` raise the level; --quiet wins."""
    if quiet:
        return
    if (runtime.debug and not debug) or (runtime.verbose and not verbose):
        _setup_logging_from_flags(verbose or runtime.verbose, quiet, debug or runtime.debug)


def _print_advice(advice: FleetAdvice) -> None:
    if advice.sufficient:
        log_success(advice.message)
    else:
        log_warning(advice.message)


def _print_schedule(schedule: DispatchSchedule) -> None:
    constants = schedule.config.constants

    table = Table(title="Trip Schedule", show_header=True, show_lines=True)
    table.add_column("Day / Time", style="bold")
    for label in constants.slot_labels:
        table.add_column(label, justify="center")

    for day in range(constants.horizon_days):
        cells = []
        for slot_index in range(constants.slots_per_day):
            entry = schedule.entry_at(day, slot_index)
            cell = escape(format_cell(entry))
            cells.append(f"[green]{cell}[/green]" if entry else f"[dim]{cell}[/dim]")
        table.add_row(f"Day {day + 1}", *cells)

    console.print(table)


def _print_summary(schedule: DispatchSchedule) -> None:
    summary = schedule.summary()

    table = Table(title="Schedule Summary", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Pickups", str(summary.pickups))
    table.add_row("Over Capacity Pickups", str(summary.over_capacity_pickups))
    table.add_row("Routine Pickups", str(summary.routine_pickups))
    table.add_row("Quantity Collected", f"{summary.quantity_collected:,.0f}")
    table.add_row("Peak Buffer", f"{summary.peak_buffer:,.0f}")
    table.add_row("Final Buffer", f"{summary.final_buffer:,.0f}")
    table.add_row("Idle Slots With Backlog", str(summary.idle_slots_with_backlog))
    for name, trips in summary.trips_per_vehicle.items():
        table.add_row(f"Trips – {name}", str(trips))

    console.print(table)


@app.command()
def plan(
    config: Path | None = ConfigOption,
    daily_production: float | None = DailyProductionOption,
    initial_storage: float | None = InitialStorageOption,
    trip_duration: float | None = TripDurationOption,
    weekly_hours: float | None = WeeklyHoursOption,
    fleet_size: int | None = FleetSizeOption,
    vehicle_name: list[str] | None = typer.Option(
        None, "--vehicle-name", help="Vehicle name, repeat once per vehicle in fleet order"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Minimal output (errors only)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output"),
) -> None:
    """
    Compute the dispatch schedule for the planning horizon.

    Loads the configuration (the packaged default unless --config is given),
    applies any overrides, prints the fleet advice, the day-by-time schedule
    grid and a summary of the run.
    """
    _setup_logging_from_flags(verbose, quiet, debug)

    params = _load_config_or_exit(
        config,
        daily_production=daily_production,
        initial_storage=initial_storage,
        trip_duration=trip_duration,
        weekly_hours=weekly_hours,
        fleet_size=fleet_size,
        vehicle_names=vehicle_name,
    )
    _apply_runtime_flags(params.runtime, verbose, quiet, debug)

    simulation = params.simulation
    log_progress(
        f"Planning {simulation.constants.horizon_days} days with "
        f"{simulation.fleet_size} vehicle(s)"
    )
    # runtime.verbose is honoured by the API itself
    result = api_plan(params, verbose=verbose)

    log_detail(
        f"{result.advice.trips_needed} trip(s) needed for "
        f"{result.advice.weekly_quantity:,.0f} kg per week"
    )
    # An insufficient fleet has already been reported by the API as a warning.
    if result.advice.sufficient:
        log_success(result.advice.message)
    _print_schedule(result.schedule)
    _print_summary(result.schedule)


@app.command()
def advise(
    config: Path | None = ConfigOption,
    daily_production: float | None = DailyProductionOption,
    trip_duration: float | None = TripDurationOption,
    weekly_hours: float | None = WeeklyHoursOption,
    fleet_size: int | None = FleetSizeOption,
) -> None:
    """
    Suggest the minimum fleet size for the weekly production.
    """
    _setup_logging_from_flags()

    params = _load_config_or_exit(
        config,
        daily_production=daily_production,
        trip_duration=trip_duration,
        weekly_hours=weekly_hours,
        fleet_size=fleet_size,
    )
    _apply_runtime_flags(params.runtime)
    advice = assess_fleet(params.simulation)

    table = Table(title="Fleet Advice", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Weekly Quantity", f"{advice.weekly_quantity:,.0f}")
    table.add_row("Trips Needed", str(advice.trips_needed))
    table.add_row("Suggested Fleet Size", str(advice.suggested_fleet_size))
    table.add_row("Configured Fleet Size", str(advice.fleet_size))
    console.print(table)

    _print_advice(advice)


@app.command()
def sweep(
    config: Path | None = ConfigOption,
    min_fleet: int = typer.Option(1, "--min-fleet", help="Smallest fleet size to try"),
    max_fleet: int | None = typer.Option(
        None, "--max-fleet", help="Largest fleet size to try (default: suggested + 2)"
    ),
    n_jobs: int | None = typer.Option(
        None, "--jobs", "-j", help="Parallel workers (default: runtime.n_jobs from the config)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Minimal output (errors only)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug output"),
) -> None:
    """
    Compare schedules obtained with a range of fleet sizes.
    """
    _setup_logging_from_flags(verbose, quiet, debug)

    params = _load_config_or_exit(config)
    _apply_runtime_flags(params.runtime, verbose, quiet, debug)

    simulation = params.simulation
    if max_fleet is None:
        max_fleet = assess_fleet(simulation).suggested_fleet_size + 2
    if min_fleet < 0 or max_fleet < min_fleet:
        log_error(f"Invalid fleet range: {min_fleet}..{max_fleet}")
        raise typer.Exit(1)
    if n_jobs is None:
        n_jobs = params.runtime.n_jobs

    log_progress(f"Simulating fleet sizes {min_fleet}..{max_fleet}")
    results = compare_fleet_sizes(simulation, range(min_fleet, max_fleet + 1), n_jobs=n_jobs)

    table = Table(title="Fleet Size Comparison", show_header=True)
    table.add_column("Fleet", justify="right", style="cyan")
    table.add_column("Pickups", justify="right")
    table.add_column("Over Capacity", justify="right")
    table.add_column("Peak Buffer", justify="right")
    table.add_column("Final Buffer", justify="right")
    table.add_column("Idle With Backlog", justify="right")
    table.add_column("Meets Suggestion", justify="center")

    for row in results.itertuples(index=False):
        table.add_row(
            str(row.fleet_size),
            str(row.pickups),
            str(row.over_capacity_pickups),
            f"{row.peak_buffer:,.0f}",
            f"{row.final_buffer:,.0f}",
            str(row.idle_slots_with_backlog),
            "[green]yes[/green]" if row.meets_suggestion else "[yellow]no[/yellow]",
        )
    console.print(table)


@app.command()
def version() -> None:
    """
    Show the milkplan version.
    """
    console.print(f"milkplan version {__version__}")


def _setup_logging_from_flags(
    verbose: bool = False, quiet: bool = False, debug: bool = False
):
    """Setup logging based on CLI flags or environment variable."""
    level_from_flags: LogLevel | None = None
    if debug:
        level_from_flags = LogLevel.DEBUG
    elif verbose:
        level_from_flags = LogLevel.VERBOSE
    elif quiet:
        level_from_flags = LogLevel.QUIET

    if level_from_flags is not None:
        setup_logging(level_from_flags)
    else:
        # No flags set, let setup_logging handle it (will check env var)
        setup_logging()


if __name__ == "__main__":
    app()
