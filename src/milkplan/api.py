"""
API facade for milkplan - provides a single entry point for programmatic usage.
"""

from dataclasses import dataclass, field
from pathlib import Path

from milkplan.advisor import assess_fleet
from milkplan.config import (
    PlannerParams,
    SimulationConfig,
    load_default,
    load_planner_params,
)
from milkplan.core_types import DispatchSchedule, FleetAdvice
from milkplan.simulation import simulate
from milkplan.utils.logging import PlannerLogger, log_debug, log_warning
from milkplan.utils.time_measurement import TimeMeasurement, TimeRecorder

logger = PlannerLogger.get_logger("milkplan.api")


@dataclass
class PlanResult:
    """Advice and schedule computed from one configuration."""

    config: SimulationConfig
    advice: FleetAdvice
    schedule: DispatchSchedule
    time_measurements: list[TimeMeasurement] = field(default_factory=list)


def _resolve_params(config: str | Path | SimulationConfig | PlannerParams | None) -> PlannerParams:
    if config is None:
        return load_default()
    if isinstance(config, SimulationConfig):
        return PlannerParams(simulation=config)
    if isinstance(config, PlannerParams):
        return config

    config_path = Path(config)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please check the file path and ensure it exists."
        )
    return load_planner_params(config_path)


def plan(
    config: str | Path | SimulationConfig | PlannerParams | None = None,
    verbose: bool = False,
) -> PlanResult:
    """
    Compute the fleet advice and the dispatch schedule for a configuration.

    Args:
        config: Planning inputs - can be:
            - Path to a YAML configuration file
            - SimulationConfig or PlannerParams object
            - None (uses the packaged default configuration)
        verbose: Log a per-vehicle trip summary (default: False). The
            ``runtime.verbose`` setting of a loaded configuration also
            enables it.

    Returns:
        PlanResult: advice, schedule and stage timings

    Raises:
        FileNotFoundError: If the configuration file doesn't exist
        InvalidConfiguration: If any configuration value is rejected

    Example:
        >>> result = plan("config.yaml")
        >>> print(result.advice.suggested_fleet_size)
        >>> print(len(result.schedule))
    """
    time_recorder = TimeRecorder()

    with time_recorder.measure("global"):
        params = _resolve_params(config)
        simulation_config = params.simulation
        verbose = verbose or params.runtime.verbose
        log_debug(f"Runtime settings: {params.runtime}")

        with time_recorder.measure("advise"):
            advice = assess_fleet(simulation_config)
        if not advice.sufficient:
            log_warning(advice.message)

        with time_recorder.measure("simulate"):
            schedule = simulate(simulation_config)

    summary = schedule.summary()
    logger.info(
        f"Planned {summary.pickups} pickup(s) over "
        f"{simulation_config.constants.horizon_days} days "
        f"({summary.over_capacity_pickups} over capacity)"
    )
    if verbose:
        for name, trips in summary.trips_per_vehicle.items():
            logger.info(f"  {name}: {trips} trip(s)")

    return PlanResult(
        config=simulation_config,
        advice=advice,
        schedule=schedule,
        time_measurements=time_recorder.measurements,
    )
