"""
Independent simulations for several candidate configurations.

Every run owns its buffer and fleet, so candidate configurations can be
simulated in separate worker processes without any coordination.  Parallelism
follows the ``MILKPLAN_N_JOBS`` environment variable unless ``n_jobs`` is given.
"""

import os
from collections.abc import Iterable, Sequence

import pandas as pd
from joblib import Parallel, delayed

from milkplan.advisor import assess_fleet
from milkplan.config.params import SimulationConfig
from milkplan.core_types import DispatchSchedule
from milkplan.exceptions import InvalidConfiguration
from milkplan.utils.logging import PlannerLogger

from .core import simulate

logger = PlannerLogger.get_logger(__name__)

N_JOBS_ENV = "MILKPLAN_N_JOBS"

SWEEP_COLUMNS = [
    "fleet_size",
    "pickups",
    "over_capacity_pickups",
    "routine_pickups",
    "peak_buffer",
    "final_buffer",
    "idle_slots_with_backlog",
    "suggested_fleet_size",
    "meets_suggestion",
]


def _resolve_n_jobs(n_jobs: int | None) -> int:
    if n_jobs is not None:
        return n_jobs
    n_jobs_env = os.getenv(N_JOBS_ENV)
    try:
        return int(n_jobs_env) if n_jobs_env is not None else -1
    except ValueError:
        logger.warning(f"Ignoring invalid {N_JOBS_ENV}={n_jobs_env!r}")
        return -1


def simulate_many(
    configs: Sequence[SimulationConfig], n_jobs: int | None = None
) -> list[DispatchSchedule]:
    """Simulate each config independently, preserving input order."""
    if not configs:
        return []
    n_jobs = _resolve_n_jobs(n_jobs)
    if n_jobs == 1 or len(configs) == 1:
        return [simulate(config) for config in configs]
    return Parallel(n_jobs=n_jobs, backend="loky")(
        delayed(simulate)(config) for config in configs
    )


def compare_fleet_sizes(
    config: SimulationConfig, sizes: Iterable[int], n_jobs: int | None = None
) -> pd.DataFrame:
    """Summarise the schedule obtained with each candidate fleet size.

    Vehicle names of ``config`` are kept by position; extra vehicles get
    default names.
    """
    sizes = list(sizes)
    if not sizes:
        raise InvalidConfiguration("fleet_size", "at least one candidate fleet size is required")

    candidates = [config.with_fleet_size(size) for size in sizes]
    advice = assess_fleet(config)
    logger.info(
        f"Comparing {len(candidates)} fleet size(s) "
        f"({min(sizes)}–{max(sizes)}), {advice.suggested_fleet_size} suggested"
    )

    rows = []
    for candidate, schedule in zip(candidates, simulate_many(candidates, n_jobs=n_jobs)):
        summary = schedule.summary()
        rows.append(
            {
                "fleet_size": candidate.fleet_size,
                **summary.to_dict(),
                "suggested_fleet_size": advice.suggested_fleet_size,
                "meets_suggestion": candidate.fleet_size >= advice.suggested_fleet_size,
            }
        )
    return pd.DataFrame(rows, columns=SWEEP_COLUMNS)
