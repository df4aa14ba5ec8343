"""
CPU backend for grid simulations.

Every (grid point, replicate) task owns a generator spawned up front,
so the outcomes do not depend on how tasks are scheduled.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np

from mcmle.core.compute.rng import spawn_grid_rngs
from mcmle.core.compute.timing import Timer
from mcmle.core.exceptions import InvalidArgumentError
from mcmle.core.result import Result
from mcmle.simulation._common import GridPointSummary, SimulationParams
from mcmle.simulation.design import SimulationDesign


class CPUSimulationBackend:
    """
    Runs replicate(config, rng) for every task.

    Sequential for n_jobs == 1, otherwise a thread pool of n_jobs workers.
    Output order always follows the grid, then the replicate index.
    """

    @property
    def name(self) -> str:
        return 'cpu_simulation'

    def solve(self, design: SimulationDesign) -> Result[SimulationParams]:
        timer = Timer()
        timer.start()
        warnings_list = []

        with timer.section('spawn_streams'):
            rngs = spawn_grid_rngs(design.seed, design.n_configs, design.R)
            tasks = [
                (config, rng)
                for config, row in zip(design.grid, rngs)
                for rng in row
            ]

        with timer.section('replicates'):
            if design.n_jobs == 1:
                values = [_run_one(design.replicate, c, g) for c, g in tasks]
            else:
                with ThreadPoolExecutor(max_workers=design.n_jobs) as pool:
                    values = list(pool.map(
                        lambda task: _run_one(design.replicate, *task), tasks
                    ))

        with timer.section('summaries'):
            outcomes = np.asarray(values, dtype=np.float64).reshape(
                design.n_configs, design.R
            )
            rows = tuple(
                GridPointSummary.from_outcomes(config, outcomes[i].copy())
                for i, config in enumerate(design.grid)
            )

        n_nonfinite = int(np.sum(~np.isfinite(outcomes)))
        if n_nonfinite:
            warnings_list.append(
                f"{n_nonfinite} of {outcomes.size} replicate outcomes are not finite"
            )
        if design.R == 1:
            warnings_list.append("R = 1: per-point standard deviations are undefined")

        timer.stop()

        return Result(
            params=SimulationParams(rows=rows, R=design.R),
            info={
                'n_configs': design.n_configs,
                'R': design.R,
                'n_jobs': design.n_jobs,
                'n_tasks': design.n_tasks,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


def _run_one(replicate, config, rng) -> float:
    value = replicate(config, rng)
    try:
        arr = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(
            f"replicate must return a real scalar, got {type(value).__name__} "
            f"for config {config!r}"
        ) from e
    if arr.shape != ():
        raise InvalidArgumentError(
            f"replicate must return a scalar, got shape {arr.shape} "
            f"for config {config!r}"
        )
    return float(arr)
