"""
Solver dispatch for grid simulations.

Public API: simulate(grid, replicate, R) -> SimulationSolution
"""

from __future__ import annotations

import warnings
from typing import Any, Sequence

from mcmle.core.compute.rng import SeedLike
from mcmle.simulation.backends.cpu import CPUSimulationBackend
from mcmle.simulation.design import Replicate, SimulationDesign
from mcmle.simulation.solution import SimulationSolution


def simulate(
    grid: Sequence[Any] | SimulationDesign,
    replicate: Replicate | None = None,
    R: int = 100,
    *,
    seed: SeedLike = None,
    n_jobs: int = 1,
    verbose: bool = False,
) -> SimulationSolution:
    """
    Run replicate(config, rng) R times at every grid point.

    Parameters
    ----------
    grid : sequence or SimulationDesign
        Configurations to evaluate, e.g. sample sizes [10, 100, 1000].
    replicate : callable
        fn(config, rng) -> float. See mcmle.simulation.replicates for
        ready-made cycles.
    R : int
        Replicates per grid point.
    seed : int, SeedSequence, Generator or None
        Root of the per-task generator tree. A fixed seed reproduces the
        outcomes exactly, for any n_jobs.
    n_jobs : int
        Worker threads. 1 runs sequentially.
    verbose : bool
        Print progress information.

    Returns
    -------
    SimulationSolution
    """
    if isinstance(grid, SimulationDesign):
        design = grid
    else:
        design = SimulationDesign.for_grid(grid, replicate, R, seed=seed, n_jobs=n_jobs)

    backend = CPUSimulationBackend()
    if verbose:
        print(f"Simulation: {design.n_configs} grid points x {design.R} replicates, "
              f"{design.n_jobs} worker(s)")

    result = backend.solve(design)

    for w in result.warnings:
        warnings.warn(w)

    if verbose:
        print(f"Finished {design.n_tasks} replicates "
              f"in {result.timing['total_seconds']:.3f}s")

    return SimulationSolution(_result=result, _design=design)
