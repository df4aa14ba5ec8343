"""
Replicated simulation over a parameter grid.

Usage:
    from mcmle.simulation import simulate, IntervalErrorReplicate

    sol = simulate([10, 100, 1000, 10000],
                   IntervalErrorReplicate(lo=-1.0, hi=1.0), R=200, seed=1)
    print(sol.means)    # mean absolute error per sample count
"""

from mcmle.simulation._common import GridPointSummary, SimulationParams
from mcmle.simulation.design import SimulationDesign
from mcmle.simulation.replicates import (
    IntervalErrorReplicate,
    LinearFitReplicate,
    LinearSimulationConfig,
    NormalMLEReplicate,
)
from mcmle.simulation.solution import SimulationSolution
from mcmle.simulation.solvers import simulate

__all__ = [
    "simulate",
    "SimulationDesign",
    "SimulationSolution",
    "SimulationParams",
    "GridPointSummary",
    "IntervalErrorReplicate",
    "LinearFitReplicate",
    "LinearSimulationConfig",
    "NormalMLEReplicate",
]
