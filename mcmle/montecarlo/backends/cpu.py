"""
CPU backend for Monte Carlo estimation.

Draws all variates with one numpy Generator, applies the outcome
function, and averages. Path designs are evaluated one trajectory at a
time so that policies see the full history of each path.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from mcmle.core.compute.rng import make_rng
from mcmle.core.compute.timing import Timer
from mcmle.core.exceptions import DimensionError
from mcmle.core.result import Result
from mcmle.montecarlo._common import MCParams, summarize_outcomes
from mcmle.montecarlo.design import MCDesign


class CPUMonteCarloBackend:
    """
    CPU backend for Monte Carlo estimation.

    Supports expectation, interval and path designs.
    """

    @property
    def name(self) -> str:
        return 'cpu_montecarlo'

    def solve(self, design: MCDesign) -> Result[MCParams]:
        """Run the simulation and return Result[MCParams]."""
        timer = Timer()
        timer.start()

        rng = make_rng(design.seed)
        warnings_list: list[str] = []

        with timer.section('simulation'):
            if design.kind == 'expectation':
                outcomes = self._expectation(design, rng)
            elif design.kind == 'interval':
                outcomes = self._interval(design, rng)
            elif design.kind == 'paths':
                outcomes = self._paths(design, rng)
            else:
                raise ValueError(f"Unknown design kind: {design.kind!r}")

        with timer.section('summary_statistics'):
            estimate, sd, se = summarize_outcomes(outcomes)

        if design.n == 1:
            warnings_list.append("n=1: standard error is undefined")

        timer.stop()

        outcomes.flags.writeable = False
        params = MCParams(
            estimate=estimate,
            sd=sd,
            se=se,
            n=design.n,
            outcomes=outcomes,
            exact=design.exact,
        )

        return Result(
            params=params,
            info=design.metadata,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def _expectation(self, design: MCDesign, rng: np.random.Generator) -> NDArray:
        """Mean of statistic over n draws."""
        draws = np.asarray(design.sampler(rng, design.n))
        if draws.shape[0] != design.n:
            raise DimensionError(
                f"sampler returned {draws.shape[0]} draws, expected {design.n}"
            )
        if design.statistic is None:
            values = draws
        else:
            values = design.statistic(draws)
        outcomes = np.asarray(values, dtype=np.float64).reshape(-1)
        if outcomes.shape[0] != design.n:
            raise DimensionError(
                f"statistic returned {outcomes.shape[0]} outcomes for "
                f"{design.n} draws; it must be vectorised over draws"
            )
        return np.array(outcomes, copy=True)

    def _interval(self, design: MCDesign, rng: np.random.Generator) -> NDArray:
        """Indicator of lo <= x <= hi over normal draws."""
        p = design.params
        x = rng.normal(p['mean'], p['sd'], size=design.n)
        return ((x >= p['lo']) & (x <= p['hi'])).astype(np.float64)

    def _paths(self, design: MCDesign, rng: np.random.Generator) -> NDArray:
        """Policy applied to each simulated trajectory."""
        n, n_steps = design.n, design.n_steps
        steps = np.asarray(design.sampler(rng, n * n_steps), dtype=np.float64)
        if steps.shape != (n * n_steps,):
            raise DimensionError(
                f"step sampler returned shape {steps.shape}, expected ({n * n_steps},)"
            )
        trajectories = design.initial + np.cumsum(steps.reshape(n, n_steps), axis=1)

        outcomes = np.empty(n, dtype=np.float64)
        for i in range(n):
            outcomes[i] = design.policy(trajectories[i])
        return outcomes
