"""
SimulationDesign: a replicate function run R times at every grid point.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

import numpy as np

from mcmle.core.compute.rng import SeedLike
from mcmle.core.exceptions import InvalidArgumentError
from mcmle.core.validation import check_count

Replicate = Callable[[Any, np.random.Generator], float]


@dataclass(frozen=True)
class SimulationDesign:
    """
    A simulation grid.

    replicate(config, rng) is called R times for each config in grid; each
    call gets its own generator and must return one scalar outcome.
    """
    grid: tuple[Any, ...]
    replicate: Replicate
    R: int
    seed: SeedLike = None
    n_jobs: int = 1

    @classmethod
    def for_grid(
        cls,
        grid: Sequence[Any],
        replicate: Replicate,
        R: int,
        seed: SeedLike = None,
        n_jobs: int = 1,
    ) -> SimulationDesign:
        """
        Validate and build a simulation design.

        Raises:
            InvalidArgumentError: Empty grid, R < 1, n_jobs < 1 or a
                non-callable replicate
        """
        grid_t = tuple(grid)
        if len(grid_t) == 0:
            raise InvalidArgumentError("grid: must contain at least one configuration")
        if not callable(replicate):
            raise InvalidArgumentError(
                f"replicate: expected a callable, got {type(replicate).__name__}"
            )
        check_count(R, "R", minimum=1)
        check_count(n_jobs, "n_jobs", minimum=1)
        return cls(grid=grid_t, replicate=replicate, R=int(R), seed=seed,
                   n_jobs=int(n_jobs))

    @property
    def n_configs(self) -> int:
        return len(self.grid)

    @property
    def n_tasks(self) -> int:
        return self.n_configs * self.R
