"""
Common data structures for grid simulations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class GridPointSummary:
    """Outcomes of all replicates at one grid point, with their mean and sd."""
    config: Any
    outcomes: NDArray[np.floating[Any]]    # shape (R,), read-only
    mean: float
    sd: float

    @classmethod
    def from_outcomes(cls, config: Any, outcomes: NDArray) -> GridPointSummary:
        outcomes = np.asarray(outcomes, dtype=np.float64)
        outcomes.flags.writeable = False
        sd = float(np.std(outcomes, ddof=1)) if outcomes.shape[0] > 1 else float('nan')
        return cls(config=config, outcomes=outcomes,
                   mean=float(np.mean(outcomes)), sd=sd)


@dataclass(frozen=True)
class SimulationParams:
    """Parameter payload: one summary per grid point, in grid order."""
    rows: tuple[GridPointSummary, ...]
    R: int
