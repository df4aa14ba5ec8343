"""
Common data structures for Monte Carlo estimation.

MCParams is the parameter payload wrapped by Result[P] and exposed
through MCSolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class MCParams:
    """
    Parameter payload for a Monte Carlo estimate.

    - estimate: mean of the per-draw (or per-path) outcomes
    - sd: sample standard deviation of the outcomes (ddof=1)
    - se: sd / sqrt(n)
    - outcomes: f(draw) for every draw, read-only
    - exact: closed-form target when one is known (interval designs)
    """
    estimate: float
    sd: float
    se: float
    n: int
    outcomes: NDArray[np.floating[Any]]        # shape (n,)
    exact: float | None = None


def summarize_outcomes(outcomes: NDArray) -> tuple[float, float, float]:
    """Return (mean, sd, se) for a 1D outcome vector of length >= 1."""
    n = outcomes.shape[0]
    estimate = float(np.mean(outcomes))
    if n > 1:
        sd = float(np.std(outcomes, ddof=1))
        se = sd / np.sqrt(n)
    else:
        sd = float('nan')
        se = float('nan')
    return estimate, sd, float(se)
