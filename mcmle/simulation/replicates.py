"""
Built-in replicate cycles.

Each class is a callable replicate(config, rng) -> float for use with
simulate(). The parameters that stay fixed across the grid live on the
instance; the grid supplies the one that varies.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

import numpy as np

from mcmle.core.exceptions import InvalidArgumentError
from mcmle.core.validation import check_count, check_positive, check_real
from mcmle.mle.solvers import fit_normal
from mcmle.montecarlo.design import MCDesign
from mcmle.montecarlo.solvers import mc_interval
from mcmle.regression.solvers import fit_linear


@dataclass(frozen=True)
class IntervalErrorReplicate:
    """
    Absolute error of the Monte Carlo estimate of P(lo <= X <= hi).

    The grid supplies the number of draws.
    """
    lo: float
    hi: float
    mean: float = 0.0
    sd: float = 1.0

    def __post_init__(self):
        # Validates the interval once, before any replicate runs.
        MCDesign.for_interval(self.lo, self.hi, mean=self.mean, sd=self.sd, n=1)

    def __call__(self, n: int, rng: np.random.Generator) -> float:
        sol = mc_interval(self.lo, self.hi, mean=self.mean, sd=self.sd, n=n, seed=rng)
        return sol.abs_error


@dataclass(frozen=True)
class LinearSimulationConfig:
    """Data-generating settings for y = intercept + slope * x + e."""
    n: int = 100
    sigma2: float = 1.0
    intercept: float = 0.0
    slope: float = 1.0
    x_low: float = 0.0
    x_high: float = 1.0

    def __post_init__(self):
        check_count(self.n, "n", minimum=3)
        check_positive(self.sigma2, "sigma2")
        check_real(self.intercept, "intercept")
        check_real(self.slope, "slope")
        if not check_real(self.x_low, "x_low") < check_real(self.x_high, "x_high"):
            raise InvalidArgumentError(
                f"x_low must be below x_high, got [{self.x_low}, {self.x_high}]"
            )

    def simulate(self, rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray]:
        x = rng.uniform(self.x_low, self.x_high, size=self.n)
        y = self.intercept + self.slope * x + rng.normal(0.0, np.sqrt(self.sigma2), size=self.n)
        return x, y


@dataclass(frozen=True)
class LinearFitReplicate:
    """
    Simulate a regression data set, fit it by least squares and return
    one fitted coefficient.

    The grid supplies the value of `vary` ('sigma2' or 'n'); every other
    setting comes from `base`.
    """
    base: LinearSimulationConfig = LinearSimulationConfig()
    vary: str = 'sigma2'
    target: str = 'slope'

    def __post_init__(self):
        if self.vary not in ('sigma2', 'n'):
            raise InvalidArgumentError(f"vary: must be 'sigma2' or 'n', got {self.vary!r}")
        if self.target not in ('slope', 'intercept', 'sigma2'):
            raise InvalidArgumentError(
                f"target: must be 'slope', 'intercept' or 'sigma2', got {self.target!r}"
            )

    def config_for(self, value: Any) -> LinearSimulationConfig:
        return replace(self.base, **{self.vary: value})

    def __call__(self, value: Any, rng: np.random.Generator) -> float:
        x, y = self.config_for(value).simulate(rng)
        fit = fit_linear(x, y)
        return float(getattr(fit, self.target))


@dataclass(frozen=True)
class NormalMLEReplicate:
    """
    Draw n normal observations, fit them by maximum likelihood and return
    the estimated mean or variance. The grid supplies n.
    """
    mean: float = 0.0
    sd: float = 1.0
    parameter: str = 'mean'

    def __post_init__(self):
        check_real(self.mean, "mean")
        check_positive(self.sd, "sd")
        if self.parameter not in ('mean', 'variance'):
            raise InvalidArgumentError(
                f"parameter: must be 'mean' or 'variance', got {self.parameter!r}"
            )

    def __call__(self, n: int, rng: np.random.Generator) -> float:
        x = rng.normal(self.mean, self.sd, size=n)
        if self.parameter == 'mean':
            fit = fit_normal(x, sigma2=self.sd ** 2)
            return float(fit.argmin[0])
        fit = fit_normal(x)
        return float(fit.argmin[1])
