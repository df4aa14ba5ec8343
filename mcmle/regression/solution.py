"""
Linear regression solution types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from mcmle.core.result import Result

if TYPE_CHECKING:
    from mcmle.regression.design import LinearDesign


@dataclass(frozen=True)
class LinearParams:
    """Parameter payload for simple linear regression."""
    coefficients: NDArray[np.floating[Any]]      # (intercept, slope)
    standard_errors: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    rss: float
    tss: float
    df_residual: int


@dataclass
class LinearSolution:
    """User-facing simple linear regression results."""
    _result: Result[LinearParams]
    _design: 'LinearDesign'

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.coefficients

    @property
    def intercept(self) -> float:
        return float(self.coefficients[0])

    @property
    def slope(self) -> float:
        return float(self.coefficients[1])

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        return self._result.params.standard_errors

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def sigma2(self) -> float:
        """Unbiased residual variance, RSS / (n - 2)."""
        return self.rss / self.df_residual

    @property
    def r_squared(self) -> float:
        tss = self._result.params.tss
        if tss == 0:
            return 1.0
        return 1.0 - self.rss / tss

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    def summary(self) -> str:
        lines = [
            "\nLINEAR REGRESSION",
            "",
            f"{'':>12s} {'Estimate':>12s} {'Std. Error':>12s}",
            f"{'(Intercept)':>12s} {self.intercept:12.6g} {self.standard_errors[0]:12.6g}",
            f"{'x':>12s} {self.slope:12.6g} {self.standard_errors[1]:12.6g}",
            "",
            f"Residual standard error: {np.sqrt(self.sigma2):.4g} "
            f"on {self.df_residual} degrees of freedom",
            f"R-squared: {self.r_squared:.4f}",
            "",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(intercept={self.intercept:.4g}, "
            f"slope={self.slope:.4g}, n={self._design.n})"
        )
