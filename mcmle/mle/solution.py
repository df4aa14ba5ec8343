"""
MLE solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from mcmle.core.result import Result

if TYPE_CHECKING:
    from mcmle.mle.design import MLEDesign


@dataclass(frozen=True)
class MLEParams:
    """
    Parameter payload for a maximum-likelihood fit.

    Immutable data computed by backends.
    """
    argmin: NDArray[np.floating[Any]]
    min_value: float
    n_iter: int
    n_fev: int
    converged: bool
    at_bound: tuple[bool, ...] = ()


@dataclass
class MLESolution:
    """
    User-facing maximum-likelihood results.

    Wraps the backend Result and provides convenient accessors.
    """
    _result: Result[MLEParams]
    _design: 'MLEDesign'

    @property
    def argmin(self) -> NDArray[np.floating[Any]]:
        """Maximum-likelihood estimate (minimiser of the nll)."""
        return self._result.params.argmin

    @property
    def estimates(self) -> dict[str, float]:
        """Estimates keyed by parameter name."""
        return dict(zip(self._design.names, (float(v) for v in self.argmin)))

    @property
    def min_value(self) -> float:
        """Negative log-likelihood at the estimate."""
        return self._result.params.min_value

    @property
    def loglik(self) -> float:
        """Log-likelihood at the estimate."""
        return -self.min_value

    @property
    def converged(self) -> bool:
        return self._result.params.converged

    @property
    def n_iter(self) -> int:
        return self._result.params.n_iter

    @property
    def n_fev(self) -> int:
        """Number of objective evaluations."""
        return self._result.params.n_fev

    @property
    def aic(self) -> float:
        """Akaike Information Criterion."""
        return 2.0 * self.min_value + 2.0 * self._design.n_params

    @property
    def bic(self) -> float | None:
        """Bayesian Information Criterion, when the data size is known."""
        n = self._design.n_observations
        if n is None:
            return None
        return 2.0 * self.min_value + np.log(n) * self._design.n_params

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Printable table of estimates and fit statistics."""
        lines = [
            "\nMAXIMUM LIKELIHOOD ESTIMATION",
            "",
            f"Method: {self._design.method} ({self.n_iter} iterations, "
            f"{self.n_fev} function evaluations)",
            "",
            f"{'':>12s} {'estimate':>14s}",
        ]
        for name, value in self.estimates.items():
            lines.append(f"{name:>12s} {value:14.6g}")
        lines.append("")
        lines.append(f"Log-likelihood: {self.loglik:.6f}")
        lines.append(f"AIC: {self.aic:.4f}")
        if self.bic is not None:
            lines.append(f"BIC: {self.bic:.4f}")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        est = ", ".join(f"{k}={v:.4g}" for k, v in self.estimates.items())
        return f"MLESolution({est}, loglik={self.loglik:.4f})"
