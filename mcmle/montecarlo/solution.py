"""
Solution wrapper for Monte Carlo estimates.

MCSolution wraps Result[MCParams] and provides convenient accessors,
a normal-approximation confidence interval and a printable summary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from mcmle.core.exceptions import InvalidArgumentError
from mcmle.core.result import Result
from mcmle.montecarlo._common import MCParams

if TYPE_CHECKING:
    from mcmle.montecarlo.design import MCDesign


@dataclass
class MCSolution:
    """User-facing Monte Carlo estimate."""
    _result: Result[MCParams]
    _design: 'MCDesign'

    @property
    def estimate(self) -> float:
        """Mean of the outcomes."""
        return self._result.params.estimate

    @property
    def sd(self) -> float:
        """Standard deviation of the outcomes (ddof=1)."""
        return self._result.params.sd

    @property
    def se(self) -> float:
        """Monte Carlo standard error: sd / sqrt(n)."""
        return self._result.params.se

    @property
    def n(self) -> int:
        return self._result.params.n

    @property
    def outcomes(self) -> NDArray[np.floating[Any]]:
        """Per-draw (or per-path) outcomes, shape (n,)."""
        return self._result.params.outcomes

    @property
    def exact(self) -> float | None:
        """Closed-form target, when the design has one."""
        return self._result.params.exact

    @property
    def abs_error(self) -> float | None:
        """|estimate - exact|, when the design has a closed form."""
        if self.exact is None:
            return None
        return abs(self.estimate - self.exact)

    @property
    def kind(self) -> str:
        return self._design.kind

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

    def conf_int(self, level: float = 0.95) -> tuple[float, float]:
        """
        Normal-approximation confidence interval for the target.

        Raises:
            InvalidArgumentError: If level is not in (0, 1)
        """
        if not 0.0 < level < 1.0:
            raise InvalidArgumentError(f"level must lie in (0, 1), got {level}")
        z = stats.norm.ppf(0.5 + level / 2.0)
        return (self.estimate - z * self.se, self.estimate + z * self.se)

    def summary(self) -> str:
        lines = [
            "\nMONTE CARLO ESTIMATE",
            "",
            f"Design: {self.kind}, n = {self.n}",
            f"Estimate: {self.estimate:.6g}",
            f"Std. error: {self.se:.6g}",
        ]
        if self.exact is not None:
            lines.append(f"Exact: {self.exact:.6g} (abs. error {self.abs_error:.3g})")
        if self.n > 1:
            lo, hi = self.conf_int()
            lines.append(f"95% CI: ({lo:.6g}, {hi:.6g})")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"MCSolution(kind={self.kind!r}, n={self.n}, "
            f"estimate={self.estimate:.4g}, se={self.se:.3g})"
        )
