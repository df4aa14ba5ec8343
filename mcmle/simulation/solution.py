"""
Simulation solution types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from mcmle.core.result import Result
from mcmle.simulation._common import GridPointSummary, SimulationParams

if TYPE_CHECKING:
    import pandas as pd
    from mcmle.simulation.design import SimulationDesign


@dataclass
class SimulationSolution:
    """
    User-facing simulation results.

    rows[i] summarises grid[i]; outcomes is the R x n_configs matrix with
    one column per grid point.
    """
    _result: Result[SimulationParams]
    _design: 'SimulationDesign'

    @property
    def rows(self) -> tuple[GridPointSummary, ...]:
        return self._result.params.rows

    @property
    def configs(self) -> tuple[Any, ...]:
        return tuple(row.config for row in self.rows)

    @property
    def means(self) -> NDArray[np.floating[Any]]:
        return np.array([row.mean for row in self.rows])

    @property
    def sds(self) -> NDArray[np.floating[Any]]:
        return np.array([row.sd for row in self.rows])

    @property
    def outcomes(self) -> NDArray[np.floating[Any]]:
        return np.column_stack([row.outcomes for row in self.rows])

    @property
    def R(self) -> int:
        return self._result.params.R

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

    def to_frame(self) -> 'pd.DataFrame':
        """
        Long-format DataFrame with columns config, replicate, outcome.

        Requires pandas.
        """
        import pandas as pd

        records = [
            {'config': row.config, 'replicate': r, 'outcome': float(v)}
            for row in self.rows
            for r, v in enumerate(row.outcomes)
        ]
        return pd.DataFrame.from_records(
            records, columns=['config', 'replicate', 'outcome']
        )

    def summary(self) -> str:
        lines = [
            "\nSIMULATION",
            f"Grid points: {len(self.rows)}    Replicates per point: {self.R}",
            "",
            f"{'config':>24s} {'mean':>12s} {'sd':>12s}",
        ]
        for row in self.rows:
            lines.append(f"{str(row.config):>24s} {row.mean:12.6g} {row.sd:12.6g}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"SimulationSolution(n_configs={len(self.rows)}, R={self.R})"
