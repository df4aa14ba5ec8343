"""
CPU reference backend for simple linear regression.

Solves the least-squares problem through a reduced QR decomposition of
the design matrix [1, x].
"""

from typing import Any

import numpy as np
from scipy.linalg import solve_triangular

from mcmle.core.compute.timing import Timer
from mcmle.core.result import Result
from mcmle.regression.design import LinearDesign
from mcmle.regression.solution import LinearParams


class CPUQRBackend:
    """
    CPU backend using QR decomposition.

    Algorithm:
        1. X = QR (reduced)
        2. beta = R^-1 Q'y
        3. Residuals, RSS, TSS and coefficient standard errors
    """

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, design: LinearDesign) -> Result[LinearParams]:
        timer = Timer()
        timer.start()

        X, y = design.X, design.y
        n, p = design.n, design.p

        with timer.section('qr_decomposition'):
            Q, R = np.linalg.qr(X, mode='reduced')

        with timer.section('solve'):
            coefficients = solve_triangular(R, Q.T @ y, lower=False)

        with timer.section('residuals'):
            fitted_values = X @ coefficients
            residuals = y - fitted_values

        with timer.section('statistics'):
            rss = float(residuals @ residuals)
            tss = float(np.sum((y - np.mean(y)) ** 2))
            df_residual = n - p
            sigma2 = rss / df_residual
            R_inv = solve_triangular(R, np.eye(p), lower=False)
            standard_errors = np.sqrt(sigma2 * np.sum(R_inv ** 2, axis=1))

        timer.stop()

        for a in (coefficients, fitted_values, residuals, standard_errors):
            a.flags.writeable = False

        params = LinearParams(
            coefficients=coefficients,
            standard_errors=standard_errors,
            residuals=residuals,
            fitted_values=fitted_values,
            rss=rss,
            tss=tss,
            df_residual=df_residual,
        )

        info: dict[str, Any] = {'method': 'qr', 'n': n}

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
