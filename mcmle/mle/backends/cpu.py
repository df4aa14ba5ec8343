"""
CPU backend for maximum-likelihood estimation using scipy.optimize.

scipy's minimize is the optimizer; this backend only adapts the design to
it and refuses to hand back a point the optimizer did not vouch for.
"""

import numpy as np
from scipy.optimize import minimize

from mcmle.core.compute.timing import Timer
from mcmle.core.exceptions import ConvergenceError
from mcmle.core.result import Result
from mcmle.mle.design import MLEDesign
from mcmle.mle.solution import MLEParams


class CPUScipyBackend:
    """
    CPU backend for negative log-likelihood minimisation.

    Uses scipy.optimize.minimize with box constraints (L-BFGS-B by default).
    """

    @property
    def name(self) -> str:
        return 'cpu_scipy'

    def solve(self, design: MLEDesign) -> Result[MLEParams]:
        """
        Minimise the design's objective.

        Raises
        ------
        ConvergenceError
            If scipy reports failure or the minimum is not finite.
        """
        timer = Timer()
        timer.start()
        warnings_list = []

        with timer.section('optimization'):
            opt_result = minimize(
                design.objective,
                np.array(design.x0),
                jac=design.jac,
                method=design.method,
                bounds=design.scipy_bounds,
                tol=design.tol,
                options={'maxiter': design.max_iter},
            )

        n_iter = int(getattr(opt_result, 'nit', 0) or 0)
        message = str(getattr(opt_result, 'message', ''))

        if not opt_result.success:
            raise ConvergenceError(
                f"Optimization did not converge ({design.method}): {message}",
                iterations=n_iter,
                reason=message,
                final_value=float(opt_result.fun) if np.isfinite(opt_result.fun) else None,
            )
        if not np.isfinite(opt_result.fun):
            raise ConvergenceError(
                f"Optimizer stopped at a non-finite objective value ({opt_result.fun})",
                iterations=n_iter,
                reason=message,
            )

        argmin = np.array(opt_result.x, dtype=np.float64)

        if design.jac is not None:
            with timer.section('gradient_check'):
                _check_stationary(design, argmin, float(opt_result.fun), n_iter, message)

        with timer.section('parameter_extraction'):
            at_bound = _active_bounds(argmin, design.bounds)
            for name, hit in zip(design.names, at_bound):
                if hit:
                    warnings_list.append(
                        f"Estimate of {name} lies on its bound; the maximum "
                        f"may be outside the feasible region"
                    )

        timer.stop()

        argmin.flags.writeable = False
        params = MLEParams(
            argmin=argmin,
            min_value=float(opt_result.fun),
            n_iter=n_iter,
            n_fev=int(getattr(opt_result, 'nfev', 0) or 0),
            converged=True,
            at_bound=at_bound,
        )

        return Result(
            params=params,
            info={
                'method': design.method,
                'message': message,
                'tol': design.tol,
                'analytic_gradient': design.jac is not None,
                'n_gradient_evals': int(getattr(opt_result, 'njev', 0) or 0),
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


def _active_bounds(x, bounds, rtol: float = 1e-8) -> tuple[bool, ...]:
    """Which coordinates of x sit on a finite bound."""
    hits = []
    for v, (lo, hi) in zip(x, bounds):
        on = False
        for b in (lo, hi):
            if b is not None and abs(v - b) <= rtol * max(1.0, abs(b)):
                on = True
        hits.append(on)
    return tuple(hits)


# Largest accepted |grad_i| * max(1, |x_i|), relative to max(1, |f|)
_GRADIENT_RTOL = 1e-3


def _check_stationary(design: MLEDesign, x, fun: float, n_iter: int, message: str) -> None:
    """
    Reject a reported minimum where the analytic gradient is not ~0.

    Coordinates held at a bound by a gradient pointing out of the box are
    exempt.

    Raises
    ------
    ConvergenceError
        If a free coordinate has a large or non-finite scaled gradient.
    """
    grad = np.asarray(design.jac(x), dtype=np.float64).reshape(-1)
    free = [not held for held in _held_at_bound(x, grad, design.bounds)]
    scaled = np.abs(grad) * np.maximum(1.0, np.abs(x))
    limit = _GRADIENT_RTOL * max(1.0, abs(fun))
    bad = [
        name for name, f, g, s in zip(design.names, free, grad, scaled)
        if f and not (np.isfinite(g) and s <= limit)
    ]
    if bad:
        raise ConvergenceError(
            f"Optimizer reported success ({message}) but the gradient is not "
            f"near zero for {', '.join(bad)}",
            iterations=n_iter,
            reason=message,
            final_value=fun,
        )


def _held_at_bound(x, grad, bounds, rtol: float = 1e-8) -> tuple[bool, ...]:
    """Which coordinates sit on a bound that the gradient pushes against."""
    held = []
    for v, g, (lo, hi) in zip(x, grad, bounds):
        at_lo = lo is not None and abs(v - lo) <= rtol * max(1.0, abs(lo))
        at_hi = hi is not None and abs(v - hi) <= rtol * max(1.0, abs(hi))
        held.append(bool((at_lo and g > 0) or (at_hi and g < 0)))
    return tuple(held)
