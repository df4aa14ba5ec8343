"""
NegLogLik: an evaluator bound to an immutable dataset.

Binding replaces closures over mutable module-level data. The dataset is
validated once, copied, and marked read-only; the bound object is a plain
callable params -> float that optimizers and grid searches can use.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from mcmle.core.exceptions import InvalidArgumentError
from mcmle.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
    check_min_samples,
    check_positive,
)
from mcmle.likelihood.evaluators import (
    binomial_nll,
    binomial_nll_grad,
    linear_nll,
    linear_nll_grad,
    normal_nll,
    normal_nll_grad,
    poisson_nll,
    poisson_nll_grad,
)


@dataclass(frozen=True)
class NegLogLik:
    """
    A negative log-likelihood with its data fixed.

    Attributes:
        fn: Evaluator fn(params, *data, **fixed) -> float
        grad: Optional analytic gradient with the same signature as fn
        data: Read-only data arrays passed positionally to fn
        fixed: Keyword arguments passed to fn (known parameters, strict flag)
        n_params: Length of the parameter vector fn expects
        names: Parameter names, for summaries
    """
    fn: Callable[..., float]
    data: tuple[NDArray[np.floating[Any]], ...]
    fixed: dict[str, Any] = field(default_factory=dict)
    grad: Callable[..., NDArray] | None = None
    n_params: int | None = None
    names: tuple[str, ...] = ()

    def __call__(self, params: ArrayLike) -> float:
        return self.fn(params, *self.data, **self.fixed)

    def gradient(self, params: ArrayLike) -> NDArray[np.floating[Any]]:
        """Analytic gradient at params; raises if the model has none."""
        if self.grad is None:
            raise InvalidArgumentError("this objective has no analytic gradient")
        return self.grad(params, *self.data, **self.fixed)

    @property
    def has_gradient(self) -> bool:
        return self.grad is not None

    @property
    def n_observations(self) -> int:
        return int(self.data[0].shape[0])

    @classmethod
    def bind(
        cls,
        fn: Callable[..., float],
        *data: ArrayLike,
        grad: Callable[..., NDArray] | None = None,
        n_params: int | None = None,
        names: tuple[str, ...] = (),
        **fixed: Any,
    ) -> NegLogLik:
        """
        Bind any evaluator to validated, read-only copies of its data.

        All data arrays must be 1D, finite, non-empty and equally long.
        """
        arrays = tuple(_freeze(d, f"data[{i}]") for i, d in enumerate(data))
        if len(arrays) > 1:
            check_consistent_length(
                *arrays, names=tuple(f"data[{i}]" for i in range(len(arrays)))
            )
        return cls(
            fn=fn, data=arrays, fixed=dict(fixed), grad=grad,
            n_params=n_params, names=tuple(names),
        )

    @classmethod
    def normal(cls, x: ArrayLike, *, sigma2: float | None = None, strict: bool = False) -> NegLogLik:
        """Normal model for x; mean only when sigma2 is known."""
        if sigma2 is None:
            return cls.bind(
                normal_nll, x, grad=normal_nll_grad, n_params=2,
                names=("mu", "sigma2"), strict=strict,
            )
        sigma2 = check_positive(sigma2, "sigma2")
        return cls.bind(
            normal_nll, x, grad=normal_nll_grad, n_params=1,
            names=("mu",), sigma2=sigma2, strict=strict,
        )

    @classmethod
    def linear(cls, x: ArrayLike, y: ArrayLike, *, strict: bool = False) -> NegLogLik:
        """Gaussian simple linear regression of y on x."""
        return cls.bind(
            linear_nll, x, y, grad=linear_nll_grad, n_params=3,
            names=("intercept", "slope", "sigma2"), strict=strict,
        )

    @classmethod
    def poisson(cls, counts: ArrayLike, *, strict: bool = False) -> NegLogLik:
        return cls.bind(
            poisson_nll, counts, grad=poisson_nll_grad, n_params=1,
            names=("lam",), strict=strict,
        )

    @classmethod
    def binomial(
        cls, successes: ArrayLike, trials: ArrayLike, *, strict: bool = False
    ) -> NegLogLik:
        return cls.bind(
            binomial_nll, successes, trials, grad=binomial_nll_grad, n_params=1,
            names=("p",), strict=strict,
        )


def _freeze(data: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    arr = check_array(data, name)
    check_1d(arr, name)
    check_min_samples(arr, 1, name)
    check_finite(arr, name)
    out = np.array(arr, copy=True)
    out.flags.writeable = False
    return out
