"""
Design class for random variate generation.

VariateDesign pins a distribution family, its validated parameters and
the number of draws. Construction fails before any generator is touched,
so an invalid request can never leave a generator half-advanced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from mcmle.core.exceptions import (
    DimensionError,
    InvalidArgumentError,
    InvalidParameterError,
)
from mcmle.core.validation import (
    check_1d,
    check_array,
    check_count,
    check_positive,
    check_probability,
    check_real,
    check_weights,
)

Family = Literal['normal', 'uniform', 'binomial', 'categorical']


@dataclass(frozen=True)
class VariateDesign:
    """
    Frozen description of a batch of independent draws.

    Attributes:
        family: Distribution family name
        params: Validated family parameters (arrays are read-only copies)
        n: Number of draws, >= 0
    """
    family: Family
    params: dict[str, Any]
    n: int

    @classmethod
    def normal(cls, mean: float = 0.0, sd: float = 1.0, n: int = 1) -> VariateDesign:
        """
        Normal draws parameterised by mean and standard deviation.

        Raises:
            InvalidParameterError: If sd <= 0 or either parameter is non-finite
            InvalidArgumentError: If n is not a non-negative integer
        """
        mean = check_real(mean, "mean")
        sd = check_positive(sd, "sd")
        n = check_count(n, "n", minimum=0)
        return cls(family='normal', params={'mean': mean, 'sd': sd}, n=n)

    @classmethod
    def uniform(cls, low: float = 0.0, high: float = 1.0, n: int = 1) -> VariateDesign:
        """Uniform draws on [low, high)."""
        low = check_real(low, "low")
        high = check_real(high, "high")
        if not low < high:
            raise InvalidParameterError(
                f"low must be < high, got low={low}, high={high}",
                parameter="high", value=high,
            )
        n = check_count(n, "n", minimum=0)
        return cls(family='uniform', params={'low': low, 'high': high}, n=n)

    @classmethod
    def binomial(cls, size: int, prob: float, n: int = 1) -> VariateDesign:
        """
        Binomial draws: successes out of `size` trials with probability `prob`.

        Raises:
            InvalidParameterError: If prob is outside [0, 1] or size < 0
        """
        try:
            size = check_count(size, "size", minimum=0)
        except InvalidArgumentError as e:
            raise InvalidParameterError(str(e), parameter="size", value=size) from e
        prob = check_probability(prob, "prob")
        n = check_count(n, "n", minimum=0)
        return cls(family='binomial', params={'size': size, 'prob': prob}, n=n)

    @classmethod
    def categorical(
        cls,
        values: ArrayLike,
        weights: ArrayLike | None = None,
        n: int = 1,
    ) -> VariateDesign:
        """
        Weighted draws (with replacement) from a finite set of values.

        Weights need not sum to 1; they are normalised. None means uniform.

        Raises:
            InvalidParameterError: If weights are negative or sum to zero
            DimensionError: If values and weights differ in length
        """
        vals = check_array(values, "values")
        check_1d(vals, "values")
        if vals.size == 0:
            raise InvalidParameterError("values: empty support", parameter="values")
        if weights is None:
            probs = np.full(vals.size, 1.0 / vals.size)
        else:
            probs = check_weights(weights, "weights")
            if probs.size != vals.size:
                raise DimensionError(
                    f"values has {vals.size} entries but weights has {probs.size}"
                )
        n = check_count(n, "n", minimum=0)
        return cls(
            family='categorical',
            params={'values': _frozen(vals), 'probs': _frozen(probs)},
            n=n,
        )


def _frozen(a: NDArray) -> NDArray:
    out = np.array(a, dtype=np.float64, copy=True)
    out.flags.writeable = False
    return out
