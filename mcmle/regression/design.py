"""
LinearDesign: data wrapper for simple linear regression.

Holds the covariate, the response and the derived design matrix
[1, x]. Validated and immutable after construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from mcmle.core.exceptions import ValidationError
from mcmle.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
    check_min_samples,
)


@dataclass(frozen=True)
class LinearDesign:
    """
    Design for the regression y = intercept + slope * x + error.

    Construction:
        LinearDesign.from_arrays(x, y)
    """
    x: NDArray[np.floating[Any]]
    y: NDArray[np.floating[Any]]
    X: NDArray[np.floating[Any]]

    @classmethod
    def from_arrays(cls, x: ArrayLike, y: ArrayLike) -> LinearDesign:
        """
        Build a LinearDesign from covariate and response vectors.

        Raises:
            ValidationError: Non-numeric or non-finite data, or constant x
            DimensionError: x and y differ in length or are not 1D
            InvalidArgumentError: Fewer than 3 observations
        """
        x_arr = check_array(x, "x")
        y_arr = check_array(y, "y")
        check_1d(x_arr, "x")
        check_1d(y_arr, "y")
        check_consistent_length(x_arr, y_arr, names=("x", "y"))
        check_min_samples(x_arr, 3, "x")
        check_finite(x_arr, "x")
        check_finite(y_arr, "y")
        if np.ptp(x_arr) == 0:
            raise ValidationError("x: constant covariate, slope is not identifiable")

        x_arr = np.array(x_arr, copy=True)
        y_arr = np.array(y_arr, copy=True)
        X = np.column_stack([np.ones_like(x_arr), x_arr])
        for a in (x_arr, y_arr, X):
            a.flags.writeable = False
        return cls(x=x_arr, y=y_arr, X=X)

    @property
    def n(self) -> int:
        return int(self.x.shape[0])

    @property
    def p(self) -> int:
        return 2
