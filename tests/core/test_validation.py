"""
Tests for input validation utilities.
"""

import numpy as np
import pytest

from mcmle.core.exceptions import (
    DimensionError,
    InvalidArgumentError,
    InvalidParameterError,
    ValidationError,
)
from mcmle.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_count,
    check_finite,
    check_min_samples,
    check_positive,
    check_probability,
    check_real,
    check_weights,
)


class TestCheckArray:

    def test_list_to_float(self):
        out = check_array([1, 2, 3], "x")
        assert out.dtype == np.float64

    def test_bool_to_float(self):
        out = check_array([True, False], "x")
        np.testing.assert_array_equal(out, [1.0, 0.0])

    def test_strings_rejected(self):
        with pytest.raises(ValidationError, match="x"):
            check_array(["a", "b"], "x")

    def test_ragged_rejected(self):
        with pytest.raises(ValidationError):
            check_array([[1, 2], [3]], "x")


class TestShapeChecks:

    def test_finite(self):
        with pytest.raises(ValidationError, match="1 NaN"):
            check_finite(np.array([1.0, np.nan]), "x")

    def test_1d(self):
        with pytest.raises(DimensionError):
            check_1d(np.zeros((2, 2)), "x")

    def test_consistent_length(self):
        with pytest.raises(DimensionError, match="x=3, y=2"):
            check_consistent_length(np.zeros(3), np.zeros(2), names=("x", "y"))

    def test_min_samples(self):
        with pytest.raises(InvalidArgumentError, match="at least 3"):
            check_min_samples(np.zeros(2), 3, "x")


class TestScalarChecks:

    def test_count_accepts_numpy_int(self):
        assert check_count(np.int64(5), "n") == 5

    @pytest.mark.parametrize("bad", [0, -1, 2.5, True, "3", None])
    def test_count_rejects(self, bad):
        with pytest.raises(InvalidArgumentError):
            check_count(bad, "n")

    def test_count_minimum_zero(self):
        assert check_count(0, "n", minimum=0) == 0

    @pytest.mark.parametrize("bad", [0.0, -1.0, np.inf, np.nan])
    def test_positive_rejects(self, bad):
        with pytest.raises(InvalidParameterError) as info:
            check_positive(bad, "sd")
        assert info.value.parameter == "sd"

    def test_real_rejects_bool(self):
        with pytest.raises(InvalidParameterError):
            check_real(True, "mean")

    def test_probability_bounds(self):
        assert check_probability(0.0, "p") == 0.0
        assert check_probability(1.0, "p") == 1.0
        with pytest.raises(InvalidParameterError):
            check_probability(1.5, "p")


class TestCheckWeights:

    def test_normalises(self):
        np.testing.assert_allclose(check_weights([1, 3], "w"), [0.25, 0.75])

    def test_zero_sum(self):
        with pytest.raises(InvalidParameterError, match="sum to zero"):
            check_weights([0, 0, 0], "w")

    def test_negative(self):
        with pytest.raises(InvalidParameterError, match="non-negative"):
            check_weights([1, -1, 2], "w")

    def test_empty(self):
        with pytest.raises(InvalidParameterError):
            check_weights([], "w")
