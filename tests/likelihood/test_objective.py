"""
Tests for NegLogLik binding and likelihood grids.
"""

import numpy as np
import pytest

from mcmle.core.exceptions import (
    DimensionError,
    DomainViolationError,
    InvalidArgumentError,
    ValidationError,
)
from mcmle.likelihood import (
    NegLogLik,
    likelihood_grid,
    normal_nll,
    poisson_nll,
)


class TestNegLogLik:

    def test_matches_evaluator(self, small_sample):
        nll = NegLogLik.normal(small_sample)
        assert nll([0.1, 0.9]) == normal_nll([0.1, 0.9], small_sample)
        assert nll.n_params == 2
        assert nll.names == ("mu", "sigma2")
        assert nll.n_observations == 11

    def test_data_is_copied_and_read_only(self, small_sample):
        x = small_sample.copy()
        nll = NegLogLik.normal(x, sigma2=1.0)
        before = nll([0.0])
        x[:] = 100.0
        assert nll([0.0]) == before
        with pytest.raises(ValueError):
            nll.data[0][0] = 1.0

    def test_gradient(self, small_sample):
        nll = NegLogLik.normal(small_sample, sigma2=1.0)
        assert nll.has_gradient
        expected = -np.sum(small_sample - 0.0) / 1.0
        assert nll.gradient([0.0])[0] == pytest.approx(expected)

    def test_bind_without_gradient(self):
        nll = NegLogLik.bind(poisson_nll, [1, 2, 3], n_params=1)
        assert not nll.has_gradient
        with pytest.raises(InvalidArgumentError):
            nll.gradient([1.0])

    def test_bind_validates_data(self):
        with pytest.raises(ValidationError):
            NegLogLik.normal([1.0, np.nan])
        with pytest.raises(InvalidArgumentError):
            NegLogLik.normal([])
        with pytest.raises(DimensionError):
            NegLogLik.linear([1.0, 2.0, 3.0], [1.0, 2.0])

    def test_strict_flag_forwarded(self, small_sample):
        nll = NegLogLik.normal(small_sample, strict=True)
        with pytest.raises(DomainViolationError):
            nll([0.0, 0.0])


class TestLikelihoodGrid:

    def test_one_axis(self, small_sample):
        nll = NegLogLik.normal(small_sample, sigma2=1.0)
        axis = np.linspace(-1.0, 1.0, 2001)
        surface = likelihood_grid(nll, [axis])
        assert surface.shape == (2001,)
        assert surface.argmin[0] == pytest.approx(np.mean(small_sample), abs=1e-3)
        assert surface.min_value == pytest.approx(nll([surface.argmin[0]]))

    def test_two_axes(self, small_sample):
        nll = NegLogLik.normal(small_sample)
        mu = np.linspace(-0.5, 0.5, 101)
        s2 = np.linspace(0.1, 1.5, 141)
        surface = likelihood_grid(nll, [mu, s2])
        assert surface.shape == (101, 141)
        assert surface.argmin[0] == pytest.approx(np.mean(small_sample), abs=0.01)
        assert surface.argmin[1] == pytest.approx(np.var(small_sample), abs=0.01)
        np.testing.assert_array_equal(surface.loglik, -surface.values)

    def test_infinite_points_skipped(self, small_sample):
        nll = NegLogLik.normal(small_sample)
        surface = likelihood_grid(nll, [[0.0], [-1.0, 0.0, 0.5]])
        assert surface.argmin == (0.0, 0.5)
        assert np.isinf(surface.values[0, 0])

    def test_nothing_finite(self, small_sample):
        nll = NegLogLik.normal(small_sample)
        with pytest.raises(DomainViolationError):
            likelihood_grid(nll, [[0.0, 1.0], [-1.0, 0.0]])

    def test_axis_count(self, small_sample):
        nll = NegLogLik.normal(small_sample)
        with pytest.raises(InvalidArgumentError):
            likelihood_grid(nll, [])
        with pytest.raises(InvalidArgumentError):
            likelihood_grid(nll, [[0.0], [1.0], [2.0]])

    def test_empty_axis(self, small_sample):
        nll = NegLogLik.normal(small_sample, sigma2=1.0)
        with pytest.raises(InvalidArgumentError):
            likelihood_grid(nll, [[]])
