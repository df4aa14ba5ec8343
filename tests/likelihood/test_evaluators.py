"""
Tests for negative log-likelihood evaluators and their gradients.

Validates:
    - Values match closed forms
    - Out-of-support points give +inf, or raise in strict mode
    - Analytic gradients match finite differences
    - Evaluators are pure functions of their arguments
"""

import numpy as np
import pytest
from scipy import stats
from scipy.optimize import approx_fprime

from mcmle.core.exceptions import (
    DimensionError,
    DomainViolationError,
    InvalidParameterError,
)
from mcmle.likelihood import (
    binomial_nll,
    binomial_nll_grad,
    linear_nll,
    linear_nll_grad,
    normal_nll,
    normal_nll_grad,
    poisson_nll,
    poisson_nll_grad,
)


def _normal_closed_form(x, mu, s2):
    n = len(x)
    return 0.5 * n * np.log(2 * np.pi * s2) + np.sum((x - mu) ** 2) / (2 * s2)


class TestNormalNLL:

    def test_closed_form(self, small_sample):
        value = normal_nll([0.1, 0.7], small_sample)
        assert value == pytest.approx(_normal_closed_form(small_sample, 0.1, 0.7))

    def test_known_variance(self, small_sample):
        assert normal_nll([0.1], small_sample, sigma2=0.7) == pytest.approx(
            normal_nll([0.1, 0.7], small_sample)
        )

    def test_scalar_param_with_known_variance(self, small_sample):
        assert normal_nll(0.1, small_sample, sigma2=1.0) == normal_nll([0.1], small_sample, sigma2=1.0)

    def test_minimised_at_sample_mean(self, small_sample):
        m = np.mean(small_sample)
        at_mean = normal_nll([m], small_sample, sigma2=1.0)
        assert at_mean < normal_nll([m + 0.01], small_sample, sigma2=1.0)
        assert at_mean < normal_nll([m - 0.01], small_sample, sigma2=1.0)

    @pytest.mark.parametrize("s2", [0.0, -1.0, np.nan])
    def test_outside_support_is_inf(self, small_sample, s2):
        assert normal_nll([0.0, s2], small_sample) == np.inf

    def test_strict_raises(self, small_sample):
        with pytest.raises(DomainViolationError) as info:
            normal_nll([0.0, -1.0], small_sample, strict=True)
        assert list(info.value.params) == [0.0, -1.0]

    def test_bad_known_variance(self, small_sample):
        with pytest.raises(InvalidParameterError):
            normal_nll([0.0], small_sample, sigma2=0.0)

    def test_wrong_param_length(self, small_sample):
        with pytest.raises(DimensionError):
            normal_nll([0.0, 1.0, 2.0], small_sample)

    def test_pure(self, small_sample):
        x = small_sample.copy()
        first = normal_nll([0.2, 1.3], x)
        assert normal_nll([0.2, 1.3], x) == first
        np.testing.assert_array_equal(x, small_sample)


class TestOtherModels:

    def test_linear_closed_form(self, rng):
        x = rng.normal(size=30)
        y = 1.0 + 2.0 * x + rng.normal(size=30)
        expected = -np.sum(stats.norm.logpdf(y - 1.0 - 2.0 * x, scale=np.sqrt(0.5)))
        assert linear_nll([1.0, 2.0, 0.5], x, y) == pytest.approx(expected)

    def test_linear_length_mismatch(self):
        with pytest.raises(DimensionError):
            linear_nll([0.0, 1.0, 1.0], [1.0, 2.0], [1.0])

    def test_linear_nonpositive_variance(self):
        assert linear_nll([0.0, 1.0, 0.0], [1.0, 2.0], [1.0, 2.0]) == np.inf

    def test_poisson(self):
        counts = np.array([0, 2, 3, 1, 4])
        expected = -np.sum(stats.poisson.logpmf(counts, 2.0))
        assert poisson_nll([2.0], counts) == pytest.approx(expected)
        assert poisson_nll([0.0], counts) == np.inf
        with pytest.raises(DomainViolationError):
            poisson_nll([-1.0], counts, strict=True)

    def test_binomial(self):
        k = np.array([3, 5, 2])
        m = np.array([10, 10, 10])
        expected = -np.sum(stats.binom.logpmf(k, m, 0.3))
        assert binomial_nll([0.3], k, m) == pytest.approx(expected)
        assert binomial_nll([1.5], k, m) == np.inf


class TestGradients:

    @staticmethod
    def _numeric(f, theta):
        return approx_fprime(np.asarray(theta, dtype=float), f, 1e-7)

    def test_normal(self, small_sample):
        theta = [0.3, 0.8]
        numeric = self._numeric(lambda t: normal_nll(t, small_sample), theta)
        np.testing.assert_allclose(normal_nll_grad(theta, small_sample), numeric, rtol=1e-4)

    def test_normal_known_variance(self, small_sample):
        numeric = self._numeric(lambda t: normal_nll(t, small_sample, sigma2=2.0), [0.3])
        np.testing.assert_allclose(
            normal_nll_grad([0.3], small_sample, sigma2=2.0), numeric, rtol=1e-4
        )

    def test_linear(self, rng):
        x = rng.normal(size=20)
        y = 0.5 - x + rng.normal(size=20)
        theta = [0.2, -0.7, 1.4]
        numeric = self._numeric(lambda t: linear_nll(t, x, y), theta)
        np.testing.assert_allclose(linear_nll_grad(theta, x, y), numeric, rtol=1e-4)

    def test_poisson(self):
        counts = np.array([0, 2, 3, 1, 4])
        numeric = self._numeric(lambda t: poisson_nll(t, counts), [1.5])
        np.testing.assert_allclose(poisson_nll_grad([1.5], counts), numeric, rtol=1e-4)

    def test_binomial(self):
        k, m = np.array([3, 5, 2]), np.array([10, 10, 10])
        numeric = self._numeric(lambda t: binomial_nll(t, k, m), [0.4])
        np.testing.assert_allclose(binomial_nll_grad([0.4], k, m), numeric, rtol=1e-4)

    def test_outside_support_is_nan(self, small_sample):
        assert np.all(np.isnan(normal_nll_grad([0.0, -1.0], small_sample)))

    @pytest.mark.parametrize("sigma2", [0.0, -1.0, np.nan])
    def test_known_sigma2_validated(self, small_sample, sigma2):
        with pytest.raises(InvalidParameterError):
            normal_nll_grad([0.0], small_sample, sigma2=sigma2)
