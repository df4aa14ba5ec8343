"""
Tests for Monte Carlo expectation and interval estimators.

Validates:
    - Design validation (n >= 1, lo <= hi, sd > 0)
    - Estimates agree with closed-form values
    - Error shrinks as the number of draws grows
    - Fixed seeds reproduce estimates exactly
"""

import numpy as np
import pytest
from scipy import stats

from mcmle.core.compute.rng import spawn_rngs
from mcmle.core.exceptions import (
    DimensionError,
    InvalidArgumentError,
    InvalidParameterError,
)
from mcmle.montecarlo import MCDesign, mc_estimate, mc_interval
from mcmle.variates import VariateDesign, sampler


class TestDesignValidation:

    def test_zero_draws(self):
        with pytest.raises(InvalidArgumentError):
            mc_interval(-1.0, 1.0, n=0, seed=0)

    def test_zero_draws_expectation(self):
        with pytest.raises(InvalidArgumentError):
            mc_estimate(sampler(VariateDesign.normal), n=0, seed=0)

    def test_reversed_interval(self):
        with pytest.raises(InvalidParameterError):
            mc_interval(1.0, -1.0, seed=0)

    def test_nonpositive_sd(self):
        with pytest.raises(InvalidParameterError):
            mc_interval(-1.0, 1.0, sd=0.0, seed=0)

    def test_nan_bound(self):
        with pytest.raises(InvalidParameterError):
            mc_interval(np.nan, 1.0, seed=0)

    def test_infinite_bounds_allowed(self):
        design = MCDesign.for_interval(-np.inf, 0.0, n=10)
        assert design.exact == pytest.approx(0.5)

    def test_unvectorised_statistic(self):
        with pytest.raises(DimensionError):
            mc_estimate(sampler(VariateDesign.normal), np.mean, n=10, seed=0)

    def test_unknown_backend(self):
        with pytest.raises(InvalidArgumentError):
            mc_interval(-1.0, 1.0, n=10, seed=0, backend='tpu')


class TestInterval:

    def test_exact_value(self):
        sol = mc_interval(-1.0, 1.0, n=10, seed=0)
        assert sol.exact == pytest.approx(stats.norm.cdf(1) - stats.norm.cdf(-1))

    def test_estimate_close_to_exact(self):
        sol = mc_interval(-1.96, 1.96, n=200_000, seed=1)
        assert sol.abs_error < 4 * sol.se
        assert sol.estimate == pytest.approx(0.95, abs=0.005)

    def test_shifted_normal(self):
        sol = mc_interval(2.0, 4.0, mean=3.0, sd=0.5, n=100_000, seed=2)
        exact = stats.norm.cdf(2.0) - stats.norm.cdf(-2.0)
        assert sol.exact == pytest.approx(exact)
        assert sol.abs_error < 4 * sol.se

    def test_outcomes_are_indicators(self):
        sol = mc_interval(-0.5, 0.5, n=1000, seed=3)
        assert set(np.unique(sol.outcomes)) <= {0.0, 1.0}
        assert sol.estimate == pytest.approx(np.mean(sol.outcomes))

    def test_reproducible(self):
        a = mc_interval(-1.0, 2.0, n=5000, seed=42)
        b = mc_interval(-1.0, 2.0, n=5000, seed=42)
        assert a.estimate == b.estimate

    def test_single_draw_warns(self):
        sol = mc_interval(-1.0, 1.0, n=1, seed=0)
        assert np.isnan(sol.se)
        assert any("n=1" in w for w in sol.warnings)

    def test_error_shrinks_with_n(self):
        """Mean absolute error over many replicates decreases in n."""
        reps = 200
        mean_errors = []
        for n in (10, 100, 1000, 10_000):
            errors = [
                mc_interval(-1.0, 1.0, n=n, seed=g).abs_error
                for g in spawn_rngs(2024, reps)
            ]
            mean_errors.append(np.mean(errors))
        assert all(a > b for a, b in zip(mean_errors, mean_errors[1:]))


class TestExpectation:

    def test_mean_of_normal(self):
        sol = mc_estimate(sampler(VariateDesign.normal, mean=2.0, sd=1.0),
                          n=100_000, seed=0)
        assert sol.estimate == pytest.approx(2.0, abs=4 * sol.se)
        assert sol.exact is None
        assert sol.abs_error is None

    def test_second_moment(self):
        sol = mc_estimate(sampler(VariateDesign.normal), lambda x: x ** 2,
                          n=100_000, seed=1)
        assert sol.estimate == pytest.approx(1.0, abs=4 * sol.se)

    def test_indicator_statistic(self):
        sol = mc_estimate(sampler(VariateDesign.uniform), lambda u: u < 0.25,
                          n=100_000, seed=2)
        assert sol.estimate == pytest.approx(0.25, abs=0.01)

    def test_se_matches_outcomes(self):
        sol = mc_estimate(sampler(VariateDesign.normal), n=500, seed=3)
        assert sol.se == pytest.approx(np.std(sol.outcomes, ddof=1) / np.sqrt(500))

    def test_design_input(self):
        design = MCDesign.for_expectation(sampler(VariateDesign.normal), n=100, seed=5)
        assert mc_estimate(design).estimate == mc_estimate(design).estimate


class TestSolution:

    def test_conf_int_contains_estimate(self):
        sol = mc_interval(-1.0, 1.0, n=1000, seed=0)
        lo, hi = sol.conf_int(0.9)
        assert lo < sol.estimate < hi

    def test_conf_int_level(self):
        sol = mc_interval(-1.0, 1.0, n=1000, seed=0)
        with pytest.raises(InvalidArgumentError):
            sol.conf_int(1.0)

    def test_summary_and_repr(self):
        sol = mc_interval(-1.0, 1.0, n=1000, seed=0)
        assert "MONTE CARLO ESTIMATE" in sol.summary()
        assert "Exact" in sol.summary()
        assert repr(sol).startswith("MCSolution(kind='interval'")
        assert sol.backend_name == 'cpu_montecarlo'
        assert 'simulation' in sol.timing
