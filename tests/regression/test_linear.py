"""
Tests for simple linear regression.

Reference values from numpy.polyfit and closed-form least squares.
"""

import numpy as np
import pytest

from mcmle.core.exceptions import DimensionError, InvalidArgumentError, ValidationError
from mcmle.regression import LinearDesign, fit_linear


class TestFitLinear:

    def test_exact_line(self):
        x = np.array([0.0, 1.0, 2.0, 3.0])
        fit = fit_linear(x, 1.5 - 2.0 * x)
        assert fit.intercept == pytest.approx(1.5)
        assert fit.slope == pytest.approx(-2.0)
        assert fit.rss == pytest.approx(0.0, abs=1e-20)
        assert fit.r_squared == pytest.approx(1.0)

    def test_matches_polyfit(self, linear_data):
        x, y = linear_data
        fit = fit_linear(x, y)
        slope, intercept = np.polyfit(x, y, 1)
        assert fit.slope == pytest.approx(slope, rel=1e-10)
        assert fit.intercept == pytest.approx(intercept, rel=1e-10)

    def test_recovers_truth(self, linear_data):
        x, y = linear_data
        fit = fit_linear(x, y)
        assert fit.intercept == pytest.approx(2.0, abs=0.2)
        assert fit.slope == pytest.approx(3.0, abs=0.05)
        assert fit.sigma2 == pytest.approx(0.25, rel=0.25)

    def test_residual_variance(self, linear_data):
        x, y = linear_data
        fit = fit_linear(x, y)
        assert fit.sigma2 == pytest.approx(np.sum(fit.residuals ** 2) / (len(x) - 2))
        np.testing.assert_allclose(fit.fitted_values + fit.residuals, y)

    def test_standard_errors(self, linear_data):
        x, y = linear_data
        fit = fit_linear(x, y)
        sxx = np.sum((x - x.mean()) ** 2)
        se_slope = np.sqrt(fit.sigma2 / sxx)
        se_intercept = np.sqrt(fit.sigma2 * (1 / len(x) + x.mean() ** 2 / sxx))
        np.testing.assert_allclose(fit.standard_errors, [se_intercept, se_slope], rtol=1e-8)

    def test_read_only_outputs(self, linear_data):
        fit = fit_linear(*linear_data)
        with pytest.raises(ValueError):
            fit.coefficients[0] = 0.0

    def test_summary(self, linear_data):
        fit = fit_linear(*linear_data)
        assert "LINEAR REGRESSION" in fit.summary()
        assert "(Intercept)" in fit.summary()
        assert repr(fit).startswith("LinearSolution(")
        assert fit.backend_name == 'cpu_qr'

    def test_design_input(self, linear_data):
        design = LinearDesign.from_arrays(*linear_data)
        assert fit_linear(design).slope == fit_linear(*linear_data).slope


class TestValidation:

    def test_too_few_points(self):
        with pytest.raises(InvalidArgumentError):
            fit_linear([1.0, 2.0], [1.0, 2.0])

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            fit_linear([1.0, 2.0, 3.0], [1.0, 2.0])

    def test_constant_x(self):
        with pytest.raises(ValidationError, match="constant"):
            fit_linear([1.0, 1.0, 1.0], [1.0, 2.0, 3.0])

    def test_nonfinite(self):
        with pytest.raises(ValidationError):
            fit_linear([1.0, 2.0, np.inf], [1.0, 2.0, 3.0])
