"""
Core infrastructure for mcmle.

This module provides shared abstractions used by all domain-specific
submodules (variates, montecarlo, likelihood, mle, regression, simulation).

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Generator handles, device detection, timing
"""

from mcmle.core.result import Result
from mcmle.core.exceptions import (
    MCMLEError,
    ValidationError,
    InvalidArgumentError,
    DimensionError,
    InvalidParameterError,
    NumericalError,
    DomainViolationError,
    ConvergenceError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "MCMLEError",
    "ValidationError",
    "InvalidArgumentError",
    "DimensionError",
    "InvalidParameterError",
    "NumericalError",
    "DomainViolationError",
    "ConvergenceError",
]
