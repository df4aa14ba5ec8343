"""
Exception hierarchy for mcmle.

All exceptions inherit from MCMLEError so callers can catch any
library-specific failure with a single clause. Input problems are split
into structural ones (InvalidArgumentError) and domain ones
(InvalidParameterError); numerical and optimizer failures have their own
branches.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Nothing is silently clamped or defaulted
"""

from typing import Any


class MCMLEError(Exception):
    """Base exception for all mcmle errors."""
    pass


class ValidationError(MCMLEError):
    """
    Input validation failed.

    Base class for every error raised before any computation starts.
    """
    pass


class InvalidArgumentError(ValidationError):
    """
    A structural precondition is violated.

    Examples: zero samples requested, an empty simulation grid, a starting
    point outside the declared bounds, an unknown option string.
    """
    pass


class DimensionError(InvalidArgumentError):
    """
    Array or vector lengths are inconsistent.

    Raised when, for example, a parameter vector and its bounds have
    different lengths, or covariate and response vectors disagree.
    """
    pass


class InvalidParameterError(ValidationError):
    """
    A distribution or likelihood parameter is outside its domain.

    Attributes:
        parameter: Name of the offending parameter
        value: The rejected value
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: Any = None,
    ):
        super().__init__(message)
        self.parameter = parameter
        self.value = value


class NumericalError(MCMLEError):
    """
    Numerical computation failed.

    Base class for errors arising during evaluation rather than validation.
    """
    pass


class DomainViolationError(NumericalError):
    """
    A parameter point lies outside a likelihood's support.

    Raised by evaluators in strict mode, and by the optimizer adapter when
    the starting point itself has no finite likelihood.

    Attributes:
        params: The parameter vector that was rejected
    """

    def __init__(self, message: str, params: Any = None):
        super().__init__(message)
        self.params = params


class ConvergenceError(MCMLEError):
    """
    The optimizer failed to converge.

    Raised instead of returning whatever point the optimizer stopped at.

    Attributes:
        iterations: Number of iterations completed
        reason: Message reported by the optimizer
        final_value: Objective value at the last iterate, if finite
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        reason: str | None = None,
        final_value: float | None = None,
    ):
        super().__init__(message)
        self.iterations = iterations
        self.reason = reason
        self.final_value = final_value
