"""
Generic result container for all mcmle computations.

Every backend returns a Result[P] whose params field holds the
domain-specific payload. Shared metadata (timing, warnings, provenance)
lives on the envelope so tooling can treat all results alike.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (converged, iterations, diagnostics)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

import platform
from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Library versions in effect when the result was produced."""
    import numpy
    import scipy
    from mcmle import __version__

    return {
        'mcmle': __version__,
        'numpy': numpy.__version__,
        'scipy': scipy.__version__,
        'python': platform.python_version(),
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for Monte Carlo and likelihood computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (estimate, argmin, grid table, ...)
        info: Structured metadata (method, convergence, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Library versions used to produce the result

    Examples:
        >>> Result(
        ...     params=MCParams(estimate=0.68, ...),
        ...     info={'kind': 'interval', 'n': 10000},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_montecarlo'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
