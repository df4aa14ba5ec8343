"""
Design class for Monte Carlo estimation.

MCDesign encapsulates everything a backend needs to produce one estimate:
how to draw, what to average, how many draws, and the seed. Immutable,
validated at construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from mcmle.core.compute.rng import SeedLike
from mcmle.core.exceptions import InvalidArgumentError, InvalidParameterError
from mcmle.core.validation import check_count, check_positive, check_real
from mcmle.montecarlo.paths import Policy, final_value

Sampler = Callable[[np.random.Generator, int], NDArray]
Kind = Literal['expectation', 'interval', 'paths']


@dataclass(frozen=True)
class MCDesign:
    """
    Frozen design for one Monte Carlo estimate.

    Attributes:
        kind: "expectation" (mean of f over draws), "interval" (normal
            interval probability), or "paths" (path-dependent outcomes).
        n: Number of draws (expectation/interval) or paths (paths).
        seed: Seed-like source of randomness.
        sampler: fn(rng, n) -> draws. For paths, draws individual steps.
        statistic: Vectorised fn(draws) -> outcomes, expectation only.
        policy: fn(trajectory) -> outcome, paths only.
        n_steps: Steps per path, paths only.
        initial: Starting value of every trajectory, paths only.
        params: Interval bounds and normal parameters, interval only.
    """
    kind: Kind
    n: int
    seed: SeedLike
    sampler: Sampler | None = None
    statistic: Callable | None = None
    policy: Policy | None = None
    n_steps: int | None = None
    initial: float = 0.0
    params: dict[str, float] = field(default_factory=dict)

    @classmethod
    def for_expectation(
        cls,
        sampler: Sampler,
        statistic: Callable | None = None,
        n: int = 10_000,
        *,
        seed: SeedLike = None,
    ) -> MCDesign:
        """
        Estimate E[f(X)] by averaging statistic over n draws of sampler.

        Args:
            sampler: fn(rng, n) -> array of n draws.
            statistic: Vectorised fn(draws) -> n outcomes. None means the
                identity, i.e. estimate E[X].
            n: Number of draws. Must be >= 1.
            seed: Random seed or Generator.

        Raises:
            InvalidArgumentError: If n < 1 or sampler is not callable.
        """
        n = check_count(n, "n", minimum=1)
        if not callable(sampler):
            raise InvalidArgumentError("sampler must be callable fn(rng, n)")
        if statistic is not None and not callable(statistic):
            raise InvalidArgumentError("statistic must be callable or None")
        return cls(kind='expectation', n=n, seed=seed, sampler=sampler, statistic=statistic)

    @classmethod
    def for_interval(
        cls,
        lo: float,
        hi: float,
        *,
        mean: float = 0.0,
        sd: float = 1.0,
        n: int = 10_000,
        seed: SeedLike = None,
    ) -> MCDesign:
        """
        Estimate P(lo <= X <= hi) for X ~ Normal(mean, sd^2).

        The indicator of [lo, hi] is averaged over n normal draws; this is
        the Monte Carlo estimate of the normal density's integral over the
        interval.

        Raises:
            InvalidParameterError: If sd <= 0 or lo > hi.
            InvalidArgumentError: If n < 1.
        """
        lo = _bound(lo, "lo")
        hi = _bound(hi, "hi")
        if lo > hi:
            raise InvalidParameterError(
                f"lo must be <= hi, got lo={lo}, hi={hi}", parameter="lo", value=lo
            )
        mean = check_real(mean, "mean")
        sd = check_positive(sd, "sd")
        n = check_count(n, "n", minimum=1)
        return cls(
            kind='interval', n=n, seed=seed,
            params={'lo': lo, 'hi': hi, 'mean': mean, 'sd': sd},
        )

    @classmethod
    def for_paths(
        cls,
        step_sampler: Sampler,
        n_steps: int,
        policy: Policy = final_value,
        n: int = 10_000,
        *,
        initial: float = 0.0,
        seed: SeedLike = None,
    ) -> MCDesign:
        """
        Estimate E[policy(trajectory)] over n simulated paths.

        Each path draws n_steps steps; its trajectory is initial plus the
        running sum of the steps, and policy sees the full trajectory.

        Raises:
            InvalidArgumentError: If n < 1, n_steps < 1, or callables are missing.
        """
        n = check_count(n, "n", minimum=1)
        n_steps = check_count(n_steps, "n_steps", minimum=1)
        if not callable(step_sampler):
            raise InvalidArgumentError("step_sampler must be callable fn(rng, n)")
        if not callable(policy):
            raise InvalidArgumentError("policy must be callable fn(trajectory)")
        initial = check_real(initial, "initial")
        return cls(
            kind='paths', n=n, seed=seed, sampler=step_sampler,
            policy=policy, n_steps=n_steps, initial=initial,
        )

    @property
    def exact(self) -> float | None:
        """Closed-form value of the target, where one exists."""
        if self.kind != 'interval':
            return None
        p = self.params
        dist = stats.norm(loc=p['mean'], scale=p['sd'])
        return float(dist.cdf(p['hi']) - dist.cdf(p['lo']))

    @property
    def metadata(self) -> dict[str, Any]:
        meta: dict[str, Any] = {'kind': self.kind, 'n': self.n}
        if self.kind == 'paths':
            meta['n_steps'] = self.n_steps
            meta['initial'] = self.initial
        meta.update(self.params)
        return meta


def _bound(value: Any, name: str) -> float:
    """Interval endpoint: finite or +/-inf, never NaN."""
    if isinstance(value, (int, float, np.floating, np.integer)) and np.isinf(value):
        return float(value)
    return check_real(value, name)
