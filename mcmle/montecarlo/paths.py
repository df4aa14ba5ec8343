"""
Path-dependent outcomes for multi-step stochastic processes.

A path is a sequence of steps; its trajectory is the running total
initial + cumsum(steps). A policy maps the whole trajectory to a single
outcome, so rules such as "bust as soon as the bankroll hits zero" are
judged on every step, not just the last one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from mcmle.core.exceptions import DimensionError, InvalidArgumentError
from mcmle.core.validation import check_array, check_count, check_real
from mcmle.variates.design import VariateDesign
from mcmle.variates.solvers import sampler

Policy = Callable[[NDArray[np.floating[Any]]], float]


def final_value(trajectory: NDArray[np.floating[Any]]) -> float:
    """Outcome is the running total after the last step."""
    return float(trajectory[-1])


def bust(trajectory: NDArray[np.floating[Any]]) -> float:
    """
    Outcome is 0 if the running total is ever <= 0, else the final total.

    Recovery after touching zero does not count.
    """
    if np.any(trajectory <= 0):
        return 0.0
    return float(trajectory[-1])


def running_total(steps: ArrayLike, initial: float = 0.0) -> NDArray[np.floating[Any]]:
    """Trajectory of a path: initial + cumulative sum of its steps."""
    s = check_array(steps, "steps")
    if s.ndim != 1:
        raise DimensionError(f"steps: expected 1D array, got shape {s.shape}")
    if s.size == 0:
        raise InvalidArgumentError("steps: a path needs at least one step")
    return initial + np.cumsum(s)


def evaluate_path(steps: ArrayLike, policy: Policy = final_value, initial: float = 0.0) -> float:
    """Apply policy to the trajectory of a single path of steps."""
    return float(policy(running_total(steps, initial)))


@dataclass(frozen=True)
class SpinGame:
    """
    A wheel is spun n_spins times; each spin pays one of `values`.

    With bust=True the player is eliminated (outcome 0) the moment the
    running total reaches or falls below zero.

    Attributes:
        values: Payout of each wheel segment
        weights: Relative frequency of each segment (normalised on use)
        n_spins: Spins per game
        initial: Starting bankroll added before the first spin
        bust: Whether the absorbing floor at zero applies
    """
    values: tuple[float, ...]
    weights: tuple[float, ...]
    n_spins: int = 20
    initial: float = 0.0
    bust: bool = False

    @classmethod
    def from_wheel(
        cls,
        values: ArrayLike,
        weights: ArrayLike | None = None,
        *,
        n_spins: int = 20,
        initial: float = 0.0,
        bust: bool = False,
    ) -> SpinGame:
        """Build a game, validating the wheel up front."""
        design = VariateDesign.categorical(values, weights, n=0)
        n_spins = check_count(n_spins, "n_spins", minimum=1)
        initial = check_real(initial, "initial")
        return cls(
            values=tuple(float(v) for v in design.params['values']),
            weights=tuple(float(w) for w in design.params['probs']),
            n_spins=n_spins,
            initial=initial,
            bust=bool(bust),
        )

    @property
    def policy(self) -> Policy:
        return bust if self.bust else final_value

    def step_sampler(self) -> Callable[[np.random.Generator, int], NDArray]:
        """Sampler yielding individual spin payouts."""
        return sampler(VariateDesign.categorical, values=self.values, weights=self.weights)

    def play(self, spins: ArrayLike) -> float:
        """Outcome of one game given its sequence of spin payouts."""
        return evaluate_path(spins, self.policy, self.initial)

    @property
    def expected_spin(self) -> float:
        """Mean payout of a single spin."""
        return float(np.dot(self.values, self.weights))
