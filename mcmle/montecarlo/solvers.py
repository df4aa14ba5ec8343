"""
Solver dispatch for Monte Carlo estimation.

Public API:
    mc_estimate(sampler, statistic, n)    - E[f(X)] by simple averaging
    mc_interval(lo, hi, mean, sd, n)      - P(lo <= X <= hi), X normal
    mc_paths(step_sampler, n_steps, ...)  - path-dependent expectation
    play_game(game, n_games)              - SpinGame expected winnings
"""

from __future__ import annotations

import warnings
from typing import Callable, Literal

from mcmle.core.compute.device import select_device
from mcmle.core.compute.rng import SeedLike
from mcmle.core.exceptions import InvalidArgumentError
from mcmle.montecarlo.backends.cpu import CPUMonteCarloBackend
from mcmle.montecarlo.design import MCDesign, Sampler
from mcmle.montecarlo.paths import Policy, SpinGame, final_value
from mcmle.montecarlo.solution import MCSolution

BackendChoice = Literal['auto', 'cpu', 'gpu']


def _get_backend(choice: str):
    """
    Select backend based on user choice and hardware availability.

    'auto' picks a GPU when one is present; 'gpu' requires one.
    """
    if choice == 'cpu':
        return CPUMonteCarloBackend()

    if choice == 'auto':
        device = select_device('auto')
        if not device.is_gpu:
            return CPUMonteCarloBackend()
        from mcmle.montecarlo.backends.gpu import GPUMonteCarloBackend
        return GPUMonteCarloBackend(device=device.device_type)

    if choice == 'gpu':
        try:
            device = select_device('gpu')
        except RuntimeError as e:
            warnings.warn(f"{e} Falling back to CPU.")
            return CPUMonteCarloBackend()
        from mcmle.montecarlo.backends.gpu import GPUMonteCarloBackend
        return GPUMonteCarloBackend(device=device.device_type)

    raise InvalidArgumentError(
        f"Unknown backend: {choice!r}. Use 'auto', 'cpu' or 'gpu'."
    )


def _run(design: MCDesign, backend: str) -> MCSolution:
    result = _get_backend(backend).solve(design)
    return MCSolution(_result=result, _design=design)


def mc_estimate(
    sampler: Sampler | MCDesign,
    statistic: Callable | None = None,
    n: int = 10_000,
    *,
    seed: SeedLike = None,
    backend: BackendChoice = 'cpu',
) -> MCSolution:
    """
    Monte Carlo estimate of E[statistic(X)].

    Parameters
    ----------
    sampler : callable or MCDesign
        fn(rng, n) -> n draws, e.g. mcmle.variates.sampler(...). A pre-built
        MCDesign of any kind is also accepted.
    statistic : callable or None
        Vectorised fn(draws) -> n outcomes. Indicator functions return
        booleans, which are averaged as 0/1. None estimates E[X].
    n : int
        Number of draws, >= 1.
    seed : None, int, SeedSequence or Generator
        Source of randomness.
    backend : str
        'cpu' (default), 'gpu' or 'auto'.

    Returns
    -------
    MCSolution
    """
    if isinstance(sampler, MCDesign):
        design = sampler
    else:
        design = MCDesign.for_expectation(sampler, statistic, n, seed=seed)
    return _run(design, backend)


def mc_interval(
    lo: float,
    hi: float,
    *,
    mean: float = 0.0,
    sd: float = 1.0,
    n: int = 10_000,
    seed: SeedLike = None,
    backend: BackendChoice = 'cpu',
) -> MCSolution:
    """
    Monte Carlo estimate of the normal integral over [lo, hi].

    The solution carries the closed-form value in `exact` and the
    discrepancy in `abs_error`.
    """
    design = MCDesign.for_interval(lo, hi, mean=mean, sd=sd, n=n, seed=seed)
    return _run(design, backend)


def mc_paths(
    step_sampler: Sampler,
    n_steps: int,
    policy: Policy = final_value,
    n: int = 10_000,
    *,
    initial: float = 0.0,
    seed: SeedLike = None,
    backend: BackendChoice = 'cpu',
) -> MCSolution:
    """
    Monte Carlo estimate of a path-dependent expectation.

    Each of the n paths takes n_steps steps from step_sampler; policy maps
    the path's running total to its outcome.
    """
    design = MCDesign.for_paths(
        step_sampler, n_steps, policy, n, initial=initial, seed=seed
    )
    return _run(design, backend)


def play_game(
    game: SpinGame,
    n_games: int = 10_000,
    *,
    seed: SeedLike = None,
    backend: BackendChoice = 'cpu',
) -> MCSolution:
    """
    Expected outcome of a SpinGame, estimated over n_games simulated games.

    Examples
    --------
    >>> game = SpinGame.from_wheel([1, -1], [18, 20], n_spins=20, bust=True, initial=5)
    >>> play_game(game, 50_000, seed=1).estimate
    """
    if not isinstance(game, SpinGame):
        raise InvalidArgumentError(
            f"game must be a SpinGame, got {type(game).__name__}"
        )
    return mc_paths(
        game.step_sampler(), game.n_spins, game.policy, n_games,
        initial=game.initial, seed=seed, backend=backend,
    )
