"""
mcmle Monte Carlo estimation.

Averages an outcome function over independent draws to approximate
expectations, probabilities and integrals, including path-dependent
outcomes of multi-step processes.

Usage:
    from mcmle.montecarlo import mc_interval, play_game, SpinGame

    # P(-1 <= X <= 1) for X ~ N(0, 1)
    result = mc_interval(-1.0, 1.0, n=100_000, seed=42)
    print(result.estimate, result.exact)

    # 20-spin wheel game with an absorbing floor at zero
    game = SpinGame.from_wheel([1, -1], [18, 20], initial=5, bust=True)
    print(play_game(game, 10_000, seed=42).estimate)
"""

from mcmle.montecarlo.design import MCDesign
from mcmle.montecarlo.paths import (
    SpinGame,
    bust,
    evaluate_path,
    final_value,
    running_total,
)
from mcmle.montecarlo.solution import MCSolution
from mcmle.montecarlo.solvers import mc_estimate, mc_interval, mc_paths, play_game

__all__ = [
    "mc_estimate",
    "mc_interval",
    "mc_paths",
    "play_game",
    "MCDesign",
    "MCSolution",
    "SpinGame",
    "bust",
    "final_value",
    "evaluate_path",
    "running_total",
]
