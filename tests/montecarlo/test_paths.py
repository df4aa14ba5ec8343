"""
Tests for path-dependent outcomes and the spin game.
"""

import numpy as np
import pytest

from mcmle.core.exceptions import (
    DimensionError,
    InvalidArgumentError,
    InvalidParameterError,
)
from mcmle.montecarlo import (
    SpinGame,
    bust,
    evaluate_path,
    final_value,
    mc_paths,
    play_game,
    running_total,
)
from mcmle.variates import VariateDesign, sampler


class TestPolicies:

    def test_running_total(self):
        np.testing.assert_array_equal(running_total([1, 2, 3], initial=1.0), [2, 4, 7])

    def test_final_value(self):
        assert evaluate_path([-1, -1, 2, 2]) == 2.0

    def test_bust_after_recovery(self):
        """Touching zero mid-path busts even if the total recovers."""
        assert evaluate_path([-1, -1, 2, 2], policy=bust) == 0.0

    def test_bust_at_exactly_zero(self):
        assert evaluate_path([1, -1, 5], policy=bust) == 0.0

    def test_no_bust(self):
        assert evaluate_path([1, 1, -1, 3], policy=bust) == 4.0

    def test_initial_bankroll(self):
        assert evaluate_path([-1, -1, 2], policy=bust, initial=3.0) == 3.0

    def test_empty_path(self):
        with pytest.raises(InvalidArgumentError):
            running_total([])

    def test_2d_path(self):
        with pytest.raises(DimensionError):
            running_total(np.zeros((2, 2)))

    def test_policy_callables(self):
        traj = np.array([1.0, -2.0, 4.0])
        assert final_value(traj) == 4.0
        assert bust(traj) == 0.0


class TestMCPaths:

    def test_deterministic_steps(self):
        ones = sampler(VariateDesign.categorical, values=[1.0])
        sol = mc_paths(ones, n_steps=5, n=10, seed=0)
        np.testing.assert_array_equal(sol.outcomes, np.full(10, 5.0))

    def test_always_bust(self):
        down = sampler(VariateDesign.categorical, values=[-1.0])
        sol = mc_paths(down, n_steps=3, policy=bust, n=10, initial=10.0, seed=0)
        assert sol.estimate == 7.0
        sol = mc_paths(down, n_steps=3, policy=bust, n=10, initial=2.0, seed=0)
        assert sol.estimate == 0.0

    def test_random_walk_mean(self):
        steps = sampler(VariateDesign.normal, mean=0.5, sd=1.0)
        sol = mc_paths(steps, n_steps=10, n=20_000, seed=1)
        assert sol.estimate == pytest.approx(5.0, abs=4 * sol.se)

    def test_invalid_steps(self):
        steps = sampler(VariateDesign.normal)
        with pytest.raises(InvalidArgumentError):
            mc_paths(steps, n_steps=0, n=10, seed=0)

    def test_kind(self):
        steps = sampler(VariateDesign.normal)
        sol = mc_paths(steps, n_steps=2, n=10, seed=0)
        assert sol.kind == 'paths'
        assert sol.info['n_steps'] == 2


class TestSpinGame:

    def test_from_wheel_normalises(self):
        game = SpinGame.from_wheel([1, -1], [18, 20])
        assert game.weights == pytest.approx((18 / 38, 20 / 38))
        assert game.expected_spin == pytest.approx(-2 / 38)

    def test_invalid_wheel(self):
        with pytest.raises(InvalidParameterError):
            SpinGame.from_wheel([1, -1], [0, 0])
        with pytest.raises(InvalidArgumentError):
            SpinGame.from_wheel([1, -1], [1, 1], n_spins=0)

    def test_play(self):
        game = SpinGame.from_wheel([1, -1], n_spins=4, bust=True)
        assert game.play([-1, -1, 1, 1]) == 0.0
        assert game.play([1, 1, -1, 1]) == 2.0

    def test_bust_is_absorbing_over_full_game(self):
        """Two early losses end a 20-spin game even after a long recovery."""
        path = [-1, -1] + [2] * 18
        assert SpinGame.from_wheel([-1, 2], n_spins=20, bust=True).play(path) == 0.0
        assert SpinGame.from_wheel([-1, 2], n_spins=20).play(path) == 34.0

    def test_expected_winnings_without_bust(self):
        game = SpinGame.from_wheel([1, -1], [18, 20], n_spins=20)
        sol = play_game(game, 50_000, seed=7)
        assert sol.estimate == pytest.approx(20 * game.expected_spin, abs=4 * sol.se)

    def test_bust_outcomes_non_negative(self):
        game = SpinGame.from_wheel([1, -1], [18, 20], n_spins=20, initial=2.0, bust=True)
        sol = play_game(game, 5_000, seed=8)
        assert np.all(sol.outcomes >= 0.0)
        assert np.any(sol.outcomes == 0.0)

    def test_reproducible(self):
        game = SpinGame.from_wheel([2, -1], n_spins=10, bust=True, initial=1.0)
        assert play_game(game, 1000, seed=3).estimate == play_game(game, 1000, seed=3).estimate

    def test_not_a_game(self):
        with pytest.raises(InvalidArgumentError):
            play_game("roulette", 10)
