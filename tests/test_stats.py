"""Tests for posterior summary statistics and diagnostics."""

import numpy as np
import pytest

from bayeslm import stats
from bayeslm.errors import EmptyChainError, InvalidInputError, InvalidLevelError


# ------------------------------------------------------------------------------
# Point estimates
# ------------------------------------------------------------------------------


@pytest.mark.parametrize("v", [0.1, 72.3, -1e-7, 1e12 + 0.3])
def test_constant_draws_mean_is_exact(v):
    assert stats.point_estimate(np.full(1000, v)) == v


def test_point_estimate_matches_mean():
    draws = np.arange(1.0, 101.0)
    assert stats.point_estimate(draws) == pytest.approx(50.5)


def test_point_estimate_is_deterministic():
    draws = np.random.default_rng(3).normal(size=500)
    assert stats.point_estimate(draws) == stats.point_estimate(draws)


def test_empty_draws_raise():
    with pytest.raises(EmptyChainError):
        stats.point_estimate([])
    with pytest.raises(EmptyChainError):
        stats.credible_interval([], 0.9)


def test_two_dimensional_draws_raise():
    with pytest.raises(InvalidInputError):
        stats.point_estimate(np.ones((2, 2)))


def test_posterior_sd():
    assert stats.posterior_sd([5.0]) == 0.0
    assert stats.posterior_sd([1.0, 3.0]) == pytest.approx(np.sqrt(2.0))


# ------------------------------------------------------------------------------
# Intervals
# ------------------------------------------------------------------------------


def test_credible_interval_uses_linear_interpolation():
    lo, hi = stats.credible_interval(np.arange(1.0, 101.0), 0.95)
    assert lo == pytest.approx(3.475)
    assert hi == pytest.approx(97.525)


def test_credible_interval_covers_level():
    draws = np.random.default_rng(7).normal(size=1001)
    lo, hi = stats.credible_interval(draws, 0.95)
    assert lo <= hi
    assert np.mean((draws >= lo) & (draws <= hi)) >= 0.95


def test_credible_interval_order_independent():
    draws = np.random.default_rng(8).normal(size=300)
    assert stats.credible_interval(draws) == stats.credible_interval(
        draws[::-1]
    )


@pytest.mark.parametrize("level", [0.0, 1.0, -0.5, 1.5, float("nan"), "x"])
def test_invalid_level_raise(level):
    with pytest.raises(InvalidLevelError):
        stats.credible_interval(np.arange(10.0), level)


def test_level_checked_before_draws():
    with pytest.raises(InvalidLevelError):
        stats.credible_interval([], 2.0)


def test_quantiles():
    q = stats.quantiles(np.arange(1.0, 101.0), [0.0, 0.5, 1.0])
    assert q == {0.0: 1.0, 0.5: 50.5, 1.0: 100.0}
    with pytest.raises(InvalidLevelError):
        stats.quantiles(np.arange(3.0), [1.2])


# ------------------------------------------------------------------------------
# Diagnostics
# ------------------------------------------------------------------------------


def test_diagnostics_of_independent_chains():
    draws = np.random.default_rng(11).normal(size=(4, 500))
    assert stats.r_hat(draws) == pytest.approx(1.0, abs=0.05)
    assert stats.n_eff(draws) > 500


def test_r_hat_detects_separated_chains():
    rng = np.random.default_rng(12)
    draws = np.stack([rng.normal(0.0, 1.0, 200), rng.normal(10.0, 1.0, 200)])
    assert stats.r_hat(draws) > 1.5


def test_diagnostics_nan_for_short_chains():
    assert np.isnan(stats.r_hat(np.arange(3.0)))
    assert np.isnan(stats.n_eff(np.ones((2, 3))))


def test_tail_probs_are_exact_decimals():
    assert stats.tail_probs(0.95) == (0.025, 0.975)
    assert stats.tail_probs(0.9) == (0.05, 0.95)
