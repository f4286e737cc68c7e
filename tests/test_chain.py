"""Tests for Chain and the chain post-processing functions."""

import numpy as np
import pandas as pd
import pytest
from jax import random

from bayeslm.errors import EmptyChainError, InvalidInputError, InvalidLevelError
from bayeslm.mcmc import Chain, Draw
from bayeslm.mcmc import chain as chain_ops


# ------------------------------------------------------------------------------
# Construction
# ------------------------------------------------------------------------------


def test_chain_indexing_and_iteration():
    chain = Chain(a=[1.0, 2.0, 3.0], b=[0.5, 0.6, 0.7], s=[1.0, 1.1, 1.2])
    assert len(chain) == 3
    assert chain[1] == Draw(2.0, 0.6, 1.1)
    assert [d.a for d in chain] == [1.0, 2.0, 3.0]
    assert chain.values("s").dtype == np.float64


def test_chain_arrays_are_read_only():
    chain = Chain(a=[1.0], b=[1.0], s=[1.0])
    with pytest.raises(ValueError):
        chain.a[0] = 2.0


@pytest.mark.parametrize(
    "a, b, s",
    [
        ([1.0, 2.0], [1.0], [1.0, 1.0]),
        ([1.0, 2.0], [1.0, 1.0], [1.0, 0.0]),
        ([1.0, 2.0], [1.0, 1.0], [1.0, -2.0]),
        ([1.0, np.inf], [1.0, 1.0], [1.0, 1.0]),
        ([[1.0]], [[1.0]], [[1.0]]),
    ],
)
def test_invalid_chains_raise(a, b, s):
    with pytest.raises(InvalidInputError):
        Chain(a=a, b=b, s=s)


def test_empty_chain_is_constructible():
    chain = Chain(a=[], b=[], s=[])
    assert len(chain) == 0
    with pytest.raises(EmptyChainError):
        chain_ops.point_estimate(chain, "a")
    with pytest.raises(EmptyChainError):
        chain_ops.credible_interval(chain, "b")
    with pytest.raises(EmptyChainError):
        chain_ops.regression_band(chain, [170.0])


def test_unknown_parameter_raise(synthetic_chain):
    with pytest.raises(InvalidInputError):
        chain_ops.point_estimate(synthetic_chain, "sigma")


def test_from_samples_requires_all_parameters():
    with pytest.raises(InvalidInputError):
        Chain.from_samples({"a": [1.0], "b": [1.0]})


# ------------------------------------------------------------------------------
# Tables
# ------------------------------------------------------------------------------


def test_to_table_single_chain(synthetic_chain):
    table = chain_ops.to_table(synthetic_chain)
    assert list(table.columns) == ["iteration", "a", "b", "s"]
    assert len(table) == len(synthetic_chain)
    assert table["iteration"].iloc[0] == 1
    np.testing.assert_array_equal(table["b"].to_numpy(), synthetic_chain.b)


def test_to_table_multiple_chains():
    chains = [
        Chain(a=[1.0, 2.0], b=[0.1, 0.2], s=[1.0, 1.0], chain_id=0),
        Chain(a=[3.0, 4.0], b=[0.3, 0.4], s=[2.0, 2.0], chain_id=1),
    ]
    table = chain_ops.to_table(chains)
    assert list(table.columns) == ["chain", "iteration", "a", "b", "s"]
    assert table["chain"].tolist() == [0, 0, 1, 1]
    assert table["iteration"].tolist() == [1, 2, 1, 2]
    assert table["a"].tolist() == [1.0, 2.0, 3.0, 4.0]


def test_to_table_empty_sequence():
    table = chain_ops.to_table([])
    assert isinstance(table, pd.DataFrame)
    assert table.empty


# ------------------------------------------------------------------------------
# Statistics
# ------------------------------------------------------------------------------


def test_constant_chain_point_estimate():
    chain = Chain(a=np.full(50, 3.3), b=np.full(50, 0.7), s=np.full(50, 1.9))
    assert chain_ops.point_estimate(chain, "a") == 3.3
    assert chain_ops.point_estimate(chain, "s") == 1.9


def test_credible_interval_of_chain():
    chain = Chain(
        a=np.arange(1.0, 101.0), b=np.zeros(100), s=np.ones(100)
    )
    lo, hi = chain_ops.credible_interval(chain, "a", 0.95)
    assert lo == pytest.approx(3.475)
    assert hi == pytest.approx(97.525)
    with pytest.raises(InvalidLevelError):
        chain_ops.credible_interval(chain, "a", 1.0)


def test_statistics_are_repeatable(synthetic_chain):
    first = chain_ops.credible_interval(synthetic_chain, "b")
    second = chain_ops.credible_interval(synthetic_chain, "b")
    assert first == second


def test_posterior_quantiles(synthetic_chain):
    q = chain_ops.posterior_quantiles(synthetic_chain, "b", (0.1, 0.9))
    assert set(q) == {0.1, 0.9}
    assert q[0.1] < q[0.9]


# ------------------------------------------------------------------------------
# Prediction
# ------------------------------------------------------------------------------


def test_predict_returns_one_draw_per_iteration(synthetic_chain, rng_key):
    draws = chain_ops.predict(synthetic_chain, 180.0, rng_key)
    assert draws.shape == (len(synthetic_chain),)
    # Centered on a + b * x0 = -100 + 180
    assert np.mean(draws) == pytest.approx(80.0, abs=4.0)


def test_predict_reproducible_with_pinned_key(synthetic_chain):
    key = random.PRNGKey(5)
    first = chain_ops.predict(synthetic_chain, 170.0, key)
    second = chain_ops.predict(synthetic_chain, 170.0, key)
    np.testing.assert_array_equal(first, second)
    np.testing.assert_array_equal(
        chain_ops.predict(synthetic_chain, 170.0, 5), first
    )


def test_predict_without_key_is_fresh(synthetic_chain):
    first = chain_ops.predict(synthetic_chain, 170.0)
    second = chain_ops.predict(synthetic_chain, 170.0)
    assert not np.array_equal(first, second)


def test_predict_empty_chain():
    chain = Chain(a=[], b=[], s=[])
    assert chain_ops.predict(chain, 170.0, 0).shape == (0,)


@pytest.mark.parametrize("x0", [float("nan"), "tall", None])
def test_predict_rejects_bad_covariate(synthetic_chain, x0):
    with pytest.raises(InvalidInputError):
        chain_ops.predict(synthetic_chain, x0, 0)


def test_predictive_interval(synthetic_chain):
    lo, hi = chain_ops.predictive_interval(synthetic_chain, 180.0, 0.9, 0)
    assert lo < 80.0 < hi


def test_regression_band(synthetic_chain):
    band = chain_ops.regression_band(synthetic_chain, [160.0, 180.0], 0.9)
    assert list(band.columns) == ["x", "mean", "lower", "upper"]
    assert (band["lower"] <= band["mean"]).all()
    assert (band["mean"] <= band["upper"]).all()
    assert band["mean"].iloc[1] == pytest.approx(
        np.mean(synthetic_chain.a + synthetic_chain.b * 180.0)
    )


def test_regression_band_covers_level():
    rng = np.random.default_rng(7)
    n = 1001
    chain = Chain(
        a=rng.normal(size=n), b=np.zeros(n), s=np.ones(n)
    )
    band = chain_ops.regression_band(chain, [170.0], 0.95)
    inside = (chain.a >= band["lower"].iloc[0]) & (
        chain.a <= band["upper"].iloc[0]
    )
    assert np.mean(inside) >= 0.95
