"""Tests for prior and predictive sampling utilities."""

import numpy as np
import pytest

from bayeslm.errors import InvalidInputError
from bayeslm.models import LinearRegressionModel, PriorConfig
from bayeslm.sampling import (
    generate_predictive_samples,
    generate_prior_predictive_samples,
    prior_table,
    sample_prior,
)


def test_sample_prior_shapes(rng_key):
    draws = sample_prior(n_samples=5000, rng_key=rng_key)
    assert set(draws) == {"a", "b", "s"}
    for values in draws.values():
        assert values.shape == (5000,)
        assert values.dtype == np.float64


def test_sample_prior_moments(rng_key):
    draws = sample_prior(n_samples=20_000, rng_key=rng_key)
    assert np.mean(draws["b"]) == pytest.approx(1.0, abs=0.02)
    assert np.std(draws["a"]) == pytest.approx(200.0, rel=0.05)
    assert draws["s"].min() >= 0.0
    assert draws["s"].max() <= 20.0


def test_sample_prior_custom_priors(rng_key):
    priors = PriorConfig(s=(2.0, 3.0))
    draws = sample_prior(priors, n_samples=1000, rng_key=rng_key)
    assert draws["s"].min() >= 2.0
    assert draws["s"].max() <= 3.0


def test_sample_prior_is_pure_in_key():
    first = sample_prior(n_samples=100, rng_key=3)
    second = sample_prior(n_samples=100, rng_key=3)
    for name in first:
        np.testing.assert_array_equal(first[name], second[name])


@pytest.mark.parametrize("n_samples", [0, -5, 2.5, True, "10"])
def test_sample_prior_rejects_bad_sizes(n_samples):
    with pytest.raises(InvalidInputError) as exc_info:
        sample_prior(n_samples=n_samples, rng_key=0)
    assert exc_info.value.stage == "prior sampling"


def test_prior_table(rng_key):
    table = prior_table(sample_prior(n_samples=10, rng_key=rng_key))
    assert list(table.columns) == ["a", "b", "s"]
    assert len(table) == 10
    with pytest.raises(InvalidInputError):
        prior_table({"a": np.zeros(3)})


def test_prior_predictive_shape(rng_key):
    model = LinearRegressionModel(x=[160.0, 170.0, 180.0], y=[60.0, 70.0, 80.0])
    sims = generate_prior_predictive_samples(model, n_samples=50, rng_key=rng_key)
    assert sims.shape == (50, 3)
    assert np.all(np.isfinite(sims))


def test_predictive_samples_follow_parameters(rng_key):
    n = 4000
    draws = generate_predictive_samples(
        np.full(n, -100.0), np.full(n, 1.0), np.full(n, 2.0), 180.0, rng_key
    )
    assert draws.shape == (n,)
    assert np.mean(draws) == pytest.approx(80.0, abs=0.2)
    assert np.std(draws) == pytest.approx(2.0, rel=0.1)


def test_predictive_samples_keep_float64_precision(rng_key):
    n = 100
    a = np.full(n, 1e6 + 0.3)
    draws = generate_predictive_samples(
        a, np.zeros(n), np.full(n, 1e-6), 180.0, rng_key
    )
    assert draws.dtype == np.float64
    np.testing.assert_allclose(draws, 1e6 + 0.3, rtol=0, atol=1e-4)
