"""Tests for utility helpers."""

import numpy as np
import numpyro.distributions as dist
import pytest
from jax import random

from bayeslm.errors import InvalidInputError
from bayeslm.utils import as_rng_key, numpyro_to_scipy, resolve_seed


def test_as_rng_key_from_int():
    np.testing.assert_array_equal(
        np.asarray(as_rng_key(3)), np.asarray(random.PRNGKey(3))
    )


def test_as_rng_key_passes_keys_through(rng_key):
    assert as_rng_key(rng_key) is rng_key


def test_as_rng_key_none_is_fresh():
    assert not np.array_equal(
        np.asarray(as_rng_key(None)), np.asarray(as_rng_key(None))
    )


def test_numpyro_to_scipy():
    normal = numpyro_to_scipy(dist.Normal(1.0, 0.5))
    assert normal.mean() == pytest.approx(1.0)
    assert normal.std() == pytest.approx(0.5)
    uniform = numpyro_to_scipy(dist.Uniform(0.0, 20.0))
    assert uniform.support() == pytest.approx((0.0, 20.0))
    with pytest.raises(ValueError):
        numpyro_to_scipy(dist.Gamma(1.0, 1.0))


def test_resolve_seed():
    assert resolve_seed(np.int64(5)) == 5
    assert isinstance(resolve_seed(None), int)
    with pytest.raises(InvalidInputError):
        resolve_seed(-3)
