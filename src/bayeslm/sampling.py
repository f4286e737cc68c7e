"""
Sampling utilities for the linear regression model.

Provides draws from the priors (before any data is seen), prior predictive
simulations of the response, and posterior predictive draws of the response
at a fixed covariate value.
"""

from typing import Dict, Optional

import numpy as np
import pandas as pd
from jax import random
from numpyro.infer import Predictive

from .errors import InvalidInputError, STAGE_PRIOR
from .models.config import Parameter, PriorConfig
from .models.linear import LinearRegressionModel, Y_NAME
from .utils import as_rng_key
from .utils.core import RNGLike

# ------------------------------------------------------------------------------
# Prior sampling
# ------------------------------------------------------------------------------


def _check_n_samples(n_samples) -> int:
    if isinstance(n_samples, bool) or not isinstance(
        n_samples, (int, np.integer)
    ):
        raise InvalidInputError(
            "n_samples must be an integer", STAGE_PRIOR, n_samples
        )
    if n_samples < 1:
        raise InvalidInputError(
            "n_samples must be positive", STAGE_PRIOR, n_samples
        )
    return int(n_samples)


def sample_prior(
    priors: Optional[PriorConfig] = None,
    n_samples: int = 10_000,
    rng_key: RNGLike = None,
) -> Dict[str, np.ndarray]:
    """
    Draw independent samples from the priors on ``a``, ``b`` and ``s``.

    Parameters
    ----------
    priors : PriorConfig, optional
        Prior configuration. Defaults to ``PriorConfig()``.
    n_samples : int, default=10_000
        Number of draws per parameter.
    rng_key : int, jax.Array or None
        Seed or PRNG key. None uses fresh entropy.

    Returns
    -------
    Dict[str, np.ndarray]
        Aligned float64 arrays of length ``n_samples`` keyed by ``"a"``,
        ``"b"`` and ``"s"``; index ``i`` across the three is one triple.

    Raises
    ------
    InvalidInputError
        If ``n_samples`` is not a positive integer.
    """
    priors = priors if priors is not None else PriorConfig()
    n_samples = _check_n_samples(n_samples)
    rng_key = as_rng_key(rng_key)

    prior_dists = priors.distributions()
    keys = random.split(rng_key, len(Parameter))
    return {
        name: np.asarray(
            prior_dists[name].sample(key, sample_shape=(n_samples,)),
            dtype=np.float64,
        )
        for name, key in zip(Parameter.names(), keys)
    }


# ------------------------------------------------------------------------------


def prior_table(draws: Dict[str, np.ndarray]) -> pd.DataFrame:
    """Arrange prior draws as a DataFrame with columns ``a``, ``b``, ``s``."""
    missing = [p for p in Parameter.names() if p not in draws]
    if missing:
        raise InvalidInputError(
            "prior draws are missing parameters", STAGE_PRIOR, missing
        )
    return pd.DataFrame({p: np.asarray(draws[p]) for p in Parameter.names()})


# ------------------------------------------------------------------------------


def generate_prior_predictive_samples(
    model: LinearRegressionModel,
    n_samples: int = 100,
    rng_key: RNGLike = None,
) -> np.ndarray:
    """
    Simulate responses at the model's ``X`` values from the prior predictive.

    Parameters
    ----------
    model : LinearRegressionModel
        Model providing ``X`` and the priors; its ``Y`` is ignored.
    n_samples : int, default=100
        Number of simulated datasets.
    rng_key : int, jax.Array or None
        Seed or PRNG key.

    Returns
    -------
    np.ndarray
        Array of shape ``(n_samples, n_obs)``.
    """
    n_samples = _check_n_samples(n_samples)
    predictive = Predictive(model.model_fn, num_samples=n_samples)
    simulated = predictive(
        as_rng_key(rng_key), **model.model_args(observed=False)
    )
    return np.asarray(simulated[Y_NAME], dtype=np.float64)


# ------------------------------------------------------------------------------
# Posterior predictive sampling
# ------------------------------------------------------------------------------


def generate_predictive_samples(
    a: np.ndarray,
    b: np.ndarray,
    s: np.ndarray,
    x0: float,
    rng_key: RNGLike = None,
) -> np.ndarray:
    """
    One predictive draw ``Normal(a_t + b_t * x0, s_t)`` per posterior draw.

    Parameters
    ----------
    a, b, s : np.ndarray
        Aligned posterior draws of intercept, slope and noise scale.
    x0 : float
        Covariate value to predict at.
    rng_key : int, jax.Array or None
        Seed or PRNG key. The same key reproduces the same draws.

    Returns
    -------
    np.ndarray
        Float64 array with the same length as ``a``.
    """
    n_draws = int(np.shape(a)[0])
    if n_draws == 0:
        return np.zeros(0, dtype=np.float64)

    # Standard normal noise from JAX, location and scale applied in float64
    z = random.normal(as_rng_key(rng_key), (n_draws,))
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    s = np.asarray(s, dtype=np.float64)
    return a + b * float(x0) + s * np.asarray(z, dtype=np.float64)
