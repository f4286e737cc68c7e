"""
Utility functions for bayeslm.
"""

from typing import Optional, Union

import jax
import numpy as np
import numpyro.distributions as dist
import scipy.stats as stats
from jax import random

from ..errors import InvalidInputError, STAGE_SAMPLING

RNGLike = Union[int, np.integer, jax.Array, None]

# ------------------------------------------------------------------------------


def resolve_seed(seed: Optional[int] = None) -> int:
    """
    Return ``seed`` as a plain int, drawing a fresh one when it is None.

    Raises
    ------
    InvalidInputError
        If ``seed`` is neither None nor a non-negative integer.
    """
    if seed is None:
        return int(np.random.default_rng().integers(0, 2**31 - 1))
    if (
        isinstance(seed, bool)
        or not isinstance(seed, (int, np.integer))
        or seed < 0
    ):
        raise InvalidInputError(
            "seed must be a non-negative integer or None", STAGE_SAMPLING, seed
        )
    return int(seed)


# ------------------------------------------------------------------------------


def as_rng_key(rng_key: RNGLike = None) -> jax.Array:
    """
    Normalize an RNG argument into a JAX PRNG key.

    Parameters
    ----------
    rng_key : int, jax.Array or None
        An integer seed, an existing PRNG key, or None. None draws a fresh
        seed from operating-system entropy, so two calls with ``None`` give
        independent keys.

    Returns
    -------
    jax.Array
        PRNG key suitable for ``jax.random`` and NumPyro ``sample`` calls.

    Examples
    --------
    >>> k1 = as_rng_key(0)
    >>> k2 = as_rng_key(k1)
    >>> bool((k1 == k2).all())
    True
    """
    if rng_key is None:
        return random.PRNGKey(resolve_seed(None))
    if isinstance(rng_key, (int, np.integer)) and not isinstance(
        rng_key, bool
    ):
        return random.PRNGKey(int(rng_key))
    return rng_key


# ------------------------------------------------------------------------------


def numpyro_to_scipy(distribution: dist.Distribution):
    """
    Get the corresponding scipy.stats distribution for a
    numpyro.distributions.Distribution.

    Parameters
    ----------
    distribution : numpyro.distributions.Distribution
        The numpyro distribution to convert

    Returns
    -------
    scipy.stats frozen distribution
        The corresponding scipy.stats distribution
    """
    if isinstance(distribution, dist.Normal):
        return stats.norm(
            loc=float(distribution.loc), scale=float(distribution.scale)
        )
    elif isinstance(distribution, dist.Uniform):
        low = float(distribution.low)
        high = float(distribution.high)
        return stats.uniform(loc=low, scale=high - low)
    else:
        raise ValueError(f"Unsupported distribution: {distribution}")
