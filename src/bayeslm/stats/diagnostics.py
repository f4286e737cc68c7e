"""Convergence diagnostics delegated to ``numpyro.diagnostics``."""

import numpy as np
from numpyro.diagnostics import effective_sample_size, split_gelman_rubin

# Split R-hat halves each chain; fewer draws give meaningless values
MIN_DRAWS_FOR_DIAGNOSTICS = 4

# ==============================================================================
# Diagnostics
# ==============================================================================


def _grouped(draws) -> np.ndarray:
    draws = np.asarray(draws, dtype=np.float64)
    if draws.ndim == 1:
        draws = draws[None, :]
    return draws


def r_hat(draws) -> float:
    """
    Split Gelman-Rubin statistic.

    Parameters
    ----------
    draws : array-like
        Array of shape ``(n_chains, n_draws)`` (a 1-D array is treated as a
        single chain).

    Returns
    -------
    float
        R-hat, or NaN when chains hold fewer than four draws.
    """
    draws = _grouped(draws)
    if draws.shape[1] < MIN_DRAWS_FOR_DIAGNOSTICS:
        return float("nan")
    return float(split_gelman_rubin(draws))


def n_eff(draws) -> float:
    """Effective sample size pooled over chains (NaN for short chains)."""
    draws = _grouped(draws)
    if draws.shape[1] < MIN_DRAWS_FOR_DIAGNOSTICS:
        return float("nan")
    return float(effective_sample_size(draws))
