"""Point estimates and quantile-based intervals for posterior draws.

All quantiles use linear interpolation between order statistics
(``numpy.quantile(..., method="linear")``, Hyndman & Fan type 7, the R
default). For the draws ``1, 2, ..., 100`` the 95% interval is therefore
``(3.475, 97.525)``.
"""

import math
from typing import Dict, Sequence, Tuple

import numpy as np

from ..errors import (
    STAGE_SUMMARY,
    EmptyChainError,
    InvalidInputError,
    InvalidLevelError,
)

QUANTILE_METHOD = "linear"

# ==============================================================================
# Validation helpers
# ==============================================================================


def _as_draws(values) -> np.ndarray:
    draws = np.asarray(values, dtype=np.float64)
    if draws.ndim != 1:
        raise InvalidInputError(
            "draws must be one-dimensional", STAGE_SUMMARY, draws.shape
        )
    if draws.shape[0] == 0:
        raise EmptyChainError("no draws to summarize", value=0)
    return draws


def validate_level(level) -> float:
    """Return ``level`` as a float, or raise ``InvalidLevelError``."""
    try:
        level = float(level)
    except (TypeError, ValueError):
        raise InvalidLevelError(
            "credible level must be a number", value=level
        ) from None
    if not math.isfinite(level) or not 0.0 < level < 1.0:
        raise InvalidLevelError(
            "credible level must lie strictly between 0 and 1", value=level
        )
    return level


def tail_probs(level: float) -> Tuple[float, float]:
    """Quantile probabilities bounding an equal-tailed ``level`` interval.

    Rounded so that ``(1 - level) / 2`` lands on the intended order statistic
    rather than one ulp past it (0.95 would otherwise give
    0.025000000000000022).
    """
    tail = round((1.0 - level) / 2.0, 12)
    return tail, round(1.0 - tail, 12)


# ==============================================================================
# Statistics
# ==============================================================================


def point_estimate(values) -> float:
    """
    Posterior mean of a one-dimensional array of draws.

    The mean is computed relative to the first draw, so a constant array
    returns its value exactly.

    Raises
    ------
    EmptyChainError
        If there are no draws.
    """
    draws = _as_draws(values)
    shift = draws[0]
    return float(shift + np.mean(draws - shift))


def posterior_sd(values) -> float:
    """Sample standard deviation (``ddof=1``); 0.0 for a single draw."""
    draws = _as_draws(values)
    if draws.shape[0] < 2:
        return 0.0
    return float(np.std(draws, ddof=1))


def quantiles(values, probs: Sequence[float]) -> Dict[float, float]:
    """
    Type-7 quantiles of the draws.

    Parameters
    ----------
    values : array-like
        One-dimensional draws.
    probs : sequence of float
        Probabilities in ``[0, 1]``.

    Returns
    -------
    dict
        Mapping from each probability to its quantile.
    """
    draws = _as_draws(values)
    probs = [float(q) for q in probs]
    for q in probs:
        if not 0.0 <= q <= 1.0:
            raise InvalidLevelError("quantile must lie in [0, 1]", value=q)
    result = np.quantile(draws, probs, method=QUANTILE_METHOD)
    return {q: float(v) for q, v in zip(probs, result)}


def credible_interval(values, level: float = 0.95) -> Tuple[float, float]:
    """
    Equal-tailed credible interval.

    Parameters
    ----------
    values : array-like
        One-dimensional draws.
    level : float, default=0.95
        Posterior mass inside the interval, strictly between 0 and 1.

    Returns
    -------
    tuple of float
        ``(lo, hi)`` at the ``(1 - level) / 2`` and ``(1 + level) / 2``
        quantiles.

    Raises
    ------
    InvalidLevelError
        If ``level`` is not in (0, 1).
    EmptyChainError
        If there are no draws.
    """
    level = validate_level(level)
    draws = _as_draws(values)
    lo, hi = np.quantile(draws, tail_probs(level), method=QUANTILE_METHOD)
    return float(lo), float(hi)
