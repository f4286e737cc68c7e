"""Statistics functions for bayeslm."""

# Point estimates and intervals
from .summary import (
    QUANTILE_METHOD,
    credible_interval,
    point_estimate,
    posterior_sd,
    quantiles,
    tail_probs,
    validate_level,
)

# Convergence diagnostics
from .diagnostics import n_eff, r_hat

__all__ = [
    # Summary
    "QUANTILE_METHOD",
    "credible_interval",
    "point_estimate",
    "posterior_sd",
    "quantiles",
    "tail_probs",
    "validate_level",
    # Diagnostics
    "n_eff",
    "r_hat",
]
