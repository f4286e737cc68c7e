"""
Markov Chain Monte Carlo (MCMC) module for Bayesian linear regression.

This module runs NumPyro's samplers and post-processes their chains.
"""

from .chain import (
    Chain,
    Draw,
    credible_interval,
    point_estimate,
    posterior_quantiles,
    predict,
    predictive_interval,
    regression_band,
    to_table,
)
from .inference_engine import MCMCInferenceEngine
from .results import PosteriorResults
from .results_factory import MCMCResultsFactory

__all__ = [
    "Chain",
    "Draw",
    "MCMCInferenceEngine",
    "MCMCResultsFactory",
    "PosteriorResults",
    "credible_interval",
    "point_estimate",
    "posterior_quantiles",
    "predict",
    "predictive_interval",
    "regression_band",
    "to_table",
]
