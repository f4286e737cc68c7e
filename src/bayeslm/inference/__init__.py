"""
Unified inference interface for bayeslm.

This module provides a single entry point that validates the observations,
builds the regression model and samples its posterior.
"""

from typing import Optional, Sequence

from ..errors import InvalidInputError, STAGE_MODEL
from ..mcmc import PosteriorResults
from ..models.config import MCMCConfig, PriorConfig
from ..models.linear import LinearRegressionModel
from .mcmc import _run_mcmc_inference

# Public API
__all__ = ["run_regression", "sample_posterior"]


# ==============================================================================
# Public API
# ==============================================================================


def run_regression(
    x: Sequence[float],
    y: Sequence[float],
    priors: Optional[PriorConfig] = None,
    mcmc_config: Optional[MCMCConfig] = None,
    seed: Optional[int] = 42,
    verbose: bool = False,
) -> PosteriorResults:
    """Fit ``y ~ Normal(a + b * x, s)`` by MCMC.

    Parameters
    ----------
    x : array-like
        Predictor values (heights).
    y : array-like
        Responses (weights), aligned with ``x``.
    priors : PriorConfig, optional
        Priors on ``a``, ``b`` and ``s``. Defaults to ``PriorConfig()``.
    mcmc_config : MCMCConfig, optional
        Sampler settings. Defaults to ``MCMCConfig()``.
    seed : int or None, default=42
        Seed of the PRNG key handed to the engine. None draws a fresh seed,
        which is recorded in ``PosteriorResults.seed``.
    verbose : bool, default=False
        Print progress messages.

    Returns
    -------
    PosteriorResults
        Chains, model and run settings.

    Raises
    ------
    InvalidInputError
        If ``x`` and ``y`` are mismatched, empty or non-finite, or if
        ``seed`` is not a non-negative integer. The engine is not invoked in
        that case.
    SamplingError
        If the engine fails or a convergence guard trips.

    Examples
    --------
    >>> from bayeslm import run_regression, MCMCConfig
    >>> results = run_regression(
    ...     [170.0, 190.0], [70.0, 90.0],
    ...     mcmc_config=MCMCConfig(n_samples=1000, n_warmup=500),
    ... )
    >>> len(results.get_chain(0))
    1000
    """
    # ==========================================================================
    # Step 1: Build and validate the model
    # ==========================================================================
    model = LinearRegressionModel(
        x=x, y=y, priors=priors if priors is not None else PriorConfig()
    )

    # ==========================================================================
    # Step 2: Sample the posterior
    # ==========================================================================
    if mcmc_config is None:
        mcmc_config = MCMCConfig()

    return _run_mcmc_inference(
        model=model,
        mcmc_config=mcmc_config,
        seed=seed,
        verbose=verbose,
    )


# ------------------------------------------------------------------------------


def sample_posterior(
    model: LinearRegressionModel,
    mcmc_config: Optional[MCMCConfig] = None,
    seed: Optional[int] = 42,
    verbose: bool = False,
) -> PosteriorResults:
    """Sample the posterior of an already constructed model.

    Use this to run repeated sampling requests (e.g. one chain, a long
    chain, four chains) against the same read-only observations.
    """
    if not isinstance(model, LinearRegressionModel):
        raise InvalidInputError(
            "model must be a LinearRegressionModel", STAGE_MODEL, type(model)
        )
    return _run_mcmc_inference(
        model=model,
        mcmc_config=mcmc_config if mcmc_config is not None else MCMCConfig(),
        seed=seed,
        verbose=verbose,
    )
