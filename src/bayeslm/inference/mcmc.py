"""
MCMC (Markov Chain Monte Carlo) execution.

This module connects the MCMC inference engine with the results factory.
"""

from typing import Optional

from ..mcmc import MCMCInferenceEngine, MCMCResultsFactory, PosteriorResults
from ..models.config import MCMCConfig
from ..models.linear import LinearRegressionModel
from ..utils import resolve_seed

# ==============================================================================
# MCMC Inference Engine
# ==============================================================================


def _run_mcmc_inference(
    model: LinearRegressionModel,
    mcmc_config: MCMCConfig,
    seed: Optional[int],
    verbose: bool = False,
) -> PosteriorResults:
    """Execute MCMC inference.

    Parameters
    ----------
    model : LinearRegressionModel
        Validated model binding the observations and priors.
    mcmc_config : MCMCConfig
        MCMC-specific configuration (n_samples, n_warmup, n_chains, etc.).
    seed : int or None
        Random seed for reproducibility. None draws a fresh seed.
    verbose : bool, default=False
        Print the run settings before sampling.

    Returns
    -------
    PosteriorResults
        Results object containing one chain per MCMC chain.

    See Also
    --------
    MCMCInferenceEngine : Core MCMC inference execution.
    MCMCResultsFactory : Results packaging and creation.
    """
    seed = resolve_seed(seed)

    if verbose:
        print(
            f"Running {mcmc_config.kernel.value.upper()} with "
            f"{mcmc_config.n_chains} chain(s), {mcmc_config.n_warmup} warmup "
            f"and {mcmc_config.n_samples} samples on {model.n_obs} "
            f"observations (seed={seed})"
        )

    # Run MCMC inference
    mcmc = MCMCInferenceEngine.run_inference(
        model=model,
        n_samples=mcmc_config.n_samples,
        n_warmup=mcmc_config.n_warmup,
        n_chains=mcmc_config.n_chains,
        seed=seed,
        kernel=mcmc_config.kernel,
        chain_method=mcmc_config.chain_method,
        thinning=mcmc_config.thinning,
        progress_bar=mcmc_config.progress_bar,
        mcmc_kwargs=mcmc_config.mcmc_kwargs,
    )

    # Package results using the factory
    results = MCMCResultsFactory.create_results(
        mcmc_results=mcmc,
        model=model,
        mcmc_config=mcmc_config,
        seed=seed,
    )

    if verbose:
        print(
            f"Collected {results.n_draws} draws "
            f"({results.n_divergences} divergent)"
        )
    return results
