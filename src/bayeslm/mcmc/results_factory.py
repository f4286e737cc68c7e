"""
Results factory for MCMC inference.

This module checks the raw NumPyro output and packages it into
:class:`PosteriorResults`. Unusable draws and tripped convergence guards are
reported as :class:`~bayeslm.errors.SamplingError`.
"""

import warnings
from typing import Any, Optional

import numpy as np

from .. import stats
from ..errors import InvalidInputError, SamplingError
from ..models.config import MCMCConfig, Parameter
from ..models.linear import LinearRegressionModel
from .results import PosteriorResults


class MCMCResultsFactory:
    """Factory for creating MCMC results objects."""

    @staticmethod
    def validate_samples(grouped: dict) -> None:
        """Reject non-finite draws and non-positive noise scales."""
        missing = [p for p in Parameter.names() if p not in grouped]
        if missing:
            raise SamplingError(
                "engine output is missing parameters", value=missing
            )
        for p in Parameter.names():
            draws = np.asarray(grouped[p])
            n_bad = int(np.sum(~np.isfinite(draws)))
            if n_bad:
                raise SamplingError(
                    f"engine returned non-finite draws of '{p}'", value=n_bad
                )
        s = np.asarray(grouped[Parameter.S.value])
        if s.size and np.min(s) <= 0:
            raise SamplingError(
                "engine returned non-positive noise scale draws",
                value=float(np.min(s)),
            )

    # --------------------------------------------------------------------------

    @staticmethod
    def check_convergence(
        results: PosteriorResults, mcmc_config: Optional[MCMCConfig]
    ) -> None:
        """Apply the divergence and R-hat guards configured for the run."""
        n_div = results.n_divergences
        max_rate = mcmc_config.max_divergence_rate if mcmc_config else None
        if n_div:
            rate = n_div / results.n_draws
            if max_rate is not None and rate > max_rate:
                raise SamplingError(
                    f"divergent transitions exceed {max_rate:.3g}",
                    value=rate,
                )
            warnings.warn(
                f"{n_div} divergent transition(s) after warmup "
                f"({rate:.2%} of draws)",
                UserWarning,
                stacklevel=3,
            )

        max_r_hat = mcmc_config.max_r_hat if mcmc_config else None
        if max_r_hat is None:
            return
        grouped = results.get_samples(group_by_chain=True)
        for p in Parameter.names():
            value = stats.r_hat(grouped[p])
            if np.isfinite(value) and value > max_r_hat:
                raise SamplingError(
                    f"chains have not converged: r_hat of '{p}' exceeds "
                    f"{max_r_hat:g}",
                    value=value,
                )

    # --------------------------------------------------------------------------

    @staticmethod
    def create_results(
        mcmc_results: Any,
        model: LinearRegressionModel,
        mcmc_config: Optional[MCMCConfig] = None,
        seed: Optional[int] = None,
    ) -> PosteriorResults:
        """Package MCMC results into a ``PosteriorResults`` object.

        Parameters
        ----------
        mcmc_results : numpyro.infer.MCMC
            Raw MCMC results from NumPyro.
        model : LinearRegressionModel
            The sampled model.
        mcmc_config : MCMCConfig, optional
            Settings of the run, including convergence guards.
        seed : int, optional
            Seed the engine ran with.

        Returns
        -------
        PosteriorResults
            Packaged results object.

        Raises
        ------
        SamplingError
            If the draws are unusable or a convergence guard trips.
        """
        MCMCResultsFactory.validate_samples(
            mcmc_results.get_samples(group_by_chain=True)
        )
        try:
            results = PosteriorResults.from_mcmc(
                mcmc=mcmc_results,
                model=model,
                mcmc_config=mcmc_config,
                seed=seed,
            )
        except InvalidInputError as exc:
            raise SamplingError(
                f"engine output could not be packaged: {exc.message}",
                value=exc.value,
            ) from exc

        MCMCResultsFactory.check_convergence(results, mcmc_config)
        return results
