"""
Results class for bayeslm MCMC inference.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from numpyro.infer import MCMC

from .. import stats
from ..errors import InvalidInputError, STAGE_SUMMARY
from ..models.config import MCMCConfig, Parameter
from ..models.linear import LinearRegressionModel, log_likelihood
from ..utils.core import RNGLike
from . import chain as _chain
from .chain import Chain, ParamLike

DEFAULT_SUMMARY_QUANTILES = (0.025, 0.25, 0.5, 0.75, 0.975)

# Chain id used for draws pooled across all chains
POOLED_CHAIN_ID = -1

# ------------------------------------------------------------------------------
# Posterior results
# ------------------------------------------------------------------------------


@dataclass
class PosteriorResults:
    """
    Posterior draws from one sampling request together with their context.

    Chains are exchangeable: statistics with ``chain=None`` pool the draws
    of every chain; an integer ``chain`` restricts them to that chain.

    Attributes
    ----------
    chains : List[Chain]
        One :class:`Chain` per MCMC chain.
    model : LinearRegressionModel, optional
        The model that was sampled.
    mcmc_config : MCMCConfig, optional
        Settings used for the sampling request.
    seed : int, optional
        Seed the engine was run with.
    diverging : np.ndarray, optional
        Boolean divergence flags with shape ``(n_chains, n_samples)``.
    """

    chains: List[Chain]
    model: Optional[LinearRegressionModel] = None
    mcmc_config: Optional[MCMCConfig] = None
    seed: Optional[int] = None
    diverging: Optional[np.ndarray] = None
    _mcmc: Optional[MCMC] = field(default=None, repr=False)

    def __post_init__(self):
        self.chains = list(self.chains)
        if not self.chains:
            raise InvalidInputError(
                "results need at least one chain", STAGE_SUMMARY, 0
            )
        for c in self.chains:
            if not isinstance(c, Chain):
                raise InvalidInputError(
                    "chains must be Chain instances", STAGE_SUMMARY, type(c)
                )

    # --------------------------------------------------------------------------
    # Construction
    # --------------------------------------------------------------------------

    @classmethod
    def from_mcmc(
        cls,
        mcmc: MCMC,
        model: Optional[LinearRegressionModel] = None,
        mcmc_config: Optional[MCMCConfig] = None,
        seed: Optional[int] = None,
    ) -> "PosteriorResults":
        """
        Create PosteriorResults from a finished NumPyro ``MCMC`` instance.

        Parameters
        ----------
        mcmc : MCMC
            Sampler after ``run``.
        model : LinearRegressionModel, optional
            The sampled model.
        mcmc_config : MCMCConfig, optional
            Settings of the run.
        seed : int, optional
            Seed of the run.
        """
        grouped = mcmc.get_samples(group_by_chain=True)
        n_chains = int(np.shape(grouped[Parameter.A.value])[0])
        chains = [
            Chain.from_samples(
                {p: np.asarray(grouped[p][i]) for p in Parameter.names()},
                chain_id=i,
            )
            for i in range(n_chains)
        ]

        diverging = None
        extra = mcmc.get_extra_fields(group_by_chain=True)
        if extra and "diverging" in extra:
            diverging = np.asarray(extra["diverging"], dtype=bool)

        return cls(
            chains=chains,
            model=model,
            mcmc_config=mcmc_config,
            seed=seed,
            diverging=diverging,
            _mcmc=mcmc,
        )

    # --------------------------------------------------------------------------
    # Pickling
    # --------------------------------------------------------------------------

    def __getstate__(self):
        # The live sampler holds compiled JAX functions
        state = self.__dict__.copy()
        state["_mcmc"] = None
        return state

    # --------------------------------------------------------------------------
    # Shape
    # --------------------------------------------------------------------------

    @property
    def n_chains(self) -> int:
        return len(self.chains)

    @property
    def n_samples(self) -> int:
        """Draws per chain (of the first chain if lengths differ)."""
        return len(self.chains[0])

    @property
    def n_draws(self) -> int:
        """Total number of draws across chains."""
        return sum(len(c) for c in self.chains)

    @property
    def n_divergences(self) -> int:
        if self.diverging is None:
            return 0
        return int(np.sum(self.diverging))

    # --------------------------------------------------------------------------
    # Posterior access
    # --------------------------------------------------------------------------

    def get_chain(self, chain: Optional[int] = None) -> Chain:
        """
        Return one chain, or all chains pooled into a single chain.

        Parameters
        ----------
        chain : int, optional
            Chain index. None concatenates all chains in chain order.
        """
        if chain is None:
            if self.n_chains == 1:
                return self.chains[0]
            return Chain(
                a=np.concatenate([c.a for c in self.chains]),
                b=np.concatenate([c.b for c in self.chains]),
                s=np.concatenate([c.s for c in self.chains]),
                chain_id=POOLED_CHAIN_ID,
            )
        if isinstance(chain, bool) or not isinstance(chain, (int, np.integer)):
            raise InvalidInputError(
                "chain must be an integer index", STAGE_SUMMARY, chain
            )
        if not 0 <= chain < self.n_chains:
            raise InvalidInputError(
                f"chain index out of range for {self.n_chains} chain(s)",
                STAGE_SUMMARY,
                chain,
            )
        return self.chains[int(chain)]

    def get_samples(self, group_by_chain: bool = False) -> Dict[str, np.ndarray]:
        """
        Get posterior samples keyed by parameter name.

        Parameters
        ----------
        group_by_chain : bool, default=False
            If True, arrays have shape ``(n_chains, n_samples)``; otherwise
            draws of all chains are concatenated.
        """
        if not group_by_chain:
            return self.get_chain(None).as_dict()
        lengths = {len(c) for c in self.chains}
        if len(lengths) != 1:
            raise InvalidInputError(
                "chains of unequal length cannot be grouped",
                STAGE_SUMMARY,
                sorted(lengths),
            )
        return {
            p: np.stack([c.values(p) for c in self.chains])
            for p in Parameter.names()
        }

    @property
    def posterior_samples(self) -> Dict[str, np.ndarray]:
        return self.get_samples()

    def to_table(self, chain: Optional[int] = None) -> pd.DataFrame:
        """
        Posterior draws as a DataFrame.

        With ``chain=None`` every chain is included and tagged by a
        ``chain`` column; with an index only that chain is returned.
        """
        if chain is None:
            return _chain.to_table(self.chains)
        return _chain.to_table(self.get_chain(chain))

    # --------------------------------------------------------------------------
    # Statistics
    # --------------------------------------------------------------------------

    def point_estimate(
        self, param: ParamLike, chain: Optional[int] = None
    ) -> float:
        """Posterior mean of ``param``."""
        return _chain.point_estimate(self.get_chain(chain), param)

    def credible_interval(
        self,
        param: ParamLike,
        level: float = 0.95,
        chain: Optional[int] = None,
    ) -> Tuple[float, float]:
        """Equal-tailed credible interval of ``param``."""
        return _chain.credible_interval(self.get_chain(chain), param, level)

    def get_posterior_quantiles(
        self,
        param: ParamLike,
        quantiles: Sequence[float] = (0.025, 0.5, 0.975),
        chain: Optional[int] = None,
    ) -> Dict[float, float]:
        """
        Get quantiles for a specific parameter.

        Returns
        -------
        dict
            Dictionary mapping quantiles to values
        """
        return _chain.posterior_quantiles(
            self.get_chain(chain), param, quantiles
        )

    def summary(
        self,
        quantiles: Sequence[float] = DEFAULT_SUMMARY_QUANTILES,
        by_chain: bool = True,
    ) -> pd.DataFrame:
        """
        Posterior summary table.

        Parameters
        ----------
        quantiles : sequence of float
            Quantiles reported as columns named like ``"2.5%"``.
        by_chain : bool, default=True
            One block of rows per chain; False pools all chains.

        Returns
        -------
        pd.DataFrame
            Indexed by ``(chain, param)`` with columns ``mean``, ``sd``,
            ``naive_se`` and one column per quantile.
        """
        targets = (
            self.chains if by_chain else [self.get_chain(None)]
        )
        rows = []
        for c in targets:
            for p in Parameter.names():
                draws = c.values(p)
                sd = stats.posterior_sd(draws)
                row = {
                    "chain": c.chain_id,
                    "param": p,
                    "mean": stats.point_estimate(draws),
                    "sd": sd,
                    "naive_se": sd / np.sqrt(len(draws)),
                }
                for q, v in stats.quantiles(draws, quantiles).items():
                    row[_quantile_label(q)] = v
                rows.append(row)
        return pd.DataFrame(rows).set_index(["chain", "param"])

    def diagnostics(self) -> pd.DataFrame:
        """
        Convergence diagnostics per parameter.

        Returns
        -------
        pd.DataFrame
            Indexed by parameter with columns ``n_eff`` and ``r_hat``.
        """
        grouped = self.get_samples(group_by_chain=True)
        return pd.DataFrame(
            {
                "n_eff": [stats.n_eff(grouped[p]) for p in Parameter.names()],
                "r_hat": [stats.r_hat(grouped[p]) for p in Parameter.names()],
            },
            index=pd.Index(Parameter.names(), name="param"),
        )

    # --------------------------------------------------------------------------
    # Prediction
    # --------------------------------------------------------------------------

    def predict(
        self,
        x0: float,
        rng_key: RNGLike = None,
        chain: Optional[int] = None,
    ) -> np.ndarray:
        """One posterior predictive draw at ``x0`` per posterior draw."""
        return _chain.predict(self.get_chain(chain), x0, rng_key)

    def predictive_interval(
        self,
        x0: float,
        level: float = 0.95,
        rng_key: RNGLike = None,
        chain: Optional[int] = None,
    ) -> Tuple[float, float]:
        """Credible interval of the predictive draws at ``x0``."""
        return _chain.predictive_interval(
            self.get_chain(chain), x0, level, rng_key
        )

    def regression_band(
        self, x_grid, level: float = 0.95, chain: Optional[int] = None
    ) -> pd.DataFrame:
        """Mean regression line with a credible band over ``x_grid``."""
        return _chain.regression_band(self.get_chain(chain), x_grid, level)

    def log_likelihood(self, chain: Optional[int] = None) -> np.ndarray:
        """Pointwise log-likelihood, shape ``(n_draws, n_obs)``."""
        if self.model is None:
            raise InvalidInputError(
                "log-likelihood needs the sampled model", STAGE_SUMMARY, None
            )
        return log_likelihood(self.model, self.get_chain(chain).as_dict())


# ------------------------------------------------------------------------------


def _quantile_label(q: float) -> str:
    return f"{100 * q:g}%"
