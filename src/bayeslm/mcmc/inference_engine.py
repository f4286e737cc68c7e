"""
Inference engine for MCMC.

This module hands a :class:`~bayeslm.models.LinearRegressionModel` to
NumPyro's MCMC machinery and returns the finished sampler. The transition
kernel itself (NUTS, HMC or SA) lives entirely inside NumPyro.
"""

from typing import Any, Dict, Optional, Type, Union

from jax import random
from numpyro.infer import HMC, MCMC, NUTS, SA
from numpyro.infer.mcmc import MCMCKernel

from ..errors import SamplingError
from ..models.config import ChainMethod, KernelType
from ..models.linear import LinearRegressionModel
from ..utils import resolve_seed

_KERNELS: Dict[KernelType, Type[MCMCKernel]] = {
    KernelType.NUTS: NUTS,
    KernelType.HMC: HMC,
    KernelType.SA: SA,
}

# Failures NumPyro and JAX surface while tracing or running a chain
_ENGINE_ERRORS = (RuntimeError, ValueError, TypeError, FloatingPointError)


class MCMCInferenceEngine:
    """Handles MCMC inference execution."""

    @staticmethod
    def build_mcmc(
        model: LinearRegressionModel,
        n_samples: int = 2_000,
        n_warmup: int = 1_000,
        n_chains: int = 1,
        kernel: Union[KernelType, str] = KernelType.NUTS,
        chain_method: Union[ChainMethod, str] = ChainMethod.SEQUENTIAL,
        thinning: int = 1,
        progress_bar: bool = False,
        mcmc_kwargs: Optional[dict] = None,
    ) -> MCMC:
        """Create the NumPyro ``MCMC`` object without running it."""
        kernel_cls = _KERNELS[KernelType(kernel)]
        kernel_instance = kernel_cls(model.model_fn, **dict(mcmc_kwargs or {}))
        return MCMC(
            kernel_instance,
            num_warmup=n_warmup,
            num_samples=n_samples,
            num_chains=n_chains,
            thinning=thinning,
            chain_method=ChainMethod(chain_method).value,
            progress_bar=progress_bar,
        )

    # --------------------------------------------------------------------------

    @staticmethod
    def run_inference(
        model: LinearRegressionModel,
        n_samples: int = 2_000,
        n_warmup: int = 1_000,
        n_chains: int = 1,
        seed: Optional[int] = 42,
        kernel: Union[KernelType, str] = KernelType.NUTS,
        chain_method: Union[ChainMethod, str] = ChainMethod.SEQUENTIAL,
        thinning: int = 1,
        progress_bar: bool = False,
        mcmc_kwargs: Optional[dict] = None,
    ) -> Any:
        """Execute MCMC inference.

        Parameters
        ----------
        model : LinearRegressionModel
            Validated model binding data and priors.
        n_samples : int, default=2_000
            Number of retained samples per chain.
        n_warmup : int, default=1_000
            Number of warmup (burn-in) iterations per chain.
        n_chains : int, default=1
            Number of independent chains.
        seed : int or None, default=42
            Seed for the PRNG key handed to NumPyro. None draws a fresh seed;
            no global random state is consulted.
        kernel : KernelType or str, default="nuts"
            Transition kernel: ``"nuts"``, ``"hmc"`` or ``"sa"``.
        chain_method : ChainMethod or str, default="sequential"
            How NumPyro runs multiple chains.
        thinning : int, default=1
            Keep every ``thinning``-th sample.
        progress_bar : bool, default=False
            Whether NumPyro shows its progress bar.
        mcmc_kwargs : Optional[dict], default=None
            Keyword arguments for the kernel constructor (e.g.
            ``target_accept_prob`` for NUTS).

        Returns
        -------
        numpyro.infer.MCMC
            The finished sampler with samples and extra fields.

        Raises
        ------
        SamplingError
            If NumPyro fails to build or run the chains. The original
            exception is chained; nothing is retried.
        InvalidInputError
            If ``seed`` is not a non-negative integer or None.
        """
        kernel = KernelType(kernel)
        chain_method = ChainMethod(chain_method)
        seed = resolve_seed(seed)

        try:
            mcmc = MCMCInferenceEngine.build_mcmc(
                model,
                n_samples=n_samples,
                n_warmup=n_warmup,
                n_chains=n_chains,
                kernel=kernel,
                chain_method=chain_method,
                thinning=thinning,
                progress_bar=progress_bar,
                mcmc_kwargs=mcmc_kwargs,
            )
            # Create random number generator key
            rng_key = random.PRNGKey(seed)
            mcmc.run(
                rng_key,
                extra_fields=("diverging",),
                **model.model_args(),
            )
        except _ENGINE_ERRORS as exc:
            raise SamplingError(
                f"MCMC engine failed: {exc}",
                value={
                    "n_samples": n_samples,
                    "n_chains": n_chains,
                    "seed": seed,
                },
            ) from exc

        return mcmc
