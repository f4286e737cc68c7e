"""
bayeslm: Bayesian simple linear regression with NumPyro MCMC

Fits weight on height with Normal priors on intercept and slope and a
Uniform prior on the residual scale, then summarizes the posterior chains.
"""

import logging
import warnings

# NumPyro warns when more chains are requested than devices are available
warnings.filterwarnings(
    "ignore",
    message=".*There are not enough devices to run parallel chains.*",
    category=UserWarning,
)

# Silence the absl "no GPU/TPU found" notice JAX logs on CPU-only machines
logging.getLogger("jax._src.xla_bridge").setLevel(logging.ERROR)

from .errors import (
    BayesLMError,
    EmptyChainError,
    InvalidInputError,
    InvalidLevelError,
    SamplingError,
)
from .models.config import (
    ChainMethod,
    DataConfig,
    KernelType,
    MCMCConfig,
    NormalPrior,
    Parameter,
    PriorConfig,
    UniformPrior,
)
from .models import LinearRegressionModel
from .mcmc import Chain, Draw, PosteriorResults
from .sampling import sample_prior, generate_prior_predictive_samples
from .data_loader import Observations, load_observations, load_from_config
from .inference import run_regression, sample_posterior

from . import viz
from . import utils
from . import stats
from . import data_loader

__version__ = "0.1.0"

__all__ = [
    # Entry point
    "run_regression",
    "sample_posterior",
    # Data and model
    "Observations",
    "load_observations",
    "load_from_config",
    "LinearRegressionModel",
    "sample_prior",
    "generate_prior_predictive_samples",
    # Results
    "Chain",
    "Draw",
    "PosteriorResults",
    # Configuration
    "PriorConfig",
    "NormalPrior",
    "UniformPrior",
    "MCMCConfig",
    "DataConfig",
    "Parameter",
    "KernelType",
    "ChainMethod",
    # Errors
    "BayesLMError",
    "InvalidInputError",
    "SamplingError",
    "EmptyChainError",
    "InvalidLevelError",
    # Submodules
    "viz",
    "utils",
    "stats",
    "data_loader",
]
