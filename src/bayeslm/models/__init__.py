"""
Model definitions for bayeslm.
"""

from .config import (
    ChainMethod,
    DataConfig,
    KernelType,
    MCMCConfig,
    NormalPrior,
    Parameter,
    PriorConfig,
    UniformPrior,
)
from .linear import (
    LinearRegressionModel,
    X_NAME,
    Y_NAME,
    linear_regression_model,
    log_likelihood,
)

__all__ = [
    "LinearRegressionModel",
    "linear_regression_model",
    "log_likelihood",
    "X_NAME",
    "Y_NAME",
    "PriorConfig",
    "NormalPrior",
    "UniformPrior",
    "MCMCConfig",
    "DataConfig",
    "Parameter",
    "KernelType",
    "ChainMethod",
]
