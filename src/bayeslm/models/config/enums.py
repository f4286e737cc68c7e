"""
Enums and constants for model configuration.

Enums restrict parameter names, kernels and chain methods to fixed choices.
"""

from enum import Enum

# ==============================================================================
# Enums for model configuration
# ==============================================================================


class Parameter(str, Enum):
    """Parameters of the linear regression model."""

    A = "a"
    B = "b"
    S = "s"

    @classmethod
    def names(cls) -> tuple:
        """Parameter names in canonical column order."""
        return tuple(p.value for p in cls)


# ------------------------------------------------------------------------------


class KernelType(str, Enum):
    """MCMC transition kernels available from NumPyro."""

    NUTS = "nuts"
    HMC = "hmc"
    SA = "sa"


# ------------------------------------------------------------------------------


class ChainMethod(str, Enum):
    """How NumPyro runs multiple chains."""

    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"
    VECTORIZED = "vectorized"
