"""
Configuration system for bayeslm models.

Uses Pydantic for validation and enums for type safety. All configs are
immutable.
"""

from .enums import ChainMethod, KernelType, Parameter
from .groups import (
    DataConfig,
    MCMCConfig,
    NormalPrior,
    PriorConfig,
    UniformPrior,
)

__all__ = [
    # Prior groups
    "NormalPrior",
    "UniformPrior",
    "PriorConfig",
    # Run groups
    "MCMCConfig",
    "DataConfig",
    # Enums
    "Parameter",
    "KernelType",
    "ChainMethod",
]
