"""
Utility functions used throughout the bayeslm codebase.
"""

from .core import as_rng_key, numpyro_to_scipy, resolve_seed

__all__ = [
    "as_rng_key",
    "numpyro_to_scipy",
    "resolve_seed",
]
