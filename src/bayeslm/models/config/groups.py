"""
Parameter group definitions for model configuration using Pydantic for type
safety and validation.

These groups define the priors of the regression model, the settings of the
MCMC run and the location of the dataset. All groups are frozen and reject
unknown fields, so a configuration cannot be mutated or silently extended
after it has been validated.

Prior groups raise :class:`~bayeslm.errors.InvalidInputError` for invalid
distribution parameters; run-setting groups rely on Pydantic's own
``ValidationError``.
"""

import math
from typing import Any, Dict, Optional

import numpyro.distributions as dist
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ...errors import InvalidInputError, STAGE_MODEL
from .enums import ChainMethod, KernelType, Parameter

# ==============================================================================
# Helpers
# ==============================================================================


def _pair_to_fields(data: Any, names: tuple) -> Any:
    """Accept ``(x, y)`` pairs in place of keyword dictionaries."""
    if isinstance(data, (tuple, list)):
        if len(data) != 2:
            raise InvalidInputError(
                f"Prior must be a 2-tuple {names}", STAGE_MODEL, tuple(data)
            )
        return dict(zip(names, data))
    return data


def _check_finite(name: str, v: float) -> float:
    if not math.isfinite(v):
        raise InvalidInputError(f"{name} must be finite", STAGE_MODEL, v)
    return v


# ==============================================================================
# Prior distributions
# ==============================================================================


class NormalPrior(BaseModel):
    """Normal prior parameterized by mean and standard deviation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    loc: float = Field(0.0, description="Mean of the Normal prior")
    scale: float = Field(1.0, description="Standard deviation (> 0)")

    @model_validator(mode="before")
    @classmethod
    def from_pair(cls, data: Any) -> Any:
        return _pair_to_fields(data, ("loc", "scale"))

    @field_validator("loc")
    @classmethod
    def validate_loc(cls, v: float) -> float:
        return _check_finite("Normal loc", v)

    @field_validator("scale")
    @classmethod
    def validate_scale(cls, v: float) -> float:
        """Validate that the standard deviation is positive."""
        _check_finite("Normal scale", v)
        if v <= 0:
            raise InvalidInputError(
                "Normal scale must be positive", STAGE_MODEL, v
            )
        return v

    def to_numpyro(self) -> dist.Normal:
        """Return the equivalent ``numpyro.distributions.Normal``."""
        return dist.Normal(self.loc, self.scale)

    def as_tuple(self) -> tuple:
        return (self.loc, self.scale)


# ------------------------------------------------------------------------------


class UniformPrior(BaseModel):
    """Uniform prior on ``[low, high)``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    low: float = Field(0.0, description="Lower bound of the support")
    high: float = Field(1.0, description="Upper bound of the support")

    @model_validator(mode="before")
    @classmethod
    def from_pair(cls, data: Any) -> Any:
        return _pair_to_fields(data, ("low", "high"))

    @field_validator("low", "high")
    @classmethod
    def validate_bounds(cls, v: float) -> float:
        return _check_finite("Uniform bound", v)

    @model_validator(mode="after")
    def validate_ordering(self) -> "UniformPrior":
        """Validate that the support is a non-empty interval."""
        if self.low >= self.high:
            raise InvalidInputError(
                "Uniform prior requires low < high",
                STAGE_MODEL,
                (self.low, self.high),
            )
        return self

    def to_numpyro(self) -> dist.Uniform:
        """Return the equivalent ``numpyro.distributions.Uniform``."""
        return dist.Uniform(self.low, self.high)

    def as_tuple(self) -> tuple:
        return (self.low, self.high)


# ==============================================================================
# Prior Configuration Group
# ==============================================================================


class PriorConfig(BaseModel):
    """Priors on intercept ``a``, slope ``b`` and noise scale ``s``.

    Defaults reproduce the height/weight analysis:
    ``a ~ Normal(0, 200)``, ``b ~ Normal(1, 0.5)``, ``s ~ Uniform(0, 20)``.

    Examples
    --------
    >>> priors = PriorConfig(b=(1.0, 0.25))
    >>> priors.b.scale
    0.25
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    a: NormalPrior = Field(
        default_factory=lambda: NormalPrior(loc=0.0, scale=200.0),
        description="Intercept prior (Normal)",
    )
    b: NormalPrior = Field(
        default_factory=lambda: NormalPrior(loc=1.0, scale=0.5),
        description="Slope prior (Normal)",
    )
    s: UniformPrior = Field(
        default_factory=lambda: UniformPrior(low=0.0, high=20.0),
        description="Residual standard deviation prior (Uniform)",
    )

    @model_validator(mode="after")
    def validate_noise_support(self) -> "PriorConfig":
        """The noise scale must be non-negative on the whole prior support."""
        if self.s.low < 0:
            raise InvalidInputError(
                "Noise prior support must be non-negative",
                STAGE_MODEL,
                self.s.low,
            )
        return self

    # --------------------------------------------------------------------------

    def distributions(self) -> Dict[str, dist.Distribution]:
        """NumPyro distributions keyed by parameter name."""
        return {
            Parameter.A.value: self.a.to_numpyro(),
            Parameter.B.value: self.b.to_numpyro(),
            Parameter.S.value: self.s.to_numpyro(),
        }

    def get_prior_params(self) -> Dict[str, tuple]:
        """Prior hyperparameters as plain tuples, keyed by parameter name."""
        return {
            Parameter.A.value: self.a.as_tuple(),
            Parameter.B.value: self.b.as_tuple(),
            Parameter.S.value: self.s.as_tuple(),
        }


# ==============================================================================
# MCMC Configuration Group
# ==============================================================================


class MCMCConfig(BaseModel):
    """Configuration for Markov Chain Monte Carlo inference."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    n_samples: int = Field(
        2_000, gt=0, description="Number of MCMC samples per chain"
    )
    n_warmup: int = Field(
        1_000, ge=0, description="Number of warmup (burn-in) samples"
    )
    n_chains: int = Field(1, gt=0, description="Number of independent chains")
    kernel: KernelType = Field(
        KernelType.NUTS, description="NumPyro transition kernel"
    )
    chain_method: ChainMethod = Field(
        ChainMethod.SEQUENTIAL, description="How to run multiple chains"
    )
    thinning: int = Field(1, gt=0, description="Keep every n-th sample")
    progress_bar: bool = Field(False, description="Show NumPyro progress bar")
    max_r_hat: Optional[float] = Field(
        None,
        gt=1.0,
        description="Fail the run when any split R-hat exceeds this value",
    )
    max_divergence_rate: Optional[float] = Field(
        None,
        ge=0.0,
        le=1.0,
        description="Fail the run when the divergent fraction exceeds this",
    )
    mcmc_kwargs: Optional[Dict[str, Any]] = Field(
        None, description="Additional keyword arguments for the MCMC kernel"
    )


# ==============================================================================
# Data Configuration Group
# ==============================================================================


class DataConfig(BaseModel):
    """Configuration for loading the observations table."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: Optional[str] = Field(None, description="Path to a CSV file")
    x_column: str = Field("hgt", description="Predictor column (height)")
    y_column: str = Field("wgt", description="Response column (weight)")
    expected_rows: Optional[int] = Field(
        None, gt=0, description="Fail when the table has a different length"
    )
