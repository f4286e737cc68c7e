"""Tests for prior and run configuration groups."""

import pytest
from pydantic import ValidationError

from bayeslm.errors import InvalidInputError
from bayeslm.models.config import (
    ChainMethod,
    DataConfig,
    KernelType,
    MCMCConfig,
    NormalPrior,
    Parameter,
    PriorConfig,
    UniformPrior,
)

# ------------------------------------------------------------------------------
# Priors
# ------------------------------------------------------------------------------


def test_default_priors():
    priors = PriorConfig()
    assert priors.get_prior_params() == {
        "a": (0.0, 200.0),
        "b": (1.0, 0.5),
        "s": (0.0, 20.0),
    }


def test_priors_accept_pairs():
    priors = PriorConfig(b=(1.0, 0.25), s=[0.0, 10.0])
    assert priors.b.scale == 0.25
    assert priors.s.high == 10.0


def test_distributions_keyed_by_parameter():
    dists = PriorConfig().distributions()
    assert set(dists) == set(Parameter.names())
    assert float(dists["a"].scale) == 200.0
    assert float(dists["s"].high) == 20.0


@pytest.mark.parametrize("scale", [0.0, -1.0, float("inf"), float("nan")])
def test_normal_scale_must_be_positive_and_finite(scale):
    with pytest.raises(InvalidInputError):
        NormalPrior(loc=0.0, scale=scale)


def test_normal_pair_must_have_two_entries():
    with pytest.raises(InvalidInputError):
        NormalPrior.model_validate((0.0, 1.0, 2.0))


@pytest.mark.parametrize("low, high", [(1.0, 1.0), (2.0, 1.0)])
def test_uniform_requires_low_below_high(low, high):
    with pytest.raises(InvalidInputError) as exc_info:
        UniformPrior(low=low, high=high)
    assert exc_info.value.stage == "model construction"


def test_noise_prior_must_be_non_negative():
    with pytest.raises(InvalidInputError):
        PriorConfig(s=(-1.0, 20.0))


def test_priors_are_frozen():
    priors = PriorConfig()
    with pytest.raises(ValidationError):
        priors.a = NormalPrior(loc=1.0, scale=1.0)


# ------------------------------------------------------------------------------
# Run settings
# ------------------------------------------------------------------------------


def test_mcmc_defaults():
    cfg = MCMCConfig()
    assert cfg.n_samples == 2000
    assert cfg.n_warmup == 1000
    assert cfg.n_chains == 1
    assert cfg.kernel is KernelType.NUTS
    assert cfg.chain_method is ChainMethod.SEQUENTIAL


def test_mcmc_accepts_strings():
    cfg = MCMCConfig(kernel="hmc", chain_method="vectorized")
    assert cfg.kernel is KernelType.HMC
    assert cfg.chain_method is ChainMethod.VECTORIZED


@pytest.mark.parametrize(
    "kwargs",
    [
        {"n_samples": 0},
        {"n_chains": 0},
        {"n_warmup": -1},
        {"max_r_hat": 1.0},
        {"max_divergence_rate": 1.5},
        {"kernel": "gibbs"},
        {"unknown": 1},
    ],
)
def test_mcmc_rejects_invalid_settings(kwargs):
    with pytest.raises(ValidationError):
        MCMCConfig(**kwargs)


def test_data_config_defaults():
    cfg = DataConfig()
    assert cfg.x_column == "hgt"
    assert cfg.y_column == "wgt"
    assert cfg.path is None
