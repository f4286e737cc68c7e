"""
Shared test fixtures and configuration for bayeslm tests.
"""

import os

import numpy as np
import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--device",
        default="cpu",
        choices=["cpu", "gpu"],
        help="Device to run tests on: cpu or gpu",
    )
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow end-to-end sampling tests",
    )


def pytest_configure(config):
    """Configure JAX device before any imports happen."""
    device = config.getoption("--device")
    if device == "cpu":
        os.environ["JAX_PLATFORM_NAME"] = "cpu"
    elif "JAX_PLATFORM_NAME" in os.environ:
        del os.environ["JAX_PLATFORM_NAME"]
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (skip unless --run-slow)"
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is specified."""
    if config.getoption("--run-slow"):
        return

    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


# ------------------------------------------------------------------------------
# Fixtures
# ------------------------------------------------------------------------------


@pytest.fixture(scope="session")
def rng_key():
    """Provide a consistent random key for tests."""
    # Import JAX here to ensure environment is configured first
    from jax import random

    return random.PRNGKey(42)


@pytest.fixture
def height_weight():
    """Twenty noisy observations around weight = -100 + 1.0 * height."""
    rng = np.random.default_rng(42)
    x = np.linspace(155.0, 195.0, 20)
    y = -100.0 + 1.0 * x + rng.normal(0.0, 5.0, size=x.shape)
    return x, y


@pytest.fixture
def synthetic_chain():
    """A chain of 200 draws centered on a=-100, b=1, s=5."""
    from bayeslm.mcmc import Chain

    rng = np.random.default_rng(0)
    return Chain(
        a=rng.normal(-100.0, 3.0, size=200),
        b=rng.normal(1.0, 0.05, size=200),
        s=rng.uniform(4.0, 6.0, size=200),
    )


@pytest.fixture
def grouped_samples():
    """Engine-shaped draws: 2 chains x 50 samples per parameter."""
    rng = np.random.default_rng(1)
    shape = (2, 50)
    return {
        "a": rng.normal(-100.0, 3.0, size=shape),
        "b": rng.normal(1.0, 0.05, size=shape),
        "s": rng.uniform(4.0, 6.0, size=shape),
    }
