"""Smoke tests for plotting functions."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from bayeslm import viz
from bayeslm.mcmc import Chain, PosteriorResults
from bayeslm.sampling import sample_prior


@pytest.fixture
def results(synthetic_chain):
    other = Chain(
        a=synthetic_chain.a[::-1],
        b=synthetic_chain.b[::-1],
        s=synthetic_chain.s[::-1],
        chain_id=1,
    )
    return PosteriorResults(chains=[synthetic_chain, other])


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_colors_are_rgb():
    col = viz.colors()
    assert col["black"] == (0.0, 0.0, 0.0)
    assert all(len(v) == 3 for v in col.values())


def test_plot_prior_samples(rng_key):
    fig = viz.plot_prior_samples(sample_prior(n_samples=500, rng_key=rng_key))
    assert len(fig.axes) == 3


def test_plot_posterior_density(results):
    fig = viz.plot_posterior_density(results, level=0.9)
    assert len(fig.axes) == 3


def test_plot_trace(results):
    fig = viz.plot_trace(results)
    assert len(fig.axes) == 3
    assert len(fig.axes[0].lines) == 2


def test_plot_regression(synthetic_chain, height_weight):
    x, y = height_weight
    fig = viz.plot_regression(synthetic_chain, x, y, n_lines=10)
    # 10 posterior lines plus the mean line
    assert len(fig.axes[0].lines) == 11


def test_plot_predictive(synthetic_chain):
    from bayeslm.mcmc import chain as chain_ops

    draws = chain_ops.predict(synthetic_chain, 180.0, 0)
    fig = viz.plot_predictive(draws, x0=180.0)
    assert "180" in fig.axes[0].get_title()


def test_matplotlib_style_runs():
    viz.matplotlib_style()
    assert plt.rcParams["axes.facecolor"].lower() == "#e6e6ef"
