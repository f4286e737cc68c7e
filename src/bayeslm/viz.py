"""
Visualization functions for bayeslm prior and posterior draws.
"""

from typing import Dict, Optional, Sequence, Union

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from . import stats
from .mcmc import Chain, PosteriorResults
from .mcmc import chain as _chain
from .models.config import Parameter, PriorConfig
from .utils import numpyro_to_scipy

ChainLike = Union[Chain, PosteriorResults]

# Axis labels of the regression parameters
PARAM_LABELS = {
    Parameter.A.value: "intercept a",
    Parameter.B.value: "slope b",
    Parameter.S.value: "noise scale s",
}

# ==============================================================================
# Style
# ==============================================================================


def matplotlib_style():
    """
    Sets plotting defaults to personal style for matplotlib.
    """
    rc = {
        # Axes formatting
        "axes.facecolor": "#E6E6EF",
        "axes.edgecolor": "none",
        "axes.labelcolor": "#000000",
        "axes.spines.right": False,
        "axes.spines.top": False,
        "axes.spines.left": False,
        "axes.spines.bottom": False,
        "axes.axisbelow": True,
        "axes.grid": True,
        "axes.titlesize": 14,
        "axes.labelsize": 13,
        "xtick.labelsize": 11,
        "ytick.labelsize": 11,
        # Grid formatting
        "grid.linestyle": "-",
        "grid.linewidth": 1.0,
        "grid.color": "#FFFFFF",
        "lines.linewidth": 1.5,
        # Legend formatting
        "legend.fontsize": 11,
        "legend.frameon": True,
        "legend.facecolor": "#E6E6EF",
        "xtick.bottom": False,
        "ytick.left": False,
        "axes.titleweight": "bold",
        "figure.facecolor": "white",
        "figure.dpi": 150,
        "savefig.bbox": "tight",
        "mathtext.default": "regular",
    }

    sns.set_style(rc)
    sns.set_palette("colorblind")


# ------------------------------------------------------------------------------


def colors() -> Dict[str, tuple]:
    """
    Returns dictionary with the plotting color palette as RGB tuples.
    """
    col = {
        "black": "#000000",
        "dark_blue": "#2957A8",
        "blue": "#3876C0",
        "light_blue": "#81A9DA",
        "pale_blue": "#C0D4ED",
        "dark_green": "#2E5C0A",
        "green": "#468C12",
        "dark_red": "#912E27",
        "red": "#CB4338",
        "light_red": "#D57A72",
        "gold": "#EBC21F",
        "purple": "#934D93",
    }

    rgb_colors = {}
    for key, hex_color in col.items():
        hex_color = hex_color.lstrip("#")
        rgb_colors[key] = tuple(
            int(hex_color[i : i + 2], 16) / 255 for i in (0, 2, 4)
        )
    return rgb_colors


def _as_chain(draws: ChainLike) -> Chain:
    if isinstance(draws, PosteriorResults):
        return draws.get_chain(None)
    return draws


def _mark_interval(ax, interval, color, label=None):
    for bound in interval:
        ax.axvline(bound, color=color, linestyle="--", linewidth=1.2)
    ax.axvspan(*interval, color=color, alpha=0.1, label=label)


# ==============================================================================
# Prior plots
# ==============================================================================


def plot_prior_samples(
    draws: Dict[str, np.ndarray],
    priors: Optional[PriorConfig] = None,
    bins: int = 50,
    n_points: int = 200,
):
    """
    Histogram of prior draws with the analytic prior density on top.

    Parameters
    ----------
    draws : dict
        Output of :func:`bayeslm.sampling.sample_prior`.
    priors : PriorConfig, optional
        Priors the draws came from; defaults to ``PriorConfig()``.
    bins : int, default=50
        Histogram bins per parameter.
    n_points : int, default=200
        Grid size for the density curve.

    Returns
    -------
    matplotlib.figure.Figure
    """
    priors = priors if priors is not None else PriorConfig()
    prior_dists = priors.distributions()
    col = colors()

    fig, axes = plt.subplots(1, len(Parameter), figsize=(4 * len(Parameter), 3))
    for ax, name in zip(axes, Parameter.names()):
        values = np.asarray(draws[name])
        ax.hist(
            values, bins=bins, density=True, color=col["pale_blue"],
            label="draws",
        )
        # Evaluate the density over the central 99.8% of the prior
        distribution = numpyro_to_scipy(prior_dists[name])
        grid = np.linspace(
            distribution.ppf(0.001), distribution.ppf(0.999), n_points
        )
        ax.plot(grid, distribution.pdf(grid), color=col["dark_blue"],
                label="density")
        ax.set_xlabel(PARAM_LABELS[name])
        ax.set_ylabel("density")
    axes[0].legend()
    fig.tight_layout()
    return fig


# ==============================================================================
# Posterior plots
# ==============================================================================


def plot_posterior_density(
    draws: ChainLike,
    level: float = 0.95,
    params: Sequence[str] = Parameter.names(),
):
    """
    Kernel density estimate of each parameter with its credible interval.

    Parameters
    ----------
    draws : Chain or PosteriorResults
        Posterior draws; results are pooled over chains.
    level : float, default=0.95
        Credible level of the marked interval.
    params : sequence of str
        Parameters to plot, one panel each.

    Returns
    -------
    matplotlib.figure.Figure
    """
    level = stats.validate_level(level)
    chain = _as_chain(draws)
    col = colors()

    fig, axes = plt.subplots(
        1, len(params), figsize=(4 * len(params), 3), squeeze=False
    )
    for ax, name in zip(axes[0], params):
        values = chain.values(name)
        sns.kdeplot(x=values, ax=ax, color=col["dark_blue"], fill=True)
        interval = _chain.credible_interval(chain, name, level)
        _mark_interval(ax, interval, col["red"], label=f"{level:.0%} CI")
        ax.axvline(
            _chain.point_estimate(chain, name),
            color=col["black"],
            linewidth=1.2,
            label="mean",
        )
        ax.set_xlabel(PARAM_LABELS.get(name, name))
    axes[0][0].legend()
    fig.tight_layout()
    return fig


# ------------------------------------------------------------------------------


def plot_trace(results: Union[PosteriorResults, Chain, Sequence[Chain]]):
    """Trace of each parameter, one line per chain."""
    if isinstance(results, PosteriorResults):
        chains = results.chains
    elif isinstance(results, Chain):
        chains = [results]
    else:
        chains = list(results)

    fig, axes = plt.subplots(
        len(Parameter), 1, figsize=(8, 2.2 * len(Parameter)), sharex=True
    )
    for ax, name in zip(axes, Parameter.names()):
        for c in chains:
            ax.plot(
                np.arange(1, len(c) + 1),
                c.values(name),
                linewidth=0.6,
                alpha=0.8,
                label=f"chain {c.chain_id}",
            )
        ax.set_ylabel(name)
    axes[-1].set_xlabel("iteration")
    if len(chains) > 1:
        axes[0].legend(loc="upper right")
    fig.tight_layout()
    return fig


# ------------------------------------------------------------------------------


def plot_regression(
    draws: ChainLike,
    x: Sequence[float],
    y: Sequence[float],
    n_lines: int = 50,
    level: float = 0.95,
    n_grid: int = 100,
):
    """
    Data with posterior regression lines.

    Draws ``n_lines`` evenly spaced posterior lines, the posterior-mean line
    and the credible band of ``a + b * x``.

    Returns
    -------
    matplotlib.figure.Figure
    """
    chain = _as_chain(draws)
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    col = colors()

    x_grid = np.linspace(x.min(), x.max(), n_grid)
    band = _chain.regression_band(chain, x_grid, level)

    fig, ax = plt.subplots(figsize=(6, 4.5))
    ax.scatter(x, y, s=12, color=col["dark_blue"], alpha=0.7, label="data")

    idx = np.unique(
        np.linspace(0, len(chain) - 1, min(n_lines, len(chain))).astype(int)
    )
    for t in idx:
        draw = chain[int(t)]
        ax.plot(
            x_grid,
            draw.a + draw.b * x_grid,
            color=col["light_red"],
            alpha=0.15,
            linewidth=0.8,
        )
    ax.fill_between(
        band["x"], band["lower"], band["upper"],
        color=col["red"], alpha=0.2, label=f"{level:.0%} band",
    )
    ax.plot(band["x"], band["mean"], color=col["dark_red"], label="mean")
    ax.set_xlabel("height")
    ax.set_ylabel("weight")
    ax.legend()
    fig.tight_layout()
    return fig


# ------------------------------------------------------------------------------


def plot_predictive(
    predictive: np.ndarray,
    x0: Optional[float] = None,
    level: float = 0.95,
    bins: int = 50,
):
    """Histogram of predictive draws with the predictive interval marked."""
    col = colors()
    interval = stats.credible_interval(predictive, level)

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.hist(
        np.asarray(predictive), bins=bins, density=True,
        color=col["pale_blue"],
    )
    _mark_interval(ax, interval, col["red"], label=f"{level:.0%} interval")
    title = "posterior predictive"
    if x0 is not None:
        title = f"{title} at x = {x0:g}"
    ax.set_title(title)
    ax.set_xlabel("weight")
    ax.set_ylabel("density")
    ax.legend()
    fig.tight_layout()
    return fig
