"""
Chains of posterior draws and the operations defined on them.

A :class:`Chain` holds the draws of ``a``, ``b`` and ``s`` of one MCMC run,
in iteration order. The module-level functions reshape chains into tables,
compute point estimates and credible intervals, and generate posterior
predictive draws. Statistics are pure functions of the stored draws;
:func:`predict` consumes randomness only through its ``rng_key``.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, NamedTuple, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .. import stats
from ..errors import EmptyChainError, InvalidInputError, STAGE_SUMMARY
from ..models.config import Parameter
from ..sampling import generate_predictive_samples
from ..utils.core import RNGLike

ParamLike = Union[Parameter, str]

# ==============================================================================
# Data types
# ==============================================================================


class Draw(NamedTuple):
    """Parameter vector of a single MCMC iteration."""

    a: float
    b: float
    s: float


# ------------------------------------------------------------------------------


def as_parameter(param: ParamLike) -> Parameter:
    """Resolve a parameter name, rejecting anything but ``a``, ``b``, ``s``."""
    if isinstance(param, Parameter):
        return param
    try:
        return Parameter(param)
    except ValueError:
        raise InvalidInputError(
            f"unknown parameter, expected one of {Parameter.names()}",
            STAGE_SUMMARY,
            param,
        ) from None


# ------------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class Chain:
    """
    Ordered posterior draws of one chain.

    Parameters
    ----------
    a, b, s : array-like
        Draws of intercept, slope and noise scale, aligned by iteration.
    chain_id : int, default=0
        Index of the chain within a multi-chain run.

    Raises
    ------
    InvalidInputError
        If the arrays differ in length, are not 1-D, contain non-finite
        values, or any ``s`` draw is not strictly positive.

    Examples
    --------
    >>> chain = Chain(a=[1.0, 2.0], b=[0.5, 0.6], s=[1.0, 1.1])
    >>> len(chain), chain[1].b
    (2, 0.6)
    """

    a: np.ndarray
    b: np.ndarray
    s: np.ndarray
    chain_id: int = 0

    def __post_init__(self):
        arrays = {}
        for name in Parameter.names():
            arr = np.array(getattr(self, name), dtype=np.float64)
            if arr.ndim != 1:
                raise InvalidInputError(
                    f"draws of '{name}' must be one-dimensional",
                    STAGE_SUMMARY,
                    arr.shape,
                )
            if not np.all(np.isfinite(arr)):
                raise InvalidInputError(
                    f"draws of '{name}' contain non-finite values",
                    STAGE_SUMMARY,
                    int(np.sum(~np.isfinite(arr))),
                )
            arr.flags.writeable = False
            arrays[name] = arr

        lengths = {name: arr.shape[0] for name, arr in arrays.items()}
        if len(set(lengths.values())) != 1:
            raise InvalidInputError(
                "draws of a, b and s must have the same length",
                STAGE_SUMMARY,
                lengths,
            )
        if np.any(arrays[Parameter.S.value] <= 0):
            raise InvalidInputError(
                "noise scale draws must be strictly positive",
                STAGE_SUMMARY,
                float(np.min(arrays[Parameter.S.value])),
            )

        for name, arr in arrays.items():
            object.__setattr__(self, name, arr)
        object.__setattr__(self, "chain_id", int(self.chain_id))

    # --------------------------------------------------------------------------

    def __len__(self) -> int:
        return int(self.a.shape[0])

    def __getitem__(self, t: int) -> Draw:
        return Draw(float(self.a[t]), float(self.b[t]), float(self.s[t]))

    def __iter__(self) -> Iterator[Draw]:
        for t in range(len(self)):
            yield self[t]

    def __repr__(self) -> str:
        return f"Chain(chain_id={self.chain_id}, n_draws={len(self)})"

    def values(self, param: ParamLike) -> np.ndarray:
        """Read-only draws of a single parameter."""
        return getattr(self, as_parameter(param).value)

    def as_dict(self) -> Dict[str, np.ndarray]:
        return {name: getattr(self, name) for name in Parameter.names()}

    @classmethod
    def from_samples(
        cls, samples: Dict[str, np.ndarray], chain_id: int = 0
    ) -> "Chain":
        """Build a chain from a ``{"a": ..., "b": ..., "s": ...}`` mapping."""
        missing = [p for p in Parameter.names() if p not in samples]
        if missing:
            raise InvalidInputError(
                "samples are missing parameters", STAGE_SUMMARY, missing
            )
        return cls(
            a=samples[Parameter.A.value],
            b=samples[Parameter.B.value],
            s=samples[Parameter.S.value],
            chain_id=chain_id,
        )


# ==============================================================================
# Reshaping
# ==============================================================================


def to_table(chains: Union[Chain, Sequence[Chain]]) -> pd.DataFrame:
    """
    One row per iteration, one column per parameter.

    Parameters
    ----------
    chains : Chain or sequence of Chain
        A single chain gives columns ``iteration, a, b, s``. A sequence
        gives ``chain, iteration, a, b, s`` with rows of each chain kept in
        iteration order.

    Returns
    -------
    pd.DataFrame
        Iteration indices start at 1.
    """
    if isinstance(chains, Chain):
        table = pd.DataFrame(
            {"iteration": np.arange(1, len(chains) + 1)}
        )
        for name in Parameter.names():
            table[name] = chains.values(name)
        return table

    frames = []
    for chain in chains:
        frame = to_table(chain)
        frame.insert(0, "chain", chain.chain_id)
        frames.append(frame)
    if not frames:
        return pd.DataFrame(
            columns=["chain", "iteration", *Parameter.names()]
        )
    return pd.concat(frames, ignore_index=True)


# ==============================================================================
# Statistics
# ==============================================================================


def point_estimate(chain: Chain, param: ParamLike) -> float:
    """Posterior mean of ``param``; ``EmptyChainError`` on an empty chain."""
    return stats.point_estimate(chain.values(param))


def credible_interval(
    chain: Chain, param: ParamLike, level: float = 0.95
) -> Tuple[float, float]:
    """Equal-tailed type-7 credible interval of ``param`` at ``level``."""
    values = chain.values(param)
    return stats.credible_interval(values, level)


def posterior_quantiles(
    chain: Chain,
    param: ParamLike,
    quantiles: Sequence[float] = (0.025, 0.5, 0.975),
) -> Dict[float, float]:
    """Quantiles of ``param`` keyed by probability."""
    return stats.quantiles(chain.values(param), quantiles)


# ==============================================================================
# Prediction
# ==============================================================================


def predict(chain: Chain, x0: float, rng_key: RNGLike = None) -> np.ndarray:
    """
    Posterior predictive draws of the response at ``x0``.

    Draws ``Normal(a_t + b_t * x0, s_t)`` once for every iteration ``t``,
    so the result has exactly ``len(chain)`` entries.

    Parameters
    ----------
    chain : Chain
        Posterior draws.
    x0 : float
        Covariate value.
    rng_key : int, jax.Array or None
        Seed or PRNG key. A pinned key reproduces the same draws; None
        gives fresh draws on each call.
    """
    x0 = _check_covariate(x0)
    return generate_predictive_samples(
        chain.a, chain.b, chain.s, x0, rng_key=rng_key
    )


def predictive_interval(
    chain: Chain,
    x0: float,
    level: float = 0.95,
    rng_key: RNGLike = None,
) -> Tuple[float, float]:
    """Credible interval of the posterior predictive draws at ``x0``."""
    level = stats.validate_level(level)
    return stats.credible_interval(predict(chain, x0, rng_key), level)


def regression_band(
    chain: Chain, x_grid, level: float = 0.95
) -> pd.DataFrame:
    """
    Posterior mean and credible band of the regression line ``a + b * x``.

    Returns
    -------
    pd.DataFrame
        Columns ``x``, ``mean``, ``lower``, ``upper``, one row per grid
        point.
    """
    level = stats.validate_level(level)
    x_grid = np.asarray(x_grid, dtype=np.float64).ravel()
    if len(chain) == 0:
        raise EmptyChainError("no draws to summarize", value=0)

    # (n_draws, n_grid)
    lines = chain.a[:, None] + chain.b[:, None] * x_grid[None, :]
    lower, upper = np.quantile(
        lines, stats.tail_probs(level), axis=0, method=stats.QUANTILE_METHOD
    )
    return pd.DataFrame(
        {
            "x": x_grid,
            "mean": lines.mean(axis=0),
            "lower": lower,
            "upper": upper,
        }
    )


def _check_covariate(x0) -> float:
    try:
        x0 = float(x0)
    except (TypeError, ValueError):
        raise InvalidInputError(
            "covariate must be a number", STAGE_SUMMARY, x0
        ) from None
    if not np.isfinite(x0):
        raise InvalidInputError(
            "covariate must be finite", STAGE_SUMMARY, x0
        )
    return x0
