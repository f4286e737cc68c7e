"""
Bayesian simple linear regression.

The generative model is

    a ~ Normal(a_loc, a_scale)
    b ~ Normal(b_loc, b_scale)
    s ~ Uniform(s_low, s_high)
    Y_i ~ Normal(a + b * X_i, s)        for i = 1..L

:class:`LinearRegressionModel` binds observed data and priors into an
immutable object that the MCMC engine consumes. Building it validates the
data and never samples.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

import jax.numpy as jnp
import numpy as np
import numpyro
import numpyro.distributions as dist
from numpyro.infer.util import log_likelihood as _numpyro_log_likelihood

from ..errors import InvalidInputError, STAGE_MODEL
from .config import Parameter, PriorConfig

# Variable names the engine binds data to
X_NAME = "X"
Y_NAME = "Y"

# ==============================================================================
# NumPyro model
# ==============================================================================


def linear_regression_model(
    X: jnp.ndarray,
    Y: Optional[jnp.ndarray] = None,
    priors: Optional[PriorConfig] = None,
):
    """
    NumPyro model for ``Y ~ Normal(a + b * X, s)``.

    Parameters
    ----------
    X : jnp.ndarray
        Predictor values, shape ``(n_obs,)``.
    Y : jnp.ndarray, optional
        Observed responses. When None the ``Y`` site is sampled, which is
        how prior and posterior predictive draws are produced.
    priors : PriorConfig, optional
        Priors on ``a``, ``b`` and ``s``. Defaults to ``PriorConfig()``.
    """
    priors = priors if priors is not None else PriorConfig()
    prior_dists = priors.distributions()

    a = numpyro.sample(Parameter.A.value, prior_dists[Parameter.A.value])
    b = numpyro.sample(Parameter.B.value, prior_dists[Parameter.B.value])
    s = numpyro.sample(Parameter.S.value, prior_dists[Parameter.S.value])

    with numpyro.plate("observations", X.shape[0]):
        numpyro.sample(Y_NAME, dist.Normal(a + b * X, s), obs=Y)


# ==============================================================================
# Model specification
# ==============================================================================


def _as_vector(name: str, values) -> np.ndarray:
    """Convert ``values`` to a finite 1-D float64 array."""
    try:
        arr = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(
            f"{name} must be numeric", STAGE_MODEL, values
        ) from exc
    if arr.ndim != 1:
        raise InvalidInputError(
            f"{name} must be one-dimensional", STAGE_MODEL, arr.shape
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(
            f"{name} contains non-finite values",
            STAGE_MODEL,
            int(np.sum(~np.isfinite(arr))),
        )
    return arr


@dataclass(frozen=True, eq=False)
class LinearRegressionModel:
    """
    Immutable binding of observed data and priors.

    Parameters
    ----------
    x : array-like
        Predictor values (height).
    y : array-like
        Response values (weight), same length as ``x``.
    priors : PriorConfig
        Priors on the intercept, slope and noise scale.

    Raises
    ------
    InvalidInputError
        If ``x`` and ``y`` differ in length, are empty, are not 1-D or hold
        non-finite values.

    Examples
    --------
    >>> model = LinearRegressionModel(x=[170.0, 190.0], y=[70.0, 90.0])
    >>> model.n_obs
    2
    """

    x: np.ndarray
    y: np.ndarray
    priors: PriorConfig = field(default_factory=PriorConfig)

    def __post_init__(self):
        x = _as_vector("X", self.x)
        y = _as_vector("Y", self.y)
        if x.shape[0] != y.shape[0]:
            raise InvalidInputError(
                "X and Y must have the same length",
                STAGE_MODEL,
                (x.shape[0], y.shape[0]),
            )
        if x.shape[0] == 0:
            raise InvalidInputError(
                "X and Y must contain at least one observation",
                STAGE_MODEL,
                0,
            )
        if not isinstance(self.priors, PriorConfig):
            raise InvalidInputError(
                "priors must be a PriorConfig", STAGE_MODEL, self.priors
            )
        x.flags.writeable = False
        y.flags.writeable = False
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    # --------------------------------------------------------------------------

    @property
    def n_obs(self) -> int:
        """Number of observations."""
        return int(self.x.shape[0])

    @property
    def model_fn(self) -> Callable:
        """The NumPyro model callable."""
        return linear_regression_model

    def model_args(self, observed: bool = True) -> Dict[str, jnp.ndarray]:
        """
        Keyword arguments binding data to the model's variable names.

        Parameters
        ----------
        observed : bool, default=True
            When False, ``Y`` is left unobserved (``None``) so the model
            simulates it.
        """
        return {
            X_NAME: jnp.asarray(self.x),
            Y_NAME: jnp.asarray(self.y) if observed else None,
            "priors": self.priors,
        }


# ==============================================================================
# Log-likelihood
# ==============================================================================


def log_likelihood(
    model: LinearRegressionModel, samples: Dict[str, jnp.ndarray]
) -> np.ndarray:
    """
    Pointwise log-likelihood of the observations under posterior draws.

    Parameters
    ----------
    model : LinearRegressionModel
        Model whose observations are scored.
    samples : Dict[str, jnp.ndarray]
        Flat posterior draws with keys ``a``, ``b``, ``s``.

    Returns
    -------
    np.ndarray
        Array of shape ``(n_draws, n_obs)``.
    """
    missing = [p for p in Parameter.names() if p not in samples]
    if missing:
        raise InvalidInputError(
            "samples are missing parameters", STAGE_MODEL, missing
        )
    params = {p: jnp.asarray(samples[p]) for p in Parameter.names()}
    ll = _numpyro_log_likelihood(
        linear_regression_model, params, **model.model_args()
    )
    return np.asarray(ll[Y_NAME], dtype=np.float64)
