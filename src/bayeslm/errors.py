"""
Exception hierarchy for bayeslm.

Every error records the pipeline ``stage`` that failed and the offending
``value`` so that callers can report exactly where an analysis stopped.

The base class derives from ``Exception``, not ``ValueError``: pydantic
validators re-raise it unchanged instead of wrapping it in a
``ValidationError``.
"""

from typing import Any, Optional

# ==============================================================================
# Pipeline stages
# ==============================================================================

STAGE_DATA = "data loading"
STAGE_MODEL = "model construction"
STAGE_PRIOR = "prior sampling"
STAGE_SAMPLING = "sampling"
STAGE_SUMMARY = "summarization"

_MISSING = object()

# ==============================================================================
# Base class
# ==============================================================================


class BayesLMError(Exception):
    """Base class for all bayeslm errors.

    Parameters
    ----------
    message : str
        Human readable description of the failure.
    stage : str, optional
        Pipeline stage that failed (e.g. ``"model construction"``).
    value : Any, optional
        Offending value, included in the rendered message.
    """

    default_stage: Optional[str] = None

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        value: Any = _MISSING,
    ):
        self.message = message
        self.stage = stage if stage is not None else self.default_stage
        self.value = None if value is _MISSING else value
        self._has_value = value is not _MISSING
        super().__init__(self._render())

    def __reduce__(self):
        # Rebuild from the raw parts so the stage prefix is not rendered twice
        args = (self.message, self.stage)
        if self._has_value:
            args += (self.value,)
        return (type(self), args)

    def _render(self) -> str:
        text = self.message
        if self.stage is not None:
            text = f"[{self.stage}] {text}"
        if self._has_value:
            text = f"{text} (got {self.value!r})"
        return text


# ------------------------------------------------------------------------------


class InvalidInputError(BayesLMError):
    """Malformed or mismatched data, chains or distribution parameters."""

    default_stage = STAGE_MODEL


class SamplingError(BayesLMError):
    """The MCMC engine failed, diverged, or returned unusable draws."""

    default_stage = STAGE_SAMPLING


class EmptyChainError(BayesLMError):
    """A statistic was requested on a chain without draws."""

    default_stage = STAGE_SUMMARY


class InvalidLevelError(BayesLMError):
    """A credible level outside the open interval (0, 1)."""

    default_stage = STAGE_SUMMARY


__all__ = [
    "BayesLMError",
    "InvalidInputError",
    "SamplingError",
    "EmptyChainError",
    "InvalidLevelError",
    "STAGE_DATA",
    "STAGE_MODEL",
    "STAGE_PRIOR",
    "STAGE_SAMPLING",
    "STAGE_SUMMARY",
]
