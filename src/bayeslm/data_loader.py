"""
Access to the height/weight observations.

The reference dataset (``bdims``) holds body measurements of 507 adults;
the regression uses the ``hgt`` (height, cm) and ``wgt`` (weight, kg)
columns.
"""

import os
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from .errors import InvalidInputError, STAGE_DATA
from .models.config import DataConfig

# ==============================================================================
# Observations
# ==============================================================================


@dataclass(frozen=True, eq=False)
class Observations:
    """Aligned, read-only predictor and response columns."""

    x: np.ndarray
    y: np.ndarray
    x_name: str = "hgt"
    y_name: str = "wgt"

    def __post_init__(self):
        x = np.array(self.x, dtype=np.float64)
        y = np.array(self.y, dtype=np.float64)
        if x.ndim != 1 or y.ndim != 1 or x.shape != y.shape:
            raise InvalidInputError(
                "observations must be two 1-D columns of equal length",
                STAGE_DATA,
                (x.shape, y.shape),
            )
        x.flags.writeable = False
        y.flags.writeable = False
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    def __len__(self) -> int:
        return int(self.x.shape[0])

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({self.x_name: self.x, self.y_name: self.y})

    def describe(self) -> pd.DataFrame:
        """Summary statistics of both columns."""
        return self.to_frame().describe()


# ==============================================================================
# Data Loader
# ==============================================================================


def load_observations(
    path: str,
    x_column: str = "hgt",
    y_column: str = "wgt",
    expected_rows: Optional[int] = None,
    verbose: bool = False,
) -> Observations:
    """
    Load the predictor and response columns from a CSV file.

    Parameters
    ----------
    path : str
        Path to a CSV file with a header row. Lines starting with ``#`` are
        ignored.
    x_column, y_column : str
        Names of the predictor and response columns.
    expected_rows : int, optional
        If given, the table must have exactly this many rows.
    verbose : bool, default=False
        Print the path and shape of the loaded table.

    Returns
    -------
    Observations
        The two columns as float64 arrays.

    Raises
    ------
    InvalidInputError
        If the file is missing or not a CSV, a column is absent,
        non-numeric or has missing values, or the row count differs from
        ``expected_rows``.
    """
    if verbose:
        print(f"Loading data from {path}...")

    _, extension = os.path.splitext(path)
    if extension != ".csv":
        raise InvalidInputError(
            "unsupported file format, please use .csv", STAGE_DATA, extension
        )
    if not os.path.exists(path):
        raise InvalidInputError("data file not found", STAGE_DATA, path)

    # Read the CSV file, ignoring lines starting with '#'
    df = pd.read_csv(path, comment="#")
    if verbose:
        print(f"Data shape: {df.shape}")

    missing = [c for c in (x_column, y_column) if c not in df.columns]
    if missing:
        raise InvalidInputError(
            "required columns are missing", STAGE_DATA, missing
        )

    columns = {}
    for name in (x_column, y_column):
        column = df[name]
        if not pd.api.types.is_numeric_dtype(column):
            raise InvalidInputError(
                f"column '{name}' is not numeric", STAGE_DATA, str(column.dtype)
            )
        n_missing = int(column.isna().sum())
        if n_missing:
            raise InvalidInputError(
                f"column '{name}' has missing values", STAGE_DATA, n_missing
            )
        columns[name] = column.to_numpy(dtype=np.float64)

    if expected_rows is not None and len(df) != expected_rows:
        raise InvalidInputError(
            f"expected {expected_rows} rows", STAGE_DATA, len(df)
        )

    return Observations(
        x=columns[x_column],
        y=columns[y_column],
        x_name=x_column,
        y_name=y_column,
    )


# ------------------------------------------------------------------------------


def load_from_config(
    data_config: DataConfig, verbose: bool = False
) -> Observations:
    """Load observations described by a :class:`DataConfig`."""
    if data_config.path is None:
        raise InvalidInputError(
            "data config has no path", STAGE_DATA, data_config
        )
    return load_observations(
        data_config.path,
        x_column=data_config.x_column,
        y_column=data_config.y_column,
        expected_rows=data_config.expected_rows,
        verbose=verbose,
    )
