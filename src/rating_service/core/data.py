"""
Spreadsheet loading utilities for attempt data.
"""

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from rating_service.core.data_models import Observation
from rating_service.core.exceptions import InvalidObservationError

logger = logging.getLogger(__name__)

CORRECT_COLUMN = "x"
DIFFICULTY_COLUMN = "b"
TIME_COLUMN = "T"
REQUIRED_COLUMNS = (CORRECT_COLUMN, DIFFICULTY_COLUMN, TIME_COLUMN)

EXCEL_SUFFIXES = {".xlsx", ".xls"}
CSV_SUFFIXES = {".csv"}


def read_attempts_table(path: Path) -> pd.DataFrame:
    """Read the first sheet of an Excel workbook, or a CSV file."""
    suffix = path.suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        return pd.read_excel(path, sheet_name=0)
    if suffix in CSV_SUFFIXES:
        return pd.read_csv(path)
    raise ValueError(
        f"Unsupported file type '{path.suffix}', "
        f"expected one of {sorted(EXCEL_SUFFIXES | CSV_SUFFIXES)}"
    )


def dataframe_to_observations(df: pd.DataFrame) -> list[Observation]:
    """Convert a table with columns x, b, T into observations, in row order.

    Raises:
        InvalidObservationError: If a column is missing or a row holds a
            value that is not numeric, not finite, (for x) not 0/1, or
            (for T) negative.
            Rows are reported 1-based, as in a spreadsheet body.
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise InvalidObservationError(
            f"Missing required column(s): {', '.join(missing)}"
        )

    numeric = df[list(REQUIRED_COLUMNS)].apply(
        pd.to_numeric, errors="coerce"
    )
    values = numeric.to_numpy(dtype=np.float64)

    observations: list[Observation] = []
    for i, (x, b, t) in enumerate(values):
        row = i + 1
        bad = [
            name
            for name, value in zip(REQUIRED_COLUMNS, (x, b, t))
            if not np.isfinite(value)
        ]
        if bad:
            raise InvalidObservationError(
                f"non-numeric or missing value in column(s) {', '.join(bad)}",
                row=row,
            )
        if x not in (0.0, 1.0):
            raise InvalidObservationError(
                f"x must be 0 or 1, got {x:g}", row=row
            )
        if t < 0:
            raise InvalidObservationError(
                f"T must be >= 0, got {t:g}", row=row
            )
        observations.append(
            Observation(correct=int(x), difficulty=b, response_time=t)
        )

    return observations


def load_observations(path: Path) -> list[Observation]:
    """Load attempt observations from a spreadsheet.

    Expected columns:
        - x: correctness (0 or 1)
        - b: item difficulty
        - T: response time

    Returns:
        Observations in file order.
    """
    df = read_attempts_table(path)
    observations = dataframe_to_observations(df)
    logger.info(f"Loaded {len(observations)} observations from {path}")
    return observations
