"""
Tabular views of a rating trace.
"""

import pandas as pd

from rating_service.core.data_models import RatingTrace

TRACE_COLUMNS = ["index", "x", "b", "T", "prior", "rating"]


def trace_to_dataframe(trace: RatingTrace) -> pd.DataFrame:
    """
    One row per attempt, in attempt order.

    The index column is 1-based, as shown to users. Ratings are not
    rounded; rounding is left to display.
    """
    rows = [
        {
            "index": point.index + 1,
            "x": point.observation.correct,
            "b": point.observation.difficulty,
            "T": point.observation.response_time,
            "prior": point.prior,
            "rating": point.rating,
        }
        for point in trace
    ]
    return pd.DataFrame(rows, columns=TRACE_COLUMNS)
