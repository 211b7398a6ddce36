from rating_service.reporting.plotting import plot_rating_trace
from rating_service.reporting.tables import trace_to_dataframe

__all__ = [
    "plot_rating_trace",
    "trace_to_dataframe",
]
