"""
Plotting utilities for rating traces.
"""

from matplotlib.figure import Figure

from rating_service.core.data_models import RatingTrace


def plot_rating_trace(
    trace: RatingTrace,
    title: str = "Ratings Tracker",
) -> Figure:
    """
    Line chart of rating against attempt number.

    Args:
        trace: Trace to plot. An empty trace gives empty axes.
        title: Figure title.

    Returns:
        matplotlib Figure.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(10, 6))

    attempts = list(range(1, len(trace) + 1))
    ratings = trace.ratings

    ax.plot(
        attempts,
        ratings,
        color=(75 / 255, 192 / 255, 192 / 255),
        marker="o",
        label="Rating",
    )
    if len(trace) > 0:
        ax.fill_between(
            attempts, ratings, color=(75 / 255, 192 / 255, 192 / 255, 0.2)
        )

    ax.set_xlabel("Attempts")
    ax.set_ylabel("Rating")
    ax.set_ylim(bottom=0)
    ax.set_title(title)
    ax.legend()

    fig.tight_layout()
    return fig
