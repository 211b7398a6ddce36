"""
Sequential rating tracker.

Folds the grid-search update over observations in order:

    rating[0] = update(initial_prior, obs[0])
    rating[i] = update(rating[i - 1], obs[i])

The fold is order dependent; permuting the observations changes every
rating from the first differing position onward.
"""

import logging
from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray

from rating_service.core.data_models import (
    Observation,
    RatingTrace,
    TracePoint,
)
from rating_service.core.exceptions import ModelDomainError, RatingStepError
from rating_service.rating.config import RatingConfig
from rating_service.rating.estimator import build_grid, update_rating

logger = logging.getLogger(__name__)


def _advance(
    points: list[TracePoint],
    observation: Observation,
    prior: float,
    config: RatingConfig,
    grid: NDArray[np.float64],
) -> TracePoint:
    """Apply one observation on top of the points computed so far."""
    index = len(points)
    try:
        rating = update_rating(prior, observation, config, grid=grid)
    except ModelDomainError as e:
        raise RatingStepError(
            index=index,
            observation=observation,
            prior=prior,
            partial_trace=RatingTrace(points=tuple(points)),
            reason=str(e),
        ) from e

    logger.debug(
        f"Step {index}: x={observation.correct} b={observation.difficulty} "
        f"T={observation.response_time} prior={prior:.4f} -> {rating:.4f}"
    )
    return TracePoint(
        index=index,
        observation=observation,
        prior=prior,
        rating=rating,
    )


def track_ratings(
    observations: Iterable[Observation],
    config: RatingConfig | None = None,
) -> RatingTrace:
    """
    Compute the rating after each observation.

    Args:
        observations: Attempts in the order they were made.
        config: Run configuration. Uses defaults if None.

    Returns:
        RatingTrace with one point per observation, in input order. Empty
        input gives an empty trace.

    Raises:
        RatingStepError: If an observation has undefined item parameters.
            Processing stops there; the error carries the partial trace.
    """
    if config is None:
        config = RatingConfig()

    grid = build_grid(config.lower_bound, config.upper_bound, config.step)

    points: list[TracePoint] = []
    prior = config.initial_prior
    for observation in observations:
        point = _advance(points, observation, prior, config, grid)
        points.append(point)
        prior = point.rating

    trace = RatingTrace(points=tuple(points))

    logger.info(
        f"Tracked {len(trace)} observations "
        f"(initial={config.initial_prior}, final={trace.final_rating})"
    )
    return trace
