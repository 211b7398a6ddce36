"""
Sequential rating module.

This module provides:
- The item parameter model (slope, reference time, guessing floor)
- The 3PL response model and the asymmetric negative log-posterior
- The grid-search estimator for a single rating update
- The sequential tracker that folds updates over a sequence of attempts
"""

from rating_service.rating.config import RatingConfig, default_config
from rating_service.rating.estimator import (
    build_grid,
    minimize_on_grid,
    update_rating,
)
from rating_service.rating.loss import asymmetric_weight, neg_log_posterior
from rating_service.rating.parameters import (
    ItemParameters,
    base_slope,
    compute_item_parameters,
    effective_slope,
    guessing_floor,
    reference_time,
)
from rating_service.rating.response_model import (
    clamp_probability,
    probability_correct,
)
from rating_service.rating.tracker import track_ratings

__all__ = [
    "ItemParameters",
    "RatingConfig",
    "asymmetric_weight",
    "base_slope",
    "build_grid",
    "clamp_probability",
    "compute_item_parameters",
    "default_config",
    "effective_slope",
    "guessing_floor",
    "minimize_on_grid",
    "neg_log_posterior",
    "probability_correct",
    "reference_time",
    "track_ratings",
    "update_rating",
]
