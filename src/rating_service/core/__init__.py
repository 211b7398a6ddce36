"""
Core shared types and utilities for the rating service.

This module provides the data models and exception taxonomy shared by the
rating core and by its outer layers (spreadsheet loading, reporting, API).
"""

from rating_service.core.data_models import (
    Observation,
    RatingTrace,
    TracePoint,
)
from rating_service.core.exceptions import (
    InvalidObservationError,
    ModelDomainError,
    RatingError,
    RatingStepError,
)

__all__ = [
    "InvalidObservationError",
    "ModelDomainError",
    "Observation",
    "RatingError",
    "RatingStepError",
    "RatingTrace",
    "TracePoint",
]
