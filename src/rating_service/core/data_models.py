"""
Data models for sequential rating input/output.

This module defines the data structures for:
- Observation: one timed attempt at an item (input)
- TracePoint / RatingTrace: the ordered ratings produced from observations
"""

import math
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from rating_service.core.exceptions import InvalidObservationError


@dataclass(frozen=True)
class Observation:
    """
    A single attempt at an item.

    Attributes:
        correct: 1 if the attempt was correct, 0 otherwise (x).
        difficulty: Item difficulty (b), nominally in [0, 100].
        response_time: Time taken for the attempt (T), >= 0.
    """

    correct: int
    difficulty: float
    response_time: float

    def __post_init__(self) -> None:
        """Validate observation fields."""
        if self.correct not in (0, 1):
            raise InvalidObservationError(
                f"correct must be 0 or 1, got {self.correct!r}"
            )
        if not math.isfinite(self.difficulty):
            raise InvalidObservationError(
                f"difficulty must be finite, got {self.difficulty}"
            )
        if not math.isfinite(self.response_time):
            raise InvalidObservationError(
                f"response_time must be finite, got {self.response_time}"
            )
        if self.response_time < 0:
            raise InvalidObservationError(
                f"response_time must be >= 0, got {self.response_time}"
            )
        # Normalize bools and numpy scalars to plain Python numbers
        object.__setattr__(self, "correct", int(self.correct))
        object.__setattr__(self, "difficulty", float(self.difficulty))
        object.__setattr__(self, "response_time", float(self.response_time))


@dataclass(frozen=True)
class TracePoint:
    """
    Rating produced by one observation.

    Attributes:
        index: 0-based position of the observation in the sequence.
        observation: The observation that was processed.
        prior: Rating carried into this step.
        rating: Rating after this step.
    """

    index: int
    observation: Observation
    prior: float
    rating: float


@dataclass(frozen=True)
class RatingTrace:
    """
    Ordered sequence of trace points.

    Point i was computed from observation i and the rating of point i-1
    (or the initial prior for i = 0).
    """

    points: tuple[TracePoint, ...] = ()

    def __post_init__(self) -> None:
        """Points must be numbered 0, 1, 2, ... in order."""
        for expected, point in enumerate(self.points):
            if point.index != expected:
                raise ValueError(
                    f"Expected point index {expected}, got {point.index}"
                )

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[TracePoint]:
        return iter(self.points)

    def __getitem__(self, index: int) -> TracePoint:
        return self.points[index]

    @property
    def ratings(self) -> NDArray[np.float64]:
        """Ratings in observation order, shape (n_observations,)."""
        return np.array([p.rating for p in self.points], dtype=np.float64)

    @property
    def observations(self) -> tuple[Observation, ...]:
        return tuple(p.observation for p in self.points)

    @property
    def final_rating(self) -> float | None:
        """Rating after the last observation, or None for an empty trace."""
        if not self.points:
            return None
        return self.points[-1].rating
