"""
Exception taxonomy for rating computation.

The core never recovers locally: domain failures propagate to the caller
with enough context to identify the failing step.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rating_service.core.data_models import Observation, RatingTrace


class RatingError(Exception):
    """Base class for all rating errors."""


class ModelDomainError(RatingError):
    """A derived item parameter is mathematically undefined."""

    def __init__(
        self, message: str, difficulty: float, response_time: float
    ) -> None:
        self.difficulty = difficulty
        self.response_time = response_time
        super().__init__(
            f"{message} "
            f"(difficulty={difficulty}, response_time={response_time})"
        )


class InvalidObservationError(RatingError):
    """An input record cannot be turned into an Observation."""

    def __init__(self, message: str, row: int | None = None) -> None:
        self.row = row
        if row is not None:
            message = f"row {row}: {message}"
        super().__init__(message)


class RatingStepError(RatingError):
    """
    Sequential tracking aborted at a single observation.

    Attributes:
        index: 0-based position of the failing observation.
        observation: The failing observation.
        prior: Rating carried into the failing step.
        partial_trace: Trace of every step completed before the failure.
    """

    def __init__(
        self,
        index: int,
        observation: "Observation",
        prior: float,
        partial_trace: "RatingTrace",
        reason: str,
    ) -> None:
        self.index = index
        self.observation = observation
        self.prior = prior
        self.partial_trace = partial_trace
        self.reason = reason
        super().__init__(
            f"Rating update failed at observation {index} "
            f"(x={observation.correct}, b={observation.difficulty}, "
            f"T={observation.response_time}, prior={prior}): {reason}"
        )
