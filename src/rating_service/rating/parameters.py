"""
Item parameter model.

Every item parameter is a fixed, deterministic function of the item
difficulty b (and, for the effective slope, the response time T):

    base slope      s(b)    = 6 + 20 * (b / 100)
    reference time  T_ref(b) = -9.48 + 18.03 * exp(0.0392 * b)
    guessing floor  c(b)    = 0.25 - 0.15 * (b / 100)
    effective slope s_eff   = s(b) * (log(T + 1) / log(T_ref(b) + 1))^2

Nothing here is fitted to data.
"""

import logging
import math
from dataclasses import dataclass

from rating_service.core.exceptions import ModelDomainError

logger = logging.getLogger(__name__)

BASE_SLOPE_INTERCEPT = 6.0
BASE_SLOPE_GAIN = 20.0

REFERENCE_TIME_OFFSET = -9.48
REFERENCE_TIME_SCALE = 18.03
REFERENCE_TIME_RATE = 0.0392

GUESSING_FLOOR_MAX = 0.25
GUESSING_FLOOR_DROP = 0.15

DIFFICULTY_SCALE = 100.0


@dataclass(frozen=True)
class ItemParameters:
    """
    Derived parameters of the response curve for one attempt.

    Attributes:
        effective_slope: Time-adjusted steepness of the logistic curve.
            Zero when the response time is zero.
        guessing_floor: Lower asymptote of P(correct). Not clamped, so it
            leaves [0, 1) for difficulties far outside [0, 100].
    """

    effective_slope: float
    guessing_floor: float


def base_slope(b: float) -> float:
    return BASE_SLOPE_INTERCEPT + BASE_SLOPE_GAIN * (b / DIFFICULTY_SCALE)


def reference_time(b: float) -> float:
    """Typical response time for an item of difficulty b."""
    return REFERENCE_TIME_OFFSET + REFERENCE_TIME_SCALE * math.exp(
        REFERENCE_TIME_RATE * b
    )


def guessing_floor(b: float) -> float:
    return GUESSING_FLOOR_MAX - GUESSING_FLOOR_DROP * (b / DIFFICULTY_SCALE)


def effective_slope(b: float, response_time: float) -> float:
    """
    Base slope scaled by the squared log-ratio of response time to the
    item's reference time.

    Raises:
        ModelDomainError: If log(T_ref(b) + 1) is undefined or zero, or if
            log(T + 1) is undefined, i.e. the slope would be NaN or infinite.
    """
    t_ref_shifted = reference_time(b) + 1.0
    if t_ref_shifted <= 0.0:
        raise ModelDomainError(
            f"reference time {t_ref_shifted - 1.0:.6g} <= -1, "
            "log(reference_time + 1) is undefined",
            difficulty=b,
            response_time=response_time,
        )
    log_ref = math.log(t_ref_shifted)
    if log_ref == 0.0:
        raise ModelDomainError(
            "reference time is zero, effective slope divides by log(1)",
            difficulty=b,
            response_time=response_time,
        )

    if response_time + 1.0 <= 0.0:
        raise ModelDomainError(
            "response time <= -1, log(response_time + 1) is undefined",
            difficulty=b,
            response_time=response_time,
        )
    ratio = math.log(response_time + 1.0) / log_ref

    slope = base_slope(b) * ratio**2
    if not math.isfinite(slope):
        raise ModelDomainError(
            f"effective slope is not finite ({slope})",
            difficulty=b,
            response_time=response_time,
        )
    return slope


def compute_item_parameters(b: float, response_time: float) -> ItemParameters:
    """Derive the response-curve parameters for one attempt."""
    c = guessing_floor(b)
    if not 0.0 <= c < 1.0:
        logger.debug(
            f"Guessing floor {c:.4f} outside [0, 1) for difficulty {b}"
        )
    return ItemParameters(
        effective_slope=effective_slope(b, response_time),
        guessing_floor=c,
    )
