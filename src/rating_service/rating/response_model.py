"""
Probabilistic response model for timed attempts.

This module computes P(correct | ability, difficulty, time) with a
three-parameter logistic curve whose slope and floor come from the item
parameter model:

    P(correct | theta) = c + (1 - c) / (1 + exp(-(theta - b) / s_eff))

Where:
    - theta: current ability estimate (rating)
    - b: item difficulty, the inflection point of the curve
    - s_eff: effective slope (larger values give a flatter curve)
    - c: guessing floor
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from rating_service.rating.parameters import (
    ItemParameters,
    compute_item_parameters,
)

PROBABILITY_EPSILON = 1e-6

# exp() overflows float64 just above 709
_MAX_EXPONENT = 500.0


def logistic_probability(
    theta: ArrayLike,
    b: float,
    params: ItemParameters,
) -> NDArray[np.float64]:
    """
    Evaluate the 3PL curve for precomputed item parameters.

    A zero effective slope (zero response time) is the step-function limit
    of the curve: P = 1 above b, P = c below b, and the slope-independent
    midpoint c + (1 - c) / 2 at theta == b.

    Args:
        theta: Ability value(s), scalar or array.
        b: Item difficulty.
        params: Derived item parameters for this attempt.

    Returns:
        Array with the same shape as theta. Not clamped.
    """
    theta_arr = np.asarray(theta, dtype=np.float64)
    c = params.guessing_floor
    gap = theta_arr - b

    with np.errstate(divide="ignore", invalid="ignore"):
        exponent = np.where(gap == 0.0, 0.0, -gap / params.effective_slope)
    exponent = np.clip(exponent, -_MAX_EXPONENT, _MAX_EXPONENT)

    result: NDArray[np.float64] = c + (1.0 - c) / (1.0 + np.exp(exponent))
    return result


def probability_correct(
    theta: ArrayLike, b: float, response_time: float
) -> NDArray[np.float64]:
    """
    Probability of a correct response.

    Args:
        theta: Ability value(s), scalar or array.
        b: Item difficulty.
        response_time: Time taken for the attempt.

    Returns:
        Array with the same shape as theta, in [c, 1] for c = guessing
        floor. Callers clamp with clamp_probability before taking logs.

    Raises:
        ModelDomainError: If the item parameters are undefined for (b, T).
    """
    params = compute_item_parameters(b, response_time)
    return logistic_probability(theta, b, params)


def clamp_probability(p: ArrayLike) -> NDArray[np.float64]:
    """Clamp probabilities to [1e-6, 1 - 1e-6] so their logs are finite."""
    result: NDArray[np.float64] = np.clip(
        np.asarray(p, dtype=np.float64),
        PROBABILITY_EPSILON,
        1.0 - PROBABILITY_EPSILON,
    )
    return result
