"""
Negative log-posterior for a single observation.

    loss(theta) = -( x (1 + w) log p + (1 - x) (1 - w) log(1 - p) )
                  + ((theta - theta_prior) / sigma)^2

with p = clamp(P(correct | theta)) and w = (b - theta) / 20 when the item
is harder than theta, 0 otherwise.

The weight w is an asymmetric, product-specific adjustment rather than a
Bernoulli log-likelihood: on items harder than theta it amplifies the
likelihood term of a correct answer and damps (past a 20 point gap,
inverts) the term of an incorrect one.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from rating_service.core.data_models import Observation
from rating_service.rating.parameters import compute_item_parameters
from rating_service.rating.response_model import (
    clamp_probability,
    logistic_probability,
)

WEIGHT_SCALE = 20.0
PRIOR_PENALTY_COEFFICIENT = 1.0


def asymmetric_weight(theta: ArrayLike, b: float) -> NDArray[np.float64]:
    """(b - theta) / 20 where b > theta, else 0."""
    theta_arr = np.asarray(theta, dtype=np.float64)
    result: NDArray[np.float64] = np.where(
        b > theta_arr, (b - theta_arr) / WEIGHT_SCALE, 0.0
    )
    return result


def neg_log_posterior(
    theta: ArrayLike,
    observation: Observation,
    theta_prior: float,
    sigma: float,
) -> NDArray[np.float64]:
    """
    Loss of candidate ability value(s) for one observation.

    Args:
        theta: Candidate ability value(s), scalar or array.
        observation: The attempt being scored.
        theta_prior: Rating before this observation.
        sigma: Spread of the prior penalty.

    Returns:
        Loss with the same shape as theta. Lower is better.

    Raises:
        ModelDomainError: If the item parameters are undefined.
    """
    theta_arr = np.asarray(theta, dtype=np.float64)
    x = observation.correct
    b = observation.difficulty

    params = compute_item_parameters(b, observation.response_time)
    p = clamp_probability(logistic_probability(theta_arr, b, params))
    weight = asymmetric_weight(theta_arr, b)

    neg_log_likelihood = -(
        x * (1.0 + weight) * np.log(p)
        + (1 - x) * (1.0 - weight) * np.log(1.0 - p)
    )
    neg_log_prior = (
        PRIOR_PENALTY_COEFFICIENT * ((theta_arr - theta_prior) / sigma) ** 2
    )

    result: NDArray[np.float64] = neg_log_likelihood + neg_log_prior
    return result
