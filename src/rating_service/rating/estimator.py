"""
Grid-search rating estimator.

A single rating update minimises the negative log-posterior over an
enumerated set of candidate ratings. All candidates are evaluated at once
and reduced with an argmin, so the search has no hidden iteration state.

Tie rules:
    - The prior itself is scored first and is kept unless some grid
      candidate has a strictly lower loss.
    - Among grid candidates with equal loss, the first (smallest) wins.
"""

from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray

from rating_service.core.data_models import Observation
from rating_service.rating.config import RatingConfig
from rating_service.rating.loss import neg_log_posterior

Objective = Callable[[NDArray[np.float64]], NDArray[np.float64]]

# Absorbs float error in (upper - lower) / step
_GRID_TOLERANCE = 1e-9


def build_grid(
    lower_bound: float, upper_bound: float, step: float
) -> NDArray[np.float64]:
    """
    Candidate ratings lower_bound, lower_bound + step, ... <= upper_bound.

    Candidates are computed as lower_bound + i * step rather than by
    repeated addition, so rounding error does not accumulate.

    Returns:
        Array of shape (n_points,); 1001 points for the default [0, 100]
        grid with step 0.1.
    """
    if step <= 0:
        raise ValueError(f"step must be > 0, got {step}")
    if upper_bound < lower_bound:
        raise ValueError(
            f"upper_bound ({upper_bound}) < lower_bound ({lower_bound})"
        )
    n_steps = int(
        np.floor((upper_bound - lower_bound) / step + _GRID_TOLERANCE)
    )
    grid = lower_bound + step * np.arange(n_steps + 1, dtype=np.float64)
    result: NDArray[np.float64] = np.minimum(grid, upper_bound)
    return result


def minimize_on_grid(
    objective: Objective,
    seed: float,
    grid: NDArray[np.float64],
) -> float:
    """
    Return the minimiser of objective over {seed} ∪ grid.

    Args:
        objective: Vectorised loss, maps an array of candidates to an
            array of losses of the same shape.
        seed: Candidate scored first. Returned unless a grid point has a
            strictly lower loss.
        grid: Candidates scanned after the seed, in order.

    Returns:
        The winning candidate. NaN losses never win.
    """
    seed_loss = float(objective(np.array([seed], dtype=np.float64))[0])
    if grid.size == 0:
        return seed

    losses = objective(grid)
    # NaN never compares lower than anything
    losses = np.where(np.isnan(losses), np.inf, losses)
    best_ix = int(np.argmin(losses))
    best_loss = float(losses[best_ix])

    if best_loss < seed_loss:
        return float(grid[best_ix])
    return seed


def update_rating(
    theta_prior: float,
    observation: Observation,
    config: RatingConfig,
    grid: NDArray[np.float64] | None = None,
) -> float:
    """
    One Bayesian-style rating update.

    Args:
        theta_prior: Rating before the observation.
        observation: The attempt to incorporate.
        config: Run configuration (sigma and grid settings).
        grid: Precomputed candidate grid. Built from config if None.

    Returns:
        The rating minimising the negative log-posterior.

    Raises:
        ModelDomainError: If the item parameters are undefined.
    """
    if grid is None:
        grid = build_grid(config.lower_bound, config.upper_bound, config.step)

    def objective(theta: NDArray[np.float64]) -> NDArray[np.float64]:
        return neg_log_posterior(theta, observation, theta_prior, config.sigma)

    return minimize_on_grid(objective, theta_prior, grid)
