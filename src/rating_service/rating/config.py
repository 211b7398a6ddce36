"""
Configuration for sequential rating estimation.

Settings are fixed for a whole run; nothing here varies per observation.
"""

from dataclasses import dataclass

DEFAULT_INITIAL_PRIOR = 25.0
DEFAULT_SIGMA = 2.0

# Candidate grid: [0, 100] inclusive in steps of 0.1 -> 1001 points
DEFAULT_LOWER_BOUND = 0.0
DEFAULT_UPPER_BOUND = 100.0
DEFAULT_STEP = 0.1


@dataclass(frozen=True)
class RatingConfig:
    """
    Settings for one tracking run.

    Attributes:
        initial_prior: Rating assumed before the first observation.
        sigma: Spread of the Gaussian prior penalty around the previous
            rating. Smaller values make each step move less.
        lower_bound: Smallest candidate rating on the search grid.
        upper_bound: Largest candidate rating on the search grid.
        step: Spacing between grid candidates.
    """

    initial_prior: float = DEFAULT_INITIAL_PRIOR
    sigma: float = DEFAULT_SIGMA
    lower_bound: float = DEFAULT_LOWER_BOUND
    upper_bound: float = DEFAULT_UPPER_BOUND
    step: float = DEFAULT_STEP

    def __post_init__(self) -> None:
        if not self.sigma > 0:
            raise ValueError(f"sigma must be > 0, got {self.sigma}")
        if not self.step > 0:
            raise ValueError(f"step must be > 0, got {self.step}")
        if not self.lower_bound < self.upper_bound:
            raise ValueError(
                f"lower_bound ({self.lower_bound}) must be < "
                f"upper_bound ({self.upper_bound})"
            )


def default_config() -> RatingConfig:
    """Create a default rating configuration."""
    return RatingConfig()
