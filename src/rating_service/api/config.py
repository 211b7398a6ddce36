from pydantic_settings import BaseSettings

from rating_service.rating.config import (
    DEFAULT_INITIAL_PRIOR,
    DEFAULT_LOWER_BOUND,
    DEFAULT_SIGMA,
    DEFAULT_STEP,
    DEFAULT_UPPER_BOUND,
)

RATINGS_ENV_PREFIX = "RATINGS_"


class ApiSettings(BaseSettings):
    model_config = {"env_prefix": RATINGS_ENV_PREFIX}

    host: str = "127.0.0.1"
    port: int = 8000
    max_observations: int = 10000

    # Defaults applied when a request does not override them
    initial_prior: float = DEFAULT_INITIAL_PRIOR
    sigma: float = DEFAULT_SIGMA
    lower_bound: float = DEFAULT_LOWER_BOUND
    upper_bound: float = DEFAULT_UPPER_BOUND
    step: float = DEFAULT_STEP
