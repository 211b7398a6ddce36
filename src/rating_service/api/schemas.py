from pydantic import BaseModel, Field

from rating_service.api.config import ApiSettings
from rating_service.core.data_models import (
    Observation,
    RatingTrace,
    TracePoint,
)
from rating_service.rating.config import RatingConfig

# --- Request schemas ---


class ObservationSchema(BaseModel):
    x: int = Field(ge=0, le=1, description="1 if correct, 0 otherwise")
    b: float = Field(allow_inf_nan=False, description="Item difficulty")
    T: float = Field(ge=0, allow_inf_nan=False, description="Response time")

    def to_domain(self) -> Observation:
        return Observation(
            correct=self.x, difficulty=self.b, response_time=self.T
        )


class RatingConfigSchema(BaseModel):
    initial_prior: float | None = Field(default=None, allow_inf_nan=False)
    sigma: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    lower_bound: float | None = Field(default=None, allow_inf_nan=False)
    upper_bound: float | None = Field(default=None, allow_inf_nan=False)
    step: float | None = Field(default=None, gt=0, allow_inf_nan=False)

    def to_domain(self, settings: ApiSettings) -> RatingConfig:
        """Merge request overrides onto the server defaults."""

        def pick(value: float | None, default: float) -> float:
            return default if value is None else value

        return RatingConfig(
            initial_prior=pick(self.initial_prior, settings.initial_prior),
            sigma=pick(self.sigma, settings.sigma),
            lower_bound=pick(self.lower_bound, settings.lower_bound),
            upper_bound=pick(self.upper_bound, settings.upper_bound),
            step=pick(self.step, settings.step),
        )


class RatingRequest(BaseModel):
    observations: list[ObservationSchema]
    config: RatingConfigSchema | None = None


# --- Response schemas ---


class RatingPointSchema(BaseModel):
    index: int
    x: int
    b: float
    T: float
    prior: float
    rating: float

    @classmethod
    def from_domain(cls, point: TracePoint) -> "RatingPointSchema":
        return cls(
            index=point.index,
            x=point.observation.correct,
            b=point.observation.difficulty,
            T=point.observation.response_time,
            prior=point.prior,
            rating=point.rating,
        )


def trace_to_schema(trace: RatingTrace) -> list[RatingPointSchema]:
    return [RatingPointSchema.from_domain(p) for p in trace]


class RatingResponse(BaseModel):
    ratings: list[RatingPointSchema]
    final_rating: float | None
    model_version: str


class ErrorDetail(BaseModel):
    code: str
    message: str
    request_id: str | None = None


class RatingStepErrorDetail(ErrorDetail):
    index: int
    prior: float
    partial_ratings: list[RatingPointSchema]


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
