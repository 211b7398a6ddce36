from fastapi import APIRouter, Depends

from rating_service.api.config import ApiSettings
from rating_service.api.dependencies import get_app_settings, get_version
from rating_service.api.errors import (
    DataSizeExceededError,
    InvalidConfigError,
)
from rating_service.api.schemas import (
    HealthResponse,
    RatingConfigSchema,
    RatingRequest,
    RatingResponse,
    trace_to_schema,
)
from rating_service.rating.config import RatingConfig
from rating_service.rating.tracker import track_ratings

router = APIRouter(prefix="/api/v1")


def _build_config(
    request: RatingRequest, settings: ApiSettings
) -> RatingConfig:
    schema = request.config or RatingConfigSchema()
    try:
        return schema.to_domain(settings)
    except ValueError as e:
        raise InvalidConfigError(str(e)) from e


@router.post("/ratings")
def compute_ratings(
    request: RatingRequest,
    settings: ApiSettings = Depends(get_app_settings),
    version: str = Depends(get_version),
) -> RatingResponse:
    n_observations = len(request.observations)
    if n_observations > settings.max_observations:
        raise DataSizeExceededError(
            f"n_observations={n_observations} exceeds "
            f"max={settings.max_observations}"
        )

    config = _build_config(request, settings)
    observations = [o.to_domain() for o in request.observations]
    trace = track_ratings(observations, config)

    return RatingResponse(
        ratings=trace_to_schema(trace),
        final_rating=trace.final_rating,
        model_version=version,
    )


@router.get("/health")
async def health_check(
    version: str = Depends(get_version),
) -> HealthResponse:
    return HealthResponse(version=version)
