import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from rating_service.api.schemas import (
    ErrorDetail,
    RatingStepErrorDetail,
    trace_to_schema,
)
from rating_service.core.exceptions import (
    InvalidObservationError,
    RatingStepError,
)

logger = logging.getLogger(__name__)


class DataSizeExceededError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidConfigError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def _get_request_id(request: Request) -> str | None:
    if hasattr(request.state, "request_id"):
        result: str = request.state.request_id
        return result
    return None


async def data_size_exceeded_handler(
    request: Request, exc: DataSizeExceededError
) -> JSONResponse:
    detail = ErrorDetail(
        code="DATA_SIZE_EXCEEDED",
        message=exc.message,
        request_id=_get_request_id(request),
    )
    return JSONResponse(status_code=422, content=detail.model_dump())


async def invalid_config_handler(
    request: Request, exc: InvalidConfigError
) -> JSONResponse:
    detail = ErrorDetail(
        code="INVALID_CONFIG",
        message=exc.message,
        request_id=_get_request_id(request),
    )
    return JSONResponse(status_code=422, content=detail.model_dump())


async def invalid_observation_handler(
    request: Request, exc: InvalidObservationError
) -> JSONResponse:
    detail = ErrorDetail(
        code="INVALID_OBSERVATION",
        message=str(exc),
        request_id=_get_request_id(request),
    )
    return JSONResponse(status_code=422, content=detail.model_dump())


async def rating_step_error_handler(
    request: Request, exc: RatingStepError
) -> JSONResponse:
    logger.warning(f"Rating aborted: {exc}")
    detail = RatingStepErrorDetail(
        code="MODEL_DOMAIN_ERROR",
        message=str(exc),
        request_id=_get_request_id(request),
        index=exc.index,
        prior=exc.prior,
        partial_ratings=trace_to_schema(exc.partial_trace),
    )
    return JSONResponse(status_code=422, content=detail.model_dump())


async def validation_error_handler(
    request: Request, exc: ValidationError | RequestValidationError
) -> JSONResponse:
    detail = ErrorDetail(
        code="VALIDATION_ERROR",
        message=str(exc),
        request_id=_get_request_id(request),
    )
    return JSONResponse(status_code=422, content=detail.model_dump())


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    logger.exception("Unhandled exception")
    detail = ErrorDetail(
        code="INTERNAL_ERROR",
        message="Internal server error",
        request_id=_get_request_id(request),
    )
    return JSONResponse(status_code=500, content=detail.model_dump())
