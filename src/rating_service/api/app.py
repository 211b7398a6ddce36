import uuid
from collections.abc import Awaitable, Callable
from typing import cast

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.types import ExceptionHandler

from rating_service.api.config import ApiSettings
from rating_service.api.dependencies import get_settings
from rating_service.api.errors import (
    DataSizeExceededError,
    InvalidConfigError,
    data_size_exceeded_handler,
    invalid_config_handler,
    invalid_observation_handler,
    rating_step_error_handler,
    unhandled_exception_handler,
    validation_error_handler,
)
from rating_service.api.routes import router
from rating_service.core.exceptions import (
    InvalidObservationError,
    RatingStepError,
)


def create_app(settings: ApiSettings | None = None) -> FastAPI:
    if settings is None:
        settings = get_settings()

    app = FastAPI(title="Ratings Tracker API")
    app.state.settings = settings

    # Exception handlers — cast needed because FastAPI expects
    # (Request, Exception) but our handlers use specific exc types.
    _eh = cast(ExceptionHandler, data_size_exceeded_handler)
    app.add_exception_handler(DataSizeExceededError, _eh)
    _eh = cast(ExceptionHandler, invalid_config_handler)
    app.add_exception_handler(InvalidConfigError, _eh)
    _eh = cast(ExceptionHandler, invalid_observation_handler)
    app.add_exception_handler(InvalidObservationError, _eh)
    _eh = cast(ExceptionHandler, rating_step_error_handler)
    app.add_exception_handler(RatingStepError, _eh)
    _eh = cast(ExceptionHandler, validation_error_handler)
    app.add_exception_handler(RequestValidationError, _eh)
    app.add_exception_handler(ValidationError, _eh)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Request-ID middleware
    @app.middleware("http")
    async def request_id_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID", uuid.uuid4().hex[:12])
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(router)

    return app
