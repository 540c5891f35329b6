"""
Error handling for HTTP endpoints.

Every AppException is rendered as ``{"error": "<message>"}`` with the
status code the exception carries, so clients (including the bundled
SDK) can map responses back onto the same exception taxonomy.
"""

from functools import wraps
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from socialnet.exceptions import AppException, InfrastructureError
from socialnet.logging import logger
from socialnet.utils.metrics import app_errors_total


def handle_http_errors(func: Callable) -> Callable:
    """
    Decorator for HTTP endpoints that converts stray SQLAlchemy errors.

    Store failures that escape repositories are re-raised as
    InfrastructureError so they render like every other application error.

    Example:
        ```python
        @router.post("/posts")
        @handle_http_errors
        async def create_post(data: CreatePostInput, ...) -> PostData:
            return await CreatePostCommand(repo).execute(user, data)
        ```
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except AppException as ex:
            logger.warning(
                f"AppException in {func.__name__}: {ex.message}",
                extra={"exception_type": type(ex).__name__},
            )
            app_errors_total.labels(
                error_type=type(ex).__name__, handler=func.__name__
            ).inc()
            raise
        except SQLAlchemyError as ex:
            logger.error(
                f"Database error in {func.__name__}: {ex}",
                exc_info=True,
            )
            app_errors_total.labels(
                error_type="SQLAlchemyError", handler=func.__name__
            ).inc()
            raise InfrastructureError("Database error occurred") from ex

    return wrapper


async def app_exception_handler(
    request: Request, exc: AppException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status, content={"error": exc.message}
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render pydantic/query validation failures as 400 errors."""
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    logger.debug(f"Request validation failed on {request.url.path}: {errors}")
    return JSONResponse(status_code=400, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
