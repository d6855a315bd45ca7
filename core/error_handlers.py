"""Error handlers for FastAPI application.

Every failure leaves the API as a single `{"error": "<message>"}` body.
Operator detail (exception `details`, tracebacks) goes to the log only.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from core.exceptions import AppException
from core.logger import get_logger

logger = get_logger("core.error_handlers")


def create_error_response(message: str, status_code: int = 500) -> JSONResponse:
    """Create the standard error response.

    Args:
        message: Human-readable error message.
        status_code: HTTP status code.

    Returns:
        JSONResponse with an `error` field.
    """
    return JSONResponse(status_code=status_code, content={"error": message})


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions.

    Args:
        request: FastAPI request object.
        exc: Application exception instance.

    Returns:
        JSONResponse with the exception's user-facing message.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "%s: %s %s [%s %s]",
        type(exc).__name__,
        exc.message,
        exc.details,
        request.method,
        request.url.path
    )
    return create_error_response(message=exc.message, status_code=exc.status_code)


def format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into `field: message` pairs."""
    parts = []
    for error in exc.errors():
        loc = [str(part) for part in error["loc"] if part != "body"]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {error['msg']}")
    return "Invalid input: " + "; ".join(parts)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors.

    Args:
        request: FastAPI request object.
        exc: Pydantic validation error.

    Returns:
        JSONResponse describing each invalid field.
    """
    message = format_validation_errors(exc)
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, message)
    return create_error_response(
        message=message,
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
    )


async def sqlalchemy_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Handle SQLAlchemy database errors.

    Args:
        request: FastAPI request object.
        exc: SQLAlchemy error.

    Returns:
        JSONResponse with a generic database error message.
    """
    logger.error(
        "Database error on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=True
    )

    # Don't expose internal database errors to clients
    return create_error_response(
        message="A database error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle all unhandled exceptions.

    Args:
        request: FastAPI request object.
        exc: Unhandled exception.

    Returns:
        JSONResponse with generic error message.
    """
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=True
    )

    return create_error_response(
        message="An internal server error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
