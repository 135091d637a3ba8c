"""Exception handlers mapping errors onto the API's JSON envelope.

Every error body has the shape
``{"error": {"message": ..., "status_code": ..., "details": ...}}``;
``details`` is left out when empty.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from core.exceptions import AppException
from core.logger import get_logger

logger = get_logger("core.error_handlers")


def create_error_response(message: str, status_code: int = 500, details: dict = None) -> JSONResponse:
    """Wrap `message` (and optional `details`) in the error envelope."""
    error = {"message": message, "status_code": status_code}
    if details:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error})


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """AppException subclasses carry their own status; 5xx logs as error, the rest as warning."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return create_error_response(exc.message, exc.status_code, exc.details)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Bad bodies, query strings or path params become a 400 listing each field."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning("%s %s -> 400: %s", request.method, request.url.path, errors)
    return create_error_response(
        "Validation error",
        status.HTTP_400_BAD_REQUEST,
        {"validation_errors": errors},
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return create_error_response(
        "A database error occurred",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {"type": "database_error"},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return create_error_response(
        "An internal server error occurred",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {"type": "internal_error"},
    )


def register_exception_handlers(app):
    """Install the handlers above on `app`, most specific first."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
    logger.info("Exception handlers registered")
