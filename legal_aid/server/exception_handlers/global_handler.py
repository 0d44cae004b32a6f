"""
Exception Handlers for FastAPI Application.

Every error leaves the API as ``{"success": false, "message": ...}`` with the
matching HTTP status:

- ``LegalAidError`` subclasses carry their own status and message.
- Request validation errors become 400 "Validation failed" with the field errors.
- ``HTTPException`` keeps its status and uses its detail as the message.
- A database uniqueness violation that slipped past the service checks
  becomes 409 "Resource already exists".
- Anything else is logged with full context and returned as a 500 with an
  error ID clients can quote when reporting the issue.
"""

import traceback

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from legal_aid.core.errors import Conflict, LegalAidError
from legal_aid.core.logging_config import get_logger
from legal_aid.core.monitoring import log_error

logger = get_logger(__name__)


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    content = {"success": False, "message": message}
    content.update({key: value for key, value in extra.items() if value is not None})
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


async def domain_exception_handler(request: Request, exc: LegalAidError) -> JSONResponse:
    """Map a business error to its status code."""
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return error_response(exc.status_code, exc.message, errors=exc.details)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"), "message": error.get("msg")}
        for error in exc.errors()
    ]
    logger.info(f"{request.method} {request.url.path} -> 400: validation failed ({len(errors)} error(s))")
    return error_response(400, "Validation failed", errors=errors)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Report a constraint violation raised at commit as a conflict."""
    logger.warning(f"{request.method} {request.url.path} -> 409: {exc.orig}")
    return error_response(Conflict.status_code, Conflict.default_message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message},
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context and returns a JSON response with an error ID
    that clients can use to reference the error when reporting issues.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc(),
        },
    )
    log_error(type(exc).__name__, str(exc), {"error_id": error_id, "path": request.url.path})

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Internal server error",
            "error_id": error_id,
            "error_type": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    This function should be called during application initialization to set up
    all custom exception handlers.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(LegalAidError, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
