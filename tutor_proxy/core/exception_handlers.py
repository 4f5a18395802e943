"""Global exception handlers for consistent error responses.

Every error leaves the API as ``{"error": "<message>"}``:
- AppError subclasses: status chosen by error family (400, 429, 500)
- HTTPException (throttling, 404, 405): status and headers preserved
- Malformed request bodies: 400
- Unexpected Exception: generic 500 (safety net), logged with traceback
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tutor_proxy.core.errors import AppError, LLMAppError, QuotaAppError
from tutor_proxy.core.logging import get_request_id

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
INVALID_BODY_MESSAGE = "Invalid request body"


def _error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def status_code_for(exc: AppError) -> int:
    """Map a domain error to its HTTP status code.

    - QuotaAppError → 429 Too Many Requests (caller must wait/stop)
    - LLMAppError → 500 Internal Server Error (server or dependency fault)
    - anything else (ValidationAppError) → 400 Bad Request (client fault)
    """
    if isinstance(exc, QuotaAppError):
        return 429
    if isinstance(exc, LLMAppError):
        return 500
    return 400


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors.

    Only ``exc.message`` reaches the client; ``code`` and ``details`` go to
    the logs.
    """
    status_code = status_code_for(exc)

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "status_code": status_code,
            "details": exc.details or {},
            "request_path": request.url.path,
            "request_id": get_request_id(),
        },
    )

    return _error_response(status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors in the same ``{"error": ...}`` shape."""
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(
        "request_validation_failed",
        extra={
            "request_path": request.url.path,
            "error_count": len(exc.errors()),
        },
    )
    return _error_response(400, INVALID_BODY_MESSAGE)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net).

    Logs the exception with traceback while returning a generic message, so
    no implementation detail reaches the client.
    """
    logger.error(
        "unhandled_exception",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "request_path": request.url.path,
            "request_method": request.method,
            "request_id": get_request_id(),
        },
    )

    return _error_response(500, INTERNAL_ERROR_MESSAGE)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Example:
        >>> from fastapi import FastAPI
        >>> from tutor_proxy.core.exception_handlers import setup_exception_handlers
        >>> app = FastAPI()
        >>> setup_exception_handlers(app)
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(StarletteHTTPException)(http_exception_handler)
    app.exception_handler(RequestValidationError)(request_validation_handler)
    app.exception_handler(Exception)(general_exception_handler)
