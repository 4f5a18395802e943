"""HTTP middleware for request ID propagation and access logging.

Every request/response pair carries a correlation ID:
- Accepts the incoming X-Request-ID header (configurable) or generates a UUID
- Stores request_id in contextvars so every log line of the request has it
- Echoes request_id and total duration in the response headers
- Emits one ``http.request`` access log line per request
- Renders unexpected exceptions as the generic 500 while the id is still bound

Usage:
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request, Response

from tutor_proxy.core.config import settings
from tutor_proxy.core.exception_handlers import general_exception_handler
from tutor_proxy.core.logging import clear_request_id, set_request_id

logger = logging.getLogger(__name__)


async def request_id_middleware(request: Request, call_next) -> Response:
    """Bind a correlation id to the request and time it.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: The downstream response with ``X-Request-ID`` and
            ``X-Request-Duration-ms`` headers added.
    """

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        try:
            response: Response = await call_next(request)
        except Exception as exc:
            # Unhandled errors become the generic 500 inside the request scope
            response = await general_exception_handler(request, exc)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "http.request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
    finally:
        clear_request_id()

    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response
