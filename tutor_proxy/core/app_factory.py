"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests can build fresh instances.
"""

from __future__ import annotations

from fastapi import FastAPI

from tutor_proxy.api.dependencies import get_completion_gateway
from tutor_proxy.api.routes import chat_router, health_router
from tutor_proxy.core.config import settings
from tutor_proxy.core.exception_handlers import setup_exception_handlers
from tutor_proxy.core.logging import configure_logging
from tutor_proxy.core.middleware import request_id_middleware

API_PREFIX = "/api"

OPENAPI_TAGS = [
    {
        "name": "Chat",
        "description": "Ask the topic-restricted tutor a question.",
    },
    {
        "name": "Health",
        "description": "Liveness checks.",
    },
]


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Tutor Proxy",
        description=(
            "Relay that forwards student questions to an OpenAI-compatible "
            f"chat model restricted to the topic \"{settings.app.topic}\". "
            "Applies per-address throttling, a per-client question limit and "
            "a content filter for solution/translation requests."
        ),
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )

    # Fail at startup on an unsupported provider rather than per request
    get_completion_gateway()

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(chat_router, prefix=API_PREFIX)
    app.include_router(health_router, prefix=API_PREFIX)

    return app
