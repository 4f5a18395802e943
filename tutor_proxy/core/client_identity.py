"""Resolution of the Client Identifier used for throttling and quotas.

The identifier is whatever the transport tells us about the caller. It is
not authenticated and can be spoofed when X-Forwarded-For is trusted.
"""

from __future__ import annotations

from fastapi import Request

from tutor_proxy.core.config import settings

UNKNOWN_CLIENT = "unknown"


def _first_forwarded_hop(request: Request) -> str | None:
    forwarded_for = request.headers.get("x-forwarded-for")
    if not forwarded_for:
        return None
    first_hop = forwarded_for.split(",")[0].strip()
    return first_hop or None


def resolve_client_id(request: Request) -> str:
    """Return the identifier for the caller of ``request``.

    Uses the socket peer address, then the first ``X-Forwarded-For`` hop.
    With ``APP_TRUST_FORWARDED_FOR`` enabled the header wins, which is what
    you want behind a reverse proxy.
    """

    peer = request.client.host if request.client else None
    forwarded = _first_forwarded_hop(request)

    if settings.app.trust_forwarded_for and forwarded:
        return forwarded
    return peer or forwarded or UNKNOWN_CLIENT
