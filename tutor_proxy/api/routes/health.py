from __future__ import annotations

from fastapi import APIRouter

from tutor_proxy.schemas.chat import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Liveness probe.

    Not rate limited and touches no state, so load balancers can poll it
    freely.
    """

    return HealthResponse(ok=True)
