from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from tutor_proxy.api.dependencies import get_chat_service, get_client_id
from tutor_proxy.core.rate_limit import enforce_rate_limit
from tutor_proxy.schemas.chat import ChatRequest, ChatResponse, ErrorResponse
from tutor_proxy.services.chat_service import ChatService

router = APIRouter(tags=["Chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": ChatRequest.model_json_schema()}},
        },
    },
    dependencies=[Depends(enforce_rate_limit)],
    responses={
        400: {"model": ErrorResponse, "description": "Empty, forbidden or too long question"},
        429: {"model": ErrorResponse, "description": "Rate limit or question limit reached"},
        500: {"model": ErrorResponse, "description": "Misconfiguration or AI service failure"},
    },
)
async def ask_tutor(
    service: Annotated[ChatService, Depends(get_chat_service)],
    client_id: Annotated[str, Depends(get_client_id)],
    payload: Annotated[Any, Body()] = None,
) -> ChatResponse:
    """Ask the tutor a question about the configured topic.

    Errors are raised as domain exceptions and rendered by the global
    exception handlers. Only a JSON object can carry a question; arrays,
    scalars and non-JSON bodies are answered as an empty question.
    """
    question = ChatRequest.model_validate(payload).question if isinstance(payload, dict) else None
    return await service.ask(client_id, question)
