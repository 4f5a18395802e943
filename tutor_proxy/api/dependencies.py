"""FastAPI dependency providers for the chat pipeline.

The ledger and the gateway are process-wide singletons created on first
use. Tests and alternative deployments swap them through
``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from tutor_proxy.adapters.attempts.base import AbstractAttemptLedger
from tutor_proxy.adapters.attempts.in_memory import InMemoryAttemptLedger
from tutor_proxy.adapters.llm.base import AbstractCompletionGateway
from tutor_proxy.adapters.llm.factory import create_completion_gateway
from tutor_proxy.core.client_identity import resolve_client_id
from tutor_proxy.core.config import settings
from tutor_proxy.services.chat_service import ChatService

_ledger: AbstractAttemptLedger | None = None
_gateway: AbstractCompletionGateway | None = None


def get_attempt_ledger() -> AbstractAttemptLedger:
    global _ledger
    if _ledger is None:
        _ledger = InMemoryAttemptLedger()
    return _ledger


def get_completion_gateway() -> AbstractCompletionGateway:
    global _gateway
    if _gateway is None:
        _gateway = create_completion_gateway()
    return _gateway


def get_client_id(request: Request) -> str:
    return resolve_client_id(request)


def get_chat_service(
    ledger: Annotated[AbstractAttemptLedger, Depends(get_attempt_ledger)],
    gateway: Annotated[AbstractCompletionGateway, Depends(get_completion_gateway)],
) -> ChatService:
    return ChatService(
        ledger,
        gateway,
        max_attempts=settings.app.max_attempts_per_client,
        max_words=settings.app.max_question_words,
    )
