"""Chat service answering one student question.

Runs the per-request pipeline in a fixed order:
- attempt limit check against the ledger
- question extraction and content guard
- completion gateway call
- ledger increment, only once an answer exists

Nothing is retried. A failure at any step leaves the ledger untouched.
"""

from __future__ import annotations

import logging
from typing import Any

from tutor_proxy.adapters.attempts.base import AbstractAttemptLedger
from tutor_proxy.adapters.llm.base import AbstractCompletionGateway
from tutor_proxy.core.errors import (
    AttemptLimitReachedError,
    EmptyQuestionError,
    ValidationAppError,
)
from tutor_proxy.core.logging import hash_identifier
from tutor_proxy.schemas.chat import ChatResponse
from tutor_proxy.services.content_guard import DEFAULT_MAX_WORDS, validate_question

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 30


class ChatService:
    """Service answering questions within a per-client attempt budget.

    Attributes:
        ledger: Store of answered-question counts per client.
        gateway: Adapter to the completion provider.
        max_attempts: Answered questions allowed per client.
        max_words: Word limit enforced by the content guard.
    """

    def __init__(
        self,
        ledger: AbstractAttemptLedger,
        gateway: AbstractCompletionGateway,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        max_words: int = DEFAULT_MAX_WORDS,
    ) -> None:
        self.ledger = ledger
        self.gateway = gateway
        self.max_attempts = max_attempts
        self.max_words = max_words

    def _check_allowance(self, client_id: str, client_hash: str) -> int:
        used = self.ledger.get(client_id)
        if used >= self.max_attempts:
            logger.warning(
                "chat.limit_reached",
                extra={"client_hash": client_hash, "used": used, "limit": self.max_attempts},
            )
            raise AttemptLimitReachedError(max_attempts=self.max_attempts)
        return used

    def _validate(self, raw_question: Any, client_hash: str) -> str:
        try:
            if not isinstance(raw_question, str) or not raw_question.strip():
                raise EmptyQuestionError()
            return validate_question(raw_question, max_words=self.max_words)
        except ValidationAppError as exc:
            logger.info(
                "chat.rejected",
                extra={"client_hash": client_hash, "error_code": exc.code},
            )
            raise

    async def ask(self, client_id: str, raw_question: Any) -> ChatResponse:
        """Answer ``raw_question`` for ``client_id``.

        The allowance check and the increment are separated by the upstream
        call, so concurrent requests from one client may overshoot the limit
        by the number of requests in flight.

        Args:
            client_id: Client Identifier resolved from the request origin.
            raw_question: The ``question`` field as received (may be anything).

        Returns:
            ChatResponse with the answer and the remaining allowance.

        Raises:
            AttemptLimitReachedError: The client already used its allowance.
            ValidationAppError: The question is blank, forbidden or too long.
            LLMAppError: The gateway is misconfigured or the provider failed.
        """
        client_hash = hash_identifier(client_id)

        self._check_allowance(client_id, client_hash)
        question = self._validate(raw_question, client_hash)

        answer = await self.gateway.complete(question)

        used = self.ledger.increment(client_id)
        remaining = self.max_attempts - used
        logger.info(
            "chat.answered",
            extra={"client_hash": client_hash, "used": used, "remaining": remaining},
        )
        return ChatResponse(answer=answer, remaining=remaining)
