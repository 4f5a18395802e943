"""OpenAI chat-completions gateway."""

from __future__ import annotations

import logging
from typing import Any

from openai import APIStatusError, AsyncOpenAI

from tutor_proxy.adapters.llm.base import AbstractCompletionGateway
from tutor_proxy.adapters.llm.prompts import PROMPT_VERSION, build_messages
from tutor_proxy.core.errors import (
    EmptyUpstreamAnswerError,
    MisconfiguredGatewayError,
    UpstreamError,
)

logger = logging.getLogger(__name__)


class OpenAICompletionGateway(AbstractCompletionGateway):
    """Gateway calling OpenAI chat completions with fixed parameters.

    Uses the official OpenAI Python SDK with async support. The SDK client is
    only built once a credential is known to exist, so a missing key never
    leads to a network call.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str,
        *,
        topic: str,
        base_url: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 160,
        timeout_seconds: float = 45.0,
        max_retries: int = 0,
    ) -> None:
        """Store configuration; the SDK client is created on first use.

        Args:
            api_key: Bearer credential, or None when not configured.
            model: Model name (e.g., "gpt-4o-mini").
            topic: Subject the tutor is restricted to.
            base_url: Optional custom base URL for an OpenAI-compatible API.
            temperature: Sampling temperature.
            max_tokens: Cap on answer length.
            timeout_seconds: Transport timeout in seconds.
            max_retries: SDK-level retries (0 disables them).
        """
        self._api_key = api_key
        self._base_url = base_url
        self._timeout_seconds = timeout_seconds
        self._max_retries = max_retries
        self._client: AsyncOpenAI | None = None
        self.model = model
        self.topic = topic
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    @property
    def client(self) -> AsyncOpenAI:
        """Lazily built SDK client.

        Raises:
            MisconfiguredGatewayError: If no API key is configured.
        """
        if not self._api_key:
            raise MisconfiguredGatewayError()
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout_seconds,
                max_retries=self._max_retries,
            )
        return self._client

    def _build_request(self, question: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": list(build_messages(question, topic=self.topic)),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    @staticmethod
    def _extract_answer(response: Any) -> str | None:
        choices = getattr(response, "choices", None) or []
        if not choices:
            return None
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            return None
        return content.strip() or None

    async def complete(self, question: str) -> str:
        """Send the tutor instruction plus ``question`` and return the answer.

        Connection failures and timeouts are not translated: they surface as
        unexpected errors to the caller.
        """
        if not self.is_configured:
            logger.error(
                "llm.missing_api_key",
                extra={"model": self.model},
            )
            raise MisconfiguredGatewayError()

        request_params = self._build_request(question)

        try:
            response = await self.client.chat.completions.create(**request_params)
        except APIStatusError as exc:
            logger.error(
                "llm.upstream_error",
                extra={
                    "model": self.model,
                    "upstream_status": exc.status_code,
                    "upstream_body": exc.body,
                },
            )
            raise UpstreamError(http_status=exc.status_code, model=self.model) from exc

        answer = self._extract_answer(response)
        if answer is None:
            logger.warning(
                "llm.empty_answer",
                extra={"model": self.model, "prompt_version": PROMPT_VERSION},
            )
            raise EmptyUpstreamAnswerError(model=self.model)

        logger.info(
            "llm.completed",
            extra={
                "model": self.model,
                "prompt_version": PROMPT_VERSION,
                "answer_chars": len(answer),
            },
        )
        return answer
