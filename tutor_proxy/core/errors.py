"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses. The ``message`` of
every error is the exact text returned to clients, so it must never carry
upstream payloads or internals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability.

    Details are logged, never serialized into client responses.
    """

    hint: str
    max_value: int
    actual_value: int
    http_status: int
    model: str
    pattern: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message (safe to show to clients).
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when client input or configuration validation fails."""


class QuotaAppError(AppError):
    """Raised when a client has used up its allowance."""


class LLMAppError(AppError):
    """Raised when completion provider/client operations fail."""


# Question validation

class EmptyQuestionError(ValidationAppError):
    def __init__(self) -> None:
        super().__init__(code="empty_question", message="Empty question")


class ForbiddenContentError(ValidationAppError):
    def __init__(self, pattern: str) -> None:
        super().__init__(
            code="forbidden_content",
            message="Questions asking for solutions/translations are not allowed.",
            details={"pattern": pattern},
        )


class QuestionTooLongError(ValidationAppError):
    def __init__(self, max_words: int, actual_words: int) -> None:
        super().__init__(
            code="question_too_long",
            message=f"Question too long (max {max_words} words).",
            details={"max_value": max_words, "actual_value": actual_words},
        )


# Quota

class AttemptLimitReachedError(QuotaAppError):
    def __init__(self, max_attempts: int) -> None:
        super().__init__(
            code="attempt_limit_reached",
            message="Limit of questions reached for this session.",
            details={"max_value": max_attempts},
        )


# Completion gateway

class MisconfiguredGatewayError(LLMAppError):
    def __init__(self) -> None:
        super().__init__(
            code="llm_missing_api_key",
            message="Server misconfigured: missing OPENAI_API_KEY",
            details={"hint": "Set the OPENAI_API_KEY environment variable"},
        )


class UpstreamError(LLMAppError):
    def __init__(self, http_status: int, model: str) -> None:
        super().__init__(
            code="llm_upstream_error",
            message="AI service error",
            details={"http_status": http_status, "model": model},
        )


class EmptyUpstreamAnswerError(LLMAppError):
    def __init__(self, model: str) -> None:
        super().__init__(
            code="llm_empty_answer",
            message="No answer from AI",
            details={"model": model},
        )
