"""Pydantic schemas for the chat and health endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Body of ``POST /api/chat``.

    ``question`` is typed loosely on purpose: a missing, non-string or blank
    value is answered with the same "Empty question" error instead of a
    schema validation failure.
    """

    question: Any = Field(
        default=None,
        description="The student's question about the tutor topic.",
        examples=["What is the role of mass media in society?"],
    )


class ChatResponse(BaseModel):
    answer: str = Field(..., description="The tutor's answer, trimmed.")
    remaining: int = Field(
        ...,
        description=(
            "Questions this client can still ask before hitting the limit. "
            "Goes negative when concurrent requests overshoot the limit."
        ),
    )


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human-readable error message.")


class HealthResponse(BaseModel):
    ok: bool = True
