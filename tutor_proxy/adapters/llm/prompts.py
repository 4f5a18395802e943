"""System instruction and Chat Exchange construction for the tutor."""

from __future__ import annotations

from typing import Literal, TypedDict

TUTOR_PERSONA = "Tutor"

# Bump when the instruction text changes so logs can tell prompt revisions apart
PROMPT_VERSION = "v1"


class ChatMessage(TypedDict):
    role: Literal["system", "user"]
    content: str


ChatExchange = tuple[ChatMessage, ChatMessage]


def build_system_prompt(topic: str) -> str:
    """Instruction that pins the model to ``topic`` and to short answers."""
    return f"""
You are a helpful English teacher named "{TUTOR_PERSONA}" who only answers questions about the topic "{topic}".
Answer briefly and simply in English. DO NOT solve assigned exercises or provide answers to tests. DO NOT provide translations of student's texts. If the question is outside "{topic}", politely say you can only answer questions about "{topic}". Keep answers concise (one short paragraph).
""".strip()


def build_messages(question: str, *, topic: str) -> ChatExchange:
    """Build the (system, user) pair sent upstream for one question."""
    return (
        {"role": "system", "content": build_system_prompt(topic)},
        {"role": "user", "content": question},
    )
