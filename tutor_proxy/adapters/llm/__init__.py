"""Completion gateway layer - abstracts over the chat-completion provider."""

from tutor_proxy.adapters.llm.base import AbstractCompletionGateway
from tutor_proxy.adapters.llm.factory import create_completion_gateway
from tutor_proxy.adapters.llm.openai_client import OpenAICompletionGateway

__all__ = [
    "AbstractCompletionGateway",
    "OpenAICompletionGateway",
    "create_completion_gateway",
]
