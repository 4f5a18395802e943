"""Factory pattern for creating completion gateway instances."""

from tutor_proxy.adapters.llm.base import AbstractCompletionGateway
from tutor_proxy.adapters.llm.openai_client import OpenAICompletionGateway
from tutor_proxy.core.config import settings
from tutor_proxy.core.errors import ValidationAppError


def create_completion_gateway() -> AbstractCompletionGateway:
    """Instantiate the completion gateway for the configured provider.

    Reads configuration from tutor_proxy.core.config.settings. A missing API
    key is not an error here; the gateway reports it on each request.

    Returns:
        AbstractCompletionGateway: Configured gateway instance.

    Raises:
        ValidationAppError: If the provider is not supported.
    """
    provider = settings.llm.provider.lower()

    if provider == "openai":
        return OpenAICompletionGateway(
            api_key=settings.llm.api_key,
            model=settings.llm.model,
            topic=settings.app.topic,
            base_url=settings.llm.base_url,
            temperature=settings.llm.temperature,
            max_tokens=settings.llm.max_tokens,
            timeout_seconds=settings.llm.timeout_seconds,
            max_retries=settings.llm.max_retries,
        )

    raise ValidationAppError(
        code="llm_unknown_provider",
        message=(
            f"Unknown LLM provider: '{provider}'. Supported providers: openai"
        ),
    )
