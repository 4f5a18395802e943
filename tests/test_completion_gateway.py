"""Tests for the completion gateway adapter and its factory."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from openai import APIConnectionError, APIStatusError

from tutor_proxy.adapters.llm import OpenAICompletionGateway, create_completion_gateway
from tutor_proxy.adapters.llm.prompts import build_messages, build_system_prompt
from tutor_proxy.core.config import LLMSettings, settings
from tutor_proxy.core.errors import (
    EmptyUpstreamAnswerError,
    MisconfiguredGatewayError,
    UpstreamError,
    ValidationAppError,
)

COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"


def _completion(content: str | None) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    return response


def _gateway(api_key: str | None = "test-key") -> OpenAICompletionGateway:
    return OpenAICompletionGateway(api_key=api_key, model="gpt-4o-mini", topic="Mass Media")


class TestPrompts:
    def test_system_prompt_pins_topic_and_persona(self) -> None:
        prompt = build_system_prompt("Mass Media")

        assert 'named "Tutor"' in prompt
        assert 'only answers questions about the topic "Mass Media"' in prompt
        assert "DO NOT provide translations" in prompt
        assert "one short paragraph" in prompt

    def test_messages_are_system_then_user(self) -> None:
        messages = build_messages("What is a tabloid?", topic="Mass Media")

        assert isinstance(messages, tuple)
        assert [m["role"] for m in messages] == ["system", "user"]
        assert messages[1]["content"] == "What is a tabloid?"


class TestOpenAICompletionGateway:
    """OpenAI gateway with the SDK call mocked out."""

    @pytest.mark.asyncio
    async def test_complete_returns_trimmed_answer(self) -> None:
        gateway = _gateway()

        with patch.object(
            gateway.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=_completion("  Mass media informs and shapes public opinion.\n"),
        ):
            answer = await gateway.complete("What is the role of mass media in society?")

        assert answer == "Mass media informs and shapes public opinion."

    @pytest.mark.asyncio
    async def test_complete_sends_fixed_parameters(self) -> None:
        gateway = _gateway()

        with patch.object(
            gateway.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=_completion("ok"),
        ) as mock_create:
            await gateway.complete("What is news?")

        call_kwargs = mock_create.call_args.kwargs
        assert call_kwargs["model"] == "gpt-4o-mini"
        assert call_kwargs["temperature"] == 0.2
        assert call_kwargs["max_tokens"] == 160
        assert call_kwargs["messages"][0]["role"] == "system"
        assert call_kwargs["messages"][1] == {"role": "user", "content": "What is news?"}

    @pytest.mark.asyncio
    async def test_missing_api_key_fails_before_any_call(self) -> None:
        gateway = _gateway(api_key=None)

        with patch("tutor_proxy.adapters.llm.openai_client.AsyncOpenAI") as sdk:
            with pytest.raises(MisconfiguredGatewayError) as exc:
                await gateway.complete("What is news?")

        sdk.assert_not_called()
        assert exc.value.message == "Server misconfigured: missing OPENAI_API_KEY"

    @pytest.mark.asyncio
    async def test_upstream_status_error_is_not_leaked(self) -> None:
        gateway = _gateway()
        upstream = APIStatusError(
            "Error code: 401",
            response=httpx.Response(401, request=httpx.Request("POST", COMPLETIONS_URL)),
            body={"error": {"message": "Incorrect API key provided: sk-abc"}},
        )

        with patch.object(
            gateway.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            side_effect=upstream,
        ):
            with pytest.raises(UpstreamError) as exc:
                await gateway.complete("What is news?")

        assert exc.value.message == "AI service error"
        assert exc.value.details["http_status"] == 401
        assert "sk-abc" not in str(exc.value)

    @pytest.mark.parametrize("content", [None, "", "   \n"])
    @pytest.mark.asyncio
    async def test_blank_answer_raises(self, content: str | None) -> None:
        gateway = _gateway()

        with patch.object(
            gateway.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=_completion(content),
        ):
            with pytest.raises(EmptyUpstreamAnswerError, match="No answer from AI"):
                await gateway.complete("What is news?")

    @pytest.mark.asyncio
    async def test_no_choices_raises(self) -> None:
        gateway = _gateway()
        response = MagicMock()
        response.choices = []

        with patch.object(
            gateway.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=response,
        ):
            with pytest.raises(EmptyUpstreamAnswerError):
                await gateway.complete("What is news?")

    @pytest.mark.asyncio
    async def test_connection_errors_propagate(self) -> None:
        gateway = _gateway()
        failure = APIConnectionError(request=httpx.Request("POST", COMPLETIONS_URL))

        with patch.object(
            gateway.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            side_effect=failure,
        ):
            with pytest.raises(APIConnectionError):
                await gateway.complete("What is news?")


class TestGatewayFactory:
    """Factory wiring from settings."""

    @pytest.fixture(autouse=True)
    def _restore_llm_settings(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.delenv("LLM_API_KEY", raising=False)
        original = settings.llm
        yield
        settings.llm = original

    def test_creates_openai_gateway_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
        settings.llm = LLMSettings(provider="openai", model="gpt-4o-mini", max_tokens=100)

        gateway = create_completion_gateway()

        assert isinstance(gateway, OpenAICompletionGateway)
        assert gateway.model == "gpt-4o-mini"
        assert gateway.max_tokens == 100
        assert gateway.topic == settings.app.topic
        assert gateway.is_configured is True

    def test_missing_api_key_is_not_a_startup_error(self) -> None:
        settings.llm = LLMSettings(provider="openai", model="gpt-4o-mini")

        gateway = create_completion_gateway()

        assert isinstance(gateway, OpenAICompletionGateway)
        assert gateway.is_configured is False

    def test_unknown_provider_raises_error(self) -> None:
        settings.llm = LLMSettings(provider="unknown-provider")

        with pytest.raises(ValidationAppError, match="Unknown LLM provider") as exc:
            create_completion_gateway()
        assert exc.value.code == "llm_unknown_provider"
