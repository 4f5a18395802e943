"""Pytest configuration and fixtures shared across all test modules.

Environment defaults are set before anything imports the settings module,
so the suite never depends on a developer's shell or .env file.
"""

import os

# CRITICAL: Set these before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("LLM_MODEL", "gpt-4o-mini")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Iterator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from tutor_proxy.adapters.attempts.in_memory import InMemoryAttemptLedger  # noqa: E402
from tutor_proxy.adapters.llm.base import AbstractCompletionGateway  # noqa: E402
from tutor_proxy.api.dependencies import get_attempt_ledger, get_completion_gateway  # noqa: E402
from tutor_proxy.core.rate_limit import get_rate_limiter  # noqa: E402
from tutor_proxy.main import app  # noqa: E402


class StubGateway(AbstractCompletionGateway):
    """Gateway double returning a canned answer or raising a canned error."""

    def __init__(self, answer: str = "Mass media informs and shapes public opinion.") -> None:
        self.answer = answer
        self.error: Exception | None = None
        self.questions: list[str] = []

    async def complete(self, question: str) -> str:
        self.questions.append(question)
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture(autouse=True)
def _fresh_rate_limiter() -> Iterator[None]:
    get_rate_limiter().reset()
    yield
    get_rate_limiter().reset()


@pytest.fixture
def ledger() -> InMemoryAttemptLedger:
    return InMemoryAttemptLedger()


@pytest.fixture
def gateway() -> StubGateway:
    return StubGateway()


@pytest.fixture
def client(ledger: InMemoryAttemptLedger, gateway: StubGateway) -> Iterator[TestClient]:
    """Test client with a fresh ledger and a stub gateway injected."""
    app.dependency_overrides[get_attempt_ledger] = lambda: ledger
    app.dependency_overrides[get_completion_gateway] = lambda: gateway
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
