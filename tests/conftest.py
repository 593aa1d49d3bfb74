"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - async_client: HTTPX client for API testing
    - fake_agent_service: Installs a scripted agent service behind /api/chat
    - llm_key: Sets a dummy model credential in the environment
    - no_llm_key: Removes every model credential from the environment

Implements async fixtures with proper cleanup, scoped appropriately for performance.
"""

from collections.abc import AsyncGenerator, Iterator

import pytest
from httpx import ASGITransport, AsyncClient

import cognitive_sync.agent.chat_agent as chat_agent_module
from cognitive_sync.agent.prompts import PromptContext
from cognitive_sync.api import app
from cognitive_sync.models.schemas import ChatMessage

VALID_DOCUMENT_REPLY = (
    "Here is a first draft.\n\n"
    "```json\n"
    '{"title": "T", "summary": "S", "sections": [{"heading": "H1", "content": "C1"}]}\n'
    "```"
)


class FakeAgentService:
    """Agent service double that replays scripted chunks, then optionally fails."""

    def __init__(self, chunks: list[str] | None = None, error: Exception | None = None) -> None:
        self.chunks = chunks if chunks is not None else ["Hello", ", world"]
        self.error = error
        self.calls: list[tuple[list[ChatMessage], PromptContext | None]] = []

    async def stream_response(
        self,
        messages: list[ChatMessage],
        context: PromptContext | None = None,
    ) -> AsyncGenerator[str]:
        self.calls.append((messages, context))
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep optional settings from the developer's .env out of the tests."""
    for name in ("LLM_BASE_URL", "LLM_MODEL", "APP_ENV"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_agent_singleton() -> Iterator[None]:
    """Make every test build its own agent service."""
    chat_agent_module._agent_service = None
    yield
    chat_agent_module._agent_service = None


@pytest.fixture
def llm_key(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("LLM_API_KEY", "sk-test-key-12345")
    return "sk-test-key-12345"


@pytest.fixture
def no_llm_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


@pytest.fixture
def fake_agent_service(monkeypatch: pytest.MonkeyPatch) -> FakeAgentService:
    """Install a FakeAgentService as the singleton used by the chat route."""
    service = FakeAgentService()
    monkeypatch.setattr(chat_agent_module, "_agent_service", service)
    return service


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
