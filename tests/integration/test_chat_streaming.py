"""Integration tests for the SSE streaming chat endpoint.

Requests go through the real FastAPI app with httpx AsyncClient and
ASGITransport. The model is replaced by a scripted agent service, except in
tests marked with requires_api_key, which call the configured provider.
"""

import json
import os

import pytest
import pytest_check as check
from httpx import AsyncClient

from cognitive_sync.models.schemas import StreamChunk, StreamStatus
from cognitive_sync.preview.extractor import PreviewState
from tests.conftest import VALID_DOCUMENT_REPLY, FakeAgentService

CONVERSATION = {"messages": [{"role": "user", "content": "Write onboarding docs"}]}


def has_llm_api_key() -> bool:
    """Check if a model API key is configured."""
    key = os.environ.get("LLM_API_KEY") or os.environ.get("OPENAI_API_KEY", "")
    return bool(key and not key.isspace())


requires_api_key = pytest.mark.skipif(
    not has_llm_api_key(),
    reason="LLM_API_KEY / OPENAI_API_KEY not set - skipping LLM integration test",
)


async def collect_chunks(client: AsyncClient, payload: dict) -> list[StreamChunk]:
    chunks: list[StreamChunk] = []
    async with client.stream("POST", "/api/chat", json=payload) as response:
        assert response.status_code == 200
        async for line in response.aiter_lines():
            if line.startswith("data: "):
                chunks.append(StreamChunk.model_validate_json(line.removeprefix("data: ")))
    return chunks


class TestStreamingEndpoint:
    """Integration tests for POST /api/chat."""

    async def test_stream_returns_sse_content_type(
        self, async_client: AsyncClient, fake_agent_service: FakeAgentService
    ) -> None:
        async with async_client.stream("POST", "/api/chat", json=CONVERSATION) as response:
            assert response.status_code == 200
            assert "text/event-stream" in response.headers["content-type"]

    async def test_fragments_arrive_in_order_then_done(
        self, async_client: AsyncClient, fake_agent_service: FakeAgentService
    ) -> None:
        """Each fragment is its own frame; the final frame has done=true."""
        fake_agent_service.chunks = ["When ", "is the ", "deadline?"]

        chunks = await collect_chunks(async_client, CONVERSATION)

        check.equal([c.content for c in chunks[:-1]], ["When ", "is the ", "deadline?"])
        check.is_true(all(c.done is False for c in chunks[:-1]))
        check.is_true(all(c.status is StreamStatus.GENERATING for c in chunks[:-1]))
        check.is_true(chunks[-1].done)
        check.equal(chunks[-1].status, StreamStatus.COMPLETE)

    async def test_full_conversation_and_context_reach_agent(
        self, async_client: AsyncClient, fake_agent_service: FakeAgentService
    ) -> None:
        payload = {
            "messages": [
                {"role": "user", "content": "Write onboarding docs"},
                {"role": "assistant", "content": "Who is the audience?"},
                {"role": "user", "content": "New hires", "id": "client-side-id"},
            ],
            "audience": "  Junior Developer  ",
            "tone": "",
            "context_assets": [{"name": "brief.md", "text": "Start date: May 1"}],
        }

        await collect_chunks(async_client, payload)

        messages, context = fake_agent_service.calls[0]
        check.equal([m.role for m in messages], ["user", "assistant", "user"])
        check.equal(context.audience, "Junior Developer")
        check.is_none(context.tone)
        check.equal(context.context_assets[0].name, "brief.md")

    async def test_streamed_document_can_be_extracted(
        self, async_client: AsyncClient, fake_agent_service: FakeAgentService
    ) -> None:
        """Feeding frames into the preview state yields the document at the end."""
        reply = VALID_DOCUMENT_REPLY
        fake_agent_service.chunks = [reply[i : i + 7] for i in range(0, len(reply), 7)]
        state = PreviewState()
        text = ""

        for chunk in await collect_chunks(async_client, CONVERSATION):
            text += chunk.content
            state.update(text)

        assert text == reply
        assert state.document is not None
        assert state.document.title == "T"
        assert state.document.missing_info is None

    async def test_empty_model_reply_still_completes(
        self, async_client: AsyncClient, fake_agent_service: FakeAgentService
    ) -> None:
        fake_agent_service.chunks = []

        chunks = await collect_chunks(async_client, CONVERSATION)

        assert len(chunks) == 1
        assert chunks[0].done is True

    @requires_api_key
    async def test_real_model_streams_content(self, async_client: AsyncClient) -> None:
        """Requires a valid model API key."""
        chunks = await collect_chunks(
            async_client,
            {"messages": [{"role": "user", "content": "Say the word 'hello' and nothing else"}]},
        )

        assert chunks[-1].done is True
        assert "".join(c.content for c in chunks)


class TestRequestValidation:
    """Bad input is rejected with 400 and an error payload."""

    async def test_invalid_json_returns_400(
        self, async_client: AsyncClient, fake_agent_service: FakeAgentService
    ) -> None:
        response = await async_client.post(
            "/api/chat",
            content="not valid json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid JSON body"
        assert "details" in body

    @pytest.mark.parametrize(
        "payload",
        [{}, {"messages": []}, {"messages": None}, [1, 2]],
        ids=["missing", "empty", "null", "not-an-object"],
    )
    async def test_missing_or_empty_conversation_returns_400(
        self,
        async_client: AsyncClient,
        fake_agent_service: FakeAgentService,
        payload: object,
    ) -> None:
        response = await async_client.post("/api/chat", json=payload)

        assert response.status_code == 400
        assert "error" in response.json()
        assert fake_agent_service.calls == []

    async def test_unknown_role_returns_400(
        self, async_client: AsyncClient, fake_agent_service: FakeAgentService
    ) -> None:
        response = await async_client.post(
            "/api/chat", json={"messages": [{"role": "robot", "content": "hi"}]}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid conversation"
        assert "messages.0.role" in body["details"]

    async def test_bad_input_checked_before_configuration(
        self, async_client: AsyncClient, no_llm_key: None
    ) -> None:
        response = await async_client.post("/api/chat", json={"messages": []})

        assert response.status_code == 400

    async def test_wrong_http_method_returns_405(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/chat")

        assert response.status_code == 405


class TestConfigurationErrors:
    async def test_missing_credential_returns_500(
        self, async_client: AsyncClient, no_llm_key: None
    ) -> None:
        response = await async_client.post("/api/chat", json=CONVERSATION)

        assert response.status_code == 500
        assert response.json() == {"error": "Server configuration error"}

    async def test_credential_never_leaks_in_error_body(
        self,
        async_client: AsyncClient,
        fake_agent_service: FakeAgentService,
        llm_key: str,
    ) -> None:
        """Even an upstream error echoing the key only returns a generic message in production."""
        fake_agent_service.chunks = []
        fake_agent_service.error = RuntimeError(f"Incorrect API key provided: {llm_key}")

        with pytest.MonkeyPatch.context() as mp:
            mp.setenv("APP_ENV", "production")
            response = await async_client.post("/api/chat", json=CONVERSATION)

        assert response.status_code == 401
        assert llm_key not in response.text


class TestUpstreamErrors:
    """Failures before the first fragment become HTTP errors."""

    @pytest.mark.parametrize(
        ("message", "expected_status"),
        [
            ("You exceeded your current quota", 429),
            ("Rate limit reached for requests", 429),
            ("Incorrect API key provided", 401),
            ("Model is overloaded", 500),
        ],
    )
    async def test_classified_status(
        self,
        async_client: AsyncClient,
        fake_agent_service: FakeAgentService,
        message: str,
        expected_status: int,
    ) -> None:
        fake_agent_service.chunks = []
        fake_agent_service.error = RuntimeError(message)

        response = await async_client.post("/api/chat", json=CONVERSATION)

        assert response.status_code == expected_status
        assert "error" in response.json()

    async def test_details_included_outside_production(
        self, async_client: AsyncClient, fake_agent_service: FakeAgentService
    ) -> None:
        fake_agent_service.chunks = []
        fake_agent_service.error = RuntimeError("Model is overloaded")

        response = await async_client.post("/api/chat", json=CONVERSATION)

        assert response.json()["details"] == "Model is overloaded"

    async def test_details_hidden_in_production(
        self,
        async_client: AsyncClient,
        fake_agent_service: FakeAgentService,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        fake_agent_service.chunks = []
        fake_agent_service.error = RuntimeError("Model is overloaded")

        response = await async_client.post("/api/chat", json=CONVERSATION)

        assert response.status_code == 500
        assert "details" not in response.json()

    async def test_mid_stream_failure_ends_with_error_frame(
        self, async_client: AsyncClient, fake_agent_service: FakeAgentService
    ) -> None:
        fake_agent_service.chunks = ["Partial answer"]
        fake_agent_service.error = RuntimeError("Rate limit reached")

        chunks = await collect_chunks(async_client, CONVERSATION)

        check.equal(chunks[0].content, "Partial answer")
        check.is_true(chunks[-1].done)
        check.equal(chunks[-1].status, StreamStatus.ERROR)
        check.is_not_none(chunks[-1].error)


class TestAppBasics:
    async def test_health(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health")

        assert response.json() == {"status": "healthy", "service": "cognitive-sync"}

    async def test_cors_headers_present(
        self, async_client: AsyncClient, fake_agent_service: FakeAgentService
    ) -> None:
        async with async_client.stream(
            "POST",
            "/api/chat",
            json=CONVERSATION,
            headers={"Origin": "http://localhost:3000"},
        ) as response:
            assert "access-control-allow-origin" in response.headers

    async def test_frames_are_json_without_null_fields(
        self, async_client: AsyncClient, fake_agent_service: FakeAgentService
    ) -> None:
        async with async_client.stream("POST", "/api/chat", json=CONVERSATION) as response:
            async for line in response.aiter_lines():
                if line.startswith("data: "):
                    data = json.loads(line.removeprefix("data: "))
                    assert "error" not in data
