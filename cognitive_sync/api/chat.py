"""Streaming chat endpoint.

Forwards the full conversation to the model and relays the reply as
Server-Sent Events. Each frame is ``data: <StreamChunk JSON>``; the last
frame has ``done=true``.
"""

import json
import logging
from collections.abc import AsyncGenerator, AsyncIterator

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse
from pydantic import ValidationError

from cognitive_sync.agent.chat_agent import get_agent_service
from cognitive_sync.agent.prompts import PromptContext
from cognitive_sync.config import get_app_config
from cognitive_sync.errors import BadRequest, classify_upstream_error, format_validation_errors
from cognitive_sync.models.schemas import ChatRequest, StreamChunk, StreamStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


def _sse(chunk: StreamChunk) -> str:
    return f"data: {chunk.model_dump_json(exclude_none=True)}\n\n"


async def _parse_chat_request(request: Request) -> ChatRequest:
    """Read and validate the request body.

    Raises:
        BadRequest: If the body is not JSON or the conversation is invalid.
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise BadRequest("Invalid JSON body", details=str(e)) from e

    if not isinstance(payload, dict):
        raise BadRequest("Request body must be a JSON object")

    try:
        return ChatRequest.model_validate(payload)
    except ValidationError as e:
        messages = payload.get("messages")
        if not messages:
            raise BadRequest(
                "Conversation must be a non-empty list of messages",
                details=format_validation_errors(e.errors()),
            ) from e
        raise BadRequest("Invalid conversation", details=format_validation_errors(e.errors())) from e


async def _relay(
    first_chunk: str | None,
    stream: AsyncIterator[str],
    expose_details: bool,
) -> AsyncGenerator[str]:
    """Yield SSE frames for an already primed model stream."""
    if first_chunk:
        yield _sse(StreamChunk(content=first_chunk, done=False, status=StreamStatus.GENERATING))
    try:
        async for chunk in stream:
            yield _sse(StreamChunk(content=chunk, done=False, status=StreamStatus.GENERATING))
    except Exception as e:
        error = classify_upstream_error(e, expose_details=expose_details)
        logger.error(f"Model stream failed mid-response ({type(error).__name__}): {e}")
        yield _sse(
            StreamChunk(content="", done=True, status=StreamStatus.ERROR, error=error.message)
        )
        return
    yield _sse(StreamChunk(content="", done=True, status=StreamStatus.COMPLETE))


@router.post("/chat")
async def chat(request: Request) -> StreamingResponse:
    """Stream the assistant's reply to a conversation.

    Request body: ``{"messages": [{"role", "content"}, ...], "audience"?,
    "tone"?, "context_assets"?}``.

    Raises:
        400: Body is not JSON, or the conversation is missing, empty or malformed.
        401: The model provider rejected the credentials.
        429: The model provider is rate limiting.
        500: Missing configuration or an unclassified provider failure.
    """
    chat_request = await _parse_chat_request(request)
    app_config = get_app_config()
    agent_service = get_agent_service()

    context = PromptContext(
        audience=chat_request.audience,
        tone=chat_request.tone,
        context_assets=chat_request.context_assets,
    )
    stream = agent_service.stream_response(chat_request.messages, context)

    # Prime the stream so failures before the first token become HTTP errors
    try:
        first_chunk = await anext(stream, None)
    except Exception as e:
        error = classify_upstream_error(e, expose_details=not app_config.is_production)
        logger.error(f"Model request failed ({type(error).__name__}): {e}")
        raise error from e

    return StreamingResponse(
        _relay(first_chunk, stream, expose_details=not app_config.is_production),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
