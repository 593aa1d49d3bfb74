"""HTTP client the pages use to reach the Cognitive Sync API."""

import json
import logging
from collections.abc import Callable

import httpx

from cognitive_sync.config import get_app_config
from cognitive_sync.models.schemas import (
    ChatMessage,
    ChatRequest,
    ContextAsset,
    ContextAssetResponse,
    StreamChunk,
)

logger = logging.getLogger(__name__)

STREAM_TIMEOUT = 120.0
UPLOAD_TIMEOUT = 60.0


class ApiClientError(Exception):
    """Raised when the API returns an error response."""


def _api_base_url() -> str:
    return get_app_config().api_base_url.rstrip("/")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {response.status_code}"


async def stream_chat_response(
    messages: list[ChatMessage],
    on_chunk: Callable[[str], None],
    on_complete: Callable[[], None],
    on_error: Callable[[str], None],
    *,
    audience: str | None = None,
    tone: str | None = None,
    context_assets: list[ContextAsset] | None = None,
) -> None:
    """Consume the SSE stream from /api/chat."""
    payload = ChatRequest(
        messages=messages,
        audience=audience,
        tone=tone,
        context_assets=context_assets or [],
    ).model_dump(mode="json", exclude_none=True)

    async with httpx.AsyncClient(timeout=STREAM_TIMEOUT) as client:
        try:
            async with client.stream(
                "POST",
                f"{_api_base_url()}/api/chat",
                json=payload,
                headers={"Accept": "text/event-stream"},
            ) as response:
                if response.is_error:
                    await response.aread()
                    on_error(_error_message(response))
                    return
                async for line in response.aiter_lines():
                    if not line.startswith("data: "):
                        continue
                    chunk = StreamChunk.model_validate(json.loads(line[6:]))
                    if chunk.error:
                        on_error(chunk.error)
                        return
                    if chunk.content:
                        on_chunk(chunk.content)
                    if chunk.done:
                        on_complete()
                        return
            # Stream closed without a final frame
            on_complete()
        except httpx.RequestError as e:
            logger.warning(f"Chat stream connection failed: {e}")
            on_error(f"Connection failed: {e}")


async def upload_context_asset(
    filename: str, content: bytes, content_type: str | None = None
) -> ContextAssetResponse:
    """Upload a context asset and return its extracted text.

    Raises:
        ApiClientError: If the API rejects the file or is unreachable.
    """
    async with httpx.AsyncClient(timeout=UPLOAD_TIMEOUT) as client:
        try:
            response = await client.post(
                f"{_api_base_url()}/api/assets",
                files={"file": (filename, content, content_type or "application/octet-stream")},
            )
        except httpx.RequestError as e:
            raise ApiClientError(f"Connection failed: {e}") from e

    if response.is_error:
        raise ApiClientError(_error_message(response))
    return ContextAssetResponse.model_validate(response.json())
