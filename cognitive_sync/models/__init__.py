"""Pydantic models for API requests, responses and the preview document.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatMessage: Individual message in conversation
    - ChatRequest: Incoming chat request payload
    - StreamChunk: One Server-Sent-Events frame of a chat response
    - ErrorResponse: Body of every handled error
    - ContextAssetResponse: Extracted text of an uploaded context asset
    - PreviewDocument: Structured instruction document for the live preview
"""

from cognitive_sync.models.preview import PreviewDocument, PreviewSection
from cognitive_sync.models.schemas import (
    ChatMessage,
    ChatRequest,
    ContextAsset,
    ContextAssetResponse,
    ErrorResponse,
    StreamChunk,
    StreamStatus,
)

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ContextAsset",
    "ContextAssetResponse",
    "ErrorResponse",
    "PreviewDocument",
    "PreviewSection",
    "StreamChunk",
    "StreamStatus",
]
