from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class StreamStatus(str, Enum):
    """Status values for streaming updates."""

    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


class ChatMessage(BaseModel):
    """A single chat turn.

    Attributes:
        role: The speaker (user, assistant, or system).
        content: The message text.
    """

    role: Literal["user", "assistant", "system"]
    content: str


class ContextAsset(BaseModel):
    """Background document text attached to a chat request.

    Attributes:
        name: Original filename of the asset.
        text: Extracted plain text.
    """

    name: str = Field(..., min_length=1)
    text: str


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        messages: Full conversation in order, oldest first.
        audience: Optional target audience of the instruction.
        tone: Optional tone preference for the generated document.
        context_assets: Optional background documents.
    """

    messages: list[ChatMessage] = Field(..., min_length=1)
    audience: str | None = None
    tone: str | None = None
    context_assets: list[ContextAsset] = Field(default_factory=list)

    @field_validator("audience", "tone", mode="before")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat blank optional strings as absent."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class StreamChunk(BaseModel):
    """A chunk of streamed response data.

    Attributes:
        content: The text content of this chunk.
        done: Whether this is the final chunk.
        status: Current processing status (generating, complete, error).
        error: Error message if something went wrong.
    """

    content: str
    done: bool
    status: StreamStatus | None = None
    error: str | None = None


class ErrorResponse(BaseModel):
    """JSON body returned for every handled error."""

    error: str
    details: str | None = None


class ContextAssetResponse(BaseModel):
    """Response after a context asset upload.

    Attributes:
        filename: Name of the uploaded file.
        text: Extracted plain text.
        pages: Number of pages (1 for text files).
        characters: Length of the extracted text.
    """

    filename: str
    text: str
    pages: int
    characters: int
