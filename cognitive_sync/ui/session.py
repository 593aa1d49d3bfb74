"""Per-page studio state: the message store and the live preview."""

from datetime import datetime

from pydantic import BaseModel, Field

from cognitive_sync.models.preview import PreviewDocument
from cognitive_sync.models.schemas import ChatMessage, ContextAsset
from cognitive_sync.preview.extractor import PreviewState


class DisplayMessage(BaseModel):
    """A chat turn with the time it was shown."""

    role: str
    content: str
    time: str = Field(default_factory=lambda: datetime.now().strftime("%I:%M %p"))
    is_error: bool = False


class StudioSession:
    """Manages chat state for one studio page.

    Messages are only ever appended. The last assistant message grows while
    its reply streams in; every growth re-runs preview extraction.
    """

    def __init__(self, draft_id: str) -> None:
        self.draft_id = draft_id
        self.messages: list[DisplayMessage] = []
        self.context_assets: list[ContextAsset] = []
        self.audience: str = ""
        self.preview = PreviewState()
        self.is_streaming: bool = False

    @property
    def document(self) -> PreviewDocument | None:
        return self.preview.document

    def load_document(self, document: PreviewDocument) -> None:
        """Seed the preview with a previously saved draft."""
        self.preview.document = document

    def add_user_message(self, content: str) -> DisplayMessage:
        message = DisplayMessage(role="user", content=content)
        self.messages.append(message)
        return message

    def start_assistant_message(self) -> DisplayMessage:
        message = DisplayMessage(role="assistant", content="")
        self.messages.append(message)
        return message

    def append_to_assistant(self, fragment: str) -> bool:
        """Grow the streaming assistant message and refresh the preview.

        Returns:
            True if the preview document changed.
        """
        if not self.messages or self.messages[-1].role != "assistant":
            self.start_assistant_message()
        last = self.messages[-1]
        last.content += fragment
        return self.preview.update(last.content)

    def add_error(self, error: str) -> None:
        """Record a failed turn; error turns are never sent to the model."""
        if self.messages and self.messages[-1].role == "assistant" and not self.messages[-1].content:
            self.messages.pop()
        self.messages.append(DisplayMessage(role="assistant", content=f"Error: {error}", is_error=True))

    def add_context_asset(self, name: str, text: str) -> None:
        self.context_assets = [a for a in self.context_assets if a.name != name]
        self.context_assets.append(ContextAsset(name=name, text=text))

    def remove_context_asset(self, name: str) -> None:
        self.context_assets = [a for a in self.context_assets if a.name != name]

    def conversation(self) -> list[ChatMessage]:
        """Messages to send to the API, oldest first."""
        return [
            ChatMessage(role=m.role, content=m.content)
            for m in self.messages
            if not m.is_error and m.content
        ]

    def reset(self) -> None:
        self.messages.clear()
        self.preview.reset()
        self.is_streaming = False
