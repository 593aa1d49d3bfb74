"""Pull the structured instruction document out of streaming model output.

The model writes prose and, once it has enough information, a fenced
``json`` block. While the response is still streaming the block is usually
incomplete, so a failed parse is the normal case and is never an error.
Only the first fenced ``json`` block of a message is considered.
"""

import logging
import re

from pydantic import ValidationError

from cognitive_sync.models.preview import PreviewDocument

logger = logging.getLogger(__name__)

# Opening fence on its own line, body, closing fence on its own line.
DATA_BLOCK_PATTERN = re.compile(r"```json[ \t]*\r?\n([\s\S]*?)\r?\n[ \t]*```")

_OPEN_FENCE_PATTERN = re.compile(r"```json\b")


def find_data_block(text: str) -> str | None:
    """Return the body of the first complete fenced ``json`` block.

    Returns None when the first ``json`` fence is still open.
    """
    opening = _OPEN_FENCE_PATTERN.search(text)
    if opening is None:
        return None
    match = DATA_BLOCK_PATTERN.match(text, opening.start())
    if match is None:
        return None
    return match.group(1)


def extract_preview_document(text: str) -> PreviewDocument | None:
    """Parse the first fenced data block of ``text`` as a PreviewDocument.

    Args:
        text: Full accumulated text of an assistant message.

    Returns:
        The parsed document, or None if there is no complete, well-formed block.
    """
    block = find_data_block(text)
    if block is None:
        return None
    try:
        return PreviewDocument.model_validate_json(block)
    except ValidationError as e:
        logger.debug(f"Fenced data block not parseable yet: {e.error_count()} error(s)")
        return None


def strip_data_blocks(text: str) -> str:
    """Remove complete fenced ``json`` blocks from a message for chat display."""
    return DATA_BLOCK_PATTERN.sub("", text).strip()


class PreviewState:
    """Holds the latest successfully parsed PreviewDocument.

    ``update`` may be called after every streamed fragment; the current
    document only changes when a complete, valid block is found.
    """

    def __init__(self) -> None:
        self.document: PreviewDocument | None = None

    def update(self, text: str) -> bool:
        """Try to replace the document from an assistant message.

        Returns:
            True if the document changed.
        """
        document = extract_preview_document(text)
        if document is None or document == self.document:
            return False
        self.document = document
        return True

    def reset(self) -> None:
        self.document = None
