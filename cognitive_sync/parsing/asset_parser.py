"""Context asset parsing using pypdf.

Extracts plain text from uploaded PDF, TXT and Markdown files with validation.
"""

import io
import logging
from pathlib import PurePath

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
PDF_MAGIC_BYTES = b"%PDF"
PDF_EXTENSIONS = frozenset({".pdf"})
TEXT_EXTENSIONS = frozenset({".txt", ".md", ".markdown"})
SUPPORTED_EXTENSIONS = PDF_EXTENSIONS | TEXT_EXTENSIONS


class AssetContent(BaseModel):
    """Extracted content from a context asset.

    Attributes:
        text: Combined text content.
        pages: Number of pages (1 for text files).
    """

    text: str
    pages: int = Field(ge=0)


class AssetParseError(Exception):
    """Raised when a context asset cannot be parsed."""


class UnsupportedAssetError(AssetParseError):
    """Raised for file types other than PDF, TXT and Markdown."""


class AssetTooLargeError(AssetParseError):
    """Raised when a file exceeds MAX_FILE_SIZE."""


def asset_extension(filename: str) -> str:
    """Return the lowercased extension of ``filename``.

    Raises:
        UnsupportedAssetError: If the extension is not supported.
    """
    suffix = PurePath(filename).suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise UnsupportedAssetError("Only PDF, TXT and MD files are accepted")
    return suffix


def _validate_size(file_content: bytes) -> None:
    if not file_content:
        raise AssetParseError("Empty file provided")

    if len(file_content) > MAX_FILE_SIZE:
        size_mb = len(file_content) / (1024 * 1024)
        raise AssetTooLargeError(f"File size ({size_mb:.1f}MB) exceeds maximum allowed (10MB)")


def parse_pdf(file_content: bytes) -> AssetContent:
    """Parse a PDF file and extract its text content.

    Raises:
        AssetParseError: If the file is not a PDF or is corrupt.
    """
    if not file_content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise AssetParseError("Invalid PDF: file does not start with PDF header")

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise AssetParseError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise AssetParseError(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise AssetParseError("PDF contains no pages")

    text_parts: list[str] = []
    for i, page in enumerate(reader.pages):
        try:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            continue

    text = "\n\n".join(text_parts)

    if not text.strip():
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return AssetContent(text=text, pages=pages)


def parse_text(file_content: bytes) -> AssetContent:
    """Decode a UTF-8 text or Markdown file.

    Raises:
        AssetParseError: If the bytes are not valid UTF-8.
    """
    try:
        text = file_content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise AssetParseError("Text file is not valid UTF-8") from e
    return AssetContent(text=text, pages=1)


def parse_asset(filename: str, file_content: bytes) -> AssetContent:
    """Parse an uploaded context asset by its extension.

    Args:
        filename: Original filename, used to pick the parser.
        file_content: Raw bytes of the file.

    Returns:
        AssetContent with extracted text and page count.

    Raises:
        AssetParseError: If the file is unsupported, too large, empty, or corrupt.
    """
    suffix = asset_extension(filename)
    _validate_size(file_content)

    if suffix in PDF_EXTENSIONS:
        return parse_pdf(file_content)
    return parse_text(file_content)
