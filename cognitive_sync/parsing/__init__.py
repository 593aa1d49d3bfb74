"""Context asset parsing for the instruction studio.

Turns uploaded documents into plain text the assistant treats as background
knowledge.

Responsibilities:
    - PDF text extraction with pypdf
    - UTF-8 decoding of TXT and Markdown files
    - Size, type and header validation
"""

from cognitive_sync.parsing.asset_parser import (
    AssetContent,
    AssetParseError,
    AssetTooLargeError,
    UnsupportedAssetError,
    parse_asset,
)

__all__ = [
    "AssetContent",
    "AssetParseError",
    "AssetTooLargeError",
    "UnsupportedAssetError",
    "parse_asset",
]
