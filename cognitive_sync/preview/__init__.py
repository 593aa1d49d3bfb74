"""Live preview of the instruction document.

Responsibilities:
    - Extracting the fenced JSON block from streaming assistant output
    - Keeping the last successfully parsed document
    - Rendering the document (or a placeholder) for the preview pane

Pure Python with no UI dependency, so it runs the same in tests and pages.
"""

from cognitive_sync.preview.extractor import (
    PreviewState,
    extract_preview_document,
    strip_data_blocks,
)
from cognitive_sync.preview.markdown import markdown_to_html
from cognitive_sync.preview.renderer import PreviewView, render_preview

__all__ = [
    "PreviewState",
    "PreviewView",
    "extract_preview_document",
    "markdown_to_html",
    "render_preview",
    "strip_data_blocks",
]
