"""Turn the current PreviewDocument into what the preview pane displays."""

from pydantic import BaseModel, Field

from cognitive_sync.models.preview import PreviewDocument
from cognitive_sync.preview.markdown import markdown_to_html

PLACEHOLDER_TEXT = "Preview will appear here..."
MISSING_INFO_HEADING = "Missing Information"


class RenderedSection(BaseModel):
    heading: str
    html: str


class PreviewView(BaseModel):
    """Display structure for the preview pane.

    Attributes:
        placeholder: Text shown instead of a document, None when a document exists.
        title: Document title.
        summary: One-line summary.
        sections: Headings with their content converted to HTML.
        missing_info: Labels for the "Missing Information" panel, in order.
    """

    placeholder: str | None = None
    title: str = ""
    summary: str = ""
    sections: list[RenderedSection] = Field(default_factory=list)
    missing_info: list[str] = Field(default_factory=list)

    @property
    def show_missing_info(self) -> bool:
        return bool(self.missing_info)


def render_preview(document: PreviewDocument | None) -> PreviewView:
    """Build the preview view for ``document``.

    A missing document yields the neutral placeholder, never an error.
    """
    if document is None:
        return PreviewView(placeholder=PLACEHOLDER_TEXT)

    return PreviewView(
        title=document.title,
        summary=document.summary,
        sections=[
            RenderedSection(heading=section.heading, html=markdown_to_html(section.content))
            for section in document.sections
        ],
        missing_info=list(document.missing_info or []),
    )
