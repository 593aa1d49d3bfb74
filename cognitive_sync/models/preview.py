"""Structured instruction document shown in the live preview."""

from pydantic import BaseModel, ConfigDict


class PreviewSection(BaseModel):
    """One heading/content pair of the instruction document."""

    model_config = ConfigDict(frozen=True, strict=True)

    heading: str
    content: str


class PreviewDocument(BaseModel):
    """Snapshot parsed from the model's fenced ``json`` block.

    Attributes:
        title: Task title.
        summary: One-line summary.
        sections: Ordered document sections.
        missing_info: Labels of information the model still needs, if any.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    title: str
    summary: str
    sections: list[PreviewSection]
    missing_info: list[str] | None = None
