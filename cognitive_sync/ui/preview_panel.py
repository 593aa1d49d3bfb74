"""NiceGUI drawing of the live preview pane."""

from nicegui import ui

from cognitive_sync.models.preview import PreviewDocument
from cognitive_sync.preview.renderer import MISSING_INFO_HEADING, render_preview


def draw_preview(container: ui.element, document: PreviewDocument | None) -> None:
    """Replace the contents of ``container`` with the rendered document."""
    view = render_preview(document)
    container.clear()
    with container:
        if view.placeholder is not None:
            with ui.column().classes("w-full items-center mt-20 gap-2"):
                ui.icon("description").classes("text-5xl text-gray-300")
                ui.label(view.placeholder).classes("text-gray-400")
            return

        ui.label(view.title).classes("text-2xl font-bold")
        ui.label(view.summary).classes("text-base text-gray-600")
        for section in view.sections:
            ui.label(section.heading).classes("text-lg font-semibold mt-4")
            ui.html(section.html, sanitize=False).classes("markdown text-sm leading-relaxed")

        if view.show_missing_info:
            with ui.column().classes("missing-info w-full p-4 mt-8 gap-1"):
                ui.label(MISSING_INFO_HEADING).classes("font-semibold text-yellow-800")
                for label in view.missing_info:
                    ui.label(f"• {label}").classes("text-yellow-700 text-sm")
