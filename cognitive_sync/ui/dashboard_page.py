"""Dashboard page: recent drafts and entry into the studio."""

import logging
import uuid

from nicegui import run, ui

from cognitive_sync.datastore.drafts import DataStoreError, DraftRepository, DraftSummary
from cognitive_sync.ui.theme import page_header

logger = logging.getLogger(__name__)


def _load_drafts() -> list[DraftSummary]:
    return DraftRepository().list_recent()


@ui.page("/")
async def dashboard_page() -> None:
    """Dashboard listing saved instruction drafts."""
    actions = page_header("Cognitive Sync")
    with actions:
        ui.button(icon="settings", on_click=lambda: ui.navigate.to("/settings")).props(
            "flat round color=white"
        )

    with ui.column().classes("w-full max-w-5xl mx-auto py-10 px-4 gap-6"):
        with ui.row().classes("w-full items-center justify-between"):
            with ui.column().classes("gap-0"):
                ui.label("Dashboard").classes("text-3xl font-bold")
                ui.label("Manage your instructions and cognitive syncs.").classes(
                    "text-gray-500"
                )
            ui.button(
                "New Instruction",
                icon="add_circle",
                on_click=lambda: ui.navigate.to(f"/studio/{uuid.uuid4()}"),
            )

        drafts_grid = ui.element("div").classes("grid gap-4 md:grid-cols-2 lg:grid-cols-3 w-full")

    try:
        drafts = await run.io_bound(_load_drafts)
    except DataStoreError as e:
        logger.warning(f"Dashboard could not load drafts: {e}")
        drafts = []
        ui.notify(str(e), type="warning")

    with drafts_grid:
        if not drafts:
            ui.label("No drafts yet. Start a new instruction.").classes("text-gray-400")
        for draft in drafts:
            with ui.card().classes("cursor-pointer hover:bg-gray-50").on(
                "click", lambda _, d=draft: ui.navigate.to(f"/studio/{d.id}")
            ):
                ui.label(draft.title or "Untitled").classes("text-lg font-semibold")
                ui.label(draft.summary).classes("text-sm text-gray-500")
                with ui.row().classes("items-center gap-2 text-sm text-gray-500"):
                    ui.icon("description")
                    ui.label(draft.status.value.capitalize())
                    if draft.updated_at:
                        ui.icon("schedule").classes("ml-auto")
                        ui.label(draft.updated_at.strftime("%Y-%m-%d %H:%M"))
