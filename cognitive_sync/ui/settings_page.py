"""Settings page: display name and tone preference, kept in user storage."""

from nicegui import app, ui

from cognitive_sync.ui.theme import page_header


@ui.page("/settings")
def settings_page() -> None:
    page_header("Cognitive Sync")
    storage = app.storage.user

    with ui.column().classes("w-full max-w-2xl mx-auto py-10 px-4 gap-4"):
        ui.label("Settings").classes("text-lg font-medium")
        ui.label("Manage your account settings and preferences.").classes(
            "text-sm text-gray-500"
        )
        ui.separator()
        display_name = ui.input("Display Name", placeholder="Your Name",
                                value=storage.get("display_name", "")).classes("w-full")
        tone = ui.textarea(
            "Tone Preference",
            placeholder="e.g. Professional, Friendly, Strict",
            value=storage.get("tone", ""),
        ).classes("w-full")
        ui.label("How should the AI address you and write instructions?").classes(
            "text-sm text-gray-500"
        )

        def save() -> None:
            storage["display_name"] = (display_name.value or "").strip()
            storage["tone"] = (tone.value or "").strip()
            ui.notify("Settings saved", type="positive")

        ui.button("Save changes", on_click=save)
