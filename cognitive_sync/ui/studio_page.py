"""Studio page: context assets, chat with SSE streaming, live preview."""

import logging

from nicegui import app, events, run, ui

from cognitive_sync.datastore.drafts import DataStoreError, DraftRepository, DraftStatus
from cognitive_sync.models.preview import PreviewDocument
from cognitive_sync.preview.extractor import strip_data_blocks
from cognitive_sync.preview.markdown import markdown_to_html
from cognitive_sync.ui.api_client import ApiClientError, stream_chat_response, upload_context_asset
from cognitive_sync.ui.preview_panel import draw_preview
from cognitive_sync.ui.session import DisplayMessage, StudioSession
from cognitive_sync.ui.theme import page_header

logger = logging.getLogger(__name__)


def _save_draft(session: StudioSession, status: DraftStatus) -> None:
    DraftRepository().save(session.draft_id, session.document, status)


def _load_draft(draft_id: str) -> PreviewDocument | None:
    return DraftRepository().get(draft_id)


@ui.page("/studio/{draft_id}")
async def studio_page(draft_id: str) -> None:
    """Instruction studio for one draft."""
    session = StudioSession(draft_id)

    messages_container: ui.column
    preview_container: ui.column
    assets_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        icon = "person" if is_user else "smart_toy"
        avatar_classes = f"w-9 h-9 rounded-full flex items-center justify-center {css}"
        with ui.element("div").classes(avatar_classes):
            ui.icon(icon).classes("text-white text-lg")

    def bubble_html(msg: DisplayMessage) -> str:
        if msg.role == "user":
            return markdown_to_html(msg.content)
        prose = strip_data_blocks(msg.content)
        if not prose and session.document is not None:
            prose = "_Draft updated in the preview._"
        return markdown_to_html(prose)

    def render_message(msg: DisplayMessage) -> ui.html:
        is_user = msg.role == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        if msg.is_error:
            bubble += " message-error"

        with ui.row().classes(f"w-full {align} gap-3 items-end"):
            if not is_user:
                render_avatar(False)
            with ui.column().classes("max-w-[80%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    content = ui.html(bubble_html(msg), sanitize=False).classes(
                        "markdown text-sm leading-relaxed"
                    )
                ui.label(msg.time).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )
            if is_user:
                render_avatar(True)
        return content

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.messages:
                with ui.column().classes("w-full h-64 items-center justify-center gap-2"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Start the Sync").classes("text-lg font-semibold text-gray-500")
                    ui.label("Describe your task or instruction roughly.").classes(
                        "text-sm text-gray-400"
                    )
            else:
                for msg in session.messages:
                    render_message(msg)

    def refresh_assets() -> None:
        assets_container.clear()
        with assets_container:
            for asset in session.context_assets:
                with ui.row().classes("w-full items-center justify-between gap-2"):
                    ui.icon("description").classes("text-gray-500")
                    ui.label(asset.name).classes("text-sm flex-grow truncate")
                    ui.button(
                        icon="close",
                        on_click=lambda _, name=asset.name: remove_asset(name),
                    ).props("flat round dense size=sm")

    def remove_asset(name: str) -> None:
        session.remove_context_asset(name)
        refresh_assets()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        data = await e.file.read()
        try:
            asset = await upload_context_asset(e.file.name, data, e.file.content_type)
        except ApiClientError as err:
            logger.warning(f"Context asset upload failed for {e.file.name}: {err}")
            ui.notify(f"{e.file.name}: {err}", type="negative")
            return
        session.add_context_asset(asset.filename, asset.text)
        refresh_assets()
        ui.notify(f"Added {asset.filename} ({asset.pages} pages)", type="positive")

    def render_status_indicator() -> ui.row:
        with ui.row().classes("w-full justify-start gap-3 items-end") as row:
            render_avatar(False)
            with ui.element("div").classes("message-assistant px-4 py-3"):
                with ui.row().classes("items-center gap-2"):
                    with ui.row().classes("gap-1"):
                        for _ in range(3):
                            ui.element("div").classes("typing-dot")
                    ui.label("Thinking...").classes("text-sm text-gray-500 italic")
        return row

    async def send_message() -> None:
        text = (input_field.value or "").strip()
        if not text or session.is_streaming:
            return

        input_field.value = ""
        session.is_streaming = True
        send_btn.disable()

        session.add_user_message(text)
        conversation = session.conversation()
        refresh_messages()

        with messages_container:
            status_row = render_status_indicator()

        response_html: ui.html | None = None

        def on_chunk(content: str) -> None:
            nonlocal response_html
            if response_html is None:
                status_row.delete()
                msg = session.start_assistant_message()
                with messages_container:
                    response_html = render_message(msg)
            if session.append_to_assistant(content):
                draw_preview(preview_container, session.document)
            response_html.set_content(bubble_html(session.messages[-1]))

        def finish() -> None:
            session.is_streaming = False
            send_btn.enable()
            refresh_messages()

        def on_complete() -> None:
            if response_html is None:
                status_row.delete()
            finish()

        def on_error(error: str) -> None:
            if response_html is None:
                status_row.delete()
            session.add_error(error)
            finish()
            ui.notify(error, type="negative")

        await stream_chat_response(
            conversation,
            on_chunk,
            on_complete,
            on_error,
            audience=session.audience,
            tone=app.storage.user.get("tone"),
            context_assets=session.context_assets,
        )

    async def save(status: DraftStatus) -> None:
        if session.document is None:
            ui.notify("Nothing to save yet: the preview is empty", type="warning")
            return
        try:
            await run.io_bound(_save_draft, session, status)
        except DataStoreError as e:
            ui.notify(str(e), type="negative")
            return
        label = "Published" if status is DraftStatus.PUBLISHED else "Draft saved"
        ui.notify(label, type="positive")

    def new_chat() -> None:
        session.reset()
        refresh_messages()
        draw_preview(preview_container, session.document)

    # === UI Layout ===
    actions = page_header("Cognitive Sync Studio")
    with actions:
        ui.button(icon="add", on_click=new_chat).props("flat round color=white")
        ui.button(
            "Save Draft", on_click=lambda: save(DraftStatus.DRAFT)
        ).props("outline color=white size=sm")
        ui.button(
            "Publish", on_click=lambda: save(DraftStatus.PUBLISHED)
        ).props("unelevated color=white text-color=primary size=sm")

    with ui.row().classes("w-full no-wrap gap-0").style("height: calc(100vh - 64px)"):
        # Left panel: context
        with ui.column().classes("w-1/5 min-w-[220px] h-full p-4 gap-4 bg-white border-r"):
            ui.label("Context Assets").classes("font-semibold")
            ui.upload(
                label="PDF, TXT, MD",
                on_upload=handle_upload,
                auto_upload=True,
                multiple=True,
            ).props('accept=".pdf,.txt,.md" flat bordered').classes("w-full")
            assets_container = ui.column().classes("w-full gap-1")
            ui.separator()
            ui.label("Target Audience").classes("font-semibold")
            ui.input(placeholder="e.g. Junior Developer").bind_value(
                session, "audience"
            ).classes("w-full")

        # Center panel: chat
        with ui.column().classes("w-2/5 h-full gap-0 bg-white border-r"):
            with (
                ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
                ui.column().classes("w-full p-5"),
            ):
                messages_container = ui.column().classes("w-full gap-4")
                refresh_messages()

            with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
                with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                    input_field = (
                        ui.textarea(placeholder="Type your instruction here...")
                        .props("autogrow borderless dense rows=2")
                        .classes("w-full")
                        .on("keydown.enter.prevent", send_message)
                    )
                send_btn = (
                    ui.button(icon="send", on_click=send_message)
                    .props("round unelevated")
                    .classes("send-btn")
                )

        # Right panel: preview
        with ui.column().classes("w-2/5 h-full gap-0 bg-gray-50"):
            with ui.row().classes("w-full p-4 items-center gap-2 bg-white border-b"):
                ui.icon("article")
                ui.label("Live Preview").classes("font-semibold")
            with ui.scroll_area().classes("flex-grow w-full"):
                preview_container = ui.column().classes("w-full p-8 gap-2")
                draw_preview(preview_container, session.document)

    try:
        saved = await run.io_bound(_load_draft, draft_id)
    except DataStoreError as e:
        logger.warning(f"Studio could not load draft {draft_id}: {e}")
        saved = None
    if saved is not None:
        session.load_document(saved)
        draw_preview(preview_container, session.document)
