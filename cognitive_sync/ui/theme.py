"""Shared page styling and layout pieces."""

from nicegui import ui

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<link href="https://fonts.googleapis.com/icon?family=Material+Icons" rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }

    .message-user {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .message-error { background: #fef2f2; color: #991b1b; }

    .avatar-user { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }
    .avatar-assistant { background: #6b7280; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #667eea;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #667eea; }

    .send-btn { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%) !important; }

    .missing-info {
        background: #fefce8;
        border: 1px solid #fef08a;
        border-radius: 6px;
    }

    /* Markdown styling */
    .markdown strong { font-weight: 600; }
    .markdown em { font-style: italic; }
    .markdown pre { margin: 0.5rem 0; }
    .markdown code { font-family: 'Menlo', 'Monaco', monospace; }
    .markdown ul, .markdown ol { margin: 0.5rem 0; }
    .markdown a { color: #4f46e5; }
</style>
"""


def page_header(title: str) -> ui.row:
    """Render the gradient header bar and return its right-hand slot."""
    ui.add_head_html(CUSTOM_CSS)
    with ui.row().classes("w-full header px-5 py-3 items-center justify-between"):
        with ui.row().classes("items-center gap-3"):
            ui.icon("hub").classes("text-white text-3xl")
            ui.link(title, "/").classes("text-lg font-semibold text-white no-underline")
        actions = ui.row().classes("items-center gap-2")
    return actions
