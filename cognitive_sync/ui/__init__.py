"""NiceGUI interface - thin visualization layer for the instruction studio.

Responsibilities:
    - Dashboard of saved drafts
    - Studio: context assets, chat with streaming support, live preview
    - Settings stored per browser

Contains minimal business logic. Delegates model calls and file parsing to
the API; preview extraction lives in ``cognitive_sync.preview``.
"""
