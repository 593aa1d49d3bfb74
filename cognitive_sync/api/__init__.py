"""FastAPI endpoints for Cognitive Sync.

HTTP and streaming routes with async request handling.
Supports Server-Sent Events for real-time chat streaming.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Streamed assistant reply for a conversation
    - POST /api/assets: Context asset upload and text extraction
"""

from cognitive_sync.api.app import app, create_app

__all__ = ["app", "create_app"]
