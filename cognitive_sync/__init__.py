"""Cognitive Sync - turn vague requests into structured instruction documents.

Combines FastAPI for HTTP streaming, Agno for LLM orchestration,
NiceGUI for the studio interface, and Pydantic for data validation.

Components:
    - api: HTTP endpoints and streaming responses
    - agent: LLM orchestration and the system prompt
    - preview: Fenced JSON extraction and preview rendering
    - parsing: Context asset text extraction
    - datastore: Draft persistence in Supabase
    - ui: Web interface for the studio
    - models: Request/response and document schemas
"""

__version__ = "0.1.0"
