"""Unit tests for individual components in isolation.

Coverage:
    - models/: Pydantic validation
    - preview/: Fenced block extraction and rendering
    - parsing/: Context asset text extraction
    - agent/: Agent configuration, prompt building and streaming
    - datastore/: Placeholder configuration and draft rows

Uses mocks for external services when needed.
"""
