"""Test package for Cognitive Sync.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP-level tests against the real FastAPI app

Leverages pytest with pytest-check for soft assertions.
"""
