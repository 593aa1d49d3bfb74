"""Integration tests for the API working as a system.

Requests go through the real FastAPI app over ASGITransport. The model is
replaced by a scripted agent service unless a real key is configured.
"""
