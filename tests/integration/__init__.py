"""Integration tests for the FastAPI app working as a system.

Requests go through httpx's ASGITransport into the real app, routers,
dependencies and SSE streaming. Only the agent service is replaced by a
scripted fake so no model provider or search API is contacted.
"""
