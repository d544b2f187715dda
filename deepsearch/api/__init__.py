"""FastAPI endpoints for Deepsearch.

HTTP and streaming routes with async request handling.
Supports Server-Sent Events for real-time chat streaming.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Streamed chat turn with web search
    - POST /api/auth/login: Sign in and set the session cookie
    - GET /api/auth/session: Current session
    - POST /api/auth/logout: Clear the session cookie
"""
