"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Sign-in form backed by the auth endpoints
    - Chat message display with streaming support
    - Markdown and tool invocation rendering to HTML

Contains minimal business logic. Delegates all operations to the API.
Remains a pure presentation layer.
"""
