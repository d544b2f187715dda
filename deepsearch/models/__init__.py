"""Pydantic models for API requests, responses and stream events.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Message: Chat message with ordered parts
    - MessagePart: Tagged union of text, tool-invocation, reasoning,
      source, file and step-start parts
    - ToolInvocation: Tool call state, arguments and result
    - SearchResult: Flattened web search hit
    - StreamEvent: One event of the streamed chat response
    - Session: Authenticated user session
"""

from deepsearch.models.schemas import (
    ChatRequest,
    FilePart,
    LoginRequest,
    Message,
    MessagePart,
    ReasoningPart,
    SearchResult,
    Session,
    SessionUser,
    SourcePart,
    StepStartPart,
    StreamEvent,
    StreamEventType,
    TextPart,
    ToolInvocation,
    ToolInvocationPart,
)

__all__ = [
    "ChatRequest",
    "FilePart",
    "LoginRequest",
    "Message",
    "MessagePart",
    "ReasoningPart",
    "SearchResult",
    "Session",
    "SessionUser",
    "SourcePart",
    "StepStartPart",
    "StreamEvent",
    "StreamEventType",
    "TextPart",
    "ToolInvocation",
    "ToolInvocationPart",
]
