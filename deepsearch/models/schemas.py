from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

Role = Literal["user", "assistant", "system"]
ToolInvocationState = Literal["partial-call", "call", "result"]


class WireModel(BaseModel):
    """Base for models exchanged with chat front ends.

    Fields are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ToolInvocation(WireModel):
    """A model-initiated call to a declared tool.

    Attributes:
        tool_call_id: Identifier linking the call to its result.
        tool_name: Name of the invoked tool.
        state: partial-call while arguments stream, call once complete,
            result after execution.
        args: Tool arguments as produced by the model.
        result: Tool output, only present in the result state.
    """

    tool_call_id: str = ""
    tool_name: str
    state: ToolInvocationState
    args: Any = None
    result: Any = None

    @model_validator(mode="after")
    def result_requires_result_state(self) -> "ToolInvocation":
        """Reject results attached to invocations that have not finished."""
        if self.result is not None and self.state != "result":
            raise ValueError(f"Tool invocation in state '{self.state}' cannot carry a result")
        return self


class TextPart(WireModel):
    type: Literal["text"] = "text"
    text: str


class ToolInvocationPart(WireModel):
    type: Literal["tool-invocation"] = "tool-invocation"
    tool_invocation: ToolInvocation


class ReasoningPart(WireModel):
    type: Literal["reasoning"] = "reasoning"
    reasoning: str = ""
    details: list[Any] = Field(default_factory=list)


class SourcePart(WireModel):
    type: Literal["source"] = "source"
    source: dict[str, Any] = Field(default_factory=dict)


class FilePart(WireModel):
    type: Literal["file"] = "file"
    mime_type: str = ""
    data: str = ""


class StepStartPart(WireModel):
    type: Literal["step-start"] = "step-start"


MessagePart = Annotated[
    TextPart | ToolInvocationPart | ReasoningPart | SourcePart | FilePart | StepStartPart,
    Field(discriminator="type"),
]


class Message(WireModel):
    """A single chat message made of ordered parts.

    Attributes:
        id: Optional client-side identifier.
        role: The speaker (user, assistant, or system).
        content: Plain-text fallback used when a message has no parts.
        parts: Ordered message parts.
    """

    id: str | None = None
    role: Role
    content: str = ""
    parts: list[MessagePart] = Field(default_factory=list)


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        messages: Full conversation history, oldest first.
    """

    messages: list[Message] = Field(..., min_length=1)


class SearchResult(BaseModel):
    """One organic web search hit, flattened for the model."""

    title: str
    link: str
    snippet: str = ""


class StreamEventType(str, Enum):
    """Kinds of events sent on the chat stream."""

    TEXT = "text"
    TOOL_CALL = "tool-call"
    TOOL_RESULT = "tool-result"
    ERROR = "error"
    DONE = "done"


class StreamEvent(WireModel):
    """A single event of the streamed chat response.

    Attributes:
        type: Event kind.
        content: Text delta for text events.
        tool_invocation: Tool call or result for tool events.
        error: User-facing error message for error events.
        done: Whether this is the final event of the stream.
    """

    type: StreamEventType
    content: str = ""
    tool_invocation: ToolInvocation | None = None
    error: str | None = None
    done: bool = False

    def to_sse(self) -> str:
        """Serialize as a single Server-Sent Events data frame."""
        return f"data: {self.model_dump_json(by_alias=True, exclude_none=True)}\n\n"


class SessionUser(BaseModel):
    name: str


class Session(BaseModel):
    """Authenticated session resolved from the request cookie."""

    user: SessionUser | None = None
    expires_at: str | None = None


class LoginRequest(BaseModel):
    """Credentials posted to the login endpoint."""

    name: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Strip whitespace from the display name before validation."""
        if isinstance(v, str):
            return v.strip()
        return v
