"""Client-side chat state for the NiceGUI page."""

import uuid
from typing import Any

from deepsearch.models.schemas import (
    Message,
    StreamEvent,
    StreamEventType,
    TextPart,
    ToolInvocationPart,
)


class ChatSession:
    """Manages chat state for a browser tab.

    Holds the conversation as messages with parts and folds stream events
    into the assistant message being generated.
    """

    def __init__(self) -> None:
        self.messages: list[Message] = []
        self.user_name: str | None = None
        self.cookies: dict[str, str] = {}
        self.is_streaming: bool = False

    @property
    def signed_in(self) -> bool:
        return self.user_name is not None

    def sign_in(self, user_name: str, cookies: dict[str, str]) -> None:
        self.user_name = user_name
        self.cookies = dict(cookies)

    def sign_out(self) -> None:
        self.user_name = None
        self.cookies = {}
        self.new_chat()

    def new_chat(self) -> None:
        self.messages.clear()

    def add_user_message(self, text: str) -> Message:
        message = Message(
            id=str(uuid.uuid4()),
            role="user",
            content=text,
            parts=[TextPart(text=text)],
        )
        self.messages.append(message)
        return message

    def history_payload(self) -> list[dict[str, Any]]:
        """Serialize the conversation for the chat endpoint."""
        return [
            message.model_dump(mode="json", by_alias=True, exclude_none=True)
            for message in self.messages
            if message.parts or message.content
        ]

    @staticmethod
    def apply_event(message: Message, event: StreamEvent) -> None:
        """Fold one stream event into an assistant message.

        Text deltas extend the trailing text part. Tool events replace the
        invocation with the same call id, or append a new one.
        """
        if event.type == StreamEventType.TEXT:
            if message.parts and isinstance(message.parts[-1], TextPart):
                message.parts[-1].text += event.content
            else:
                message.parts.append(TextPart(text=event.content))
            return

        if event.type in (StreamEventType.TOOL_CALL, StreamEventType.TOOL_RESULT):
            invocation = event.tool_invocation
            if invocation is None:
                return
            for part in message.parts:
                if (
                    isinstance(part, ToolInvocationPart)
                    and part.tool_invocation.tool_call_id == invocation.tool_call_id
                ):
                    part.tool_invocation = invocation
                    return
            message.parts.append(ToolInvocationPart(tool_invocation=invocation))
            return

        if event.type == StreamEventType.ERROR and event.error:
            message.parts.append(TextPart(text=f"Error: {event.error}"))
