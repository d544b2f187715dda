"""Conversion of chat messages into Agno model messages.

Text parts become message content. Finished tool invocations on assistant
messages become an assistant tool-call message followed by one tool message
per result. Unfinished invocations and non-rendered part kinds are not sent
to the model.
"""

import json
from typing import Any

from agno.models.message import Message as ModelMessage

from deepsearch.models.schemas import Message, TextPart, ToolInvocation, ToolInvocationPart


def _message_text(message: Message) -> str:
    texts = [part.text for part in message.parts if isinstance(part, TextPart)]
    if not texts:
        return message.content
    return "".join(texts)


def _encode(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _tool_call(invocation: ToolInvocation) -> dict[str, Any]:
    return {
        "id": invocation.tool_call_id,
        "type": "function",
        "function": {
            "name": invocation.tool_name,
            "arguments": _encode(invocation.args if invocation.args is not None else {}),
        },
    }


def _convert_assistant(message: Message) -> list[ModelMessage]:
    """Split an assistant message into text and tool call/result messages.

    Parts are grouped by step: text is flushed whenever a finished tool
    invocation follows it, so the model sees calls in the order they happened.
    When no part is sendable, the plain content is used instead.
    """
    converted: list[ModelMessage] = []
    text: list[str] = []
    calls: list[ToolInvocation] = []

    def flush() -> None:
        if not text and not calls:
            return
        converted.append(
            ModelMessage(
                role="assistant",
                content="".join(text) or None,
                tool_calls=[_tool_call(call) for call in calls] or None,
            )
        )
        converted.extend(
            ModelMessage(role="tool", tool_call_id=call.tool_call_id, content=_encode(call.result))
            for call in calls
        )
        text.clear()
        calls.clear()

    for part in message.parts:
        if isinstance(part, TextPart):
            if calls:
                flush()
            text.append(part.text)
        elif isinstance(part, ToolInvocationPart) and part.tool_invocation.state == "result":
            calls.append(part.tool_invocation)
    flush()

    if not converted and message.content:
        converted.append(ModelMessage(role="assistant", content=message.content))

    return converted


def to_model_messages(messages: list[Message]) -> list[ModelMessage]:
    """Convert a chat history into messages for the model.

    Args:
        messages: Chat history, oldest first.

    Returns:
        Agno messages in the same order. Messages with no sendable content
        are skipped.
    """
    converted: list[ModelMessage] = []
    for message in messages:
        if message.role == "assistant":
            converted.extend(_convert_assistant(message))
            continue

        content = _message_text(message)
        if content:
            converted.append(ModelMessage(role=message.role, content=content))

    return converted
