"""Unit tests for chat history conversion."""

import json

from deepsearch.agent.history import to_model_messages
from deepsearch.models.schemas import (
    Message,
    ReasoningPart,
    SourcePart,
    StepStartPart,
    TextPart,
    ToolInvocation,
    ToolInvocationPart,
)


def tool_part(state: str, call_id: str = "call_1", result=None) -> ToolInvocationPart:
    return ToolInvocationPart(
        tool_invocation=ToolInvocation(
            tool_call_id=call_id,
            tool_name="searchWeb",
            state=state,
            args={"query": "weather in Paris"},
            result=result,
        )
    )


class TestToModelMessages:
    """Tests for to_model_messages."""

    def test_user_text_parts_become_content(self) -> None:
        """Text parts are joined into the message content."""
        messages = [Message(role="user", parts=[TextPart(text="Hello "), TextPart(text="world")])]

        converted = to_model_messages(messages)

        assert len(converted) == 1
        assert converted[0].role == "user"
        assert converted[0].content == "Hello world"

    def test_content_is_used_when_there_are_no_parts(self) -> None:
        """Messages without parts fall back to their content field."""
        converted = to_model_messages([Message(role="system", content="Be brief.")])

        assert converted[0].role == "system"
        assert converted[0].content == "Be brief."

    def test_finished_tool_call_becomes_call_and_result_messages(self) -> None:
        """A result-state invocation yields an assistant call and a tool message."""
        results = [{"title": "Météo", "link": "https://meteo.fr", "snippet": "Soleil"}]
        messages = [
            Message(role="user", content="Weather in Paris?"),
            Message(
                role="assistant",
                parts=[
                    StepStartPart(),
                    tool_part("result", result=results),
                    TextPart(text="Sunny, per [Météo](https://meteo.fr)."),
                ],
            ),
        ]

        converted = to_model_messages(messages)

        assert [m.role for m in converted] == ["user", "assistant", "tool", "assistant"]
        call = converted[1].tool_calls[0]
        assert call["id"] == "call_1"
        assert call["function"]["name"] == "searchWeb"
        assert json.loads(call["function"]["arguments"]) == {"query": "weather in Paris"}
        assert converted[2].tool_call_id == "call_1"
        assert json.loads(converted[2].content) == results
        assert converted[3].content == "Sunny, per [Météo](https://meteo.fr)."

    def test_unfinished_tool_calls_are_dropped(self) -> None:
        """Invocations still in partial-call or call state are not sent."""
        messages = [
            Message(
                role="assistant",
                parts=[tool_part("partial-call"), tool_part("call", "call_2"), TextPart(text="…")],
            )
        ]

        converted = to_model_messages(messages)

        assert len(converted) == 1
        assert converted[0].content == "…"
        assert converted[0].tool_calls is None

    def test_unrendered_parts_are_not_sent(self) -> None:
        """Reasoning, source and step-start parts carry no model content."""
        messages = [
            Message(
                role="assistant",
                parts=[
                    ReasoningPart(reasoning="thinking"),
                    SourcePart(source={"url": "https://a"}),
                    StepStartPart(),
                ],
            )
        ]

        assert to_model_messages(messages) == []

    def test_string_tool_result_is_sent_verbatim(self) -> None:
        """String results are not re-encoded as JSON."""
        messages = [Message(role="assistant", parts=[tool_part("result", result="no results")])]

        converted = to_model_messages(messages)

        assert converted[1].content == "no results"

    def test_assistant_content_is_used_when_no_part_is_sendable(self) -> None:
        """Hidden parts alone do not discard the content fallback."""
        messages = [
            Message(role="assistant", content="It is sunny.", parts=[StepStartPart()]),
        ]

        converted = to_model_messages(messages)

        assert len(converted) == 1
        assert converted[0].role == "assistant"
        assert converted[0].content == "It is sunny."
