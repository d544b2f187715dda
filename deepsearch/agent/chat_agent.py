"""Agno agent service with streaming support and a web search tool.

Core module for the chatbot's intelligence and conversation handling.

The agent is stateless across requests: the caller supplies the full chat
history on every turn, so no session storage is attached. The service wraps
Agno's Agent with:

1. **One tool** - ``searchWeb`` runs a Serper search and returns up to
   ``search_results`` hits flattened to title/link/snippet.

2. **Step budget** - each model request is counted and the run is closed
   instead of starting request ``max_steps + 1``.

3. **Event stream** - Agno's run events are mapped onto ``StreamEvent``
   objects (text deltas, tool calls, tool results) for the SSE endpoint.
   Errors propagate to the caller, which decides what the user sees.
"""

import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

from agno.agent import Agent
from agno.models.openai import OpenAIChat
from agno.run.agent import RunEvent
from agno.tools import tool
from agno.tools.function import Function

from deepsearch.agent.config import AgentConfig, get_agent_config
from deepsearch.agent.history import to_model_messages
from deepsearch.agent.prompts import SEARCH_TOOL_DESCRIPTION, SEARCH_TOOL_NAME, SYSTEM_PROMPT
from deepsearch.models.schemas import (
    Message,
    SearchResult,
    StreamEvent,
    StreamEventType,
    ToolInvocation,
)
from deepsearch.search.serper import SerperClient

logger = logging.getLogger(__name__)


class AgentRunError(Exception):
    """Raised when the model run reports an error event."""

    pass


def _decode_result(result: Any) -> Any:
    """Turn JSON tool output back into structured data; leave other text as is."""
    if not isinstance(result, str):
        return result
    try:
        return json.loads(result)
    except ValueError:
        return result


def _to_stream_event(chunk: Any) -> StreamEvent | None:
    """Map an Agno run event onto a stream event.

    Returns:
        The stream event, or None for run events the client does not see.

    Raises:
        AgentRunError: If the run reported an error.
    """
    event = getattr(chunk, "event", None)

    if event == RunEvent.run_content:
        content = getattr(chunk, "content", None)
        if isinstance(content, str) and content:
            return StreamEvent(type=StreamEventType.TEXT, content=content)
        return None

    if event in (RunEvent.tool_call_started, RunEvent.tool_call_completed):
        execution = chunk.tool
        if execution is None:
            return None
        completed = event == RunEvent.tool_call_completed
        invocation = ToolInvocation(
            tool_call_id=execution.tool_call_id or "",
            tool_name=execution.tool_name or "",
            state="result" if completed else "call",
            args=execution.tool_args or {},
            result=_decode_result(execution.result) if completed else None,
        )
        return StreamEvent(
            type=StreamEventType.TOOL_RESULT if completed else StreamEventType.TOOL_CALL,
            tool_invocation=invocation,
        )

    if event == RunEvent.run_error:
        raise AgentRunError(str(getattr(chunk, "content", "") or "Model run failed"))

    return None


class AgentService:
    """Service for managing the Agno search agent.

    Wraps Agno's Agent with:
    - The searchWeb tool backed by Serper
    - A bounded tool/response loop
    - Singleton lifecycle management
    - Clean streaming interface for SSE endpoints
    """

    def __init__(
        self,
        config: AgentConfig | None = None,
        search_client: SerperClient | None = None,
    ) -> None:
        """Initialize the agent service.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
            search_client: Optional search client.
                    Built from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._search_client = search_client or SerperClient()
        self._search_tool = self._create_search_tool()
        self._agent = self._create_agent()

    def _create_search_tool(self) -> Function:
        """Create the searchWeb tool declaration.

        Returns:
            Agno Function wrapping ``search_web``.
        """
        service = self

        @tool(name=SEARCH_TOOL_NAME, description=SEARCH_TOOL_DESCRIPTION)
        async def search_web(query: str) -> str:
            """Search the web.

            Args:
                query: The query to search the web for
            """
            results = await service.search_web(query)
            return json.dumps([result.model_dump() for result in results], ensure_ascii=False)

        return search_web

    def _create_agent(self) -> Agent:
        """Create the Agno agent instance.

        Returns:
            Configured Agent with OpenAI model, system prompt and search tool.
        """
        model = OpenAIChat(
            id=self._config.model_name,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )

        return Agent(
            model=model,
            system_message=SYSTEM_PROMPT,
            tools=[self._search_tool],
        )

    async def search_web(self, query: str) -> list[SearchResult]:
        """Execute a web search for the model.

        Args:
            query: The query to search the web for.

        Returns:
            Up to ``search_results`` hits in provider order.
        """
        response = await self._search_client.search(query, num=self._config.search_results)
        results = response.to_results()
        logger.info(f"Search for {query!r} returned {len(results)} results")
        return results

    async def stream_chat(self, messages: list[Message]) -> AsyncGenerator[StreamEvent]:
        """Stream the model's answer to a chat history.

        Args:
            messages: Full chat history, oldest first.

        Yields:
            Text, tool-call and tool-result events as they arrive. The stream
            ends early once the model would be called more than
            ``max_steps`` times.

        Raises:
            AgentRunError: If the model run reports an error.
        """
        history = to_model_messages(messages)
        response_stream = self._agent.arun(input=history, stream=True, stream_events=True)
        steps = 0

        try:
            async for chunk in response_stream:
                if getattr(chunk, "event", None) == RunEvent.model_request_started:
                    steps += 1
                    if steps > self._config.max_steps:
                        logger.warning(
                            f"Step budget of {self._config.max_steps} exhausted, ending run"
                        )
                        break

                event = _to_stream_event(chunk)
                if event is not None:
                    yield event
        finally:
            await response_stream.aclose()


# Module-level singleton instance
_agent_service: AgentService | None = None


def get_agent_service() -> AgentService:
    """Get or create the global agent service.

    Uses singleton pattern for resource efficiency.

    Returns:
        The AgentService instance.
    """
    global _agent_service
    if _agent_service is None:
        _agent_service = AgentService()
    return _agent_service
