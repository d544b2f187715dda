"""Streaming chat endpoint.

Authenticates the caller, forwards the chat history to the search agent and
relays its events as Server-Sent Events.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from deepsearch.agent.chat_agent import AgentService, get_agent_service
from deepsearch.api.dependencies import require_user
from deepsearch.models.schemas import ChatRequest, Message, Session, StreamEvent, StreamEventType

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

ERROR_MESSAGE = "Oops, an error occured!"


async def _event_stream(
    agent_service: AgentService,
    messages: list[Message],
    user_name: str,
) -> AsyncGenerator[str]:
    """Relay agent events as SSE frames, ending with a done or error event."""
    try:
        async for event in agent_service.stream_chat(messages):
            yield event.to_sse()
    except asyncio.CancelledError:
        logger.info(f"Chat stream for {user_name!r} cancelled by client")
        raise
    except Exception:
        logger.exception(f"Chat stream for {user_name!r} failed")
        yield StreamEvent(type=StreamEventType.ERROR, error=ERROR_MESSAGE, done=True).to_sse()
        return

    yield StreamEvent(type=StreamEventType.DONE, done=True).to_sse()


@router.post("/chat")
async def chat(
    request: ChatRequest,
    session: Annotated[Session, Depends(require_user)],
    agent_service: Annotated[AgentService, Depends(get_agent_service)],
) -> StreamingResponse:
    """Stream the assistant's answer to a chat history.

    Args:
        request: Chat history, oldest message first.
        session: Signed-in session (injected).
        agent_service: Search agent (injected).

    Returns:
        text/event-stream of StreamEvent frames.

    Raises:
        401: No signed-in session.
        422: Missing or empty message list.
    """
    user_name = session.user.name if session.user else ""
    logger.info(f"Chat turn for {user_name!r} with {len(request.messages)} messages")

    return StreamingResponse(
        _event_stream(agent_service, request.messages, user_name),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
