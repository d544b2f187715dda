"""Agno agent logic for LLM orchestration.

Handles search-and-cite answers over a caller-supplied chat history.

Responsibilities:
    - Agent initialization with OpenAI models
    - The searchWeb tool backed by the Serper client
    - Chat history conversion for the model
    - Streaming text and tool events

Leverages the Agno framework for the tool-calling loop.
Maintains clean separation from the HTTP layer.
"""

from deepsearch.agent.chat_agent import AgentRunError, AgentService, get_agent_service
from deepsearch.agent.config import AgentConfig, get_agent_config

__all__ = [
    "AgentConfig",
    "AgentRunError",
    "AgentService",
    "get_agent_config",
    "get_agent_service",
]
