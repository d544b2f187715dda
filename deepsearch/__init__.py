"""Deepsearch - web chat with a search-and-cite language model assistant.

Combines FastAPI for HTTP streaming, Agno for model orchestration,
NiceGUI for visualization, and Pydantic for data validation.

Components:
    - api: HTTP endpoints and streaming responses
    - agent: LLM orchestration with the web search tool
    - auth: Signed session cookies for the chat endpoint
    - search: Serper web search client
    - ui: Web interface and message rendering
    - models: Message, part and stream event schemas
"""

__version__ = "0.1.0"
