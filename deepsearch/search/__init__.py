"""Web search client used by the agent's searchWeb tool.

Responsibilities:
    - Serper API requests over async httpx
    - Flattening organic hits into title/link/snippet results

No caching and no retries. Cancelling the awaiting task aborts the request.
"""

from deepsearch.search.config import SearchConfig, get_search_config
from deepsearch.search.serper import SearchError, SearchResponse, SerperClient

__all__ = ["SearchConfig", "SearchError", "SearchResponse", "SerperClient", "get_search_config"]
