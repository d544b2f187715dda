"""Serper web search client using httpx.

Posts ``{"q": query, "num": num}`` to the Serper endpoint and validates the
organic results with pydantic.
"""

import logging

import httpx
from pydantic import BaseModel, Field, ValidationError

from deepsearch.models.schemas import SearchResult
from deepsearch.search.config import SearchConfig, get_search_config

logger = logging.getLogger(__name__)


class SearchError(Exception):
    """Raised when the search provider request fails."""

    pass


class OrganicResult(BaseModel):
    """A single organic hit as returned by Serper."""

    title: str = ""
    link: str = ""
    snippet: str = ""
    position: int | None = None


class SearchResponse(BaseModel):
    """Subset of the Serper response used by the search tool.

    Attributes:
        organic: Organic results in provider order.
    """

    organic: list[OrganicResult] = Field(default_factory=list)

    def to_results(self) -> list[SearchResult]:
        """Flatten organic hits into title/link/snippet results, preserving order."""
        return [
            SearchResult(title=hit.title, link=hit.link, snippet=hit.snippet)
            for hit in self.organic
        ]


class SerperClient:
    """Async client for the Serper search API.

    Cancelling the task awaiting ``search`` aborts the in-flight request.
    """

    def __init__(
        self,
        config: SearchConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the search client.

        Args:
            config: Optional search configuration.
                    Loads from environment if not provided.
            client: Optional shared HTTP client. A short-lived client is
                    opened per request when omitted.
        """
        self._config = config or get_search_config()
        self._client = client

    async def search(self, query: str, num: int = 10) -> SearchResponse:
        """Run a web search.

        Args:
            query: The search query.
            num: Number of results to request.

        Returns:
            SearchResponse with organic results in provider order.

        Raises:
            SearchError: If the request fails or the response is malformed.
        """
        payload = {"q": query, "num": num}
        headers = {
            "X-API-KEY": self._config.api_key,
            "Content-Type": "application/json",
        }

        logger.info(f"Searching web: {query!r} (num={num})")

        if self._client is not None:
            return await self._post(self._client, payload, headers)

        async with httpx.AsyncClient(timeout=self._config.timeout) as client:
            return await self._post(client, payload, headers)

    async def _post(
        self,
        client: httpx.AsyncClient,
        payload: dict[str, str | int],
        headers: dict[str, str],
    ) -> SearchResponse:
        try:
            response = await client.post(self._config.base_url, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SearchError(f"Search request failed: HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise SearchError(f"Search request failed: {e}") from e

        try:
            return SearchResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise SearchError(f"Malformed search response: {e}") from e
