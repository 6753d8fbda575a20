"""
Tavily Search Service for the trip planner.
Runs the web search whose results ground the assistant reply.

This service is DETERMINISTIC - NO LLM calls.
Any failure raises SearchProviderError; there are no retries.

Python 3.9 compatible - uses typing.Optional
"""

import logging
from typing import Optional

import httpx

from .config import TripPlannerConfig
from .errors import SearchProviderError
from .models import SearchResponse, SearchResult

logger = logging.getLogger(__name__)

# Maximum chars to log from an error body
MAX_ERROR_LOG_CHARS = 2000


class TavilySearchService:
    """Service for Tavily search API operations."""

    def __init__(
        self,
        config: TripPlannerConfig,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self.http_client = http_client or httpx.AsyncClient(timeout=config.http_timeout)
        logger.info("Tavily search service initialized")

    async def close(self):
        """Close the HTTP client."""
        await self.http_client.aclose()
        logger.info("Tavily search service closed")

    def _build_payload(self, query: str) -> dict:
        return {
            "api_key": self.config.tavily_api_key,
            "query": query,
            "search_depth": self.config.search_depth,
            "include_answer": True,
            "include_raw_content": False,
            "max_results": self.config.max_results,
            "include_domains": self.config.include_domains,
        }

    async def search(self, query: str) -> SearchResponse:
        """
        Search the travel sites for a query.

        Args:
            query: Composed search query

        Returns:
            SearchResponse with the provider answer and ordered results

        Raises:
            SearchProviderError: key missing, non-2xx status, network failure
                or an unreadable body
        """
        if not self.config.tavily_api_key:
            raise SearchProviderError(
                "Tavily API key not configured. Add TAVILY_API_KEY to .env"
            )

        logger.info(f"Searching Tavily for: {query}")

        try:
            response = await self.http_client.post(
                self.config.tavily_search_url,
                json=self._build_payload(query),
            )
        except httpx.HTTPError as e:
            logger.error(f"Tavily request failed: {e}")
            raise SearchProviderError(f"Tavily request failed: {e}") from e

        if response.status_code < 200 or response.status_code >= 300:
            logger.error(f"Tavily error: {response.text[:MAX_ERROR_LOG_CHARS]}")
            raise SearchProviderError(f"Tavily API error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise SearchProviderError(f"Tavily returned invalid JSON: {e}") from e

        results = [
            SearchResult(
                title=item.get("title") or "",
                url=item.get("url") or "",
                content=item.get("content") or "",
            )
            for item in data.get("results") or []
        ]
        logger.info(f"Tavily search complete. Found {len(results)} results")

        return SearchResponse(answer=data.get("answer") or "", results=results)
