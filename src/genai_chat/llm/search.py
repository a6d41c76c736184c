"""Client for the semantic search service used for context injection."""

import httpx
import structlog

logger = structlog.get_logger()


class SemanticSearchClient:
    """Looks up extra context for a user query.

    Failures never break a chat request: they are logged and an empty context
    is returned.
    """

    def __init__(self, url: str, http_client: httpx.AsyncClient) -> None:
        self._url = url
        self._http = http_client

    async def search(self, query: str) -> str:
        try:
            response = await self._http.post(self._url, json={"query": query})
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("semantic_search_failed", url=self._url, error=str(e))
            return ""

        context = data.get("context") if isinstance(data, dict) else None
        if not isinstance(context, str):
            return ""

        logger.debug("semantic_search_complete", context_length=len(context))
        return context
