"""
Thin async client for the Elasticsearch REST API.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from jakarta_insight.config import get_settings
from jakarta_insight.models import JsonDict

logger = logging.getLogger(__name__)


class SearchEngineError(Exception):
    """Raised when the search engine rejects a request or cannot be reached."""

    def __init__(self, status_code: int, info: Any = None, message: str = ""):
        self.status_code = status_code
        self.info = info
        super().__init__(message or f"search engine returned {status_code}")


class SearchClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        verify: bool = False,
        auth: Optional[Tuple[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            verify=verify,
            auth=auth,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def _post(self, path: str, body: Optional[JsonDict]) -> JsonDict:
        try:
            response = await self._client.post(path, json=body or {})
        except httpx.HTTPError as e:
            logger.error("Search engine request to %s failed: %s", path, e)
            raise SearchEngineError(502, message=f"search engine unreachable: {e}") from e

        if response.status_code >= 400:
            try:
                info = response.json().get("error")
            except ValueError:
                info = response.text
            raise SearchEngineError(response.status_code, info)

        return response.json()

    async def search(self, index: str, body: JsonDict) -> JsonDict:
        """Run a query DSL body against ``index`` and return the raw response."""
        return await self._post(f"/{index}/_search", body)

    async def count(self, index: str, body: Optional[JsonDict] = None) -> int:
        """Number of documents in ``index`` matching ``body`` (all when omitted)."""
        result = await self._post(f"/{index}/_count", body)
        return int(result.get("count", 0))

    async def close(self) -> None:
        await self._client.aclose()


def total_hits(result: JsonDict) -> int:
    """Read ``hits.total`` in both its numeric and ``{"value": n}`` forms."""
    total = result.get("hits", {}).get("total", 0)
    if isinstance(total, dict):
        return int(total.get("value", 0) or 0)
    return int(total or 0)


def hits_of(result: JsonDict) -> list:
    return result.get("hits", {}).get("hits", []) or []


_client: Optional[SearchClient] = None


def get_search_client() -> SearchClient:
    """FastAPI dependency returning the process-wide search client."""
    global _client
    if _client is None:
        settings = get_settings()
        auth = (settings.ES_USERNAME, settings.ES_PASSWORD) if settings.ES_USERNAME else None
        _client = SearchClient(
            settings.ES_URL,
            timeout=settings.ES_TIMEOUT,
            verify=settings.ES_VERIFY_TLS,
            auth=auth,
        )
    return _client


async def close_search_client() -> None:
    global _client
    if _client is not None:
        await _client.close()
        _client = None


__all__ = [
    "SearchClient",
    "SearchEngineError",
    "get_search_client",
    "close_search_client",
    "total_hits",
    "hits_of",
]
