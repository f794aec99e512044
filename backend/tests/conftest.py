from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from jakarta_insight.config import get_settings
from jakarta_insight.main import app
from jakarta_insight.search import SearchEngineError, get_search_client

SearchHandler = Callable[[str, Dict[str, Any]], Dict[str, Any]]
CountHandler = Callable[[str, Optional[Dict[str, Any]]], int]


class FakeSearchClient:
    """Stands in for SearchClient; answers from handlers and records every call."""

    def __init__(
        self,
        search: Optional[SearchHandler] = None,
        count: Optional[CountHandler] = None,
        error: Optional[SearchEngineError] = None,
    ):
        self._search = search or (lambda index, body: {"hits": {"total": {"value": 0}, "hits": []}})
        self._count = count or (lambda index, body: 0)
        self._error = error
        self.searches: List[Tuple[str, Dict[str, Any]]] = []
        self.counts: List[Tuple[str, Optional[Dict[str, Any]]]] = []

    async def search(self, index: str, body: Dict[str, Any]) -> Dict[str, Any]:
        self.searches.append((index, body))
        if self._error:
            raise self._error
        return self._search(index, body)

    async def count(self, index: str, body: Optional[Dict[str, Any]] = None) -> int:
        self.counts.append((index, body))
        if self._error:
            raise self._error
        return self._count(index, body)

    async def close(self) -> None:
        pass


def hit(source: Dict[str, Any], **extra: Any) -> Dict[str, Any]:
    return {"_index": "test", "_id": extra.pop("_id", "1"), "_source": source, **extra}


def hits_response(sources: List[Dict[str, Any]], total: Optional[int] = None) -> Dict[str, Any]:
    return {
        "hits": {
            "total": {"value": len(sources) if total is None else total, "relation": "eq"},
            "hits": [hit(s, _id=str(i)) for i, s in enumerate(sources)],
        }
    }


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def api():
    """Return a factory: api(fake) -> TestClient wired to that fake search client."""

    def make(fake: FakeSearchClient) -> TestClient:
        app.dependency_overrides[get_search_client] = lambda: fake
        return TestClient(app)

    yield make
    app.dependency_overrides.clear()
