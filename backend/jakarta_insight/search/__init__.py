from jakarta_insight.search.client import (
    SearchClient,
    SearchEngineError,
    close_search_client,
    get_search_client,
    hits_of,
    total_hits,
)

__all__ = [
    "SearchClient",
    "SearchEngineError",
    "close_search_client",
    "get_search_client",
    "hits_of",
    "total_hits",
]
