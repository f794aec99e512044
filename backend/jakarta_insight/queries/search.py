"""
Free-text search bodies for the dashboard search bar.
"""
from __future__ import annotations

from typing import Optional

from jakarta_insight.models import JsonDict
from jakarta_insight.queries.dashboard import display_fields, sort_field


def content_search_query(
    query: Optional[str], source: str, page: int = 1, items_per_page: int = 10
) -> JsonDict:
    """Paginated search across news or tweets; no query text matches everything."""
    if query:
        match: JsonDict = {
            "multi_match": {
                "query": query,
                "fields": ["content", "title", "description", "full_text"],
                "type": "best_fields",
                "operator": "and",
                "minimum_should_match": "75%",
            }
        }
    else:
        match = {"match_all": {}}

    return {
        "size": items_per_page,
        "from": (page - 1) * items_per_page,
        "_source": display_fields(source),
        "query": match,
        "sort": [{sort_field(source): "desc"}],
    }


def news_search_query(query: Optional[str], size: int = 10) -> JsonDict:
    fields = [f for f in display_fields("news") if f != "description"]
    return {
        "size": size,
        "sort": [{"publish_at": "desc"}],
        "_source": fields,
        "query": (
            {"multi_match": {"query": query, "fields": ["content", "title", "description"]}}
            if query
            else {"match_all": {}}
        ),
    }
