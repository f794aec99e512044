"""
Dashboard overview, content search and trending topics.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from jakarta_insight.config import Settings, get_settings
from jakarta_insight.core.metrics import dashboard_stats, format_insight, normalize_hit
from jakarta_insight.errors import APIError
from jakarta_insight.queries.dashboard import (
    dashboard_content_query,
    dashboard_stats_query,
    latest_insight_query,
    trending_keywords_query,
)
from jakarta_insight.queries.search import content_search_query, news_search_query
from jakarta_insight.schemas import (
    DashboardResponse,
    NewsSearchRequest,
    SearchRequest,
    SearchResponse,
)
from jakarta_insight.search import SearchClient, SearchEngineError, get_search_client, hits_of, total_hits
from jakarta_insight.utils import total_pages

logger = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api")


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    source: Literal["news", "twitter"] = Query("news", description="Which feed to summarize"),
    page: int = Query(1, ge=1),
    items_per_page: int = Query(10, ge=1, le=100, alias="itemsPerPage"),
    client: SearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_settings),
):
    """
    Stat cards, one page of newest content and the latest insight digest.

    Args:
        source: ``news`` or ``twitter``
        page: 1-based page number
        items_per_page: Page size

    Returns:
        DashboardResponse with stats, data, total, insights and pagination
    """
    index = settings.index_for(source)
    try:
        stats_result, total, content_result, insight_result = await asyncio.gather(
            client.search(index, dashboard_stats_query(source)),
            client.count(index),
            client.search(index, dashboard_content_query(source, page, items_per_page)),
            client.search(settings.insight_index_for(source), latest_insight_query()),
        )

        insight_hits = hits_of(insight_result)
        insight = format_insight(insight_hits[0].get("_source") if insight_hits else None)

        return {
            "stats": dashboard_stats(source, stats_result.get("aggregations"), total),
            "data": [normalize_hit(hit, source) for hit in hits_of(content_result)],
            "total": total,
            "insights": {source: insight},
            "pagination": {
                "currentPage": page,
                "totalPages": total_pages(total, items_per_page),
                "itemsPerPage": items_per_page,
            },
        }

    except SearchEngineError as e:
        logger.error("Dashboard query failed (%s): %s", e.status_code, e.info or e)
        raise APIError(
            "Failed to fetch dashboard data",
            status_code=e.status_code,
            details={"message": str(e), "meta": e.info, "status": e.status_code},
        ) from e
    except Exception as e:
        logger.exception("Error building dashboard for %s", source)
        raise APIError(
            "Failed to fetch dashboard data",
            details={"message": str(e), "meta": None, "status": 500},
        ) from e


@router.post("/search", response_model=SearchResponse)
async def search_content(
    request: SearchRequest,
    client: SearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_settings),
):
    """Paginated free-text search over news articles or tweets."""
    try:
        body = content_search_query(
            request.query, request.source, request.page, request.items_per_page
        )
        result = await client.search(settings.index_for(request.source), body)
        total = total_hits(result)

        return {
            "hits": [normalize_hit(hit, request.source) for hit in hits_of(result)],
            "total": total,
            "pagination": {
                "currentPage": request.page,
                "totalPages": total_pages(total, request.items_per_page),
                "itemsPerPage": request.items_per_page,
            },
        }
    except Exception as e:
        logger.error(f"Search error: {e}")
        raise APIError("Failed to search content", details=str(e)) from e


@router.post("/news/search")
async def search_news(
    request: NewsSearchRequest,
    client: SearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_settings),
):
    """Ten newest news articles matching the query, as the raw engine response."""
    try:
        return await client.search(settings.NEWS_INDEX, news_search_query(request.query))
    except Exception as e:
        logger.error(f"News search error: {e}")
        raise APIError("Failed to search news", details=str(e)) from e


@router.get("/trending")
async def get_trending(
    source: Optional[str] = Query(None, description="'twitter' for the latest insight digest"),
    client: SearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_settings),
):
    """
    Trending panel data.

    For ``source=twitter`` the latest Twitter insight document (location,
    hashtag and mention totals); otherwise the top contextual keywords of
    last week's news.
    """
    try:
        if source == "twitter":
            result = await client.search(settings.TWITTER_INSIGHT_INDEX, latest_insight_query())
            hits = hits_of(result)
            return {"data": hits[0].get("_source") if hits else None}

        result = await client.search(settings.NEWS_INDEX, trending_keywords_query())
        filtered = (result.get("aggregations") or {}).get("filtered_trending_keywords") or {}
        buckets = (filtered.get("trending_keywords") or {}).get("buckets") or []
        return {"trending": buckets}

    except Exception as e:
        logger.error(f"Failed to fetch trending topics: {e}")
        raise APIError("Failed to fetch trending topics", details=str(e)) from e
