"""
Citizen engagement: chatbot usage statistics and the interaction log.
"""
from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, Query

from jakarta_insight.config import Settings, get_settings
from jakarta_insight.core.metrics import engagement_stats, reshape_chat_log
from jakarta_insight.errors import APIError
from jakarta_insight.queries.engagement import (
    active_users_query,
    answered_interactions_query,
    avg_response_time_query,
    chat_logs_query,
    daily_interactions_query,
)
from jakarta_insight.schemas import ChatLogsResponse, EngagementStats
from jakarta_insight.search import SearchClient, get_search_client, hits_of
from jakarta_insight.utils import now_utc

logger = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api/engagement")


@router.get("", response_model=EngagementStats)
async def get_engagement_stats(
    client: SearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_settings),
):
    """Active users and interactions of the last 24 hours, response rate and latency."""
    index = settings.CHAT_INDEX
    try:
        active_users, daily, avg_response, answered, total = await asyncio.gather(
            client.search(index, active_users_query()),
            client.count(index, daily_interactions_query()),
            client.search(index, avg_response_time_query()),
            client.count(index, answered_interactions_query()),
            client.count(index),
        )
        return engagement_stats(
            active_users.get("aggregations"),
            daily,
            avg_response.get("aggregations"),
            answered,
            total,
        )
    except Exception as e:
        logger.error(f"Error fetching engagement stats: {e}")
        raise APIError("Failed to fetch engagement statistics", details=str(e)) from e


@router.get("/logs", response_model=ChatLogsResponse)
async def get_chat_logs(
    search: str = Query("", description="Free text over message, response and user id"),
    client: SearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_settings),
):
    """The 100 most recent chatbot interactions, optionally filtered."""
    try:
        result = await client.search(settings.CHAT_INDEX, chat_logs_query(search.strip()))
        now = now_utc()
        return {"logs": [reshape_chat_log(hit, now=now) for hit in hits_of(result)]}
    except Exception as e:
        logger.error(f"Error fetching chat logs: {e}")
        raise APIError("Failed to fetch chat logs", details=str(e)) from e
