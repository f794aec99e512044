"""
Analytics pages: topics, weekly social media metrics, enhanced analytics,
the hashtag/mention network and the tweets behind a network node.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Tuple

from fastapi import APIRouter, Depends, Query

from jakarta_insight.config import DEFAULT_NETWORK_REGION, Settings, get_settings
from jakarta_insight.core.metrics import reshape_topics, weekly_twitter_analytics
from jakarta_insight.core.network import (
    build_network,
    classify_term,
    relation_breakdown,
    reshape_related_tweet,
    serialize_network,
)
from jakarta_insight.errors import APIError, bad_request
from jakarta_insight.models import JsonDict
from jakarta_insight.queries.engagement import topics_query
from jakarta_insight.queries.twitter import (
    current_week_query,
    enhanced_analytics_query,
    network_query,
    previous_week_query,
    related_tweets_query,
    week_windows,
)
from jakarta_insight.schemas import (
    EnhancedAnalyticsResponse,
    NetworkResponse,
    RelatedTweetsResponse,
    SummaryResponse,
    TopicsResponse,
    TwitterAnalyticsResponse,
)
from jakarta_insight.search import SearchClient, get_search_client, hits_of, total_hits
from jakarta_insight.services.recommendations import ai_recommendations, template_recommendations
from jakarta_insight.services.summarizer import summarize_tweets
from jakarta_insight.utils import now_utc

logger = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api/analytics")


@router.get("/topics", response_model=TopicsResponse)
async def get_topics(
    client: SearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_settings),
):
    """Topics citizens raised with the chatbot this week, with urgency and sentiment score."""
    try:
        result = await client.search(settings.CHAT_INDEX, topics_query())
        topics = reshape_topics(result.get("aggregations"))
        if not topics:
            logger.info("No topics found in aggregations")
        return {"topics": topics}
    except Exception as e:
        logger.error(f"Error fetching topics: {e}")
        raise APIError("Failed to fetch topic data", details=str(e)) from e


@router.get("/twitter", response_model=TwitterAnalyticsResponse)
async def get_twitter_analytics(
    client: SearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_settings),
):
    """
    This week's social media metrics compared with the week before.

    Returns:
        Headline counts, weekly percentage changes, daily sentiment trend,
        top issues, department mentions and regional distribution
    """
    index = settings.TWITTER_INDEX
    (current_gte, current_lt), (previous_gte, previous_lt) = week_windows(now_utc())
    try:
        current, previous, total = await asyncio.gather(
            client.search(index, current_week_query(current_gte, current_lt)),
            client.search(index, previous_week_query(previous_gte, previous_lt)),
            client.count(index),
        )
        return weekly_twitter_analytics(
            current.get("aggregations"), previous.get("aggregations"), total
        )
    except Exception as e:
        logger.error(f"Error in Twitter Analytics API: {e}")
        raise APIError("Failed to fetch analytics data", details=str(e)) from e


@router.get("/enhanced-twitter", response_model=EnhancedAnalyticsResponse)
async def get_enhanced_twitter_analytics(
    time_range: str = Query("daily", alias="timeRange", description="daily, weekly or monthly"),
    region: str = Query("all", description="affected_region, or 'all'"),
    ai: bool = Query(False, description="Write recommendations with the OpenAI API"),
    client: SearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_settings),
):
    """Sentiment, urgency, engagement and audience aggregations with recommendations."""
    try:
        result = await client.search(
            settings.TWITTER_INDEX, enhanced_analytics_query(time_range, region)
        )
        aggs = result.get("aggregations") or {}

        critical = aggs.get("critical_issues")
        if ai:
            recommendations = await ai_recommendations(critical)
        else:
            recommendations = template_recommendations(critical)

        return {
            "timeRange": time_range,
            "region": region,
            "sentimentDistribution": aggs.get("sentiment_distribution"),
            "sentimentTrends": aggs.get("sentiment_trends"),
            "urgencyDistribution": aggs.get("urgency_distribution"),
            "topPosts": aggs.get("top_posts"),
            "keywords": aggs.get("keyword_analysis"),
            "hashtags": aggs.get("hashtag_analysis"),
            "regionalSentiment": aggs.get("regional_sentiment"),
            "engagementTrends": aggs.get("engagement_trends"),
            "audienceDistribution": aggs.get("audience_distribution"),
            "recommendations": recommendations,
        }
    except Exception as e:
        logger.error(f"Enhanced Twitter Analytics Error: {e}")
        raise APIError("Failed to fetch enhanced analytics data", details=str(e)) from e


@router.get("/network", response_model=NetworkResponse)
async def get_network(
    region: str = Query(DEFAULT_NETWORK_REGION, description="affected_region, or 'All Data'"),
    client: SearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_settings),
):
    """Hashtag and mention graph of the region's tweets."""
    try:
        result = await client.search(settings.TWITTER_INDEX, network_query(region))
        posts = (hit.get("_source") or {} for hit in hits_of(result))
        graph = build_network(posts)
        logger.info(
            "Network for %s: %d nodes, %d edges", region, len(graph.nodes), len(graph.edges)
        )
        return serialize_network(graph, region)
    except Exception as e:
        logger.error(f"Network analysis error: {e}")
        raise APIError("Failed to fetch network data", details=str(e)) from e


async def fetch_related_tweets(
    client: SearchClient, settings: Settings, term: str
) -> Tuple[List[JsonDict], JsonDict]:
    """Tweets written by, mentioning or tagged with ``term``, plus a breakdown."""
    node_type, clean_term = classify_term(term)
    result = await client.search(
        settings.TWITTER_INDEX, related_tweets_query(term, clean_term, node_type)
    )

    tweets = [
        reshape_related_tweet(hit.get("_source") or {}, node_type, clean_term)
        for hit in hits_of(result)
    ]
    meta = {
        "total": total_hits(result) if tweets else 0,
        "query_term": term,
        "clean_query_term": clean_term,
        "node_type": node_type,
        "breakdown": relation_breakdown(tweets),
    }
    return tweets, meta


@router.get("/user-tweets", response_model=RelatedTweetsResponse)
async def get_user_tweets(
    username: str = Query("", description="User name, @mention or #hashtag of a network node"),
    client: SearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_settings),
):
    if not username:
        raise bad_request("Username is required")

    node_type, clean_term = classify_term(username)
    logger.info("Related tweets for %s (%s)", username, node_type)
    try:
        tweets, meta = await fetch_related_tweets(client, settings, username)
        return {"tweets": tweets, "meta": meta}
    except Exception as e:
        logger.error(f"Error fetching related tweets for {username}: {e}")
        raise APIError(
            "Failed to fetch related tweets",
            details={"message": str(e), "query": {"original": username, "clean": clean_term}},
        ) from e


@router.get("/summary", response_model=SummaryResponse)
async def get_node_summary(
    username: str = Query("", description="User name, @mention or #hashtag of a network node"),
    client: SearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_settings),
):
    """
    Digest of the tweets behind a network node from the summarization service.

    ``summary`` is null whenever the service is unavailable; that is not an error.
    """
    if not username:
        raise bad_request("Username is required")

    try:
        tweets, _ = await fetch_related_tweets(client, settings, username)
    except Exception as e:
        logger.error(f"Error fetching tweets to summarize for {username}: {e}")
        raise APIError("Failed to fetch related tweets", details=str(e)) from e

    return {"summary": await summarize_tweets(tweets)}
