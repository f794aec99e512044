"""
Query bodies over the chatbot interaction log index.
"""
from __future__ import annotations

from typing import Optional

from jakarta_insight.config import CHAT_LOG_SIZE
from jakarta_insight.models import JsonDict


def last_24h() -> JsonDict:
    return {"range": {"timestamp": {"gte": "now-24h"}}}


def active_users_query() -> JsonDict:
    return {
        "size": 0,
        "query": last_24h(),
        "aggs": {"unique_users": {"cardinality": {"field": "user_id"}}},
    }


def daily_interactions_query() -> JsonDict:
    return {"query": last_24h()}


def avg_response_time_query() -> JsonDict:
    return {
        "size": 0,
        "aggs": {"avg_response_time": {"avg": {"field": "response_time_ms"}}},
    }


def answered_interactions_query() -> JsonDict:
    return {"query": {"bool": {"must_not": {"term": {"bot_response": ""}}}}}


def chat_logs_query(search: Optional[str] = None, size: int = CHAT_LOG_SIZE) -> JsonDict:
    if search:
        match: JsonDict = {
            "multi_match": {
                "query": search,
                "fields": ["message_text", "bot_response", "user_id"],
            }
        }
    else:
        match = {"match_all": {}}
    return {
        "query": {"bool": {"must": [match]}},
        "sort": [{"timestamp": {"order": "desc"}}],
        "size": size,
    }


def topics_query(size: int = 9) -> JsonDict:
    """Top topics raised to the chatbot in the last week with urgency and sentiment."""
    return {
        "size": 0,
        "query": {"range": {"timestamp": {"gte": "now-7d/d"}}},
        "aggs": {
            "topics": {
                "terms": {"field": "topic_classification.keyword", "size": size},
                "aggs": {
                    "avg_urgency": {"avg": {"field": "urgency_level"}},
                    "sentiment_distribution": {"terms": {"field": "sentiment.keyword"}},
                },
            }
        },
    }
