"""
Query bodies behind the dashboard overview and the trending panel.
"""
from __future__ import annotations

from jakarta_insight.config import (
    GOVERNMENT_TOPIC,
    NEWS_FIELDS,
    TRENDING_EXCLUDED_PHRASE,
    TWITTER_FIELDS,
    URGENT_THRESHOLD,
)
from jakarta_insight.models import JsonDict


def sort_field(source: str) -> str:
    return "publish_at" if source == "news" else "date"


def display_fields(source: str, with_keywords: bool = False) -> list[str]:
    fields = list(NEWS_FIELDS if source == "news" else TWITTER_FIELDS)
    if with_keywords:
        fields.append("contextual_keywords")
        if source == "news":
            fields.append("creator")
    return fields


def dashboard_stats_query(source: str) -> JsonDict:
    """Aggregation-only body for the stat cards of one source."""
    is_twitter = source == "twitter"
    return {
        "size": 0,
        "aggs": {
            "urgent_count": {"filter": {"range": {"urgency_level": {"gte": URGENT_THRESHOLD}}}},
            "government_coverage": {
                "filter": {"term": {"topic_classification.keyword": GOVERNMENT_TOPIC}}
            },
            "sentiment_distribution": {"terms": {"field": "sentiment.keyword"}},
            "total_engagements": {
                "sum": {"field": "favorite_count" if is_twitter else "_score"}
            },
            "total_views": {"sum": {"field": "views_count" if is_twitter else "_score"}},
            "active_discussions": {
                "filter": {"range": {("reply_count" if is_twitter else "_score"): {"gt": 0}}}
            },
        },
    }


def dashboard_content_query(source: str, page: int, items_per_page: int) -> JsonDict:
    return {
        "size": items_per_page,
        "from": (page - 1) * items_per_page,
        "sort": [{sort_field(source): "desc"}],
        "_source": display_fields(source, with_keywords=True),
    }


def latest_insight_query() -> JsonDict:
    return {"size": 1, "sort": [{"date": {"order": "desc"}}]}


def trending_keywords_query(size: int = 10) -> JsonDict:
    """Top contextual keywords of the past week's news, excluding one phrase set."""
    return {
        "size": 0,
        "query": {
            "bool": {
                "must": [{"range": {"publish_at": {"gte": "now-7d/d", "lte": "now"}}}],
                "must_not": [
                    {
                        "multi_match": {
                            "query": TRENDING_EXCLUDED_PHRASE,
                            "fields": ["content", "title", "description"],
                            "operator": "or",
                        }
                    }
                ],
            }
        },
        "aggs": {
            "filtered_trending_keywords": {
                "filter": {"range": {"urgency_level": {"gt": 0}}},
                "aggs": {
                    "trending_keywords": {
                        "terms": {"field": "contextual_keywords.keyword", "size": size}
                    }
                },
            }
        },
    }
