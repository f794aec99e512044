"""
Query bodies for the social media analytics pages.
"""
from __future__ import annotations

from datetime import datetime, timedelta

from jakarta_insight.config import (
    ALL_REGIONS,
    DEPARTMENT_KEYWORDS,
    HIGH_URGENCY_THRESHOLD,
    MEDIUM_URGENCY_THRESHOLD,
    NETWORK_MAX_POSTS,
    RELATED_TWEETS_SIZE,
)
from jakarta_insight.models import JsonDict

ENGAGEMENT_SCRIPT = (
    "doc['favorite_count'].value + doc['retweet_count'].value + "
    "doc['reply_count'].value + doc['views_count'].value"
)

TIME_RANGES: dict[str, JsonDict] = {
    "daily": {"gte": "now-24h", "lt": "now"},
    "weekly": {"gte": "now-7d/d", "lt": "now/d"},
    "monthly": {"gte": "now-30d/d", "lt": "now/d"},
}


def _high_urgency_filter() -> JsonDict:
    return {"filter": {"range": {"urgency_level": {"gte": HIGH_URGENCY_THRESHOLD}}}}


def _department_mentions() -> JsonDict:
    return {
        "filters": {
            "filters": {
                key: {"match_phrase": {"contextual_keywords": phrase}}
                for key, phrase in DEPARTMENT_KEYWORDS.items()
            }
        }
    }


def week_windows(now: datetime) -> tuple[tuple[str, str], tuple[str, str]]:
    """(current, previous) seven-day windows ending at ``now`` as ISO strings."""
    last_week = now - timedelta(days=7)
    previous_week = last_week - timedelta(days=7)
    return (
        (last_week.isoformat(), now.isoformat()),
        (previous_week.isoformat(), last_week.isoformat()),
    )


def _date_window(gte: str, lt: str) -> JsonDict:
    return {"range": {"date": {"gte": gte, "lt": lt}}}


def current_week_query(gte: str, lt: str) -> JsonDict:
    return {
        "size": 0,
        "query": _date_window(gte, lt),
        "aggs": {
            "total_engagement": {"sum": {"script": {"source": ENGAGEMENT_SCRIPT}}},
            "unique_users": {"cardinality": {"field": "username.keyword"}},
            "sentiment_distribution": {"terms": {"field": "sentiment.keyword", "size": 3}},
            "critical_topics": {
                "terms": {"field": "topic_classification.keyword", "size": 10},
                "aggs": {
                    "high_urgency_count": _high_urgency_filter(),
                    "avg_urgency": {"avg": {"field": "urgency_level"}},
                },
            },
            "dept_mentions": _department_mentions(),
            "sentiment_trends": {
                "date_histogram": {
                    "field": "date",
                    "calendar_interval": "day",
                    "format": "yyyy-MM-dd",
                },
                "aggs": {"sentiments": {"terms": {"field": "sentiment.keyword", "size": 3}}},
            },
            "regional_distribution": {"terms": {"field": "affected_region.keyword", "size": 6}},
            "high_urgency_total": _high_urgency_filter(),
        },
    }


def previous_week_query(gte: str, lt: str) -> JsonDict:
    return {
        "size": 0,
        "query": _date_window(gte, lt),
        "aggs": {
            "total_engagement": {"sum": {"script": {"source": ENGAGEMENT_SCRIPT}}},
            "unique_users": {"cardinality": {"field": "username.keyword"}},
            "high_urgency_count": _high_urgency_filter(),
            "dept_mentions": _department_mentions(),
        },
    }


def enhanced_analytics_query(time_range: str, region: str = "all") -> JsonDict:
    """
    The full aggregation set of the enhanced analytics view.

    Args:
        time_range: ``daily``, ``weekly`` or ``monthly``; anything else is daily
        region: ``affected_region`` to restrict to, or ``all``
    """
    date_range = TIME_RANGES.get(time_range, TIME_RANGES["daily"])
    must: list[JsonDict] = [{"range": {"date": dict(date_range)}}]
    if region != "all":
        must.append({"term": {"affected_region.keyword": region}})

    interval = "day" if time_range == "monthly" else "hour"

    return {
        "size": 0,
        "query": {"bool": {"must": must}},
        "aggs": {
            "sentiment_distribution": {"terms": {"field": "sentiment.keyword"}},
            "sentiment_trends": {
                "date_histogram": {"field": "date", "calendar_interval": interval},
                "aggs": {"sentiments": {"terms": {"field": "sentiment.keyword"}}},
            },
            "urgency_distribution": {
                "range": {
                    "field": "urgency_level",
                    "ranges": [
                        {"to": MEDIUM_URGENCY_THRESHOLD, "key": "Low"},
                        {
                            "from": MEDIUM_URGENCY_THRESHOLD,
                            "to": HIGH_URGENCY_THRESHOLD,
                            "key": "Medium",
                        },
                        {"from": HIGH_URGENCY_THRESHOLD, "key": "High"},
                    ],
                },
                "aggs": {
                    "top_topics": {"terms": {"field": "topic_classification.keyword", "size": 3}}
                },
            },
            "top_posts": {
                "top_hits": {
                    "size": 10,
                    "sort": [
                        {"views_count": {"order": "desc"}},
                        {"favorite_count": {"order": "desc"}},
                    ],
                    "_source": {
                        "includes": [
                            "full_text",
                            "views_count",
                            "favorite_count",
                            "retweet_count",
                            "sentiment",
                            "urgency_level",
                            "affected_region",
                            "link_post",
                        ]
                    },
                }
            },
            "keyword_analysis": {"terms": {"field": "contextual_keywords.keyword", "size": 50}},
            "hashtag_analysis": {"terms": {"field": "hastags.keyword", "size": 30}},
            "regional_sentiment": {
                "terms": {"field": "affected_region.keyword"},
                "aggs": {"sentiment_breakdown": {"terms": {"field": "sentiment.keyword"}}},
            },
            "engagement_trends": {
                "date_histogram": {"field": "date", "calendar_interval": interval},
                "aggs": {
                    "avg_views": {"avg": {"field": "views_count"}},
                    "avg_favorites": {"avg": {"field": "favorite_count"}},
                    "avg_retweets": {"avg": {"field": "retweet_count"}},
                    "avg_replies": {"avg": {"field": "reply_count"}},
                },
            },
            "audience_distribution": {"terms": {"field": "target_audience.keyword", "size": 10}},
            "critical_issues": {
                "filter": {
                    "bool": {
                        "must": [{"range": {"urgency_level": {"gte": HIGH_URGENCY_THRESHOLD}}}]
                    }
                },
                "aggs": {
                    "by_topic": {
                        "terms": {"field": "topic_classification.keyword", "size": 5},
                        "aggs": {
                            "by_region": {
                                "terms": {"field": "affected_region.keyword"},
                                "aggs": {
                                    "sentiment_analysis": {
                                        "terms": {"field": "sentiment.keyword"}
                                    }
                                },
                            }
                        },
                    }
                },
            },
        },
    }


def network_query(region: str, size: int = NETWORK_MAX_POSTS) -> JsonDict:
    """Tweets carrying both hashtags and mentions, optionally for one region.

    The index spells the hashtag field ``hastags``.
    """
    must = [] if region == ALL_REGIONS else [{"match": {"affected_region.keyword": region}}]
    return {
        "size": size,
        "query": {
            "bool": {
                "must": must,
                "filter": [
                    {"exists": {"field": "hastags"}},
                    {"exists": {"field": "mentions"}},
                ],
            }
        },
        "sort": [{"date": "desc"}],
    }


def related_tweets_query(
    term: str, clean_term: str, node_type: str, size: int = RELATED_TWEETS_SIZE
) -> JsonDict:
    if node_type == "hashtag":
        query: JsonDict = {"match": {"hastags": term}}
    else:
        query = {
            "bool": {
                "should": [
                    {"match": {"username": clean_term}},
                    {"match": {"mentions": term}},
                ],
                "minimum_should_match": 1,
            }
        }
    return {
        "query": query,
        "sort": [{"date": {"order": "desc"}}],
        "size": size,
    }
