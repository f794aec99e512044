"""
Reshape search engine aggregations into the flat payloads of the dashboard.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from jakarta_insight.core.scoring import calculate_sentiment_score, urgency_label
from jakarta_insight.models import JsonDict
from jakarta_insight.utils import (
    agg_doc_count,
    agg_value,
    as_list,
    bucket_count,
    calculate_change,
    extract_domain_from_url,
    format_time_ago,
    get_buckets,
    now_utc,
    percentage,
)

INSIGHT_LIMIT = 5


# Dashboard overview

def news_stats(aggregations: Optional[JsonDict], total: int) -> JsonDict:
    positive = bucket_count(get_buckets(aggregations, "sentiment_distribution"), "Positive")
    return {
        "totalArticles": total,
        "urgentArticles": agg_doc_count(aggregations, "urgent_count"),
        "governmentMentions": agg_doc_count(aggregations, "government_coverage"),
        "publicSentiment": percentage(positive, total),
        "regionalImpact": 0,
        "topicDistribution": {},
    }


def twitter_stats(aggregations: Optional[JsonDict], total: int) -> JsonDict:
    positive = bucket_count(get_buckets(aggregations, "sentiment_distribution"), "Positive")
    engagements = agg_value(aggregations, "total_engagements")
    return {
        "totalEngagements": engagements,
        "citizenReach": agg_value(aggregations, "total_views"),
        "activeDiscussions": agg_doc_count(aggregations, "active_discussions"),
        "publicResponse": percentage(positive, total),
        "totalTweets": total,
        "avgEngagementRate": engagements / total if total > 0 else 0,
    }


def dashboard_stats(source: str, aggregations: Optional[JsonDict], total: int) -> JsonDict:
    if source == "news":
        return news_stats(aggregations, total)
    return twitter_stats(aggregations, total)


def format_insight(document: Optional[JsonDict], today: Optional[datetime] = None) -> JsonDict:
    """
    Latest insight digest with its entries ranked by urgency, top five kept.

    A missing document becomes today's date with no entries.
    """
    if not document:
        return {"date": (today or now_utc()).date().isoformat(), "insight": []}

    entries = list(document.get("insight") or [])
    entries.sort(key=lambda entry: entry.get("urgency_score") or 0, reverse=True)
    return {**document, "insight": entries[:INSIGHT_LIMIT]}


def normalize_hit(hit: JsonDict, source: str) -> JsonDict:
    """Display-ready copy of a search hit.

    ``target_audience`` is always a list and news articles carry the
    publisher domain of their URL.
    """
    doc = dict(hit.get("_source") or {})
    doc["target_audience"] = as_list(doc.get("target_audience"), ["General"])
    if source == "news":
        doc["source_domain"] = extract_domain_from_url(doc.get("url"))
    return {**hit, "_source": doc}


# Citizen engagement

def engagement_stats(
    active_users: Optional[JsonDict],
    daily_interactions: int,
    avg_response: Optional[JsonDict],
    answered: int,
    total: int,
) -> JsonDict:
    response_rate = round(percentage(answered, total))
    avg_ms = agg_value(avg_response, "avg_response_time")
    return {
        "activeUsers": agg_value(active_users, "unique_users"),
        "dailyInteractions": daily_interactions,
        "responseRate": response_rate,
        "avgResponseTime": round(avg_ms / 1000),
    }


CHAT_LOG_FIELDS = (
    "user_id",
    "username",
    "message_text",
    "bot_response",
    "timestamp",
    "response_time_ms",
)


def reshape_chat_log(hit: JsonDict, now: Optional[datetime] = None) -> JsonDict:
    doc = hit.get("_source") or {}
    log = {field: doc.get(field) for field in CHAT_LOG_FIELDS}
    log["time_ago"] = format_time_ago(doc.get("timestamp"), now=now)
    return log


def reshape_topics(aggregations: Optional[JsonDict]) -> List[JsonDict]:
    return [
        {
            "name": bucket.get("key"),
            "count": bucket.get("doc_count", 0),
            "urgency": round((bucket.get("avg_urgency") or {}).get("value") or 0),
            "sentiment": calculate_sentiment_score(
                (bucket.get("sentiment_distribution") or {}).get("buckets") or []
            ),
        }
        for bucket in get_buckets(aggregations, "topics")
    ]


# Weekly social media analytics

def department_mentions_total(aggregations: Optional[JsonDict]) -> int:
    buckets = ((aggregations or {}).get("dept_mentions") or {}).get("buckets") or {}
    return sum((bucket or {}).get("doc_count", 0) for bucket in buckets.values())


def department_metrics(aggregations: Optional[JsonDict]) -> List[JsonDict]:
    buckets: Dict[str, JsonDict] = ((aggregations or {}).get("dept_mentions") or {}).get("buckets") or {}
    metrics = [
        {"department": key[:1].upper() + key[1:], "mentions": (value or {}).get("doc_count", 0)}
        for key, value in buckets.items()
    ]
    metrics = [m for m in metrics if m["mentions"] > 0]
    metrics.sort(key=lambda m: m["mentions"], reverse=True)
    return metrics


def sentiment_trends(aggregations: Optional[JsonDict]) -> List[JsonDict]:
    trends = []
    for bucket in get_buckets(aggregations, "sentiment_trends"):
        counts = {
            "date": bucket.get("key_as_string"),
            "positive": 0,
            "negative": 0,
            "neutral": 0,
        }
        for sentiment in (bucket.get("sentiments") or {}).get("buckets") or []:
            key = str(sentiment.get("key", "")).lower()
            if key in ("positive", "negative", "neutral"):
                counts[key] = sentiment.get("doc_count", 0)
        trends.append(counts)
    return trends


def _critical_buckets(aggregations: Optional[JsonDict]) -> List[JsonDict]:
    return [
        bucket
        for bucket in get_buckets(aggregations, "critical_topics")
        if ((bucket.get("high_urgency_count") or {}).get("doc_count") or 0) > 0
    ]


def top_issues(aggregations: Optional[JsonDict]) -> List[JsonDict]:
    issues = []
    for bucket in _critical_buckets(aggregations):
        urgency = (bucket.get("avg_urgency") or {}).get("value") or 0
        issues.append(
            {
                "topic": bucket.get("key"),
                "count": (bucket.get("high_urgency_count") or {}).get("doc_count") or 0,
                "urgency": round(urgency),
                "level": urgency_label(urgency),
            }
        )
    issues.sort(key=lambda issue: issue["count"], reverse=True)
    return issues


def regional_distribution(aggregations: Optional[JsonDict]) -> List[JsonDict]:
    regions = [
        {"region": bucket.get("key"), "value": bucket.get("doc_count") or 0}
        for bucket in get_buckets(aggregations, "regional_distribution")
    ]
    regions.sort(key=lambda r: r["value"], reverse=True)
    return regions


def weekly_twitter_analytics(
    current: Optional[JsonDict], previous: Optional[JsonDict], total_tweets: int
) -> JsonDict:
    """
    Week-over-week analytics of the social media index.

    Args:
        current: Aggregations of the last seven days
        previous: Aggregations of the seven days before that
        total_tweets: Size of the whole index

    Returns:
        Headline counts, weekly percentage changes and chart series
    """
    issues_now = agg_doc_count(current, "high_urgency_total")
    issues_before = agg_doc_count(previous, "high_urgency_count")
    reach_now = agg_value(current, "unique_users")
    reach_before = agg_value(previous, "unique_users")
    engagement_now = agg_value(current, "total_engagement")
    engagement_before = agg_value(previous, "total_engagement")
    departments_now = department_mentions_total(current)
    departments_before = department_mentions_total(previous)

    positive = bucket_count(
        get_buckets(current, "sentiment_distribution"), "positive", case_insensitive=True
    )

    return {
        "publicIssuesCount": issues_now,
        "citizenReach": reach_now,
        "activeDiscussions": round(engagement_now),
        "totalTweets": total_tweets,
        "criticalTopicsCount": len(_critical_buckets(current)),
        "departmentMentionsCount": departments_now,
        "weeklyChanges": {
            "publicIssues": calculate_change(issues_now, issues_before),
            "citizenReach": calculate_change(reach_now, reach_before),
            "activeDiscussions": calculate_change(engagement_now, engagement_before),
            "departmentMentions": calculate_change(departments_now, departments_before),
        },
        "sentimentTrends": sentiment_trends(current),
        "topIssues": top_issues(current),
        "departmentMetrics": department_metrics(current),
        "regionalDistribution": regional_distribution(current),
        "publicSentiment": f"{percentage(positive, total_tweets):.1f}",
    }
