"""
Sentiment and urgency scoring over aggregation buckets.
"""
from __future__ import annotations

from typing import Iterable

from jakarta_insight.config import (
    HIGH_URGENCY_THRESHOLD,
    MEDIUM_URGENCY_THRESHOLD,
    SENTIMENT_SCORES,
)
from jakarta_insight.models import JsonDict


def calculate_sentiment_score(buckets: Iterable[JsonDict]) -> str:
    """
    Weighted average sentiment of a terms aggregation on ``sentiment.keyword``.

    Each bucket contributes its score from the Positive/Neutral/Negative table
    (unknown labels count as 0) times its ``doc_count``.

    Returns:
        Score on a 0-100 scale with two decimals, ``"0"`` for no documents
    """
    total_score = 0
    total_count = 0
    for bucket in buckets:
        count = bucket.get("doc_count", 0) or 0
        total_score += SENTIMENT_SCORES.get(str(bucket.get("key")), 0) * count
        total_count += count

    if total_count == 0:
        return "0"
    return f"{total_score / total_count:.2f}"


def urgency_label(urgency: float) -> str:
    if urgency >= HIGH_URGENCY_THRESHOLD:
        return "High"
    if urgency >= MEDIUM_URGENCY_THRESHOLD:
        return "Medium"
    return "Low"


def dominant_sentiment(buckets: list[JsonDict], default: str = "neutral") -> str:
    """Key of the first (largest) sentiment bucket."""
    if not buckets:
        return default
    return str(buckets[0].get("key") or default)
