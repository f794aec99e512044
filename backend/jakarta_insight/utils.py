"""
Shared utility functions for reshaping search engine responses.
"""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, List, Optional, Union

import tldextract
from dateutil import parser as dateparser

from jakarta_insight.models import JsonDict


# Bundled public suffix snapshot only, no network fetch
_extract_domain = tldextract.TLDExtract(suffix_list_urls=())


def now_utc() -> datetime:
    """
    Get current UTC datetime with timezone information.

    Returns:
        Current UTC datetime
    """
    return datetime.now(timezone.utc)


def extract_domain_from_url(url: str | None) -> str:
    """
    Extract the registered domain from a URL.

    Args:
        url: Full URL string

    Returns:
        Lowercase domain such as ``detik.com``, empty string for a missing URL
    """
    if not url:
        return ""
    extracted = _extract_domain(url)
    domain = f"{extracted.domain}.{extracted.suffix}" if extracted.suffix else extracted.domain
    return domain.lower()


def parse_utc_datetime(value: Union[str, int, float, None]) -> Optional[datetime]:
    """
    Parse a timestamp and convert it to UTC.

    Numbers are epoch milliseconds. Naive timestamp strings are assumed to
    already be UTC. Returns ``None`` when the value is empty or cannot be
    parsed.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, timezone.utc)
        except (ValueError, OverflowError, OSError):
            return None
    try:
        parsed = dateparser.parse(value)
    except (ValueError, OverflowError, TypeError):
        return None
    if parsed.tzinfo:
        return parsed.astimezone(timezone.utc)
    return parsed.replace(tzinfo=timezone.utc)


def format_time_ago(timestamp: Union[str, int, float, None], now: Optional[datetime] = None) -> str:
    """
    Human readable age of a timestamp: ``just now``, ``5m ago``, ``3h ago``,
    ``2d ago``, or the plain date once it is 30 days or older.
    """
    past = parse_utc_datetime(timestamp)
    if past is None:
        return ""

    seconds = math.floor(((now or now_utc()) - past).total_seconds())
    if seconds < 60:
        return "just now"

    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"

    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"

    days = hours // 24
    if days < 30:
        return f"{days}d ago"

    return past.date().isoformat()


def calculate_change(current: float, previous: float) -> str:
    """
    Percentage change from ``previous`` to ``current``, one decimal.

    Returns ``"N/A"`` when there is no previous value to compare against.
    """
    if previous == 0:
        return "N/A"
    change = ((current - previous) / previous) * 100
    return f"{change:.1f}"


def total_pages(total: int, items_per_page: int) -> int:
    if items_per_page <= 0:
        return 0
    return math.ceil(total / items_per_page)


def percentage(part: float, whole: float) -> float:
    return (part / whole) * 100 if whole > 0 else 0


# Aggregation accessors. Missing aggregations read as empty / zero.

def get_buckets(aggregations: Optional[JsonDict], name: str) -> List[JsonDict]:
    agg = (aggregations or {}).get(name) or {}
    buckets = agg.get("buckets") or []
    return buckets if isinstance(buckets, list) else []


def agg_value(aggregations: Optional[JsonDict], name: str) -> float:
    agg = (aggregations or {}).get(name) or {}
    return agg.get("value") or 0


def agg_doc_count(aggregations: Optional[JsonDict], name: str) -> int:
    agg = (aggregations or {}).get(name) or {}
    return agg.get("doc_count") or 0


def bucket_count(buckets: List[JsonDict], key: str, case_insensitive: bool = False) -> int:
    """``doc_count`` of the bucket whose key equals ``key`` (0 if absent)."""
    for bucket in buckets:
        bucket_key = str(bucket.get("key", ""))
        if bucket_key == key or (case_insensitive and bucket_key.lower() == key.lower()):
            return bucket.get("doc_count", 0) or 0
    return 0


def as_list(value: Any, default: Optional[List[Any]] = None) -> List[Any]:
    """Wrap a scalar in a list; ``None`` or empty becomes ``default``."""
    if isinstance(value, list):
        return value
    if isinstance(value, str) and value:
        return [value]
    return list(default or [])
