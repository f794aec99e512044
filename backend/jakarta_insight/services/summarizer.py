"""
Best-effort client for the external tweet summarization service.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from jakarta_insight.config import get_settings
from jakarta_insight.models import JsonDict
from jakarta_insight.schemas import Summary

logger = logging.getLogger(__name__)

SUMMARY_TWEET_LIMIT = 20


def format_tweets_for_summary(tweets: List[JsonDict], limit: int = SUMMARY_TWEET_LIMIT) -> List[JsonDict]:
    """Most urgent tweets first, each with a one-line Indonesian context note."""
    ranked = sorted(tweets, key=lambda t: t.get("urgency_level") or 0, reverse=True)
    return [
        {
            "full_text": tweet.get("full_text"),
            "contextual_content": (
                f"Tweet ini dari {tweet.get('username')} dengan topik "
                f"{tweet.get('topic_classification')} dan sentiment {tweet.get('sentiment')}"
            ),
        }
        for tweet in ranked[:limit]
    ]


async def summarize_tweets(
    tweets: List[JsonDict],
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[JsonDict]:
    """
    Ask the summarization service for a digest of ``tweets``.

    Returns:
        The service's ``summary`` object (main_issue, problem, suggestion,
        urgency_score), or None when the service is not configured, slow,
        failing or returns no summary
    """
    settings = get_settings()
    if not settings.SUMMARIZER_URL or not tweets:
        return None

    url = settings.SUMMARIZER_URL.rstrip("/") + "/summarize/"
    payload = {"search_results": format_tweets_for_summary(tweets)}

    try:
        async with httpx.AsyncClient(timeout=settings.SUMMARIZER_TIMEOUT, transport=transport) as client:
            response = await client.post(url, json=payload, headers={"Accept": "application/json"})
            if response.status_code >= 400:
                logger.warning("Summarizer returned %s", response.status_code)
                return None
            body = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Summarizer unavailable: %s: %s", type(e).__name__, e)
        return None

    summary = body.get("summary") if isinstance(body, dict) else None
    if not isinstance(summary, dict) or not summary:
        logger.warning("Summarizer answered without a summary object")
        return None

    try:
        Summary.model_validate(summary)
    except ValidationError as e:
        logger.warning("Summarizer returned a malformed summary: %s", e)
        return None
    return summary
