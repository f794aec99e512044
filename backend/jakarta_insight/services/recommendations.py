"""
Action recommendations for critical issues found by the enhanced analytics.
"""
from __future__ import annotations

import json
import logging
import random
from typing import List, Optional

from openai import AsyncOpenAI

from jakarta_insight.config import get_settings
from jakarta_insight.core.scoring import dominant_sentiment
from jakarta_insight.models import JsonDict

logger = logging.getLogger(__name__)

ACTIONS = {
    "negative": [
        "Increase public communication",
        "Schedule community meetings",
        "Develop action plans",
        "Allocate emergency resources",
    ],
    "neutral": [
        "Monitor situation closely",
        "Gather public feedback",
        "Prepare contingency plans",
        "Enhance public awareness",
    ],
    "positive": [
        "Maintain current approach",
        "Share success stories",
        "Build on positive momentum",
        "Expand successful programs",
    ],
}

SYSTEM_PROMPT = (
    "You advise the Jakarta provincial government. For each critical public issue, "
    "write one concrete recommended action in a single sentence that names the topic "
    "and the region. Be specific and use plain language."
)


def generate_recommendation(
    topic: str, region: Optional[str], sentiment: str, rng: Optional[random.Random] = None
) -> str:
    """Template recommendation: an action matching the sentiment, for a topic and region."""
    actions = ACTIONS.get(sentiment.lower(), ACTIONS["neutral"])
    action = (rng or random).choice(actions)
    return f"{action} regarding {topic} in {region}."


def critical_issues(aggregation: Optional[JsonDict]) -> List[JsonDict]:
    """
    Flatten the critical_issues aggregation to one entry per topic.

    Each topic is paired with its most affected region and that region's
    dominant sentiment.
    """
    topics = ((aggregation or {}).get("by_topic") or {}).get("buckets")
    if not topics:
        return []

    issues = []
    for topic in topics:
        regions = (topic.get("by_region") or {}).get("buckets") or []
        top_region = regions[0] if regions else None
        sentiment = dominant_sentiment(
            ((top_region or {}).get("sentiment_analysis") or {}).get("buckets") or []
        )
        issues.append(
            {
                "topic": topic.get("key"),
                "region": (top_region or {}).get("key"),
                "sentiment": sentiment,
                "urgencyLevel": "High",
            }
        )
    return issues


def template_recommendations(
    aggregation: Optional[JsonDict], rng: Optional[random.Random] = None
) -> List[JsonDict]:
    return [
        {
            **issue,
            "recommendation": generate_recommendation(
                issue["topic"], issue["region"], issue["sentiment"], rng
            ),
        }
        for issue in critical_issues(aggregation)
    ]


def _get_openai_client() -> Optional[AsyncOpenAI]:
    """Get OpenAI client only when an API key is configured."""
    settings = get_settings()
    if not settings.OPENAI_API_KEY:
        return None
    return AsyncOpenAI(api_key=settings.OPENAI_API_KEY)


async def ai_recommendations(aggregation: Optional[JsonDict]) -> List[JsonDict]:
    """
    Recommendations written by the OpenAI chat API.

    Falls back to the templates when no key is configured, the call fails or
    the answer is not a JSON array of strings.
    """
    fallback = template_recommendations(aggregation)
    if not fallback:
        return []

    client = _get_openai_client()
    if not client:
        return fallback

    compact = [
        {"topic": r["topic"], "region": r["region"], "sentiment": r["sentiment"]}
        for r in fallback
    ]
    user_prompt = (
        "Critical issues (JSON):\n"
        + json.dumps(compact, ensure_ascii=False)
        + "\n\nReturn a JSON array of recommendations (strings), one per issue, same order. "
        "No extra text."
    )

    try:
        response = await client.chat.completions.create(
            model=get_settings().OPENAI_MODEL,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt},
            ],
            temperature=0.2,
            max_tokens=400,
        )
        data = json.loads(response.choices[0].message.content.strip())
        if not isinstance(data, list):
            raise ValueError("AI did not return a JSON array")
    except Exception as e:
        logger.warning("AI recommendations unavailable, using templates: %s", e)
        return fallback

    for i, item in enumerate(fallback):
        text = str(data[i] or "").strip() if i < len(data) else ""
        if text:
            item["recommendation"] = text
    return fallback
