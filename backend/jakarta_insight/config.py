"""
Application configuration with environment variable support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Dict, List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Search engine
    ES_URL: str = "http://localhost:9200"
    ES_TIMEOUT: float = 30.0
    ES_VERIFY_TLS: bool = False
    ES_USERNAME: str = ""
    ES_PASSWORD: str = ""

    NEWS_INDEX: str = "news_jakarta"
    TWITTER_INDEX: str = "twitter_jakarta"
    CHAT_INDEX: str = "chat_interactions"
    NEWS_INSIGHT_INDEX: str = "insight_news_jakarta"
    TWITTER_INSIGHT_INDEX: str = "insight_twitter_jakarta"

    # Optional external services
    SUMMARIZER_URL: str = ""
    SUMMARIZER_TIMEOUT: float = 5.0
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"

    # Demo authentication
    AUTH_USERNAME: str = "demo"
    AUTH_PASSWORD: str = "demomenyala24"
    AUTH_ROLE: str = "admin"
    AUTH_COOKIE_DAYS: int = 7

    # Web
    CORS_ALLOW_ORIGINS: List[str] = ["*"]
    FRONTEND_DIR: str = ""
    PORT: int = 8000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def index_for(self, source: str) -> str:
        return self.NEWS_INDEX if source == "news" else self.TWITTER_INDEX

    def insight_index_for(self, source: str) -> str:
        return self.NEWS_INSIGHT_INDEX if source == "news" else self.TWITTER_INSIGHT_INDEX


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# Urgency thresholds (urgency_level is 0-100)
URGENT_THRESHOLD: int = 80
HIGH_URGENCY_THRESHOLD: int = 70
MEDIUM_URGENCY_THRESHOLD: int = 30

GOVERNMENT_TOPIC = "Government and Public Policy"

# Topic sentiment score table
SENTIMENT_SCORES: Dict[str, int] = {
    "Positive": 100,
    "Neutral": 50,
    "Negative": 0,
}

# Keyword phrases counted as mentions of a government body
DEPARTMENT_KEYWORDS: Dict[str, str] = {
    "pemprov": "Pemprov",
    "dinas": "Dinas",
    "dprd": "DPRD",
    "walikota": "Walikota",
    "gubernur": "Gubernur",
    "pemerintah": "Pemerintah",
}

# Kept out of the trending keyword panel
TRENDING_EXCLUDED_PHRASE = "israel gaza palestina"

ALL_REGIONS = "All Data"
DEFAULT_NETWORK_REGION = "Jakarta Pusat"

NETWORK_MAX_POSTS = 10000
RELATED_TWEETS_SIZE = 20
CHAT_LOG_SIZE = 100

NEWS_FIELDS: List[str] = [
    "title",
    "url",
    "image_url",
    "content",
    "description",
    "publish_at",
    "sentiment",
    "topic_classification",
    "urgency_level",
    "target_audience",
    "affected_region",
]

TWITTER_FIELDS: List[str] = [
    "id",
    "full_text",
    "link_post",
    "link_image_url",
    "username",
    "name",
    "date",
    "time",
    "sentiment",
    "topic_classification",
    "urgency_level",
    "target_audience",
    "affected_region",
    "favorite_count",
    "retweet_count",
    "reply_count",
    "views_count",
]

# Paths that require the isAuthenticated cookie
PROTECTED_PREFIXES = ("/dashboard", "/analytics", "/citizen-engagement")
LOGIN_PATH = "/login"
HOME_PATH = "/dashboard"

AUTH_COOKIE = "isAuthenticated"
USER_COOKIE = "userData"
