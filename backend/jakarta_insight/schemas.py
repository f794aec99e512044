# jakarta_insight/schemas.py
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Source = Literal["news", "twitter"]


class CamelModel(BaseModel):
    """Fields are snake_case in Python and camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Requests

class LoginRequest(BaseModel):
    username: str
    password: str


class SearchRequest(CamelModel):
    query: Optional[str] = None
    source: Source = "news"
    page: int = Field(1, ge=1)
    items_per_page: int = Field(10, ge=1, le=100)


class NewsSearchRequest(BaseModel):
    query: Optional[str] = None


# Responses

class UserResponse(BaseModel):
    username: str
    role: str


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    items_per_page: int


class DashboardResponse(BaseModel):
    stats: Dict[str, Any]
    data: List[Dict[str, Any]]
    total: int
    insights: Dict[str, Dict[str, Any]]
    pagination: Pagination


class SearchResponse(BaseModel):
    hits: List[Dict[str, Any]]
    total: int
    pagination: Pagination


class EngagementStats(CamelModel):
    active_users: float
    daily_interactions: int
    response_rate: int
    avg_response_time: int


class ChatLog(BaseModel):
    user_id: Optional[Union[str, int]] = None
    username: Optional[str] = None
    message_text: Optional[str] = None
    bot_response: Optional[str] = None
    timestamp: Optional[Union[str, int]] = None
    response_time_ms: Optional[float] = None
    time_ago: str = ""


class ChatLogsResponse(BaseModel):
    logs: List[ChatLog]


class Topic(BaseModel):
    name: str
    count: int
    urgency: int
    sentiment: str


class TopicsResponse(BaseModel):
    topics: List[Topic]


class WeeklyChanges(CamelModel):
    public_issues: str
    citizen_reach: str
    active_discussions: str
    department_mentions: str


class SentimentTrend(BaseModel):
    date: Optional[str] = None
    positive: int = 0
    negative: int = 0
    neutral: int = 0


class TopIssue(BaseModel):
    topic: str
    count: int
    urgency: int
    level: str


class DepartmentMetric(BaseModel):
    department: str
    mentions: int


class RegionValue(BaseModel):
    region: str
    value: int


class TwitterAnalyticsResponse(CamelModel):
    public_issues_count: int
    citizen_reach: float
    active_discussions: int
    total_tweets: int
    critical_topics_count: int
    department_mentions_count: int
    weekly_changes: WeeklyChanges
    sentiment_trends: List[SentimentTrend]
    top_issues: List[TopIssue]
    department_metrics: List[DepartmentMetric]
    regional_distribution: List[RegionValue]
    public_sentiment: str


class Recommendation(CamelModel):
    topic: str
    region: Optional[str] = None
    sentiment: str
    urgency_level: str
    recommendation: str


class EnhancedAnalyticsResponse(CamelModel):
    time_range: str
    region: str
    sentiment_distribution: Optional[Dict[str, Any]] = None
    sentiment_trends: Optional[Dict[str, Any]] = None
    urgency_distribution: Optional[Dict[str, Any]] = None
    top_posts: Optional[Dict[str, Any]] = None
    keywords: Optional[Dict[str, Any]] = None
    hashtags: Optional[Dict[str, Any]] = None
    regional_sentiment: Optional[Dict[str, Any]] = None
    engagement_trends: Optional[Dict[str, Any]] = None
    audience_distribution: Optional[Dict[str, Any]] = None
    recommendations: List[Recommendation]


class NetworkMeta(CamelModel):
    region: str
    total_nodes: int
    total_edges: int


class NetworkResponse(BaseModel):
    nodes: List[Dict[str, Any]]
    edges: List[Dict[str, Any]]
    meta: NetworkMeta


class RelatedTweet(BaseModel):
    username: Optional[str] = None
    full_text: Optional[str] = None
    created_at: Optional[str] = None
    topic_classification: str
    sentiment: str
    urgency_level: float
    target_audience: Union[List[str], str]
    link_post: Optional[str] = None
    mentions: List[str]
    hastags: List[str]
    relation_type: Literal["hashtag", "author", "mentioned", "unknown"]


class RelationBreakdown(BaseModel):
    as_author: int
    as_mentioned: int
    in_hashtag: int


class RelatedTweetsMeta(BaseModel):
    total: int
    query_term: str
    clean_query_term: str
    node_type: str
    breakdown: RelationBreakdown


class RelatedTweetsResponse(BaseModel):
    tweets: List[RelatedTweet]
    meta: RelatedTweetsMeta


class Summary(BaseModel):
    main_issue: Optional[str] = None
    problem: Optional[str] = None
    suggestion: Optional[str] = None
    urgency_score: Optional[Union[str, float]] = None


class SummaryResponse(BaseModel):
    summary: Optional[Summary] = None
