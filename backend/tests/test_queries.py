from datetime import datetime, timezone

from jakarta_insight.queries.dashboard import dashboard_content_query, dashboard_stats_query, trending_keywords_query
from jakarta_insight.queries.engagement import active_users_query, chat_logs_query, daily_interactions_query
from jakarta_insight.queries.search import content_search_query, news_search_query
from jakarta_insight.queries.twitter import (
    enhanced_analytics_query,
    network_query,
    related_tweets_query,
    week_windows,
)


def test_dashboard_stats_fields_depend_on_source():
    twitter = dashboard_stats_query("twitter")["aggs"]
    news = dashboard_stats_query("news")["aggs"]

    assert twitter["total_engagements"] == {"sum": {"field": "favorite_count"}}
    assert twitter["active_discussions"] == {"filter": {"range": {"reply_count": {"gt": 0}}}}
    assert news["total_views"] == {"sum": {"field": "_score"}}
    assert news["urgent_count"] == {"filter": {"range": {"urgency_level": {"gte": 80}}}}


def test_dashboard_content_pagination_and_sort():
    body = dashboard_content_query("news", page=3, items_per_page=20)
    assert body["from"] == 40
    assert body["size"] == 20
    assert body["sort"] == [{"publish_at": "desc"}]
    assert "contextual_keywords" in body["_source"]
    assert "creator" in body["_source"]

    tweets = dashboard_content_query("twitter", page=1, items_per_page=10)
    assert tweets["sort"] == [{"date": "desc"}]
    assert "creator" not in tweets["_source"]


def test_content_search_with_and_without_text():
    body = content_search_query("banjir kemang", "news", page=2, items_per_page=5)
    match = body["query"]["multi_match"]
    assert match["query"] == "banjir kemang"
    assert match["operator"] == "and"
    assert match["minimum_should_match"] == "75%"
    assert body["from"] == 5

    assert content_search_query(None, "twitter")["query"] == {"match_all": {}}


def test_news_search_returns_ten_newest():
    body = news_search_query("")
    assert body["size"] == 10
    assert body["query"] == {"match_all": {}}
    assert "description" not in body["_source"]


def test_trending_excludes_phrase_and_counts_urgent_keywords():
    body = trending_keywords_query()
    assert body["query"]["bool"]["must_not"][0]["multi_match"]["query"] == "israel gaza palestina"
    filtered = body["aggs"]["filtered_trending_keywords"]
    assert filtered["filter"] == {"range": {"urgency_level": {"gt": 0}}}
    assert filtered["aggs"]["trending_keywords"]["terms"]["size"] == 10


def test_chat_logs_search():
    assert chat_logs_query("")["query"] == {"bool": {"must": [{"match_all": {}}]}}
    body = chat_logs_query("banjir")
    assert body["query"]["bool"]["must"][0]["multi_match"]["fields"] == [
        "message_text",
        "bot_response",
        "user_id",
    ]
    assert body["size"] == 100


def test_week_windows():
    now = datetime(2024, 11, 20, tzinfo=timezone.utc)
    (current_gte, current_lt), (previous_gte, previous_lt) = week_windows(now)
    assert current_lt == "2024-11-20T00:00:00+00:00"
    assert current_gte == previous_lt == "2024-11-13T00:00:00+00:00"
    assert previous_gte == "2024-11-06T00:00:00+00:00"


def test_enhanced_time_ranges_and_region():
    monthly = enhanced_analytics_query("monthly", "North Jakarta")
    must = monthly["query"]["bool"]["must"]
    assert must[0] == {"range": {"date": {"gte": "now-30d/d", "lt": "now/d"}}}
    assert must[1] == {"term": {"affected_region.keyword": "North Jakarta"}}
    assert monthly["aggs"]["sentiment_trends"]["date_histogram"]["calendar_interval"] == "day"

    daily = enhanced_analytics_query("bogus")
    assert daily["query"]["bool"]["must"] == [{"range": {"date": {"gte": "now-24h", "lt": "now"}}}]
    assert daily["aggs"]["engagement_trends"]["date_histogram"]["calendar_interval"] == "hour"

    ranges = daily["aggs"]["urgency_distribution"]["range"]["ranges"]
    assert [r["key"] for r in ranges] == ["Low", "Medium", "High"]


def test_network_query_region_filter():
    assert network_query("All Data")["query"]["bool"]["must"] == []
    regional = network_query("Jakarta Pusat")
    assert regional["query"]["bool"]["must"] == [{"match": {"affected_region.keyword": "Jakarta Pusat"}}]
    assert regional["size"] == 10000


def test_related_tweets_query():
    assert related_tweets_query("#banjir", "banjir", "hashtag")["query"] == {"match": {"hastags": "#banjir"}}
    should = related_tweets_query("@budi", "budi", "user/mention")["query"]["bool"]["should"]
    assert should == [{"match": {"username": "budi"}}, {"match": {"mentions": "@budi"}}]


def test_engagement_bodies_do_not_share_query_objects():
    users = active_users_query()
    users["query"]["range"]["timestamp"]["gte"] = "now-1h"
    assert daily_interactions_query()["query"] == {"range": {"timestamp": {"gte": "now-24h"}}}
    assert active_users_query()["query"] is not daily_interactions_query()["query"]
