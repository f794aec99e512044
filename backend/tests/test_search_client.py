import asyncio
import json

import httpx
import pytest

from jakarta_insight.search import SearchClient, SearchEngineError, total_hits


def make_client(handler) -> SearchClient:
    return SearchClient("http://es.local:9200/", transport=httpx.MockTransport(handler))


def test_search_posts_body_to_index():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"hits": {"total": {"value": 1}, "hits": [{"_source": {"a": 1}}]}})

    async def run():
        client = make_client(handler)
        try:
            return await client.search("news_jakarta", {"size": 1})
        finally:
            await client.close()

    result = asyncio.run(run())
    assert seen == {"method": "POST", "path": "/news_jakarta/_search", "body": {"size": 1}}
    assert result["hits"]["hits"][0]["_source"] == {"a": 1}


def test_count_without_body():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/chat_interactions/_count"
        return httpx.Response(200, json={"count": 57})

    async def run():
        client = make_client(handler)
        try:
            return await client.count("chat_interactions")
        finally:
            await client.close()

    assert asyncio.run(run()) == 57


def test_engine_error_carries_status_and_reason():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": {"type": "index_not_found_exception"}, "status": 404})

    async def run():
        client = make_client(handler)
        try:
            await client.search("missing", {})
        finally:
            await client.close()

    with pytest.raises(SearchEngineError) as excinfo:
        asyncio.run(run())
    assert excinfo.value.status_code == 404
    assert excinfo.value.info == {"type": "index_not_found_exception"}


def test_unreachable_engine_is_a_bad_gateway():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def run():
        client = make_client(handler)
        try:
            await client.count("news_jakarta")
        finally:
            await client.close()

    with pytest.raises(SearchEngineError) as excinfo:
        asyncio.run(run())
    assert excinfo.value.status_code == 502


def test_total_hits_shapes():
    assert total_hits({"hits": {"total": {"value": 12, "relation": "eq"}}}) == 12
    assert total_hits({"hits": {"total": 7}}) == 7
    assert total_hits({}) == 0
