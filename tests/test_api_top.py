"""Tests for the /api/top routes."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

import topposts.api.top as top_api
from topposts.common.mapper import DomainEntityMapper
from topposts.domain.models import TimeRange
from topposts.main import app
from topposts.top.facade import TopPostsFacade
from topposts.top.models import (
    DataPost,
    DataPostContainer,
    TopRequestData,
    TopRequestDataContainer,
    TopRequestParameters,
)
from topposts.top.registry import SubredditRegistry


def _page(*ids: str) -> TopRequestDataContainer:
    return TopRequestDataContainer(
        data=TopRequestData(
            children=[
                DataPostContainer(
                    data=DataPost(
                        id=post_id,
                        title=f"post {post_id}",
                        subreddit="python",
                        permalink=f"/r/python/comments/{post_id}/",
                    )
                )
                for post_id in ids
            ]
        )
    )


@pytest.fixture
def source():
    mock = MagicMock()
    mock.fetch = AsyncMock(return_value=_page("f1"))
    mock.get = AsyncMock(return_value=_page("g1", "g2"))
    return mock


@pytest.fixture
def client(monkeypatch, tmp_path, source):
    path = tmp_path / "subreddits.yaml"
    path.write_text(
        "subreddits:\n"
        "  - subreddit: python\n"
        "    name: Python\n"
        "    time_range: day\n"
        "    limit: 20\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(top_api, "subreddit_registry", SubredditRegistry(str(path)))
    monkeypatch.setattr(top_api, "facade", TopPostsFacade(source, DomainEntityMapper()))
    return TestClient(app)


def test_healthz(client):
    res = client.get("/healthz")

    assert res.status_code == 200
    assert res.json()["ok"] is True


def test_list_subreddits(client):
    res = client.get("/api/top")

    assert res.status_code == 200
    assert res.json() == {
        "subreddits": [{"subreddit": "python", "name": "Python", "time_range": "day", "limit": 20}]
    }


def test_get_top_uses_registry_defaults_and_cached_mode(client, source):
    res = client.get("/api/top/python")

    assert res.status_code == 200
    body = res.json()
    assert body["subreddit"] == "python"
    assert body["time_range"] == "day"
    assert body["limit"] == 20
    assert [item["post_id"] for item in body["items"]] == ["g1", "g2"]
    assert body["items"][0]["permalink"] == "https://www.reddit.com/r/python/comments/g1/"
    source.get.assert_awaited_once_with(
        TopRequestParameters(subreddit="python", time_range=TimeRange.DAY, limit=20)
    )
    source.fetch.assert_not_called()


def test_force_uses_fetch_mode(client, source):
    res = client.get("/api/top/rust", params={"force": "true", "time_range": "week", "limit": 5})

    assert res.status_code == 200
    assert [item["post_id"] for item in res.json()["items"]] == ["f1"]
    source.fetch.assert_awaited_once_with(
        TopRequestParameters(subreddit="rust", time_range=TimeRange.WEEK, limit=5)
    )
    source.get.assert_not_called()


def test_unknown_subreddit_falls_back_to_settings(client, source):
    res = client.get("/api/top/rust")

    assert res.status_code == 200
    assert res.json()["time_range"] == "all"
    assert res.json()["limit"] == top_api.settings.default_limit


def test_invalid_query_is_rejected(client):
    assert client.get("/api/top/python", params={"limit": 101}).status_code == 422
    assert client.get("/api/top/python", params={"time_range": "decade"}).status_code == 422


def test_upstream_status_maps_to_bad_gateway(client, source):
    request = httpx.Request("GET", "https://www.reddit.com/r/python/top.json")
    source.get.side_effect = httpx.HTTPStatusError(
        "server error", request=request, response=httpx.Response(503, request=request)
    )

    res = client.get("/api/top/python")

    assert res.status_code == 502
    assert res.json()["detail"] == "upstream returned 503"


def test_upstream_not_found_maps_to_404(client, source):
    request = httpx.Request("GET", "https://www.reddit.com/r/nope/top.json")
    source.get.side_effect = httpx.HTTPStatusError(
        "not found", request=request, response=httpx.Response(404, request=request)
    )

    res = client.get("/api/top/nope")

    assert res.status_code == 404


def test_transport_error_maps_to_bad_gateway(client, source):
    source.fetch.side_effect = httpx.ConnectError("refused")

    res = client.get("/api/top/python", params={"force": "true"})

    assert res.status_code == 502
    assert res.json()["detail"] == "upstream unavailable"


def test_reload_rereads_registry_and_clears_source_cache(client, monkeypatch, tmp_path):
    reddit_source = MagicMock()
    monkeypatch.setattr(top_api, "source", reddit_source)
    path = tmp_path / "subreddits.yaml"
    path.write_text("subreddits:\n  - subreddit: python\n  - subreddit: rust\n", encoding="utf-8")

    res = client.post("/api/top/reload")

    assert res.status_code == 200
    assert res.json() == {"subreddits": 2, "cache_cleared": True}
    reddit_source.clear.assert_called_once_with()
    assert [row["subreddit"] for row in client.get("/api/top").json()["subreddits"]] == ["python", "rust"]
