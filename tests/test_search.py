import pytest
import requests

from services.search import build_query


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=""):
        self.payload = payload or {}
        self.status_code = status_code
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self.payload


@pytest.fixture
def calls(monkeypatch):
    """Record outgoing provider requests and answer with a canned payload."""
    recorded = []

    def fake_get(url, params=None, headers=None, timeout=None):
        recorded.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        return FakeResponse({"web": {"results": [{"title": "Everest Base Camp Trek"}]}})

    monkeypatch.setattr(requests, "get", fake_get)
    return recorded


@pytest.mark.parametrize("query, category, expected", [
    ("Everest", "destinations", ("Everest destinations tourism travel Nepal", None)),
    ("Sherpa", "guides", ("Sherpa travel guides tours trekking Nepal", None)),
    ("Kathmandu Nepal", "general", ("Kathmandu Nepal", None)),
    ("trekking news", "latest", ("trekking news Nepal", "past1m")),
    ("Pokhara", "museums", ("Pokhara Nepal", None)),
])
def test_build_query(query, category, expected):
    assert build_query(query, category) == expected


def test_search_proxies_provider(client, calls):
    resp = client.get("/search", query_string={"q": "Everest", "type": "destinations", "count": 5})
    assert resp.status_code == 200
    assert resp.get_json()["web"]["results"][0]["title"] == "Everest Base Camp Trek"

    call = calls[0]
    assert call["url"] == "https://api.search.brave.com/res/v1/web/search"
    assert call["params"]["q"] == "Everest destinations tourism travel Nepal"
    assert call["params"]["count"] == 5
    assert call["params"]["offset"] == 0
    assert "freshness" not in call["params"]
    assert call["headers"]["X-Subscription-Token"] == "brave-test-key"


def test_search_latest_sets_freshness(client, calls):
    client.get("/search", query_string={"q": "trail conditions", "type": "latest"})
    assert calls[0]["params"]["freshness"] == "past1m"


def test_search_rejects_large_count(client, calls):
    resp = client.get("/search", query_string={"q": "Everest", "count": 50})
    assert resp.status_code == 400
    assert calls == []


def test_search_provider_error(client, monkeypatch):
    monkeypatch.setattr(
        requests, "get",
        lambda *args, **kwargs: FakeResponse(status_code=429, text="rate limited"),
    )

    resp = client.get("/search", query_string={"q": "Everest"})
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Upstream service failure"}


def test_search_network_failure(client, monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(requests, "get", boom)

    resp = client.get("/search", query_string={"q": "Everest"})
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Upstream service failure"}
