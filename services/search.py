"""Brave web-search proxy, biased towards Nepal travel content."""

import requests

from errors import UpstreamError

CATEGORY_SUFFIXES = {
    "destinations": "destinations tourism travel",
    "guides": "travel guides tours trekking",
}


def build_query(query, category="general"):
    """Return ``(q, freshness)`` for the provider request."""
    query = (query or "").strip()
    suffix = CATEGORY_SUFFIXES.get(category)
    if suffix:
        query = f"{query} {suffix}".strip()
    if "nepal" not in query.lower():
        query = f"{query} Nepal".strip()

    freshness = "past1m" if category == "latest" else None
    return query, freshness


def search(query, category, settings, count=10, offset=0, session=requests):
    q, freshness = build_query(query, category)
    params = {
        "q": q,
        "count": count,
        "offset": offset,
        "search_lang": "en",
        "safesearch": "moderate",
    }
    if freshness:
        params["freshness"] = freshness

    headers = {
        "Accept": "application/json",
        "Accept-Encoding": "gzip",
        "X-Subscription-Token": settings.brave_search_api_key,
    }

    try:
        resp = session.get(
            settings.brave_search_url,
            params=params,
            headers=headers,
            timeout=settings.search_timeout,
        )
    except requests.RequestException as e:
        raise UpstreamError(f"Brave Search API error: {e}") from e

    if not resp.ok:
        raise UpstreamError(f"Brave Search API error: {resp.text}")

    return resp.json()
