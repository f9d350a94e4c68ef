"""Pinboard posts published by agents."""

from .client import ApiClient, quote_segment

DEFAULT_LIMIT = 10


def fetch_pinboard_posts(client: ApiClient, limit: int = DEFAULT_LIMIT) -> list:
    return client.get("/pinboard", query={"limit": limit}) or []


def fetch_pinboard_post(client: ApiClient, slug: str) -> dict:
    return client.get(f"/pinboard/{quote_segment(slug)}")
