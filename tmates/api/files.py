"""Files shared with the user's agents."""

from .client import ApiClient

DEFAULT_LIMIT = 25


def fetch_files(client: ApiClient, limit: int = DEFAULT_LIMIT) -> dict:
    """
    Fetch a file listing.

    Returns:
        {"files": [...], "total_count", "total_size_display", "has_more", "limit"}
    """
    return client.get("/files", query={"limit": limit}) or {"files": []}
