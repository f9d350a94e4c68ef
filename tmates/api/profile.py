"""User profile and mobile app preferences."""

from .client import ApiClient


def fetch_user_profile(client: ApiClient) -> dict:
    return client.get("/profile") or {}


def update_user_profile(client: ApiClient, **fields) -> dict:
    """Update profile fields (display_name, avatar_url, email)."""
    return client.patch("/profile", body=fields)


def fetch_mobile_settings(client: ApiClient) -> dict:
    return client.get("/settings/mobile") or {}


def update_mobile_settings(client: ApiClient, **fields) -> dict:
    """Update preferences such as allow_notifications or theme_preference."""
    return client.patch("/settings/mobile", body=fields)
