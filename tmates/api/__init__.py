"""
Tmates API layer.

ApiClient handles transport; endpoint groups are plain functions taking
the client as their first argument.
"""

from .client import ApiClient, ApiClientConfig, ApiError
from . import pinboard, teammates, messages, files, profile

__all__ = [
    "ApiClient",
    "ApiClientConfig",
    "ApiError",
    "pinboard",
    "teammates",
    "messages",
    "files",
    "profile",
]
