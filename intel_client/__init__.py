"""Remote intelligence API clients (Spamhaus Intel, Wayback Machine)."""

from intel_client.base import BaseClient, RequestTimeoutError, parse_json
from intel_client.spamhaus import LoginError, SpamhausClient
from intel_client.wayback import WaybackClient

__all__ = [
    # Base
    "BaseClient",
    "RequestTimeoutError",
    "parse_json",
    # Clients
    "LoginError",
    "SpamhausClient",
    "WaybackClient",
]
