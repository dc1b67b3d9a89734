"""Spamhaus Intel API client."""

from intel_client.spamhaus.client import LoginError, SpamhausClient

__all__ = ["LoginError", "SpamhausClient"]
