"""Wayback Machine client."""

from intel_client.wayback.client import WaybackClient

__all__ = ["WaybackClient"]
