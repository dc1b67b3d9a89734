"""Domain search API."""

from web.api.domains.views import search_domains

__all__ = ["search_domains"]
