"""Domain check API."""

from web.api.verification.views import check_domain

__all__ = ["check_domain"]
