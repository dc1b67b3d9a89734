"""Catalog API."""

from web.api.catalog.views import get_capabilities, health, list_columns, list_tables

__all__ = [
    "health",
    "list_tables",
    "list_columns",
    "get_capabilities",
]
