"""Catalog repositories."""

from app.repositories.catalog.catalog import CatalogRepository
from app.repositories.catalog.metadata import TableMetadataCache

__all__ = [
    "CatalogRepository",
    "TableMetadataCache",
]
