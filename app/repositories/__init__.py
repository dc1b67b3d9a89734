"""Repositories package - data access layer for the domains database."""

from app.repositories.base import BaseRepository
from app.repositories.db import Database, DuckDBPool, close_db, get_db
from app.repositories.catalog import CatalogRepository, TableMetadataCache
from app.repositories.domains import DomainRepository

__all__ = [
    # DB
    "Database",
    "DuckDBPool",
    "get_db",
    "close_db",
    # Base
    "BaseRepository",
    # Catalog
    "CatalogRepository",
    "TableMetadataCache",
    # Domains
    "DomainRepository",
]
