"""Catalog services."""

from app.services.catalog.roles import ROLE_RULES, resolve_roles
from app.services.catalog.service import Capabilities, CatalogService

__all__ = [
    "ROLE_RULES",
    "Capabilities",
    "CatalogService",
    "resolve_roles",
]
