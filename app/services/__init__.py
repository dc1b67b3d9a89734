"""Services package - service class exports."""

from app.services.catalog import CatalogService
from app.services.search import SearchService
from app.services.verification import VerificationService

__all__ = [
    "CatalogService",
    "SearchService",
    "VerificationService",
]
