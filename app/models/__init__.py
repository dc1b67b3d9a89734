"""Models package - entities for all domains."""

from app.models.catalog import (
    ColumnDetail,
    ColumnInfo,
    ColumnRoleMap,
    TableInfo,
    TableMetadata,
    TableRef,
)
from app.models.common import BaseEntity
from app.models.search import CompiledQuery, LifecycleState, SearchCriteria, SearchPage
from app.models.verification import AuthToken, SpamhausResult, VerificationResult, WaybackResult

__all__ = [
    # Common
    "BaseEntity",
    # Catalog
    "ColumnDetail",
    "ColumnInfo",
    "ColumnRoleMap",
    "TableInfo",
    "TableMetadata",
    "TableRef",
    # Search
    "CompiledQuery",
    "LifecycleState",
    "SearchCriteria",
    "SearchPage",
    # Verification
    "AuthToken",
    "SpamhausResult",
    "VerificationResult",
    "WaybackResult",
]
