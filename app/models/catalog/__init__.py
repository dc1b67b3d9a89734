"""Catalog models - table metadata and column roles."""

from app.models.catalog.roles import ColumnRoleMap
from app.models.catalog.table import (
    FALLBACK_TABLE,
    ColumnDetail,
    ColumnInfo,
    TableInfo,
    TableMetadata,
    TableRef,
)

__all__ = [
    "FALLBACK_TABLE",
    "ColumnDetail",
    "ColumnInfo",
    "ColumnRoleMap",
    "TableInfo",
    "TableMetadata",
    "TableRef",
]
