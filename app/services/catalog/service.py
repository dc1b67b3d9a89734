"""Catalog service - table browsing and capability discovery."""

from dataclasses import dataclass, field

from loguru import logger
from pydantic.alias_generators import to_camel

from app.models.catalog import ColumnDetail, ColumnInfo, TableInfo, TableRef
from app.models.common import BaseEntity
from app.repositories.catalog import CatalogRepository, TableMetadataCache
from app.services.catalog.roles import resolve_roles

STATUS_SAMPLE_LIMIT = 50


@dataclass
class Capabilities(BaseEntity):
    """What the domains table supports, as discovered from its catalog."""

    table: str
    columns: list[ColumnInfo]
    supports: dict[str, bool]
    columns_picked: dict[str, str | None]
    status_values: list[str] = field(default_factory=list)


class CatalogService:
    """Catalog browsing and capability negotiation over the domains table."""

    def __init__(self, catalog_repo: CatalogRepository, metadata_cache: TableMetadataCache, default_schema: str):
        self._catalog = catalog_repo
        self._metadata = metadata_cache
        self._default_schema = default_schema

    def list_tables(self) -> list[TableInfo]:
        return self._catalog.list_tables()

    def list_columns(self, table: str | None = None) -> tuple[TableRef, list[ColumnDetail]]:
        """Columns of ``table`` ("schema.table" or "table"), the domains table by default."""
        ref = TableRef.parse(table, self._default_schema) if table else self._metadata.table_ref
        return ref, self._catalog.list_columns(ref)

    def capabilities(self) -> Capabilities:
        metadata = self._metadata.get_table_metadata()
        roles = resolve_roles(metadata)

        supports = {
            "lifecycle": roles.supports_lifecycle,
            "ageRange": roles.created is not None,
            "creationDateRange": roles.created is not None,
            "keywords": roles.domain is not None,
            "tld": roles.tld is not None or roles.domain is not None,
            "wayback": roles.wayback is not None,
            "spamhaus": roles.spamhaus is not None,
            "viewsTotal": roles.views_total is not None,
        }
        picked = {f"{to_camel(role)}Column": column for role, column in roles.to_dict().items()}

        status_values: list[str] = []
        if roles.status:
            try:
                status_values = self._catalog.distinct_values(metadata.table_ref, roles.status, STATUS_SAMPLE_LIMIT)
            except Exception as e:
                logger.warning("Could not sample status values from {}: {}", roles.status, e)

        return Capabilities(
            table=metadata.table_ref.qualified,
            columns=list(metadata.columns),
            supports=supports,
            columns_picked=picked,
            status_values=status_values,
        )
