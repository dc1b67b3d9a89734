"""Catalog API views - thin layer over services."""

from app.container import container
from app.errors import QueryError
from web.api.errors import ServiceError

from .schemas import (
    CapabilitiesResponse,
    CapabilityColumn,
    ColumnItem,
    ColumnsResponse,
    HealthResponse,
    TableItem,
    TablesResponse,
)


def health() -> HealthResponse:
    return HealthResponse(status="ok")


def list_tables() -> TablesResponse:
    """List user tables (system schemas excluded)."""
    try:
        data = container.catalog.list_tables()
    except QueryError as e:
        raise ServiceError(e.message) from e

    return TablesResponse(tables=[TableItem(schema_name=t.schema, name=t.name, type=t.type) for t in data])


def list_columns(table: str | None = None) -> ColumnsResponse:
    """Columns of one table ("schema.table" or "table"), the domains table by default."""
    try:
        ref, data = container.catalog.list_columns(table)
    except QueryError as e:
        raise ServiceError(e.message) from e

    items = [
        ColumnItem(
            position=c.position,
            name=c.name,
            data_type=c.data_type,
            udt=c.udt,
            nullable=c.nullable,
            default=c.default,
        )
        for c in data
    ]

    return ColumnsResponse(table=ref.qualified, columns=items)


def get_capabilities() -> CapabilitiesResponse:
    """Which filters the domains table supports and which columns back them."""
    caps = container.catalog.capabilities()

    return CapabilitiesResponse(
        table=caps.table,
        columns=[CapabilityColumn(name=c.name, data_type=c.data_type, udt=c.udt_name) for c in caps.columns],
        supports=caps.supports,
        columns_picked=caps.columns_picked,
        status_values=caps.status_values,
    )
