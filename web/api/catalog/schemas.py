"""Catalog API response schemas."""

from pydantic import Field

from web.api.schemas import ApiModel


class HealthResponse(ApiModel):
    """Liveness check."""

    status: str


class TableItem(ApiModel):
    """A database table."""

    schema_name: str = Field(serialization_alias="schema")
    name: str
    type: str


class TablesResponse(ApiModel):
    """Tables response."""

    tables: list[TableItem]


class ColumnItem(ApiModel):
    """Column detail."""

    position: int
    name: str
    data_type: str
    udt: str | None
    nullable: bool
    default: str | None


class ColumnsResponse(ApiModel):
    """Columns of one table."""

    table: str
    columns: list[ColumnItem]


class CapabilityColumn(ApiModel):
    """Column as seen by capability discovery."""

    name: str
    data_type: str
    udt: str | None


class CapabilitiesResponse(ApiModel):
    """What the domains table supports."""

    table: str
    columns: list[CapabilityColumn]
    supports: dict[str, bool]
    columns_picked: dict[str, str | None]
    status_values: list[str]
