"""Catalog entities - table references and column metadata."""

from dataclasses import dataclass, field

from app.models.common import BaseEntity

FALLBACK_TABLE = "expired_domains"


@dataclass(frozen=True)
class TableRef:
    """Schema-qualified table name."""

    schema: str
    table: str

    @classmethod
    def parse(cls, ref: str | None, default_schema: str) -> "TableRef":
        """Parse "table" or "schema.table"; anything else falls back to the default table."""
        parts = [p.strip() for p in str(ref or "").strip().split(".") if p.strip()]
        if len(parts) == 1:
            return cls(default_schema, parts[0])
        if len(parts) == 2:
            return cls(parts[0], parts[1])
        return cls(default_schema, FALLBACK_TABLE)

    @property
    def qualified(self) -> str:
        return f"{self.schema}.{self.table}"


@dataclass(frozen=True)
class ColumnInfo:
    """One column of the catalog, in ordinal order."""

    name: str
    data_type: str
    udt_name: str | None = None
    position: int = 0

    @property
    def is_boolean(self) -> bool:
        return (self.data_type or "").lower() == "boolean"


@dataclass(frozen=True)
class TableMetadata:
    """Immutable column catalog of the domains table."""

    table_ref: TableRef
    columns: tuple[ColumnInfo, ...] = ()
    _by_name: dict[str, ColumnInfo] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        index: dict[str, ColumnInfo] = {}
        for col in self.columns:
            # first column wins on case-insensitive collisions
            index.setdefault(col.name.lower(), col)
        object.__setattr__(self, "_by_name", index)

    def column(self, name: str) -> ColumnInfo | None:
        """Case-insensitive column lookup."""
        return self._by_name.get(str(name).lower())

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]


@dataclass
class TableInfo(BaseEntity):
    """A table listed from information_schema.tables."""

    schema: str
    name: str
    type: str


@dataclass
class ColumnDetail(BaseEntity):
    """Full column description for the column browser."""

    position: int
    name: str
    data_type: str
    udt: str | None
    nullable: bool
    default: str | None
