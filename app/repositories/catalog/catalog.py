"""Catalog repository - information_schema access."""

from loguru import logger

from app.models.catalog import ColumnDetail, ColumnInfo, TableInfo, TableRef
from app.repositories.base import BaseRepository
from app.repositories.sql import quote_ident, quote_table

SYSTEM_SCHEMAS = ("pg_catalog", "information_schema")


class CatalogRepository(BaseRepository):
    """Repository for table and column catalog queries."""

    def load_columns(self, ref: TableRef) -> tuple[ColumnInfo, ...]:
        """Columns of one table in ordinal order (errors propagate)."""
        rows = self.fetchall(
            """
            SELECT column_name, data_type, udt_name, ordinal_position
            FROM information_schema.columns
            WHERE table_schema = $1 AND table_name = $2
            ORDER BY ordinal_position ASC
            """,
            [ref.schema, ref.table],
        )
        columns = tuple(
            ColumnInfo(
                name=str(r["column_name"]),
                data_type=str(r["data_type"] or ""),
                udt_name=r.get("udt_name") or r["data_type"],
                position=int(r["ordinal_position"]),
            )
            for r in rows
        )
        logger.debug("load_columns({}): {} columns", ref.qualified, len(columns))
        return columns

    def list_tables(self) -> list[TableInfo]:
        """All user tables and views."""
        rows = self.fetchall(
            """
            SELECT table_schema, table_name, table_type
            FROM information_schema.tables
            WHERE table_schema NOT IN ($1, $2)
            ORDER BY table_schema ASC, table_name ASC
            """,
            list(SYSTEM_SCHEMAS),
        )
        return [TableInfo(schema=r["table_schema"], name=r["table_name"], type=r["table_type"]) for r in rows]

    def list_columns(self, ref: TableRef) -> list[ColumnDetail]:
        """Detailed column listing for the column browser."""
        rows = self.fetchall(
            """
            SELECT ordinal_position, column_name, data_type, udt_name, is_nullable, column_default
            FROM information_schema.columns
            WHERE table_schema = $1 AND table_name = $2
            ORDER BY ordinal_position ASC
            """,
            [ref.schema, ref.table],
        )
        return [
            ColumnDetail(
                position=int(r["ordinal_position"]),
                name=r["column_name"],
                data_type=r["data_type"],
                udt=r.get("udt_name"),
                nullable=r["is_nullable"] == "YES",
                default=r["column_default"],
            )
            for r in rows
        ]

    def distinct_values(self, ref: TableRef, column: str, limit: int = 50) -> list[str]:
        """Sample of distinct non-null values of a column, as text."""
        col = quote_ident(column)
        rows = self.fetchall(
            f"SELECT DISTINCT {col}::text AS v FROM {quote_table(ref)} WHERE {col} IS NOT NULL LIMIT $1",
            [limit],
        )
        return [r["v"] for r in rows if r["v"]]
