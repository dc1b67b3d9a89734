"""Domain search repository - query executor for compiled criteria."""

import math
from typing import Any

from loguru import logger

from app.models.search import CompiledQuery, SearchPage
from app.repositories.base import BaseRepository
from app.repositories.sql import ParamBinder, quote_ident

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 500
MAX_PAGE = 1_000_000_000


def clamp_int(value: Any, minimum: int, maximum: int, fallback: int) -> int:
    """Truncate to int and clamp to [minimum, maximum]; non-numeric gives fallback."""
    try:
        n = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(n):
        return fallback
    return min(maximum, max(minimum, int(n)))


def clamp_pagination(page: Any, page_size: Any) -> tuple[int, int]:
    """Server-side bounds for client pagination input."""
    return (
        clamp_int(page, 1, MAX_PAGE, DEFAULT_PAGE),
        clamp_int(page_size, 1, MAX_PAGE_SIZE, DEFAULT_PAGE_SIZE),
    )


class DomainRepository(BaseRepository):
    """Runs COUNT and the paginated SELECT for a compiled query."""

    def count(self, table_sql: str, compiled: CompiledQuery) -> int:
        row = self.fetchone(
            f"SELECT COUNT(*) AS total FROM {table_sql} {compiled.where_sql}",
            compiled.parameters,
        )
        return int(row["total"] or 0) if row else 0

    def search(
        self,
        table_sql: str,
        compiled: CompiledQuery,
        order_column: str,
        page: Any = DEFAULT_PAGE,
        page_size: Any = DEFAULT_PAGE_SIZE,
    ) -> SearchPage:
        """One page of rows ordered by ``order_column`` plus the total match count."""
        page, page_size = clamp_pagination(page, page_size)
        offset = (page - 1) * page_size

        total = self.count(table_sql, compiled)

        binder = ParamBinder(compiled.parameters)
        limit_ph = binder.bind(page_size)
        offset_ph = binder.bind(offset)
        items = self.fetchall(
            f"""
            SELECT {compiled.select_sql}
            FROM {table_sql}
            {compiled.where_sql}
            ORDER BY {quote_ident(order_column)} ASC
            LIMIT {limit_ph}
            OFFSET {offset_ph}
            """,
            binder.values,
        )
        logger.debug("search: page={}, page_size={}, total={}, returned={}", page, page_size, total, len(items))

        return SearchPage(
            page=page,
            page_size=page_size,
            total=total,
            total_pages=max(1, math.ceil(total / page_size)),
            items=items,
        )
