"""Compiled query and search page entities."""

from dataclasses import dataclass, field
from typing import Any

from app.models.common import BaseEntity


@dataclass
class CompiledQuery:
    """WHERE fragments with positional ($n) placeholders and their bound values."""

    where_fragments: list[str] = field(default_factory=list)
    parameters: list[Any] = field(default_factory=list)
    select_columns: list[tuple[str, str | None]] = field(default_factory=list)

    @property
    def where_sql(self) -> str:
        if not self.where_fragments:
            return ""
        return "WHERE " + " AND ".join(self.where_fragments)

    @property
    def select_sql(self) -> str:
        return ",\n       ".join(expr if alias is None else f"{expr} AS {alias}" for expr, alias in self.select_columns)


@dataclass
class SearchPage(BaseEntity):
    """One page of search results."""

    page: int
    page_size: int
    total: int
    total_pages: int
    items: list[dict[str, Any]]
