"""SQL text helpers - identifier quoting and positional parameter binding."""

from typing import Any

from app.models.catalog import TableRef


def quote_ident(name: str) -> str:
    """Double-quote an identifier, doubling any embedded quote."""
    return '"' + str(name).replace('"', '""') + '"'


def quote_table(ref: TableRef) -> str:
    """Schema-qualified, quoted table name."""
    return f"{quote_ident(ref.schema)}.{quote_ident(ref.table)}"


class ParamBinder:
    """Collects bound values and hands out their $n placeholders."""

    def __init__(self, start: list[Any] | None = None):
        self.values: list[Any] = list(start or [])

    def bind(self, value: Any) -> str:
        self.values.append(value)
        return f"${len(self.values)}"

    def bind_all(self, values: list[Any]) -> list[str]:
        return [self.bind(v) for v in values]
