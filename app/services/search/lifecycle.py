"""Lifecycle sub-compiler - derives active / expiring / deleted from whatever columns exist.

Deletion evidence is derived first, in this order:

1. deleted flag (``IS TRUE`` for boolean columns, numeric text ``> 0`` otherwise)
   OR deleted-at timestamp present;
2. only when neither column exists: status text matching a deleted pattern.

``deleted`` filters to that evidence. ``active`` and ``expiring`` filter to its
negation (when derivable) plus a state-specific predicate. States whose columns
are all missing compile to no fragment at all.

Stored text is converted with ``TRY_CAST``: a value that does not parse reads
as NULL instead of failing the query.
"""

import math

from app.models.catalog import ColumnRoleMap, TableMetadata
from app.models.search import LifecycleState
from app.repositories.sql import ParamBinder, quote_ident

DELETED_STATUS_PATTERNS = ("%deleted%", "%dropped%", "%removed%")
EXPIRING_STATUS_PATTERNS = ("%expir%", "%pending%", "%to_delete%")
ACTIVE_STATUS_PATTERNS = ("active", "ok", "registered", "%active%")

DEFAULT_EXPIRING_DAYS = 30


def expiring_days(raw: str | None) -> int:
    """Window in days: truncated, at least 1, default 30 when absent or non-numeric."""
    try:
        n = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_EXPIRING_DAYS
    if not math.isfinite(n):
        return DEFAULT_EXPIRING_DAYS
    return max(1, int(n))


def text_of(column: str) -> str:
    return f"{quote_ident(column)}::text"


def try_cast(column: str, sql_type: str) -> str:
    """Column text as ``sql_type``; blank or unparseable values become NULL."""
    return f"TRY_CAST(NULLIF({text_of(column)}, '') AS {sql_type})"


def int_or_zero(column: str) -> str:
    return f"COALESCE({try_cast(column, 'INTEGER')}, 0)"


def timestamp_of(column: str) -> str:
    return try_cast(column, "TIMESTAMP")


def ilike_any(expr: str, patterns: tuple[str, ...], binder: ParamBinder) -> str:
    """``(expr ILIKE $a OR expr ILIKE $b ...)`` with every pattern bound."""
    return "(" + " OR ".join(f"{expr} ILIKE {ph}" for ph in binder.bind_all(list(patterns))) + ")"


def deleted_fragment(roles: ColumnRoleMap, metadata: TableMetadata, binder: ParamBinder) -> str | None:
    """Parenthesized deletion predicate, or None when nothing signals deletion."""
    clauses = []
    if roles.deleted_flag:
        info = metadata.column(roles.deleted_flag)
        flag = quote_ident(roles.deleted_flag)
        if info is not None and info.is_boolean:
            clauses.append(f"{flag} IS TRUE")
        else:
            clauses.append(f"{int_or_zero(roles.deleted_flag)} > 0")
    if roles.deleted_at:
        clauses.append(f"NULLIF({quote_ident(roles.deleted_at)}::text, '') IS NOT NULL")

    if clauses:
        return "(" + " OR ".join(clauses) + ")"
    if roles.status:
        return ilike_any(text_of(roles.status), DELETED_STATUS_PATTERNS, binder)
    return None


def compile_lifecycle(
    state: LifecycleState,
    days_raw: str | None,
    roles: ColumnRoleMap,
    metadata: TableMetadata,
    binder: ParamBinder,
) -> list[str]:
    """Fragments for one lifecycle state (possibly none)."""
    deleted = deleted_fragment(roles, metadata, binder)

    if state is LifecycleState.DELETED:
        return [deleted] if deleted else []

    fragments = [f"NOT {deleted}"] if deleted else []

    if state is LifecycleState.EXPIRING:
        date_column = roles.scheduled_delete or roles.expires
        if date_column:
            ts = timestamp_of(date_column)
            days = binder.bind(expiring_days(days_raw))
            fragments.append(f"({ts} >= NOW() AND {ts} < NOW() + CAST({days} AS INTEGER) * INTERVAL '1 day')")
        elif roles.status:
            fragments.append(ilike_any(text_of(roles.status), EXPIRING_STATUS_PATTERNS, binder))
        return fragments

    # active: not yet expired OR an active-looking status
    options = []
    if roles.expires:
        options.append(f"{timestamp_of(roles.expires)} >= NOW()")
    if roles.status:
        options.append(ilike_any(text_of(roles.status), ACTIVE_STATUS_PATTERNS, binder))
    if len(options) == 1:
        fragments.append(options[0])
    elif options:
        fragments.append("(" + " OR ".join(options) + ")")
    return fragments
