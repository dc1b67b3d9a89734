"""Criteria compiler - SearchCriteria + resolved columns -> parameterized WHERE fragments.

Every criterion compiles to zero or more AND-combined fragments. A criterion
whose column is missing is dropped silently. Column names only ever reach the
SQL text through ``quote_ident``; user values only ever travel as bound
``$n`` parameters. Stored text is read through ``TRY_CAST``, so rows holding
unparseable numbers or dates fail the predicate instead of the query.
"""

import math

from app.models.catalog import ColumnRoleMap, TableMetadata
from app.models.search import CompiledQuery, SearchCriteria
from app.repositories.sql import ParamBinder, quote_ident
from app.services.search.lifecycle import compile_lifecycle, int_or_zero, text_of, timestamp_of, try_cast

# role -> output alias, in select order
ROLE_ALIASES = (
    ("domain", "domain"),
    ("tld", "tld"),
    ("created", "domain_creation_date"),
    ("expires", "domain_expiration_date"),
    ("scheduled_delete", "scheduled_delete_date"),
    ("status", "status"),
    ("deleted_flag", "is_deleted"),
    ("deleted_at", "deleted_at"),
)

# selected verbatim when present
FIXED_COLUMNS = (
    "tld_suffix",
    "technologies",
    "country_by_ip",
    "pr_value",
    "harmonic_value",
    "detected_hosts",
    "rdap_whois_last_data_checked",
    "rdap_whois_method",
    "domain_last_changed",
    "registrar",
    "response_status",
)

COUNTER_ALIASES = (
    ("wayback", "wayback"),
    ("spamhaus", "spamhaus"),
    ("views_total", "viewstotal"),
)

# criterion field -> exact column name; no heuristic fallback
CONTAINS_COLUMNS = (
    ("registrar_contains", "registrar"),
    ("technologies_contains", "technologies"),
    ("response_status_contains", "response_status"),
)


def normalize_tld(term: str) -> str:
    return term.strip().lstrip(".").lower()


def _years(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        n = float(raw)
    except ValueError:
        return None
    if not math.isfinite(n):
        return None
    return max(0, int(n))


def _date_of(column: str) -> str:
    return try_cast(column, "DATE")


def build_select_columns(roles: ColumnRoleMap, metadata: TableMetadata) -> list[tuple[str, str | None]]:
    """Projection: resolved roles under canonical aliases, fixed-name columns, counters."""
    columns: list[tuple[str, str | None]] = []
    for role, alias in ROLE_ALIASES:
        physical = getattr(roles, role)
        if physical:
            columns.append((quote_ident(physical), alias))
    for name in FIXED_COLUMNS:
        col = metadata.column(name)
        if col is not None:
            columns.append((quote_ident(col.name), None))
    for role, alias in COUNTER_ALIASES:
        physical = getattr(roles, role)
        if physical:
            columns.append((quote_ident(physical), alias))
    return columns


class _Fragments:
    """Ordered WHERE fragments sharing one parameter binder."""

    def __init__(self):
        self.binder = ParamBinder()
        self.where: list[str] = []

    def add(self, fragment: str) -> None:
        self.where.append(fragment)

    def bind(self, value) -> str:
        return self.binder.bind(value)


def _safe_flag(column: str, metadata: TableMetadata) -> str:
    """Not flagged: boolean columns must not be true; others must be blank or a number <= 0."""
    info = metadata.column(column)
    if info is not None and info.is_boolean:
        return f"{quote_ident(column)} IS NOT TRUE"
    return f"(NULLIF({text_of(column)}, '') IS NULL OR {try_cast(column, 'INTEGER')} <= 0)"


def compile_criteria(criteria: SearchCriteria, roles: ColumnRoleMap, metadata: TableMetadata) -> CompiledQuery:
    """Compile criteria against the resolved columns of the domains table."""
    q = _Fragments()

    # domain prefix / suffix
    if roles.domain:
        domain = quote_ident(roles.domain)
        if criteria.domain_starts_with:
            q.add(f"{domain} ILIKE {q.bind(criteria.domain_starts_with + '%')}")
        if criteria.domain_ends_with:
            q.add(f"{domain} ILIKE {q.bind('%' + criteria.domain_ends_with)}")

    # TLD set
    tlds = [t for t in (normalize_tld(x) for x in criteria.tld) if t]
    if tlds:
        if roles.tld:
            placeholders = ", ".join(q.binder.bind_all(tlds))
            q.add(f"{quote_ident(roles.tld)} IN ({placeholders})")
        elif roles.domain:
            lowered = f"LOWER({quote_ident(roles.domain)})"
            patterns = [f"{lowered} LIKE {q.bind('%.' + t)}" for t in tlds]
            q.add("(" + " OR ".join(patterns) + ")")

    # lifecycle
    if criteria.lifecycle_state is not None:
        for fragment in compile_lifecycle(
            criteria.lifecycle_state, criteria.expiring_within_days, roles, metadata, q.binder
        ):
            q.add(fragment)

    # creation date range
    if roles.created:
        created = _date_of(roles.created)
        if criteria.creation_date_from:
            q.add(f"{created} >= CAST({q.bind(criteria.creation_date_from)} AS DATE)")
        if criteria.creation_date_to:
            q.add(f"{created} <= CAST({q.bind(criteria.creation_date_to)} AS DATE)")

        # age in years: older than min, younger than max
        min_years = _years(criteria.age_years_from)
        max_years = _years(criteria.age_years_to)
        if min_years is not None and max_years is not None and min_years > max_years:
            min_years, max_years = max_years, min_years
        if min_years is not None:
            q.add(f"{created} <= CURRENT_DATE - CAST({q.bind(min_years)} AS INTEGER) * INTERVAL '1 year'")
        if max_years is not None:
            q.add(f"{created} >= CURRENT_DATE - CAST({q.bind(max_years)} AS INTEGER) * INTERVAL '1 year'")

    # exact-name columns
    country = metadata.column("country_by_ip")
    if criteria.country_by_ip and country is not None:
        q.add(f"{quote_ident(country.name)} = {q.bind(criteria.country_by_ip)}")

    for field_name, column_name in CONTAINS_COLUMNS:
        value = getattr(criteria, field_name)
        col = metadata.column(column_name)
        if value and col is not None:
            q.add(f"{quote_ident(col.name)} ILIKE {q.bind('%' + value + '%')}")

    # detected hosts: unparseable stored text never matches
    hosts = metadata.column("detected_hosts")
    if hosts is not None:
        hosts_int = try_cast(hosts.name, "INTEGER")
        if criteria.detected_hosts_min:
            q.add(f"{hosts_int} >= CAST({q.bind(criteria.detected_hosts_min)} AS INTEGER)")
        if criteria.detected_hosts_max:
            q.add(f"{hosts_int} <= CAST({q.bind(criteria.detected_hosts_max)} AS INTEGER)")

    # expiration range
    if roles.expires:
        expires = timestamp_of(roles.expires)
        if criteria.expiration_from:
            q.add(f"{expires} >= CAST({q.bind(criteria.expiration_from)} AS TIMESTAMP)")
        if criteria.expiration_to:
            q.add(f"{expires} <= CAST({q.bind(criteria.expiration_to)} AS TIMESTAMP)")

    # reputation counters
    if criteria.wayback_min_snapshots and roles.wayback:
        q.add(f"{int_or_zero(roles.wayback)} >= CAST({q.bind(criteria.wayback_min_snapshots)} AS INTEGER)")
    if criteria.safe_spamhaus_only and roles.spamhaus:
        q.add(_safe_flag(roles.spamhaus, metadata))
    if criteria.safe_views_total_only and roles.views_total:
        q.add(_safe_flag(roles.views_total, metadata))

    return CompiledQuery(
        where_fragments=q.where,
        parameters=q.binder.values,
        select_columns=build_select_columns(roles, metadata),
    )
