"""Column role resolver - maps semantic roles onto the columns of an unknown table.

Each role has an ordered list of exact candidate names (matched
case-insensitively) and an optional regex tried against lowercased column
names when no candidate exists. Columns are scanned in catalog ordinal order,
so the result is deterministic for a given catalog. A role that matches
nothing resolves to None and every filter depending on it is skipped.
"""

import re
from dataclasses import dataclass

from app.models.catalog import ColumnRoleMap, TableMetadata


@dataclass(frozen=True)
class RoleRule:
    """Lookup rule for one role."""

    candidates: tuple[str, ...]
    pattern: re.Pattern | None = None
    # never picked by the pattern fallback
    exclude: tuple[str, ...] = ()


DELETED_AT_CANDIDATES = ("deleted_at", "dropped_at", "removed_at")
DELETED_FLAG_CANDIDATES = ("is_deleted", "deleted", "is_dropped", "dropped", "is_removed", "removed")

ROLE_RULES: dict[str, RoleRule] = {
    "domain": RoleRule(
        ("domain", "hostname", "host", "name"),
        re.compile(r"domain"),
    ),
    "tld": RoleRule(("tld", "zone", "tld_suffix")),
    "created": RoleRule(
        ("domain_creation_date", "creation_date", "created_at", "registered_at", "registration_date"),
        re.compile(r"(creation|created|registered|registration)"),
    ),
    "expires": RoleRule(
        ("domain_expiration_date", "expiration_date", "expires_at", "expires_on", "expiry_date", "expire_date"),
        re.compile(r"(expiration|expire|expires|expiry)"),
    ),
    "scheduled_delete": RoleRule(
        ("drop_date", "delete_date", "deletion_date", "pending_delete_date", "scheduled_delete_date"),
        re.compile(r"(drop|delete|deletion)"),
        exclude=DELETED_AT_CANDIDATES + DELETED_FLAG_CANDIDATES,
    ),
    "deleted_at": RoleRule(DELETED_AT_CANDIDATES),
    "deleted_flag": RoleRule(DELETED_FLAG_CANDIDATES),
    "status": RoleRule(("status", "domain_status", "state", "domain_state", "lifecycle")),
    "wayback": RoleRule(
        (
            "wayback_snapshots",
            "wayback_total",
            "wayback_count",
            "webarchive_snapshots",
            "archive_snapshots",
            "archive_count",
        ),
        re.compile(r"(wayback|archive)"),
    ),
    "spamhaus": RoleRule(
        ("spamhaus_listed", "spamhouse_listed", "spamhaus", "spamhouse"),
        re.compile(r"(spamhaus|spamhouse)"),
    ),
    "views_total": RoleRule(
        ("views_total_listed", "viewstotal_listed", "views_total", "viewstotal"),
        re.compile(r"(viewstotal|views_total)"),
    ),
}


def find_first_column(metadata: TableMetadata, candidates: tuple[str, ...]) -> str | None:
    """Physical name of the first candidate present in the catalog."""
    for name in candidates:
        col = metadata.column(name)
        if col is not None:
            return col.name
    return None


def find_columns_like(metadata: TableMetadata, pattern: re.Pattern, exclude: tuple[str, ...] = ()) -> list[str]:
    """Columns whose lowercased name matches the pattern, in ordinal order."""
    return [c.name for c in metadata.columns if pattern.search(c.name.lower()) and c.name.lower() not in exclude]


def resolve_column(metadata: TableMetadata, rule: RoleRule) -> str | None:
    found = find_first_column(metadata, rule.candidates)
    if found is None and rule.pattern is not None:
        matches = find_columns_like(metadata, rule.pattern, rule.exclude)
        found = matches[0] if matches else None
    return found


def resolve_roles(metadata: TableMetadata) -> ColumnRoleMap:
    """Resolve every role against the catalog."""
    return ColumnRoleMap(**{role: resolve_column(metadata, rule) for role, rule in ROLE_RULES.items()})
