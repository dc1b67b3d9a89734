"""Column role map - semantic roles resolved to physical column names."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ColumnRoleMap:
    """Physical column per semantic role; None means the role is not available."""

    domain: str | None = None
    tld: str | None = None
    created: str | None = None
    expires: str | None = None
    scheduled_delete: str | None = None
    deleted_at: str | None = None
    deleted_flag: str | None = None
    status: str | None = None
    wayback: str | None = None
    spamhaus: str | None = None
    views_total: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return asdict(self)

    @property
    def reputation_counters(self) -> list[str]:
        """Present reputation counter columns (wayback, spamhaus, views total)."""
        return [c for c in (self.wayback, self.spamhaus, self.views_total) if c]

    @property
    def supports_lifecycle(self) -> bool:
        return any((self.status, self.expires, self.scheduled_delete, self.deleted_at, self.deleted_flag))
