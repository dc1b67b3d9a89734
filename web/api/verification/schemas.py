"""Domain check API schemas."""

from typing import Any

from web.api.schemas import ApiModel


class SpamhausItem(ApiModel):
    supported: bool
    source: str
    listed: bool | None = None
    raw: Any = None
    error: str | None = None


class WaybackItem(ApiModel):
    supported: bool
    link: str
    has_snapshots: bool
    snapshots: int | str | None = None
    last_snapshot: str | None = None
    error: str | None = None


class CheckResponse(ApiModel):
    """Merged reputation and archive check for one domain."""

    domain: str
    cached: bool
    spamhaus: SpamhausItem
    wayback: WaybackItem
