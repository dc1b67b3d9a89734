"""Verification entities - remote check results and auth tokens."""

from dataclasses import dataclass
from typing import Any

from app.models.common import BaseEntity

SPAMHAUS_SOURCE = "spamhaus_intel"


@dataclass
class SpamhausResult(BaseEntity):
    """Reputation lookup outcome: supported success, supported error, or unsupported."""

    supported: bool
    source: str = SPAMHAUS_SOURCE
    listed: bool | None = None
    raw: Any = None
    error: str | None = None


@dataclass
class WaybackResult(BaseEntity):
    """Archive lookup outcome."""

    supported: bool
    link: str
    has_snapshots: bool = False
    snapshots: int | str | None = None
    last_snapshot: str | None = None
    error: str | None = None


@dataclass
class VerificationResult(BaseEntity):
    """Merged result of both remote checks for one normalized domain."""

    domain: str
    spamhaus: SpamhausResult
    wayback: WaybackResult
    cached: bool = False

    @property
    def has_error(self) -> bool:
        return bool(self.spamhaus.error or self.wayback.error)


@dataclass(frozen=True)
class AuthToken:
    """Bearer token with its absolute expiry (epoch milliseconds)."""

    token: str
    expires_at_ms: int

    def is_fresh(self, now_ms: int, margin_ms: int) -> bool:
        return now_ms < self.expires_at_ms - margin_ms
