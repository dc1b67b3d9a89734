"""Verification models."""

from app.models.verification.entities import (
    SPAMHAUS_SOURCE,
    AuthToken,
    SpamhausResult,
    VerificationResult,
    WaybackResult,
)

__all__ = [
    "SPAMHAUS_SOURCE",
    "AuthToken",
    "SpamhausResult",
    "VerificationResult",
    "WaybackResult",
]
