"""Domain check API views - thin layer over services."""

from typing import Any

from app.container import container
from app.errors import InvalidDomainError
from web.api.errors import ValidationError, validate_body

from .schemas import CheckResponse, SpamhausItem, WaybackItem


async def check_domain(body: Any = None) -> CheckResponse:
    """Check one domain (``{"domain": "..."}``) against Spamhaus and the Wayback Machine.

    Remote failures come back as per-check ``error`` strings, never as exceptions.
    """
    body = validate_body(body)
    try:
        result = await container.verification.check(body.get("domain"))
    except InvalidDomainError as e:
        raise ValidationError(e.message) from e

    s, w = result.spamhaus, result.wayback
    return CheckResponse(
        domain=result.domain,
        cached=result.cached,
        spamhaus=SpamhausItem(supported=s.supported, source=s.source, listed=s.listed, raw=s.raw, error=s.error),
        wayback=WaybackItem(
            supported=w.supported,
            link=w.link,
            has_snapshots=w.has_snapshots,
            snapshots=w.snapshots,
            last_snapshot=w.last_snapshot,
            error=w.error,
        ),
    )
