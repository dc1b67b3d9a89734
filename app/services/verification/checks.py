"""The two remote checks: Spamhaus Intel reputation and Wayback Machine history."""

import asyncio
from collections.abc import Awaitable
from typing import Any

import httpx
from loguru import logger

from app.models.verification import SpamhausResult, WaybackResult
from app.services.verification.credentials import SOURCE_MISSING, CredentialManager
from intel_client import LoginError, RequestTimeoutError, SpamhausClient, WaybackClient, parse_json

MISSING_CREDENTIALS = (
    "Missing Spamhaus Intel credentials (set SPAMHAUS_INTEL_API_KEY or SPAMHAUS_INTEL_USERNAME/PASSWORD)"
)
MISSING_TOKEN = "Missing Spamhaus Intel token"

# failures surfaced as a per-branch error message
REMOTE_ERRORS = (httpx.HTTPError, RequestTimeoutError, LoginError)

SNAPSHOT_DISPLAY_CAP = 9999


def describe(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


async def check_spamhaus(client: SpamhausClient, credentials: CredentialManager, domain: str) -> SpamhausResult:
    """404 -> not listed, 200 -> listed, 401/403 -> token invalidated, anything else -> error."""
    try:
        token, source = await credentials.get_token(client)
    except REMOTE_ERRORS as e:
        logger.warning("Spamhaus login failed: {}", e)
        return SpamhausResult(supported=True, error=describe(e))

    if not token:
        return SpamhausResult(
            supported=False,
            error=MISSING_CREDENTIALS if source == SOURCE_MISSING else MISSING_TOKEN,
        )

    try:
        resp = await client.lookup_domain(domain, token)
    except REMOTE_ERRORS as e:
        logger.warning("Spamhaus lookup for {} failed: {}", domain, e)
        return SpamhausResult(supported=True, error=describe(e))

    status = resp.status_code
    if status == 404:
        return SpamhausResult(supported=True, listed=False)
    if status == 200:
        payload = parse_json(resp)
        return SpamhausResult(supported=True, listed=True, raw=payload if payload is not None else resp.text)
    if status in (401, 403):
        credentials.invalidate()
        return SpamhausResult(supported=True, error=f"Auth failed (HTTP {status})")
    return SpamhausResult(supported=True, error=f"HTTP {status} {resp.text[:300]}".strip())


async def _optional(call: Awaitable[Any], label: str) -> tuple[Any, str | None]:
    """(value, None) on success, (None, message) on a remote failure."""
    try:
        return await call, None
    except REMOTE_ERRORS as e:
        logger.debug("Wayback {} failed: {}", label, e)
        return None, describe(e)


def snapshot_date(timestamp: Any) -> str | None:
    """Wayback timestamp (YYYYMMDDhhmmss) to YYYY-MM-DD."""
    ts = str(timestamp or "")
    if len(ts) < 8:
        return None
    return f"{ts[0:4]}-{ts[4:6]}-{ts[6:8]}"


def wayback_link(domain: str) -> str:
    return f"https://web.archive.org/web/*/{domain}"


async def check_wayback(client: WaybackClient, domain: str) -> WaybackResult:
    """Availability and CDX count run concurrently; each may fail on its own."""
    (availability, avail_error), (rows, cdx_error) = await asyncio.gather(
        _optional(client.availability(domain), "availability"),
        _optional(client.snapshot_rows(domain), "cdx"),
    )
    link = wayback_link(domain)

    if avail_error and cdx_error:
        return WaybackResult(supported=True, link=link, error=f"Wayback Machine unavailable: {avail_error}")

    archived = (availability or {}).get("archived_snapshots")
    closest = archived.get("closest") if isinstance(archived, dict) else None
    if not isinstance(closest, dict):
        closest = {}

    snapshots: int | str | None = None
    if rows:
        snapshots = len(rows) - 1
        if snapshots >= SNAPSHOT_DISPLAY_CAP:
            snapshots = "10000+"

    return WaybackResult(
        supported=True,
        link=link,
        has_snapshots=bool(closest.get("available")),
        snapshots=snapshots,
        last_snapshot=snapshot_date(closest.get("timestamp")),
    )
