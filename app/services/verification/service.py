"""Verification orchestrator - cached, concurrent Spamhaus + Wayback checks."""

import asyncio
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from loguru import logger

from app.models.verification import SpamhausResult, VerificationResult, WaybackResult
from app.services.verification.cache import TTLCache
from app.services.verification.checks import check_spamhaus, check_wayback
from app.services.verification.credentials import CredentialManager
from app.services.verification.normalize import normalize_domain
from intel_client import SpamhausClient, WaybackClient


class VerificationService:
    """normalize -> cache lookup -> (miss) both checks concurrently -> merge -> cache if error-free.

    Concurrent checks of the same domain share one in-flight computation.
    """

    def __init__(
        self,
        credentials: CredentialManager,
        cache: TTLCache,
        spamhaus_factory: Callable[[], SpamhausClient],
        wayback_factory: Callable[[], WaybackClient],
    ):
        self._credentials = credentials
        self._cache = cache
        self._spamhaus_factory = spamhaus_factory
        self._wayback_factory = wayback_factory
        self._inflight: dict[str, asyncio.Task] = {}

    async def check(self, raw_domain: Any) -> VerificationResult:
        domain = normalize_domain(raw_domain)

        cached = self._cache.get(domain)
        if cached is not None:
            return replace(cached, cached=True)

        task = self._inflight.get(domain)
        if task is None:
            task = asyncio.create_task(self._run(domain))
            self._inflight[domain] = task
            task.add_done_callback(lambda t, d=domain: self._forget(d, t))
        return await asyncio.shield(task)

    def _forget(self, domain: str, task: asyncio.Task) -> None:
        if self._inflight.get(domain) is task:
            del self._inflight[domain]

    async def _run(self, domain: str) -> VerificationResult:
        logger.info("Checking {}", domain)
        spamhaus, wayback = await asyncio.gather(self._spamhaus(domain), self._wayback(domain))
        result = VerificationResult(domain=domain, spamhaus=spamhaus, wayback=wayback)

        if result.has_error:
            logger.warning(
                "Check for {} not cached: spamhaus={}, wayback={}",
                domain,
                spamhaus.error,
                wayback.error,
            )
        else:
            self._cache.set(domain, result)
        return result

    async def _spamhaus(self, domain: str) -> SpamhausResult:
        async with self._spamhaus_factory() as client:
            return await check_spamhaus(client, self._credentials, domain)

    async def _wayback(self, domain: str) -> WaybackResult:
        async with self._wayback_factory() as client:
            return await check_wayback(client, domain)
