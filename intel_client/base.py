"""Base HTTP client with deadline and retry logic."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

DEFAULT_TIMEOUT = 12.0
MAX_RETRIES = 2
BACKOFF_SECONDS = 0.25


class RequestTimeoutError(Exception):
    """The whole request (connect + transfer) exceeded its deadline."""


def _is_retryable_error(exc: BaseException) -> bool:
    """Transport failures and deadline overruns are retried."""
    return isinstance(exc, (httpx.TransportError, RequestTimeoutError))


def _is_retryable_response(resp: httpx.Response) -> bool:
    """5xx and 429 responses are retried."""
    return resp.status_code >= 500 or resp.status_code == 429


def _last_outcome(state: RetryCallState) -> httpx.Response:
    """After the last attempt: return the final response or re-raise the final error."""
    return state.outcome.result()


def _log_retry(state: RetryCallState) -> None:
    if state.outcome.failed:
        reason = repr(state.outcome.exception())
    else:
        reason = f"HTTP {state.outcome.result().status_code}"
    logger.debug("Retrying ({}) after attempt {}: {}", state.fn.__name__, state.attempt_number, reason)


def parse_json(resp: httpx.Response) -> Any:
    """Response body as JSON, None when empty or not JSON."""
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return None


class BaseClient:
    """Base async HTTP client with per-request deadlines and exponential backoff.

    Each attempt is bounded by ``asyncio.wait_for``, so a request that runs
    past its deadline is cancelled rather than left running. Attempts that
    end in a transport error, a timeout, a 5xx or a 429 are retried up to
    ``retries`` more times, waiting 0.25s, 0.5s, ... in between. When the
    retries run out the last response is returned (or the last error raised).
    """

    def __init__(
        self,
        max_concurrent: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._client: httpx.AsyncClient | None = None
        self._sem = asyncio.Semaphore(max_concurrent)
        self._transport = transport
        self._sleep = sleep
        self._request_count = 0

    @property
    def request_count(self) -> int:
        return self._request_count

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            transport=self._transport,
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=5),
        )
        return self

    async def __aexit__(self, *_):
        logger.debug("{}: {} requests", self.__class__.__name__, self._request_count)
        if self._client:
            await self._client.aclose()

    async def _send(self, method: str, url: str, timeout: float, **kwargs) -> httpx.Response:
        async with self._sem:
            self._request_count += 1
            try:
                return await asyncio.wait_for(self._client.request(method, url, timeout=timeout, **kwargs), timeout)
            except asyncio.TimeoutError as e:
                raise RequestTimeoutError(f"{method} {url} timed out after {timeout}s") from e

    async def _request(
        self,
        method: str,
        url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = MAX_RETRIES,
        **kwargs,
    ) -> httpx.Response:
        """Send a request with deadline and retry policy applied."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(min(retries, MAX_RETRIES) + 1),
            wait=wait_exponential(multiplier=BACKOFF_SECONDS),
            retry=retry_if_exception(_is_retryable_error) | retry_if_result(_is_retryable_response),
            retry_error_callback=_last_outcome,
            before_sleep=_log_retry,
            sleep=self._sleep,
        )
        return await retrying(self._send, method, url, timeout, **kwargs)
