"""Credential manager - bearer token lifecycle for the Spamhaus Intel API."""

import asyncio
import time
from collections.abc import Callable

from loguru import logger

from app.models.verification import AuthToken
from intel_client import SpamhausClient

EXPIRY_MARGIN_MS = 60_000
DEFAULT_TOKEN_LIFETIME_MS = 23 * 60 * 60 * 1000

# token sources
SOURCE_API_KEY = "api_key"
SOURCE_LOGIN = "login"
SOURCE_LOGIN_CACHED = "login_cached"
SOURCE_MISSING = "missing"


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class CredentialManager:
    """Hands out a bearer token, preferring a static API key over login.

    Login tokens are cached until 60s before their declared expiry (23h when
    the login response has none). Concurrent callers share a single login.
    ``invalidate`` drops the cached token so the next call logs in again.
    """

    def __init__(
        self,
        api_key: str | None = None,
        username: str | None = None,
        password: str | None = None,
        clock_ms: Callable[[], int] = _epoch_ms,
    ):
        self._api_key = api_key
        self._username = username
        self._password = password
        self._clock_ms = clock_ms
        self._token: AuthToken | None = None
        self._lock = asyncio.Lock()

    @property
    def cached_token(self) -> AuthToken | None:
        return self._token

    def _fresh_token(self) -> AuthToken | None:
        token = self._token
        if token is not None and token.is_fresh(self._clock_ms(), EXPIRY_MARGIN_MS):
            return token
        return None

    async def get_token(self, client: SpamhausClient) -> tuple[str | None, str]:
        """(token, source); token is None when no credentials are configured."""
        if self._api_key:
            return self._api_key, SOURCE_API_KEY
        if not self._username or not self._password:
            return None, SOURCE_MISSING

        token = self._fresh_token()
        if token is not None:
            return token.token, SOURCE_LOGIN_CACHED

        async with self._lock:
            token = self._fresh_token()
            if token is not None:
                return token.token, SOURCE_LOGIN_CACHED

            data = await client.login(self._username, self._password)
            try:
                expires = float(data.get("expires") or 0)
            except (TypeError, ValueError):
                expires = 0
            now = self._clock_ms()
            expires_at_ms = int(expires * 1000) if expires else now + DEFAULT_TOKEN_LIFETIME_MS
            self._token = AuthToken(token=str(data["token"]), expires_at_ms=expires_at_ms)
            logger.info("Spamhaus login ok, token valid for {}s", (expires_at_ms - now) // 1000)
            return self._token.token, SOURCE_LOGIN

    def invalidate(self) -> None:
        """Forget the cached login token."""
        if self._token is not None:
            logger.warning("Spamhaus token invalidated")
        self._token = None
