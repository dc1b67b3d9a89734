"""Spamhaus Intel API client - login and domain lookups."""

from urllib.parse import quote

import httpx

from intel_client.base import BaseClient, parse_json

LOGIN_REALM = "intel"


class LoginError(Exception):
    """Login did not yield a token."""


class SpamhausClient(BaseClient):
    """Client for the Spamhaus Intel API."""

    def __init__(self, base_url: str, timeout: float = 12.0, **kwargs):
        super().__init__(**kwargs)
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def login(self, username: str, password: str) -> dict:
        """POST /api/v1/login - returns {"token": ..., "expires": <unix seconds>}."""
        resp = await self._request(
            "POST",
            f"{self._base_url}/api/v1/login",
            json={"username": username, "password": password, "realm": LOGIN_REALM},
            headers={"Accept": "application/json"},
            timeout=self._timeout,
            retries=1,
        )
        if not resp.is_success:
            raise LoginError(f"Spamhaus login failed: HTTP {resp.status_code} {resp.text[:200]}".strip())
        data = parse_json(resp)
        if not isinstance(data, dict) or not data.get("token"):
            raise LoginError("Spamhaus login failed: no token in response")
        return data

    async def lookup_domain(self, domain: str, token: str) -> httpx.Response:
        """GET /api/intel/v2/byobject/domain/{domain} - 404 means not listed."""
        return await self._request(
            "GET",
            f"{self._base_url}/api/intel/v2/byobject/domain/{quote(domain, safe='')}",
            headers={"Authorization": f"Bearer {token}", "Accept": "application/json"},
            timeout=self._timeout,
            retries=1,
        )
