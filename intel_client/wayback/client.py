"""Wayback Machine client - availability and CDX snapshot listing."""

from intel_client.base import BaseClient, parse_json

CDX_LIMIT = 10000


class WaybackClient(BaseClient):
    """Client for the Internet Archive availability and CDX endpoints."""

    def __init__(
        self,
        availability_url: str,
        cdx_url: str,
        availability_timeout: float = 8.0,
        cdx_timeout: float = 25.0,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._availability_url = availability_url
        self._cdx_url = cdx_url
        self._availability_timeout = availability_timeout
        self._cdx_timeout = cdx_timeout

    async def availability(self, domain: str) -> dict | None:
        """Closest snapshot info, None unless the endpoint answered 2xx."""
        resp = await self._request(
            "GET",
            self._availability_url,
            params={"url": f"http://{domain}"},
            headers={"Accept": "application/json"},
            timeout=self._availability_timeout,
            retries=1,
        )
        if not resp.is_success:
            return None
        data = parse_json(resp)
        return data if isinstance(data, dict) else None

    async def snapshot_rows(self, domain: str) -> list | None:
        """CDX rows (first row is the header), None unless the endpoint answered 2xx."""
        resp = await self._request(
            "GET",
            self._cdx_url,
            params={
                "url": domain,
                "matchType": "exact",
                "output": "json",
                "fl": "timestamp",
                "limit": CDX_LIMIT,
            },
            headers={"Accept": "application/json"},
            timeout=self._cdx_timeout,
            retries=0,
        )
        if not resp.is_success:
            return None
        data = parse_json(resp)
        return data if isinstance(data, list) else None
