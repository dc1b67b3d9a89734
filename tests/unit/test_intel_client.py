"""Tests for the HTTP client retry and deadline policy."""

import asyncio
import json

import httpx
import pytest

from intel_client import LoginError, RequestTimeoutError, SpamhausClient, WaybackClient

BASE = "https://api.spamhaus.test"


class Recorder:
    def __init__(self, responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []
        self.waits: list[float] = []

    def handler(self, request):
        self.requests.append(request)
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item

    async def sleep(self, seconds):
        self.waits.append(seconds)

    def spamhaus(self, **kwargs):
        return SpamhausClient(BASE, transport=httpx.MockTransport(self.handler), sleep=self.sleep, **kwargs)


class TestRetryPolicy:
    @pytest.mark.asyncio
    async def test_retries_5xx_then_succeeds(self):
        rec = Recorder([httpx.Response(502), httpx.Response(404)])
        async with rec.spamhaus() as client:
            resp = await client.lookup_domain("example.com", "tok")

        assert resp.status_code == 404
        assert len(rec.requests) == 2
        assert rec.waits == [0.25]
        assert client.request_count == 2

    @pytest.mark.asyncio
    async def test_429_retried(self):
        rec = Recorder([httpx.Response(429), httpx.Response(200, json={})])
        async with rec.spamhaus() as client:
            resp = await client.lookup_domain("example.com", "tok")
        assert resp.status_code == 200

    @pytest.mark.asyncio
    async def test_client_errors_not_retried(self):
        rec = Recorder([httpx.Response(401)])
        async with rec.spamhaus() as client:
            resp = await client.lookup_domain("example.com", "tok")
        assert resp.status_code == 401
        assert len(rec.requests) == 1

    @pytest.mark.asyncio
    async def test_last_response_returned_when_retries_exhausted(self):
        rec = Recorder([httpx.Response(500)])
        async with rec.spamhaus() as client:
            resp = await client.lookup_domain("example.com", "tok")
        assert resp.status_code == 500
        assert len(rec.requests) == 2

    @pytest.mark.asyncio
    async def test_transport_error_raised_after_retries(self):
        rec = Recorder([httpx.ConnectError("refused")])
        async with rec.spamhaus() as client:
            with pytest.raises(httpx.ConnectError):
                await client.lookup_domain("example.com", "tok")
        assert len(rec.requests) == 2

    @pytest.mark.asyncio
    async def test_cdx_not_retried(self):
        rec = Recorder([httpx.Response(503)])
        transport = httpx.MockTransport(rec.handler)
        async with WaybackClient("https://a.test/available", "https://a.test/cdx", transport=transport) as client:
            assert await client.snapshot_rows("example.com") is None
        assert len(rec.requests) == 1
        assert rec.requests[0].url.params["fl"] == "timestamp"


class TestDeadline:
    @pytest.mark.asyncio
    async def test_slow_request_cancelled(self):
        async def slow(request):
            await asyncio.sleep(5)
            return httpx.Response(200)

        async def no_sleep(_):
            return None

        transport = httpx.MockTransport(slow)
        async with SpamhausClient(BASE, timeout=0.05, transport=transport, sleep=no_sleep) as client:
            with pytest.raises(RequestTimeoutError):
                await client.lookup_domain("example.com", "tok")
        assert client.request_count == 2


class TestSpamhausClient:
    @pytest.mark.asyncio
    async def test_login_payload(self):
        rec = Recorder([httpx.Response(200, json={"token": "abc", "expires": 123})])
        async with rec.spamhaus() as client:
            data = await client.login("user", "secret")

        assert data == {"token": "abc", "expires": 123}
        request = rec.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/v1/login"
        assert json.loads(request.content) == {"username": "user", "password": "secret", "realm": "intel"}

    @pytest.mark.asyncio
    async def test_login_without_token(self):
        rec = Recorder([httpx.Response(200, json={"expires": 123})])
        async with rec.spamhaus() as client:
            with pytest.raises(LoginError):
                await client.login("user", "secret")

    @pytest.mark.asyncio
    async def test_login_rejected(self):
        rec = Recorder([httpx.Response(401, text="bad credentials")])
        async with rec.spamhaus() as client:
            with pytest.raises(LoginError, match="HTTP 401"):
                await client.login("user", "secret")

    @pytest.mark.asyncio
    async def test_lookup_quotes_domain_and_sends_bearer(self):
        rec = Recorder([httpx.Response(404)])
        async with rec.spamhaus() as client:
            await client.lookup_domain("example.com", "tok")

        request = rec.requests[0]
        assert request.url.path == "/api/intel/v2/byobject/domain/example.com"
        assert request.headers["Authorization"] == "Bearer tok"
