"""
tests/test_transport.py – Unit tests for the requests / aiohttp transports.

No real sockets are opened: the sync transport is given a dummy session as
its agent, and the async transport's session is replaced by a fake.
They verify:
  1. Timeout, TLS and agent settings are applied to every request.
  2. Form bodies are sent byte-for-byte with the form content type.
  3. Network failures become TransportError with the cause chained.
  4. A shared agent is never closed by the transport.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import aiohttp
import pytest
import requests

from cryptotrade_sdk import ClientConfig, RawResponse, TransportError
from cryptotrade_sdk.transport import FORM_CONTENT_TYPE, AiohttpTransport, RequestsTransport

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@dataclass
class DummyResponse:
    status_code: int = 200
    text: str = "{}"


class DummySession:
    def __init__(self, response: Any = None) -> None:
        self._response = response or DummyResponse()
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def request(self, method: str, url: str, **kwargs: Any) -> DummyResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if isinstance(self._response, BaseException):
            raise self._response
        return self._response

    def close(self) -> None:
        self.closed = True


class FakeAiohttpResponse:
    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self._body  = body

    async def text(self, errors: str = "strict") -> str:
        return self._body

    async def __aenter__(self) -> "FakeAiohttpResponse":
        return self

    async def __aexit__(self, *_: Any) -> None:
        return None


class FakeAiohttpSession:
    def __init__(self, response: Any) -> None:
        self._response = response
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def request(self, method: str, url: str, **kwargs: Any) -> FakeAiohttpResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if isinstance(self._response, BaseException):
            raise self._response
        return self._response

    async def close(self) -> None:
        self.closed = True


def _async_transport(session: FakeAiohttpSession, **config: Any) -> AiohttpTransport:
    transport = AiohttpTransport(ClientConfig(**config))
    transport._session = session
    return transport


# ---------------------------------------------------------------------------
# RequestsTransport
# ---------------------------------------------------------------------------

class TestRequestsTransport:
    def test_post_applies_config(self) -> None:
        session = DummySession(DummyResponse(200, '{"ok": 1}'))
        transport = RequestsTransport(ClientConfig(agent=session, timeout=2500, strict_ssl=False))

        raw = transport.request("POST", "https://x/private/", data="a=1&method=getinfo", headers={"AuthKey": "k"})

        assert raw == RawResponse(200, '{"ok": 1}')
        call = session.calls[0]
        assert call["method"] == "POST"
        assert call["data"] == b"a=1&method=getinfo"
        assert call["headers"] == {"AuthKey": "k", "Content-Type": FORM_CONTENT_TYPE}
        assert call["timeout"] == 2.5
        assert call["verify"] is False

    def test_get_sends_no_body_or_headers(self) -> None:
        session = DummySession()
        RequestsTransport(ClientConfig(agent=session)).request("GET", "https://x/ticker/btc_usd")
        call = session.calls[0]
        assert call["data"] is None
        assert call["headers"] is None
        assert call["verify"] is True
        assert call["timeout"] == 5.0

    def test_body_not_interpreted(self) -> None:
        session = DummySession(DummyResponse(500, "<html>oops</html>"))
        raw = RequestsTransport(ClientConfig(agent=session)).request("GET", "https://x/")
        assert raw == RawResponse(500, "<html>oops</html>")

    @pytest.mark.parametrize(
        "exc",
        [requests.ConnectionError("refused"), requests.Timeout("slow"), requests.exceptions.SSLError("bad cert")],
    )
    def test_network_errors_become_transport_error(self, exc: Exception) -> None:
        session = DummySession(exc)
        with pytest.raises(TransportError) as exc_info:
            RequestsTransport(ClientConfig(agent=session)).request("GET", "https://x/")
        assert exc_info.value.cause is exc
        assert exc_info.value.__cause__ is exc

    def test_shared_agent_not_closed(self) -> None:
        session = DummySession()
        RequestsTransport(ClientConfig(agent=session)).close()
        assert session.closed is False

    def test_owned_session_created(self) -> None:
        transport = RequestsTransport(ClientConfig())
        assert isinstance(transport._session, requests.Session)
        transport.close()


# ---------------------------------------------------------------------------
# AiohttpTransport
# ---------------------------------------------------------------------------

class TestAiohttpTransport:
    @pytest.mark.asyncio
    async def test_post_applies_config(self) -> None:
        session = FakeAiohttpSession(FakeAiohttpResponse(200, '{"ok": 1}'))
        transport = _async_transport(session, timeout=1500, strict_ssl=False)

        raw = await transport.request("POST", "https://x/private/", data="method=getinfo&nonce=1", headers={"AuthSign": "s"})

        assert raw == RawResponse(200, '{"ok": 1}')
        call = session.calls[0]
        assert call["data"] == b"method=getinfo&nonce=1"
        assert call["headers"] == {"AuthSign": "s", "Content-Type": FORM_CONTENT_TYPE}
        assert call["timeout"].total == 1.5
        assert call["ssl"] is False

    @pytest.mark.asyncio
    async def test_get_sends_no_body_or_headers(self) -> None:
        session = FakeAiohttpSession(FakeAiohttpResponse(404, "missing"))
        raw = await _async_transport(session).request("GET", "https://x/ticker/nope")
        assert raw == RawResponse(404, "missing")
        assert session.calls[0]["data"] is None
        assert session.calls[0]["headers"] is None
        assert session.calls[0]["ssl"] is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc",
        [aiohttp.ClientConnectionError("refused"), asyncio.TimeoutError()],
    )
    async def test_network_errors_become_transport_error(self, exc: Exception) -> None:
        session = FakeAiohttpSession(exc)
        with pytest.raises(TransportError) as exc_info:
            await _async_transport(session).request("GET", "https://x/")
        assert exc_info.value.cause is exc

    @pytest.mark.asyncio
    async def test_close_owned_session(self) -> None:
        session = FakeAiohttpSession(FakeAiohttpResponse(200, "{}"))
        transport = _async_transport(session)
        await transport.close()
        assert session.closed

    @pytest.mark.asyncio
    async def test_shared_client_session_not_closed(self) -> None:
        async with aiohttp.ClientSession() as shared:
            transport = AiohttpTransport(ClientConfig(agent=shared))
            assert transport._get_session() is shared
            await transport.close()
            assert not shared.closed

    @pytest.mark.asyncio
    async def test_connector_agent_not_owned(self) -> None:
        connector = aiohttp.TCPConnector()
        transport = AiohttpTransport(ClientConfig(agent=connector))
        session = transport._get_session()
        assert session.connector is connector
        await transport.close()
        assert not connector.closed
        await connector.close()
