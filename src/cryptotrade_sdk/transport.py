"""
transport.py – HTTP transports (sync and async) for the Crypto-Trade SDK.

A transport performs exactly one HTTP request and hands back the raw
status code and body text.  It never inspects the body; deciding what a
response means is the REST client's job.

Both transports apply a ClientConfig uniformly to every request:

    timeout     ClientConfig.timeout (ms) → seconds
    strict_ssl  TLS certificate verification
    agent       shared connection pool, used but never closed or mutated

Any failure to complete the request (timeout, refused connection, DNS,
TLS) is raised as TransportError with the original exception chained.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import requests

from .errors import TransportError
from .types import ClientConfig, RawResponse

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


# ---------------------------------------------------------------------------
# Synchronous transport
# ---------------------------------------------------------------------------

class RequestsTransport:
    """
    requests-based transport.

    ``config.agent`` may be a requests.Session to share its connection pool;
    otherwise the transport creates and owns a session of its own.
    """

    def __init__(self, config: ClientConfig) -> None:
        self._config = config
        self._owns_session = config.agent is None
        self._session: requests.Session = config.agent if config.agent is not None else requests.Session()

    def request(
        self,
        method: str,
        url: str,
        *,
        data: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> RawResponse:
        """
        Send one request.

        Parameters
        ----------
        method  : "GET" or "POST"
        url     : absolute URL
        data    : pre-encoded form body, sent byte-for-byte
        headers : extra headers (auth headers for private calls)
        """
        send_headers = dict(headers or {})
        if data is not None:
            send_headers.setdefault("Content-Type", FORM_CONTENT_TYPE)

        logger.debug("%s %s", method.upper(), url)
        try:
            resp = self._session.request(
                method,
                url,
                data=data.encode("utf-8") if data is not None else None,
                headers=send_headers or None,
                timeout=self._config.timeout_seconds,
                verify=self._config.strict_ssl,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method.upper()} {url} failed: {exc}", cause=exc) from exc

        return RawResponse(status=resp.status_code, body=resp.text)

    def close(self) -> None:
        if self._owns_session:
            self._session.close()


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class AiohttpTransport:
    """
    aiohttp-based transport.

    ``config.agent`` may be an aiohttp.BaseConnector (shared, not owned) or
    an aiohttp.ClientSession (used as-is).  Without one, a session is
    created on first use and closed by ``close()``.
    """

    def __init__(self, config: ClientConfig) -> None:
        self._config  = config
        self._session: Any = None   # aiohttp.ClientSession, created on first use
        self._owns_session = True

    async def __aenter__(self) -> "AiohttpTransport":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    def _get_session(self) -> Any:
        import aiohttp

        agent = self._config.agent
        if isinstance(agent, aiohttp.ClientSession):
            self._owns_session = False
            return agent

        if self._session is None or self._session.closed:
            if agent is not None:
                self._session = aiohttp.ClientSession(connector=agent, connector_owner=False)
            else:
                self._session = aiohttp.ClientSession()
        return self._session

    async def request(
        self,
        method: str,
        url: str,
        *,
        data: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> RawResponse:
        import aiohttp

        session = self._get_session()
        send_headers = dict(headers or {})
        if data is not None:
            send_headers.setdefault("Content-Type", FORM_CONTENT_TYPE)

        logger.debug("%s %s", method.upper(), url)
        try:
            async with session.request(
                method,
                url,
                data=data.encode("utf-8") if data is not None else None,
                headers=send_headers or None,
                timeout=aiohttp.ClientTimeout(total=self._config.timeout_seconds),
                ssl=self._config.strict_ssl,
            ) as resp:
                body = await resp.text(errors="replace")
                return RawResponse(status=resp.status, body=body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(f"{method.upper()} {url} failed: {exc!r}", cause=exc) from exc
