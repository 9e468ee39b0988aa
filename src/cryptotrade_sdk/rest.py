"""
rest.py – REST clients (sync and async) for the Crypto-Trade exchange.

Every endpoint method maps onto one of two call shapes:

    invoke_private(method, params)  signed POST to ClientConfig.tapi_url
    invoke_public(method, path)     plain GET to {public_url}/{method}/{path}

Each call issues exactly one HTTP request and either returns the decoded
JSON payload or raises one CryptoTradeError subclass.  There is no retry:
a failed call is reported to the caller as-is.

Usage – sync
------------
    from cryptotrade_sdk import CryptoTradeRestClient

    client = CryptoTradeRestClient(api_key="...", secret="...")
    client.ticker("btc_usd")
    client.trade("btc_usd", "buy", price=100, amount=1)

Usage – async
-------------
    async with AsyncCryptoTradeRestClient(api_key="...", secret="...") as client:
        book = await client.depth("btc_usd")
        info = await client.get_info()
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from .auth import CryptoTradeAuth
from .errors import ExchangeError, HttpStatusError, MalformedResponseError
from .nonce import NonceProvider
from .signing import RequestSigner
from .transport import AiohttpTransport, RequestsTransport
from .types import ClientConfig, PublicRequest, RawResponse, SignedRequest, TradeType

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Response normalisation (shared by sync and async clients)
# ---------------------------------------------------------------------------

def normalize_response(raw: RawResponse, method: str = "", url: str = "") -> Any:
    """
    Turn a raw transport result into a decoded payload or an exception.

    Order matters: the status is checked before the body is parsed, and the
    body must be valid JSON before its ``error`` field is inspected.
    Transport failures never get here; the transport raises them itself.
    """
    if raw.status != 200:
        raise HttpStatusError(raw.status, raw.body, method=method, url=url)

    try:
        result = json.loads(raw.body)
    except (ValueError, RecursionError) as exc:
        raise MalformedResponseError(raw.body, cause=exc) from exc

    if isinstance(result, dict) and result.get("error"):
        raise ExchangeError(result["error"], payload=result)

    return result


def _public_url(config: ClientConfig, method: str, path: str) -> str:
    return f"{config.public_url.rstrip('/')}/{method}/{path}"


def _trade_params(pair: str, type: Union[TradeType, str], price: Any, amount: Any) -> dict[str, Any]:
    return {
        "pair":   pair,
        "type":   TradeType(type).value,
        "price":  price,
        "amount": amount,
    }


# ---------------------------------------------------------------------------
# Shared construction / signing
# ---------------------------------------------------------------------------

class _BaseClient:
    """Configuration, credentials and signing shared by both clients."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        secret:  Optional[str] = None,
        config:  Optional[ClientConfig] = None,
        *,
        signer: Optional[RequestSigner] = None,
    ) -> None:
        self._auth   = CryptoTradeAuth(api_key=api_key, secret=secret)
        self._config = config or ClientConfig()
        self._signer = signer or RequestSigner(secret)

    @classmethod
    def with_nonce(
        cls,
        api_key: Optional[str],
        secret:  Optional[str],
        nonce:   NonceProvider,
        **kwargs: Any,
    ):
        """Build a client with default settings and a custom nonce strategy."""
        return cls(api_key, secret, ClientConfig(nonce=nonce), **kwargs)

    @property
    def auth(self) -> CryptoTradeAuth:
        return self._auth

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _sign(self, method: str, params: Optional[Mapping[str, Any]]) -> SignedRequest:
        # Credentials are checked before a nonce is drawn or anything is sent
        self._auth.require()
        nonce = self._config.nonce.next_nonce()
        return self._signer.sign(method, params, nonce)


# ---------------------------------------------------------------------------
# Synchronous client
# ---------------------------------------------------------------------------

class CryptoTradeRestClient(_BaseClient):
    """
    Synchronous REST client for Crypto-Trade.

    Parameters
    ----------
    api_key   : public API key (optional; public endpoints work without it)
    secret    : API secret, required together with api_key
    config    : ClientConfig (URLs, timeout, TLS, agent, nonce strategy)
    transport : object with ``request(method, url, *, data, headers)``
                returning RawResponse; defaults to RequestsTransport
    signer    : RequestSigner replacement, mainly for tests
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        secret:  Optional[str] = None,
        config:  Optional[ClientConfig] = None,
        *,
        transport: Any = None,
        signer: Optional[RequestSigner] = None,
    ) -> None:
        super().__init__(api_key, secret, config, signer=signer)
        self._transport = transport or RequestsTransport(self._config)

    def __enter__(self) -> "CryptoTradeRestClient":
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()

    def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if close is not None:
            close()

    # ------------------------------------------------------------------
    # Call shapes
    # ------------------------------------------------------------------

    def invoke_private(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Sign and POST a private API call; return the decoded payload."""
        signed = self._sign(method, params)
        url    = self._config.tapi_url
        logger.debug("private %s nonce=%d", method, signed.nonce)
        raw = self._transport.request(
            "POST", url,
            data=signed.body,
            headers=self._auth.headers(signed.signature),
        )
        return normalize_response(raw, method="POST", url=url)

    def invoke_public(self, method: str, path: str = "") -> Any:
        """GET ``{public_url}/{method}/{path}``; return the decoded payload."""
        url = _public_url(self._config, method, path)
        logger.debug("public %s", method)
        raw = self._transport.request("GET", url)
        return normalize_response(raw, method="GET", url=url)

    def _public(self, request: PublicRequest) -> Any:
        return self.invoke_public(request.method, request.path)

    # ------------------------------------------------------------------
    # Account / order endpoints (private)
    # ------------------------------------------------------------------

    def get_info(self) -> Any:
        """Balances and account information."""
        return self.invoke_private("getinfo", {})

    def trades_history(self, **params: Any) -> Any:
        """The account's own trades (filters: pair, start_id, since, count, ...)."""
        return self.invoke_private("tradeshistory", params)

    def orders_history(self, **params: Any) -> Any:
        """The account's orders (filters: pair, start_id, since, count, ...)."""
        return self.invoke_private("ordershistory", params)

    def transactions(self, **params: Any) -> Any:
        """Deposits, withdrawals and other balance movements."""
        return self.invoke_private("transactions", params)

    def order_info(self, order_id: Union[int, str]) -> Any:
        return self.invoke_private("orderinfo", {"orderid": order_id})

    def trade(self, pair: str, type: Union[TradeType, str], price: Any, amount: Any) -> Any:
        """Place a limit order. ``type`` is "buy" or "sell"."""
        return self.invoke_private("trade", _trade_params(pair, type, price, amount))

    def cancel_order(self, order_id: Union[int, str]) -> Any:
        return self.invoke_private("cancelorder", {"orderid": order_id})

    # ------------------------------------------------------------------
    # Market data endpoints (public)
    # ------------------------------------------------------------------

    def ticker(self, pair: str) -> Any:
        return self._public(PublicRequest(method="ticker", pair=pair))

    def get_pair(self, pair: str) -> Any:
        """Trading rules (fees, limits, precision) for one pair."""
        return self._public(PublicRequest(method="getpair", pair=pair))

    def depth(self, pair: str) -> Any:
        """Order-book depth for a pair."""
        return self._public(PublicRequest(method="depth", pair=pair))

    def pair_trades_history(self, pair: str, since: Optional[int] = None) -> Any:
        """Public trades for a pair, optionally only those after ``since`` (Unix s)."""
        return self._public(PublicRequest(method="tradeshistory", pair=pair, timestamp=since))

    def tickers(self) -> Any:
        return self._public(PublicRequest(method="tickers"))

    def get_pairs(self) -> Any:
        return self._public(PublicRequest(method="getpairs"))


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------

class AsyncCryptoTradeRestClient(_BaseClient):
    """
    Async REST client for Crypto-Trade (aiohttp-based).

    The client keeps no per-call state, so any number of calls may be in
    flight at once.  Nonce ordering across concurrent signed calls is up to
    the NonceProvider (see CounterNonce).

    Usage
    -----
        async with AsyncCryptoTradeRestClient(api_key, secret) as client:
            ticker = await client.ticker("btc_usd")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        secret:  Optional[str] = None,
        config:  Optional[ClientConfig] = None,
        *,
        transport: Any = None,
        signer: Optional[RequestSigner] = None,
    ) -> None:
        super().__init__(api_key, secret, config, signer=signer)
        self._transport = transport or AiohttpTransport(self._config)

    async def __aenter__(self) -> "AsyncCryptoTradeRestClient":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()

    async def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if close is not None:
            await close()

    # ------------------------------------------------------------------
    # Call shapes
    # ------------------------------------------------------------------

    async def invoke_private(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        signed = self._sign(method, params)
        url    = self._config.tapi_url
        logger.debug("private %s nonce=%d", method, signed.nonce)
        raw = await self._transport.request(
            "POST", url,
            data=signed.body,
            headers=self._auth.headers(signed.signature),
        )
        return normalize_response(raw, method="POST", url=url)

    async def invoke_public(self, method: str, path: str = "") -> Any:
        url = _public_url(self._config, method, path)
        logger.debug("public %s", method)
        raw = await self._transport.request("GET", url)
        return normalize_response(raw, method="GET", url=url)

    async def _public(self, request: PublicRequest) -> Any:
        return await self.invoke_public(request.method, request.path)

    # ------------------------------------------------------------------
    # Account / order endpoints (private)
    # ------------------------------------------------------------------

    async def get_info(self) -> Any:
        return await self.invoke_private("getinfo", {})

    async def trades_history(self, **params: Any) -> Any:
        return await self.invoke_private("tradeshistory", params)

    async def orders_history(self, **params: Any) -> Any:
        return await self.invoke_private("ordershistory", params)

    async def transactions(self, **params: Any) -> Any:
        return await self.invoke_private("transactions", params)

    async def order_info(self, order_id: Union[int, str]) -> Any:
        return await self.invoke_private("orderinfo", {"orderid": order_id})

    async def trade(self, pair: str, type: Union[TradeType, str], price: Any, amount: Any) -> Any:
        return await self.invoke_private("trade", _trade_params(pair, type, price, amount))

    async def cancel_order(self, order_id: Union[int, str]) -> Any:
        return await self.invoke_private("cancelorder", {"orderid": order_id})

    # ------------------------------------------------------------------
    # Market data (public)
    # ------------------------------------------------------------------

    async def ticker(self, pair: str) -> Any:
        return await self._public(PublicRequest(method="ticker", pair=pair))

    async def get_pair(self, pair: str) -> Any:
        return await self._public(PublicRequest(method="getpair", pair=pair))

    async def depth(self, pair: str) -> Any:
        return await self._public(PublicRequest(method="depth", pair=pair))

    async def pair_trades_history(self, pair: str, since: Optional[int] = None) -> Any:
        return await self._public(PublicRequest(method="tradeshistory", pair=pair, timestamp=since))

    async def tickers(self) -> Any:
        return await self._public(PublicRequest(method="tickers"))

    async def get_pairs(self) -> Any:
        return await self._public(PublicRequest(method="getpairs"))
