"""
Crypto-Trade SDK – Python client for the Crypto-Trade exchange HTTP API.

Provides:
  - HMAC-SHA512 request signing        (signing.py   → RequestSigner)
  - Pluggable nonce strategies         (nonce.py     → TimeNonce, CounterNonce)
  - API key / secret handling          (auth.py      → CryptoTradeAuth)
  - Validated Pydantic v2 models       (types.py     → ClientConfig)
  - requests / aiohttp transports      (transport.py)
  - Synchronous REST client            (rest.py      → CryptoTradeRestClient)
  - Async REST client                  (rest.py      → AsyncCryptoTradeRestClient)
  - Error taxonomy                     (errors.py)

Quickstart
----------
    import asyncio
    from cryptotrade_sdk import AsyncCryptoTradeRestClient

    async def main() -> None:
        async with AsyncCryptoTradeRestClient(api_key="...", secret="...") as client:
            print(await client.ticker("btc_usd"))
            print(await client.get_info())

    asyncio.run(main())
"""

from .types import (
    # Defaults
    DEFAULT_PUBLIC_URL,
    DEFAULT_TAPI_URL,
    DEFAULT_TIMEOUT_MS,
    # Enums
    TradeType,
    # Configuration
    ClientConfig,
    # Requests / responses
    SignedRequest,
    PublicRequest,
    RawResponse,
)
from .errors import (
    CryptoTradeError,
    AuthenticationError,
    TransportError,
    HttpStatusError,
    MalformedResponseError,
    ExchangeError,
)
from .nonce import NonceProvider, TimeNonce, CallableNonce, CounterNonce
from .signing import RequestSigner, build_params, encode_form, sign_body
from .auth import CryptoTradeAuth
from .transport import RequestsTransport, AiohttpTransport
from .rest import CryptoTradeRestClient, AsyncCryptoTradeRestClient, normalize_response

__all__ = [
    # Defaults
    "DEFAULT_PUBLIC_URL",
    "DEFAULT_TAPI_URL",
    "DEFAULT_TIMEOUT_MS",
    # Enums
    "TradeType",
    # Configuration
    "ClientConfig",
    # Requests / responses
    "SignedRequest",
    "PublicRequest",
    "RawResponse",
    # Errors
    "CryptoTradeError",
    "AuthenticationError",
    "TransportError",
    "HttpStatusError",
    "MalformedResponseError",
    "ExchangeError",
    # Nonce
    "NonceProvider",
    "TimeNonce",
    "CallableNonce",
    "CounterNonce",
    # Signing
    "RequestSigner",
    "build_params",
    "encode_form",
    "sign_body",
    # Auth
    "CryptoTradeAuth",
    # Transport
    "RequestsTransport",
    "AiohttpTransport",
    # REST
    "CryptoTradeRestClient",
    "AsyncCryptoTradeRestClient",
    "normalize_response",
]

__version__ = "0.1.0"
