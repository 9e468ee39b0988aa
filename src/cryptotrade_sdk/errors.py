"""
errors.py – Exception hierarchy for the Crypto-Trade SDK.

Every failure of an API call surfaces as exactly one of these:

    CryptoTradeError
    ├── AuthenticationError     missing API key / secret (no I/O performed)
    ├── TransportError          timeout, connection, DNS or TLS failure
    ├── HttpStatusError         any HTTP status other than 200
    ├── MalformedResponseError  200 response whose body is not valid JSON
    └── ExchangeError           valid JSON carrying a truthy "error" field

Nothing is retried or swallowed inside the SDK; callers branch on the type.
"""

from __future__ import annotations

from typing import Any, Optional


class CryptoTradeError(Exception):
    """Base class for all SDK errors."""


class AuthenticationError(CryptoTradeError):
    """Raised when a private endpoint is called without API credentials."""


class TransportError(CryptoTradeError):
    """Raised when the HTTP request itself could not be completed."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class HttpStatusError(CryptoTradeError):
    """Raised on a non-200 response.  The body is kept raw, never parsed."""

    def __init__(self, status_code: int, body: str = "", method: str = "", url: str = "") -> None:
        self.status_code = status_code
        self.body        = body
        self.method      = method.upper()
        self.url         = url
        location = f" {self.method} {self.url}" if url else ""
        super().__init__(f"Crypto-Trade HTTP error [{status_code}]{location}")


class MalformedResponseError(CryptoTradeError):
    """Raised when a 200 response body cannot be decoded as JSON."""

    def __init__(self, body: str, *, cause: Optional[BaseException] = None) -> None:
        self.body  = body
        self.cause = cause
        super().__init__(f"Malformed JSON response: {body[:200]!r}")


class ExchangeError(CryptoTradeError):
    """Raised when the exchange reports an error in a well-formed response."""

    def __init__(self, message: Any, payload: Any = None) -> None:
        self.message = message
        self.payload = payload
        super().__init__(str(message))
