"""
types.py – Pydantic v2 models for the Crypto-Trade SDK.

Configuration and request objects are validated on construction and frozen
afterwards, so a client's settings cannot drift between calls.  Invalid
values raise pydantic.ValidationError with field-level detail before any
request is built.

API responses are returned as the decoded JSON value; the exchange's
payloads vary per endpoint and the SDK does not remodel them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .nonce import NonceProvider, TimeNonce

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_TAPI_URL   = "https://crypto-trade.com/api/1/private/"
DEFAULT_PUBLIC_URL = "https://crypto-trade.com/api/1/"
DEFAULT_TIMEOUT_MS = 5000


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

@unique
class TradeType(str, Enum):
    BUY  = "buy"
    SELL = "sell"


# ---------------------------------------------------------------------------
# Shared validator helpers
# ---------------------------------------------------------------------------

def _validate_http_url(v: str, field: str = "url") -> str:
    """Reject empty strings and non-HTTP(S) URLs."""
    if not v or not v.strip():
        raise ValueError(f"{field} must be a non-empty URL")
    if not v.startswith(("http://", "https://")):
        raise ValueError(f"{field} '{v}' must start with http:// or https://")
    return v


# ---------------------------------------------------------------------------
# Client configuration
# ---------------------------------------------------------------------------

class ClientConfig(BaseModel):
    """
    Constructor-time settings shared by every call of a client.

    tapi_url   : private (signed) endpoint URL
    public_url : base URL of the public market-data API
    timeout    : per-request timeout in milliseconds
    strict_ssl : verify TLS certificates
    agent      : connection-pool handle handed to the transport untouched
                 (requests.Session, aiohttp.BaseConnector or ClientSession)
    nonce      : NonceProvider invoked once per signed request
    """
    tapi_url:   str   = DEFAULT_TAPI_URL
    public_url: str   = DEFAULT_PUBLIC_URL
    timeout:    float = DEFAULT_TIMEOUT_MS
    strict_ssl: bool  = True
    agent:      Any   = None
    nonce:      Any   = Field(default_factory=TimeNonce)

    model_config = {"frozen": True, "extra": "forbid", "arbitrary_types_allowed": True}

    @field_validator("tapi_url", "public_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _validate_http_url(v)

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout must be a positive number of milliseconds, got {v}")
        return v

    @field_validator("nonce")
    @classmethod
    def validate_nonce(cls, v: Any) -> Any:
        if not isinstance(v, NonceProvider):
            raise ValueError(
                f"nonce must provide next_nonce() -> int, got {type(v).__name__}; "
                "wrap plain functions in CallableNonce"
            )
        return v

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000.0


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class SignedRequest(BaseModel):
    """
    A private call ready to be transmitted.

    params    : ordered mapping actually encoded, ending in method and nonce
    body      : the application/x-www-form-urlencoded string sent on the wire
    signature : lowercase hex HMAC-SHA512 of ``body``
    """
    method:    str
    params:    dict[str, Any]
    nonce:     int
    body:      str
    signature: str

    model_config = {"frozen": True}


class PublicRequest(BaseModel):
    """A market-data call: ``{public_url}/{method}/{pair}[/{timestamp}]``."""
    method:    str
    pair:      Optional[str] = None
    timestamp: Optional[int] = None

    model_config = {"frozen": True}

    @field_validator("method")
    @classmethod
    def validate_method(cls, v: str) -> str:
        if not v or "/" in v:
            raise ValueError(f"method must be a non-empty path segment, got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_timestamp_needs_pair(self) -> "PublicRequest":
        if self.timestamp is not None and not self.pair:
            raise ValueError("timestamp requires a pair")
        return self

    @property
    def path(self) -> str:
        if not self.pair:
            return ""
        if self.timestamp is None:
            return self.pair
        return f"{self.pair}/{self.timestamp}"


# ---------------------------------------------------------------------------
# Transport result  (plain dataclass – internal, never validated)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RawResponse:
    status: int
    body:   str
