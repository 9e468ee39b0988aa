"""
auth.py – API credentials for Crypto-Trade private endpoints.

Private calls are authenticated per request, with no login step:

1. The form body is signed with HMAC-SHA512 keyed by the API secret.
2. The request carries two headers:
     AuthKey  : the public API key
     AuthSign : the hex signature

A client built without credentials can still use every public endpoint;
private endpoints fail with AuthenticationError before any network I/O.

Usage
-----
    from cryptotrade_sdk import CryptoTradeAuth

    auth = CryptoTradeAuth(api_key="...", secret="...")
    auth = CryptoTradeAuth.from_env()      # CRYPTOTRADE_API_KEY / _SECRET
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .errors import AuthenticationError

# Header names expected by the private API
_KEY_HEADER  = "AuthKey"
_SIGN_HEADER = "AuthSign"

_ENV_API_KEY = "CRYPTOTRADE_API_KEY"
_ENV_SECRET  = "CRYPTOTRADE_API_SECRET"


@dataclass(frozen=True)
class CryptoTradeAuth:
    """
    Holds the API key / secret pair.

    Parameters
    ----------
    api_key : public key shown in the exchange's API settings
    secret  : shared secret used to sign request bodies

    Both must be given, or neither.
    """

    api_key: Optional[str] = None
    secret:  Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if bool(self.api_key) != bool(self.secret):
            raise ValueError("api_key and secret must be provided together")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CryptoTradeAuth":
        """Read credentials from CRYPTOTRADE_API_KEY / CRYPTOTRADE_API_SECRET."""
        env = os.environ if environ is None else environ
        return cls(api_key=env.get(_ENV_API_KEY) or None, secret=env.get(_ENV_SECRET) or None)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.secret)

    def require(self) -> None:
        """Raise AuthenticationError unless both credentials are present."""
        if not self.is_configured:
            raise AuthenticationError("Must provide API key and secret to use the trade API.")

    def headers(self, signature: str) -> dict[str, str]:
        """Headers for a signed private request."""
        self.require()
        assert self.api_key is not None
        return {_KEY_HEADER: self.api_key, _SIGN_HEADER: signature}
