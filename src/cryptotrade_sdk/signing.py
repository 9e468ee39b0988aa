"""
signing.py – HMAC-SHA512 request signing for Crypto-Trade private calls.

How it works
------------
1. The caller's parameters are copied in insertion order.  ``method`` and
   ``nonce`` are appended last, replacing any caller-supplied keys of the
   same name.
2. The mapping is form-encoded (application/x-www-form-urlencoded).  Keys
   are NOT sorted: the server verifies the signature over the exact bytes
   it receives, so the encoded string is both the signed message and the
   request body.
3. The body is signed with HMAC-SHA512 keyed by the API secret and sent
   hex-encoded (lowercase) in the ``AuthSign`` header.

Signing is a pure function of (method, params, nonce, secret)::

    signer = RequestSigner(secret="...")
    req    = signer.sign("trade", {"pair": "btc_usd", "type": "buy"}, nonce=1)
    req.body       # 'pair=btc_usd&type=buy&method=trade&nonce=1'
    req.signature  # 128 hex chars
"""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import quote

from .errors import AuthenticationError
from .types import SignedRequest

# Characters encodeURIComponent leaves alone besides [A-Za-z0-9_.-~]
_FORM_SAFE = "!*'()"

_RESERVED_KEYS = ("method", "nonce")


# ---------------------------------------------------------------------------
# Form encoding
# ---------------------------------------------------------------------------

def _form_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if hasattr(value, "value") and isinstance(value.value, str):   # str enums
        return value.value
    return str(value)


def build_params(method: str, params: Optional[Mapping[str, Any]], nonce: int) -> dict[str, Any]:
    """Caller params in insertion order, then ``method``, then ``nonce``."""
    merged = {k: v for k, v in (params or {}).items() if k not in _RESERVED_KEYS}
    merged["method"] = method
    merged["nonce"]  = nonce
    return merged


def encode_form(params: Mapping[str, Any]) -> str:
    """
    Form-encode ``params`` preserving key order.

    Lists and tuples repeat the key (``k=a&k=b``); other values are rendered
    with ``_form_value``.
    """
    parts: list[str] = []
    for key, value in params.items():
        values = value if isinstance(value, (list, tuple)) else (value,)
        for item in values:
            parts.append(f"{quote(str(key), safe=_FORM_SAFE)}={quote(_form_value(item), safe=_FORM_SAFE)}")
    return "&".join(parts)


def sign_body(body: str, secret: str) -> str:
    """Lowercase hex HMAC-SHA512 of ``body`` keyed by ``secret``."""
    if not secret:
        raise AuthenticationError("Must provide API key and secret to use the trade API.")
    return hmac.new(secret.encode("utf-8"), body.encode("utf-8"), hashlib.sha512).hexdigest()


# ---------------------------------------------------------------------------
# Signing service
# ---------------------------------------------------------------------------

class RequestSigner:
    """
    Signs private requests with a shared secret.

    Injected into the REST clients so tests can substitute a fake signer.
    """

    def __init__(self, secret: Optional[str]) -> None:
        self._secret = secret or ""

    def __repr__(self) -> str:
        return f"RequestSigner(secret={'***' if self._secret else None})"

    def sign(self, method: str, params: Optional[Mapping[str, Any]], nonce: int) -> SignedRequest:
        """Build the canonical body for ``method`` and sign it."""
        if not self._secret:
            raise AuthenticationError("Must provide API key and secret to use the trade API.")

        merged    = build_params(method, params, nonce)
        body      = encode_form(merged)
        signature = sign_body(body, self._secret)
        return SignedRequest(method=method, params=merged, nonce=nonce, body=body, signature=signature)

    def verify(self, body: str, signature: str) -> bool:
        """Check ``signature`` against ``body`` in constant time."""
        if not self._secret:
            raise AuthenticationError("Must provide API key and secret to use the trade API.")
        return hmac.compare_digest(sign_body(body, self._secret), signature.lower())
