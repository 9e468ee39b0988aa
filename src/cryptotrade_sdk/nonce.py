"""
nonce.py – Nonce strategies for signed Crypto-Trade requests.

The exchange rejects a signed request whose nonce is lower than the last one
it accepted for the same API key.  The client asks its provider for a fresh
nonce on every private call and never caches or increments one itself.

Keeping the sequence non-decreasing is the provider's job.  The default
uses the Unix time in seconds, which is fine for one request per second.
For bots that sign several requests per second, use CounterNonce or plug
in your own::

    class SeqNonce:
        def __init__(self) -> None:
            self._n = 0
        def next_nonce(self) -> int:
            self._n += 1
            return self._n

    client = CryptoTradeRestClient.with_nonce(key, secret, SeqNonce())
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional, Protocol, runtime_checkable


@runtime_checkable
class NonceProvider(Protocol):
    """Anything with a zero-argument ``next_nonce() -> int``."""

    def next_nonce(self) -> int: ...


class TimeNonce:
    """Default nonce: current Unix timestamp truncated to whole seconds."""

    def next_nonce(self) -> int:
        return int(time.time())

    def __repr__(self) -> str:
        return "TimeNonce()"


class CallableNonce:
    """Adapt a plain zero-argument callable to the NonceProvider protocol."""

    def __init__(self, func: Callable[[], int]) -> None:
        if not callable(func):
            raise TypeError(f"nonce function must be callable, got {type(func).__name__}")
        self._func = func

    def next_nonce(self) -> int:
        return int(self._func())

    def __repr__(self) -> str:
        return f"CallableNonce({self._func!r})"


class CounterNonce:
    """
    Strictly increasing nonce, safe to share between threads.

    Returns ``max(last + 1, now)``, so it never goes backwards and still
    tracks wall-clock time when calls are sparse.  ``start`` sets a floor
    for the first value (useful after a key was used with a higher nonce).
    """

    def __init__(self, start: Optional[int] = None) -> None:
        self._last = (int(time.time()) if start is None else start) - 1
        self._lock = threading.Lock()

    def next_nonce(self) -> int:
        with self._lock:
            self._last = max(self._last + 1, int(time.time()))
            return self._last

    def __repr__(self) -> str:
        return f"CounterNonce(last={self._last})"
