"""
tests/test_integration.py – Smoke tests against the live Crypto-Trade API.

These tests make real network calls.  They are skipped unless pytest is
run with --integration; the private test is also skipped when no
credentials are present.

HOW TO RUN
----------
    export CRYPTOTRADE_API_KEY="your_api_key"
    export CRYPTOTRADE_API_SECRET="your_secret"

    pytest tests/test_integration.py -v --integration

WHAT THESE TESTS VERIFY
-----------------------
  1. Public REST  – ticker and pair list decode to JSON objects
  2. Async REST   – the aiohttp transport reaches the same endpoints
  3. Private REST – getinfo is accepted with a valid signature
"""

from __future__ import annotations

import pytest

from cryptotrade_sdk import AsyncCryptoTradeRestClient, CryptoTradeAuth, CryptoTradeRestClient

PAIR = "btc_usd"

AUTH = CryptoTradeAuth.from_env()


@pytest.mark.integration
def test_public_ticker() -> None:
    with CryptoTradeRestClient() as client:
        ticker = client.ticker(PAIR)
    assert isinstance(ticker, dict)


@pytest.mark.integration
def test_public_pairs() -> None:
    with CryptoTradeRestClient() as client:
        pairs = client.get_pairs()
    assert pairs, "Pair list is empty"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_async_depth() -> None:
    async with AsyncCryptoTradeRestClient() as client:
        book = await client.depth(PAIR)
    assert isinstance(book, dict)


@pytest.mark.integration
@pytest.mark.skipif(not AUTH.is_configured, reason="Crypto-Trade credentials not set in environment")
def test_private_get_info() -> None:
    with CryptoTradeRestClient(AUTH.api_key, AUTH.secret) as client:
        info = client.get_info()
    assert isinstance(info, dict)
