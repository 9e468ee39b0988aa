"""
examples/quickstart.py – End-to-end demo of the Crypto-Trade SDK.

Walks through:
  1. Public market data with the sync client (ticker, depth, pairs)
  2. Account info and order history over the signed private API
  3. The same public calls concurrently with the async client

HOW TO RUN
----------
    export CRYPTOTRADE_API_KEY="your_api_key"      # optional, enables part 2
    export CRYPTOTRADE_API_SECRET="your_secret"
    python examples/quickstart.py

Set PLACE_ORDER=1 to also place (and immediately cancel) a far-from-market
buy order.
"""

from __future__ import annotations

import asyncio
import logging
import os

from cryptotrade_sdk import (
    AsyncCryptoTradeRestClient,
    ClientConfig,
    CounterNonce,
    CryptoTradeAuth,
    CryptoTradeError,
    CryptoTradeRestClient,
    ExchangeError,
    TradeType,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s – %(message)s",
)
logger = logging.getLogger("quickstart")

# ---------------------------------------------------------------------------
# Config – read from environment variables
# ---------------------------------------------------------------------------

AUTH        = CryptoTradeAuth.from_env()
PAIR        = os.environ.get("CRYPTOTRADE_PAIR", "btc_usd")
PLACE_ORDER = os.environ.get("PLACE_ORDER", "") == "1"

# Several signed calls per second need a strictly increasing nonce
CONFIG = ClientConfig(nonce=CounterNonce(), timeout=10_000)


# ---------------------------------------------------------------------------
# Part 1 – public market data
# ---------------------------------------------------------------------------

def public_demo(client: CryptoTradeRestClient) -> None:
    logger.info("=== Public demo ===")

    ticker = client.ticker(PAIR)
    logger.info("Ticker %s: %s", PAIR, ticker.get("data", ticker))

    book = client.depth(PAIR)
    data = book.get("data", book)
    logger.info("Depth %s: %d bids / %d asks", PAIR, len(data.get("bids", [])), len(data.get("asks", [])))

    pairs = client.get_pairs()
    logger.info("Pairs: %s", pairs.get("data", pairs))


# ---------------------------------------------------------------------------
# Part 2 – private account endpoints
# ---------------------------------------------------------------------------

def private_demo(client: CryptoTradeRestClient) -> None:
    logger.info("=== Private demo ===")

    info = client.get_info()
    logger.info("Account info: %s", info.get("data", info))

    orders = client.orders_history(pair=PAIR, count=5)
    logger.info("Last orders: %s", orders.get("data", orders))

    if not PLACE_ORDER:
        return

    try:
        placed = client.trade(PAIR, TradeType.BUY, price=1, amount=0.01)
    except ExchangeError as exc:
        logger.warning("Order rejected by exchange: %s", exc.message)
        return

    order_id = placed.get("data", {}).get("order_id")
    logger.info("Placed order %s", order_id)
    if order_id is not None:
        logger.info("Cancel: %s", client.cancel_order(order_id))


# ---------------------------------------------------------------------------
# Part 3 – async client, concurrent public calls
# ---------------------------------------------------------------------------

async def async_demo() -> None:
    logger.info("=== Async demo ===")
    async with AsyncCryptoTradeRestClient(config=CONFIG) as client:
        ticker, book = await asyncio.gather(client.ticker(PAIR), client.depth(PAIR))
    logger.info("Async ticker: %s", ticker.get("data", ticker))
    logger.info("Async depth keys: %s", list(book.get("data", book)))


def main() -> None:
    with CryptoTradeRestClient(AUTH.api_key, AUTH.secret, CONFIG) as client:
        try:
            public_demo(client)
            if AUTH.is_configured:
                private_demo(client)
            else:
                logger.info("No credentials set – skipping private demo")
        except CryptoTradeError as exc:
            logger.error("%s: %s", type(exc).__name__, exc)
            raise

    asyncio.run(async_demo())


if __name__ == "__main__":
    main()
