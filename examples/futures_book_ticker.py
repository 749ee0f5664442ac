#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from laakhay.fstream import FuturesStream, SessionConfig
from laakhay.fstream.models import BookTicker


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream Binance futures best bid/ask via WebSocket")
    p.add_argument("symbols", nargs="*", default=["BTCUSDT"])
    p.add_argument("--testnet", action="store_true")
    p.add_argument("--limit", type=int, default=20, help="Stop after N events")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO)
    config = SessionConfig().use_testnet() if args.testnet else SessionConfig()
    stream = FuturesStream(config)
    for symbol in args.symbols:
        stream.with_book_ticker(symbol)

    print("=" * 60)
    print(f"Streaming book tickers: {', '.join(c.name for c in stream.channels)}")
    print("=" * 60)
    count = 0
    async with stream:
        async for event in stream.consume():
            if not isinstance(event, BookTicker):
                continue
            print(
                f"{event.event_time} {event.symbol} bid={event.bid_price} x {event.bid_quantity} ask={event.ask_price} x {event.ask_quantity}"
            )
            count += 1
            if count >= args.limit:
                break


if __name__ == "__main__":
    asyncio.run(main())
