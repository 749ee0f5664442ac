#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from laakhay.fstream import FuturesStream
from laakhay.fstream.core import MarkPriceUpdateSpeed
from laakhay.fstream.models import MarkPriceUpdates


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream mark prices for all Binance futures symbols")
    p.add_argument("--fast", action="store_true", help="1s updates instead of 3s")
    p.add_argument("--batches", type=int, default=3)
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    speed = MarkPriceUpdateSpeed.SECONDS_1 if args.fast else MarkPriceUpdateSpeed.SECONDS_3
    stream = FuturesStream().with_mark_prices(speed)
    print("=" * 60)
    print(f"Streaming all-market mark prices: {stream.channels[0].name}")
    print("=" * 60)
    seen = 0
    async with stream:
        async for event in stream.consume():
            if not isinstance(event, MarkPriceUpdates):
                continue
            top = sorted(event.data, key=lambda u: abs(u.funding_rate), reverse=True)[:5]
            print(f"{len(event.data)} symbols; highest |funding|:")
            for update in top:
                print(f"  {update.symbol:<14} mark={update.mark_price} funding={update.funding_rate}")
            seen += 1
            if seen >= args.batches:
                break


if __name__ == "__main__":
    asyncio.run(main())
