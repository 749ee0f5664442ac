#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from laakhay.fstream import ApiAuth, FuturesStream, SessionConfig
from laakhay.fstream.models import is_data_event


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Stream Binance futures account updates (needs BINANCE_API_KEY)"
    )
    p.add_argument("--testnet", action="store_true")
    p.add_argument("--mark-price", metavar="SYMBOL", help="Also subscribe to a mark price stream")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO)
    auth = ApiAuth.from_env()
    if auth is None:
        print("Set BINANCE_API_KEY to stream user data", file=sys.stderr)
        sys.exit(1)

    config = SessionConfig().with_api_auth(auth)
    if args.testnet:
        config = config.use_testnet()
    stream = FuturesStream(config)
    if args.mark_price:
        stream.with_mark_price(args.mark_price)

    async with stream:
        async for event in stream.consume():
            if is_data_event(event):
                print(event.model_dump_json())


if __name__ == "__main__":
    asyncio.run(main())
