"""Shared fixtures for integration tests.

Network tests run only with RUN_LAAKHAY_NETWORK_TESTS=1; each module
carries its own skip marker.
"""

import os

import pytest


@pytest.fixture
def live_symbol() -> str:
    """Symbol used for single-symbol channels (LAAKHAY_LIVE_SYMBOL)."""
    return os.environ.get("LAAKHAY_LIVE_SYMBOL", "BTCUSDT")


@pytest.fixture
def live_timeout() -> float:
    """Seconds to wait for the first matching event."""
    return float(os.environ.get("LAAKHAY_LIVE_TIMEOUT", "30"))
