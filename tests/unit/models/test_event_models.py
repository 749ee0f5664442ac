"""Unit tests for event models."""

import pytest
from pydantic import ValidationError

from laakhay.fstream.core import EventType, MarginType
from laakhay.fstream.models import (
    AccountConfigUpdate,
    BookTicker,
    MarginCall,
    SubscriptionAck,
    is_data_event,
)

BOOK_TICKER = {
    "e": "bookTicker",
    "u": 1,
    "E": 2,
    "T": 3,
    "s": "BTCUSDT",
    "b": "100.5",
    "B": "1.25",
    "a": "100.6",
    "A": "2",
}


class TestBookTicker:
    """Test BookTicker model."""

    def test_aliases_and_coercion(self):
        """Test wire keys map to descriptive fields."""
        event = BookTicker.model_validate(BOOK_TICKER)
        assert event.event_type == EventType.BOOK_TICKER
        assert event.bid_quantity == 1.25
        assert event.transaction_time == 3

    def test_frozen(self):
        """Test events are immutable."""
        event = BookTicker.model_validate(BOOK_TICKER)
        with pytest.raises(ValidationError):
            event.bid_price = 1.0

    def test_non_numeric_string_rejected(self):
        """Test decimal strings must be numeric."""
        with pytest.raises(ValidationError):
            BookTicker.model_validate({**BOOK_TICKER, "b": "abc"})


class TestAccountModels:
    """Test account event models."""

    def test_margin_call(self):
        """Test nested positions decode."""
        event = MarginCall.model_validate(
            {
                "e": "MARGIN_CALL",
                "E": 1587727187525,
                "cw": "3.16812045",
                "p": [
                    {
                        "s": "ETHUSDT",
                        "ps": "LONG",
                        "pa": "1.327",
                        "mt": "crossed",
                        "iw": "0",
                        "mp": "187.17127",
                        "up": "-1.166074",
                        "mm": "1.614445",
                    }
                ],
            }
        )
        assert event.cross_wallet_balance == pytest.approx(3.16812045)
        assert event.positions[0].margin_type == MarginType.CROSSED
        assert event.positions[0].unrealized_pnl == pytest.approx(-1.166074)

    def test_multi_assets_mode_update(self):
        """Test the ``ai`` variant of ACCOUNT_CONFIG_UPDATE."""
        event = AccountConfigUpdate.model_validate(
            {"e": "ACCOUNT_CONFIG_UPDATE", "E": 1, "T": 2, "ai": {"j": True}}
        )
        assert event.account_config is None
        assert event.account_info.multi_assets_mode is True


def test_subscription_ack_is_not_data():
    """Test the sentinel is excluded from data events."""
    assert not is_data_event(SubscriptionAck())
    assert is_data_event(BookTicker.model_validate(BOOK_TICKER))


def test_margin_type_wire_values():
    """Test isolated margin decodes from the lower-case wire value."""
    assert MarginType("isolated") == MarginType.ISOLATED
