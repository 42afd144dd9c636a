"""
Unit Tests for HoldingLedger

✅ Quantity / average cost follow the transaction history
✅ Replay from scratch always matches the stored position
✅ Oversell and non-positive amounts are rejected
"""

import pytest

from trackmint.domain.errors import InvalidTransaction
from trackmint.domain.models import AlertType, Holding, PriceAlert, TransactionType
from trackmint.domain.services.holding_ledger import HoldingLedger, replay_transactions


def _holding(**kwargs) -> Holding:
    return Holding(user_id=1, symbol="aapl", company_name="Apple Inc", **kwargs)


def test_buy_buy_sell_scenario():
    holding = _holding()
    ledger = HoldingLedger(holding)

    ledger.add_transaction(TransactionType.BUY, 10, 100)
    assert holding.quantity == pytest.approx(10)
    assert holding.average_cost == pytest.approx(100)

    ledger.add_transaction(TransactionType.BUY, 10, 200)
    assert holding.quantity == pytest.approx(20)
    assert holding.average_cost == pytest.approx(150)

    # 5 of 20 held -> a quarter of 3000 invested is removed; 2250 / 15
    ledger.add_transaction(TransactionType.SELL, 5, 250)
    assert holding.quantity == pytest.approx(15)
    assert holding.average_cost == pytest.approx(150.0)


def test_symbol_is_normalised():
    assert _holding().symbol == "AAPL"


def test_fees_are_part_of_cost_basis():
    holding = _holding()
    HoldingLedger(holding).add_transaction("buy", 10, 100, fees=20)
    assert holding.average_cost == pytest.approx(102)


def test_replay_matches_stored_position_after_every_mutation():
    holding = _holding()
    ledger = HoldingLedger(holding)
    steps = [
        (TransactionType.BUY, 8, 120.0),
        (TransactionType.BUY, 4, 90.0),
        (TransactionType.SELL, 3, 130.0),
        (TransactionType.BUY, 2, 150.0),
        (TransactionType.SELL, 11, 110.0),
    ]
    for tx_type, quantity, price in steps:
        ledger.add_transaction(tx_type, quantity, price)
        quantity_replayed, average_replayed = replay_transactions(holding.transactions)
        assert holding.quantity == pytest.approx(quantity_replayed)
        assert holding.average_cost == pytest.approx(average_replayed)
        assert holding.quantity >= 0


def test_replay_is_deterministic():
    holding = _holding()
    ledger = HoldingLedger(holding)
    ledger.add_transaction("buy", 5, 10)
    ledger.add_transaction("buy", 5, 30)
    ledger.add_transaction("sell", 2, 25)

    assert replay_transactions(holding.transactions) == replay_transactions(list(holding.transactions))


def test_selling_everything_resets_average():
    holding = _holding()
    ledger = HoldingLedger(holding)
    ledger.add_transaction("buy", 10, 100)
    ledger.add_transaction("sell", 10, 120)
    assert holding.quantity == 0
    assert holding.average_cost == 0


def test_oversell_is_rejected_and_history_untouched():
    holding = _holding()
    ledger = HoldingLedger(holding)
    ledger.add_transaction("buy", 10, 100)

    with pytest.raises(InvalidTransaction, match="Cannot sell more shares than owned"):
        ledger.add_transaction("sell", 11, 100)

    assert len(holding.transactions) == 1
    assert holding.quantity == pytest.approx(10)


def test_whole_fractional_position_can_be_sold():
    holding = _holding()
    ledger = HoldingLedger(holding)
    ledger.add_transaction("buy", 0.3, 100)
    ledger.add_transaction("sell", 0.1, 100)

    ledger.add_transaction("sell", 0.2, 100)
    assert holding.quantity == 0.0
    assert holding.average_cost == 0.0
    assert len(holding.transactions) == 3


@pytest.mark.parametrize(
    "quantity,price,fees",
    [(0, 100, 0), (-1, 100, 0), (1, 0, 0), (1, -5, 0), (1, 100, -1)],
)
def test_invalid_amounts_are_rejected(quantity, price, fees):
    with pytest.raises(InvalidTransaction):
        HoldingLedger(_holding()).add_transaction("buy", quantity, price, fees=fees)


def test_update_price_stamps_and_fires_alerts():
    holding = _holding(alerts=[PriceAlert(type=AlertType.PRICE_ABOVE, value=200)])
    ledger = HoldingLedger(holding)

    fired = ledger.update_price(210)

    assert holding.current_price == 210
    assert holding.last_updated is not None
    assert fired == [holding.alerts[0]]


def test_update_price_rejects_non_positive():
    with pytest.raises(InvalidTransaction):
        HoldingLedger(_holding()).update_price(0)
