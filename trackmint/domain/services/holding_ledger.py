"""
HOLDING LEDGER

Maintains a holding's quantity and average cost as a pure function of its
transaction history.

RULES (LOCKED):
- Transactions are append-only; replay order is insertion order
- quantity / average_cost are only ever written by recompute_averages()
- quantity never goes negative (oversell raises InvalidTransaction)
- Sell depletion uses the running-quantity ratio below, not FIFO lots
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from trackmint.domain.errors import InvalidTransaction
from trackmint.domain.models import Holding, PriceAlert, Transaction, TransactionType
from trackmint.domain.services import alert_evaluator
from trackmint.utils.time import now_local_naive

logger = logging.getLogger(__name__)

# Float slack for whole-position sells (0.3 - 0.1 leaves 0.19999999999999998)
QUANTITY_EPSILON = 1e-9


def replay_transactions(transactions: Iterable[Transaction]) -> Tuple[float, float]:
    """
    Fold a transaction history into (quantity, average_cost).

    NOTE: the sell ratio is q / (running quantity after this sell + q), i.e.
    the share of the quantity held just before this sell. It depends on
    replay order and is not lot-based accounting.
    """
    total_quantity = 0.0
    total_investment = 0.0

    for tx in transactions:
        if tx.type == TransactionType.BUY:
            total_quantity += tx.quantity
            total_investment += (tx.quantity * tx.price) + tx.fees
        elif tx.type == TransactionType.SELL:
            total_quantity -= tx.quantity
            held_before = total_quantity + tx.quantity
            sell_ratio = tx.quantity / held_before if held_before > 0 else 0.0
            total_investment -= total_investment * sell_ratio
            if total_quantity < QUANTITY_EPSILON:
                total_quantity = 0.0
                total_investment = 0.0

    average_cost = total_investment / total_quantity if total_quantity > 0 else 0.0
    return total_quantity, average_cost


class HoldingLedger:
    """
    Holding Ledger
    Wraps one Holding and owns every write to its position fields.
    """

    def __init__(self, holding: Holding):
        self.holding = holding

    def add_transaction(
        self,
        type: TransactionType,
        quantity: float,
        price: float,
        fees: float = 0.0,
        date: Optional[datetime] = None,
        note: Optional[str] = None,
    ) -> Transaction:
        """
        Append a transaction and recompute the position.

        Args:
            type: buy or sell
            quantity: Units (> 0)
            price: Price per unit (> 0)
            fees: Fees paid (>= 0)
            date: Trade date (defaults to now)
            note: Optional free text

        Returns:
            The appended Transaction

        Raises:
            InvalidTransaction: non-positive amounts or a sell larger than
                the current quantity
        """
        type = TransactionType(type)
        if quantity <= 0:
            raise InvalidTransaction("Transaction quantity must be greater than 0")
        if price <= 0:
            raise InvalidTransaction("Transaction price must be greater than 0")
        if fees < 0:
            raise InvalidTransaction("Transaction fees cannot be negative")
        if type == TransactionType.SELL and quantity > self.holding.quantity + QUANTITY_EPSILON:
            raise InvalidTransaction("Cannot sell more shares than owned")

        tx = Transaction(
            type=type,
            quantity=quantity,
            price=price,
            fees=fees,
            date=date or now_local_naive(),
            note=note,
        )
        self.holding.transactions.append(tx)
        self.recompute_averages()

        logger.info(
            f"📒 {self.holding.symbol}: {type.value} {quantity} @ {price} "
            f"-> qty={self.holding.quantity}, avg={self.holding.average_cost:.4f}"
        )
        return tx

    def recompute_averages(self) -> None:
        """Replay the full history and overwrite quantity / average_cost."""
        quantity, average_cost = replay_transactions(self.holding.transactions)
        self.holding.quantity = quantity
        self.holding.average_cost = average_cost

    def update_price(self, new_price: float, now: Optional[datetime] = None) -> List[PriceAlert]:
        """
        Set the current price, stamp last_updated, then evaluate alerts.

        Returns:
            Alerts newly triggered by this price
        """
        if new_price <= 0:
            raise InvalidTransaction("Price must be greater than 0")
        now = now or now_local_naive()
        self.holding.current_price = new_price
        self.holding.last_updated = now
        return alert_evaluator.evaluate(self.holding.alerts, new_price, now)
