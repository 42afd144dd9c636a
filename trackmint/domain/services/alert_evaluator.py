"""
ALERT EVALUATOR

Checks a holding's alerts against a fresh price.

- Only active, untriggered alerts are considered
- price_above fires at price >= value, price_below at price <= value
- An alert triggers at most once; it is never reset here
- volume_spike / news have no feed wired in and are never auto-triggered
"""

import logging
from datetime import datetime
from typing import List, Optional

from trackmint.domain.models import AlertType, PriceAlert
from trackmint.utils.time import now_local_naive

logger = logging.getLogger(__name__)


def _crossed(alert: PriceAlert, current_price: float) -> bool:
    if alert.type == AlertType.PRICE_ABOVE:
        return current_price >= alert.value
    if alert.type == AlertType.PRICE_BELOW:
        return current_price <= alert.value
    return False


def evaluate(
    alerts: List[PriceAlert],
    current_price: float,
    now: Optional[datetime] = None,
) -> List[PriceAlert]:
    """
    Mutate alerts in place and return the ones newly triggered by this call.
    """
    now = now or now_local_naive()
    fired: List[PriceAlert] = []
    for alert in alerts:
        if not alert.active or alert.triggered:
            continue
        if _crossed(alert, current_price):
            alert.triggered = True
            alert.triggered_date = now
            fired.append(alert)

    for alert in fired:
        logger.info(f"🔔 Alert triggered: {alert.type.value} {alert.value} at price {current_price}")
    return fired
