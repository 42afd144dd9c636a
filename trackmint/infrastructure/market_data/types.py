"""
Market data types and provider protocol.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol


@dataclass(frozen=True)
class Quote:
    symbol: str
    price: float
    change: float
    change_percent: float
    previous_close: Optional[float] = None


@dataclass(frozen=True)
class SymbolInfo:
    """Listed symbol; carries no size classification"""
    symbol: str
    description: str
    display_symbol: Optional[str] = None


class MarketDataProvider(Protocol):
    async def get_quote(self, symbol: str) -> Optional[Quote]:
        ...

    async def list_symbols(self, limit: int) -> List[SymbolInfo]:
        ...
