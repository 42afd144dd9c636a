from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from trackmint.domain.models import AlertType, MarketCap, TransactionType


class HoldingCreateRequest(BaseModel):
    """
    Add a symbol to the portfolio.

    quantity > 0 seeds an initial buy at average_buy_price;
    quantity == 0 creates a watchlist entry.
    """
    symbol: str = Field(..., min_length=1, max_length=10)
    company_name: str = Field(..., min_length=1, max_length=100)
    quantity: float = Field(0.0, ge=0)
    average_buy_price: Optional[float] = Field(None, gt=0)
    current_price: Optional[float] = Field(None, ge=0)
    sector: Optional[str] = Field(None, max_length=50)
    industry: Optional[str] = Field(None, max_length=50)
    market_cap: Optional[MarketCap] = None
    dividend_yield: Optional[float] = Field(None, ge=0, le=100)
    watchlist: bool = False
    tags: List[str] = Field(default_factory=list)
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("symbol")
    @classmethod
    def normalize_symbol(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("Symbol cannot be empty")
        return value

    @model_validator(mode="after")
    def check_initial_price(self):
        if self.quantity > 0 and self.average_buy_price is None:
            raise ValueError("average_buy_price is required when quantity > 0")
        return self


class HoldingUpdateRequest(BaseModel):
    """Metadata only; position fields change through transactions"""
    model_config = ConfigDict(extra="forbid")

    company_name: Optional[str] = Field(None, min_length=1, max_length=100)
    sector: Optional[str] = Field(None, max_length=50)
    industry: Optional[str] = Field(None, max_length=50)
    market_cap: Optional[MarketCap] = None
    dividend_yield: Optional[float] = Field(None, ge=0, le=100)
    tags: Optional[List[str]] = None
    notes: Optional[str] = Field(None, max_length=1000)


class TransactionRequest(BaseModel):
    type: TransactionType
    quantity: float = Field(..., gt=0)
    price: float = Field(..., gt=0)
    fees: float = Field(0.0, ge=0)
    date: Optional[datetime] = None
    note: Optional[str] = Field(None, max_length=200)


class PriceUpdateRequest(BaseModel):
    current_price: float = Field(..., gt=0)


class AlertCreateRequest(BaseModel):
    type: AlertType
    value: Optional[float] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_value(self):
        if self.type.is_price_alert and self.value is None:
            raise ValueError(f"value is required for {self.type.value} alerts")
        return self


class AlertToggleRequest(BaseModel):
    active: bool


class TransactionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    type: TransactionType
    quantity: float
    price: float
    fees: float
    date: datetime
    note: Optional[str] = None


class AlertSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    type: AlertType
    value: Optional[float] = None
    triggered: bool
    triggered_date: Optional[datetime] = None
    active: bool


class HoldingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    symbol: str
    company_name: str
    quantity: float
    average_cost: float
    current_price: Optional[float] = None
    total_invested: float
    current_value: float
    profit_loss: float
    profit_loss_percentage: float
    sector: Optional[str] = None
    industry: Optional[str] = None
    market_cap: Optional[MarketCap] = None
    dividend_yield: Optional[float] = None
    watchlist: bool
    tags: List[str]
    notes: Optional[str] = None
    transactions: List[TransactionSchema]
    alerts: List[AlertSchema]
    last_updated: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PriceUpdateResponse(BaseModel):
    holding: HoldingResponse
    triggered_alerts: List[AlertSchema]
    source: Optional[str] = None


class PerformerSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    symbol: str
    company_name: str
    profit_loss: float
    profit_loss_percentage: float
    current_value: float


class SectorSliceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    count: int
    invested: float
    current_value: float


class PortfolioStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_holdings: int
    total_invested: float
    current_value: float
    total_profit_loss: float
    total_profit_loss_percentage: float
    sector_breakdown: Dict[str, SectorSliceSchema]
    top_performers: List[PerformerSchema]
    worst_performers: List[PerformerSchema]
