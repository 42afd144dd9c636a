"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from trackmint.utils.time import now_local_naive


# ------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------

class TransactionType(str, Enum):
    """Side of a holding transaction"""
    BUY = "buy"
    SELL = "sell"


class AlertType(str, Enum):
    """Holding alert kinds"""
    PRICE_ABOVE = "price_above"
    PRICE_BELOW = "price_below"
    VOLUME_SPIKE = "volume_spike"
    NEWS = "news"

    @property
    def is_price_alert(self) -> bool:
        return self in (AlertType.PRICE_ABOVE, AlertType.PRICE_BELOW)


class MarketCap(str, Enum):
    SMALL = "Small Cap"
    MID = "Mid Cap"
    LARGE = "Large Cap"
    MEGA = "Mega Cap"


class GoalStatus(str, Enum):
    """Goal lifecycle status"""
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class GoalPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class GoalCategory(str, Enum):
    EMERGENCY_FUND = "Emergency Fund"
    VACATION = "Vacation"
    HOME_PURCHASE = "Home Purchase"
    CAR_PURCHASE = "Car Purchase"
    EDUCATION = "Education"
    RETIREMENT = "Retirement"
    INVESTMENT = "Investment"
    DEBT_PAYOFF = "Debt Payoff"
    WEDDING = "Wedding"
    HEALTH_FITNESS = "Health & Fitness"
    TECHNOLOGY = "Technology"
    OTHER = "Other"


class ExpenseCategory(str, Enum):
    HOUSING = "Housing"
    TRANSPORTATION = "Transportation"
    FOOD_DINING = "Food & Dining"
    HEALTHCARE = "Healthcare"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    UTILITIES = "Utilities"
    EDUCATION = "Education"
    TRAVEL = "Travel"
    INSURANCE = "Insurance"
    INVESTMENT = "Investment"
    SAVINGS = "Savings"
    OTHER = "Other"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    BANK_TRANSFER = "bank_transfer"
    DIGITAL_WALLET = "digital_wallet"
    OTHER = "other"


class RecurringFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class BudgetRule(str, Enum):
    """Income split rule"""
    RULE_50_30_20 = "50-30-20"
    RULE_60_20_20 = "60-20-20"
    RULE_70_20_10 = "70-20-10"
    CUSTOM = "custom"


class BudgetBucket(str, Enum):
    """User-facing spending buckets"""
    NEEDS = "needs"
    WANTS = "wants"
    SAVINGS = "savings"


class RiskAppetite(str, Enum):
    """Risk appetite as stored on the user profile"""
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class RiskCategory(str, Enum):
    """Risk category driving recommendations"""
    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"


class AssetClass(str, Enum):
    """Size bucket of a recommendation candidate"""
    MEGA_CAP = "mega_cap"
    LARGE_CAP = "large_cap"
    MID_CAP = "mid_cap"
    SMALL_CAP = "small_cap"


# ------------------------------------------------------------------
# Portfolio
# ------------------------------------------------------------------

@dataclass
class Transaction:
    """One entry of a holding's append-only history"""
    type: TransactionType
    quantity: float
    price: float
    fees: float = 0.0
    date: datetime = field(default_factory=now_local_naive)
    note: Optional[str] = None
    id: Optional[int] = None


@dataclass
class PriceAlert:
    """Alert attached to a holding"""
    type: AlertType
    value: Optional[float] = None
    triggered: bool = False
    triggered_date: Optional[datetime] = None
    active: bool = True
    id: Optional[int] = None

    def __post_init__(self):
        if self.type.is_price_alert and self.value is None:
            raise ValueError(f"{self.type.value} alert requires a value")


@dataclass
class Holding:
    """
    A user's position in one symbol.

    quantity and average_cost are derived from transactions; only the
    holding ledger writes them.
    """
    user_id: int
    symbol: str
    company_name: str
    quantity: float = 0.0
    average_cost: float = 0.0
    current_price: Optional[float] = None
    sector: Optional[str] = None
    industry: Optional[str] = None
    market_cap: Optional[MarketCap] = None
    dividend_yield: Optional[float] = None
    transactions: List[Transaction] = field(default_factory=list)
    alerts: List[PriceAlert] = field(default_factory=list)
    watchlist: bool = False
    tags: List[str] = field(default_factory=list)
    notes: Optional[str] = None
    last_updated: Optional[datetime] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.symbol = (self.symbol or "").strip().upper()
        if not self.symbol:
            raise ValueError("Holding symbol cannot be empty")

    @property
    def total_invested(self) -> float:
        return self.quantity * self.average_cost

    @property
    def current_value(self) -> float:
        price = self.current_price if self.current_price is not None else self.average_cost
        return self.quantity * price

    @property
    def profit_loss(self) -> float:
        return self.current_value - self.total_invested

    @property
    def profit_loss_percentage(self) -> float:
        if self.total_invested == 0:
            return 0.0
        return (self.profit_loss / self.total_invested) * 100.0


# ------------------------------------------------------------------
# Goals
# ------------------------------------------------------------------

@dataclass
class Contribution:
    amount: float
    date: datetime = field(default_factory=now_local_naive)
    note: Optional[str] = None
    id: Optional[int] = None


@dataclass
class Milestone:
    percentage: float
    amount: float
    achieved: bool = False
    achieved_date: Optional[datetime] = None
    reward: Optional[str] = None
    id: Optional[int] = None


@dataclass
class Goal:
    """Savings goal with contributions and percentage milestones"""
    user_id: int
    title: str
    target_amount: float
    category: GoalCategory
    target_date: datetime
    current_amount: float = 0.0
    description: Optional[str] = None
    priority: GoalPriority = GoalPriority.MEDIUM
    start_date: datetime = field(default_factory=now_local_naive)
    status: GoalStatus = GoalStatus.ACTIVE
    monthly_contribution: Optional[float] = None
    auto_contribute: bool = False
    contributions: List[Contribution] = field(default_factory=list)
    milestones: List[Milestone] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def progress_percentage(self) -> float:
        if self.target_amount == 0:
            return 0.0
        return min((self.current_amount / self.target_amount) * 100.0, 100.0)

    @property
    def remaining_amount(self) -> float:
        return max(self.target_amount - self.current_amount, 0.0)

    def days_remaining_at(self, now: datetime) -> int:
        """Whole days until target_date; negative once overdue"""
        return math.ceil((self.target_date - now).total_seconds() / 86400)

    def monthly_required_savings_at(self, now: datetime) -> int:
        months_left = max(self.days_remaining_at(now) / 30, 1)
        return math.ceil(self.remaining_amount / months_left)

    @property
    def days_remaining(self) -> int:
        return self.days_remaining_at(now_local_naive())

    @property
    def monthly_required_savings(self) -> int:
        return self.monthly_required_savings_at(now_local_naive())


# ------------------------------------------------------------------
# Budget, expenses & profile
# ------------------------------------------------------------------

@dataclass(frozen=True)
class CustomBudget:
    """Custom split in percentages (not validated to sum to 100 here)"""
    needs: float = 50.0
    wants: float = 30.0
    savings: float = 20.0


@dataclass(frozen=True)
class BudgetAllocation:
    """Monthly income split into amounts"""
    needs: float
    wants: float
    savings: float

    @property
    def total(self) -> float:
        return self.needs + self.wants + self.savings


@dataclass
class UserProfile:
    email: str
    first_name: str
    last_name: str
    monthly_income: float = 0.0
    budget_rule: BudgetRule = BudgetRule.RULE_50_30_20
    custom_budget: CustomBudget = field(default_factory=CustomBudget)
    risk_appetite: RiskAppetite = RiskAppetite.MODERATE
    date_of_birth: Optional[datetime] = None
    phone: Optional[str] = None
    occupation: Optional[str] = None
    profile_complete: bool = False
    is_active: bool = True
    last_login: Optional[datetime] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass
class Expense:
    user_id: int
    title: str
    amount: float
    category: ExpenseCategory
    date: datetime = field(default_factory=now_local_naive)
    subcategory: Optional[str] = None
    description: Optional[str] = None
    is_recurring: bool = False
    recurring_frequency: Optional[RecurringFrequency] = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    tags: List[str] = field(default_factory=list)
    receipt_url: Optional[str] = None
    receipt_filename: Optional[str] = None
    is_planned: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ------------------------------------------------------------------
# Recommendations
# ------------------------------------------------------------------

@dataclass(frozen=True)
class Candidate:
    """A recommendation candidate with its latest price move"""
    symbol: str
    description: str
    current_price: float
    change: float
    change_percent: float
    asset_class: Optional[AssetClass] = None


@dataclass(frozen=True)
class FundSuggestion:
    name: str
    category: str
    expected_return: str


@dataclass(frozen=True)
class BondSuggestion:
    name: str
    yield_range: str
    duration: str
    rating: str


@dataclass(frozen=True)
class RankedList:
    """Selector output: eligible picks plus top/worst movers"""
    risk_category: RiskCategory
    picks: List[Candidate]
    top_performers: List[Candidate]
    worst_performers: List[Candidate]

