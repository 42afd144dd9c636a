"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    AlertType,
    AssetClass,
    BudgetBucket,
    BudgetRule,
    ExpenseCategory,
    GoalCategory,
    GoalPriority,
    GoalStatus,
    MarketCap,
    PaymentMethod,
    RecurringFrequency,
    RiskAppetite,
    RiskCategory,
    TransactionType,

    # Entities
    BondSuggestion,
    BudgetAllocation,
    Candidate,
    Contribution,
    CustomBudget,
    Expense,
    FundSuggestion,
    Goal,
    Holding,
    Milestone,
    PriceAlert,
    RankedList,
    Transaction,
    UserProfile,
)
from .portfolio import (
    CategoryProgress,
    GoalStats,
    PortfolioStats,
    SectorSlice,
)

__all__ = [
    # Enums
    "AlertType",
    "AssetClass",
    "BudgetBucket",
    "BudgetRule",
    "ExpenseCategory",
    "GoalCategory",
    "GoalPriority",
    "GoalStatus",
    "MarketCap",
    "PaymentMethod",
    "RecurringFrequency",
    "RiskAppetite",
    "RiskCategory",
    "TransactionType",

    # Entities
    "BondSuggestion",
    "BudgetAllocation",
    "Candidate",
    "Contribution",
    "CustomBudget",
    "Expense",
    "FundSuggestion",
    "Goal",
    "Holding",
    "Milestone",
    "PriceAlert",
    "RankedList",
    "Transaction",
    "UserProfile",

    # Aggregates
    "CategoryProgress",
    "GoalStats",
    "PortfolioStats",
    "SectorSlice",
]
