"""
Category translation tables.

The client speaks in informal vocabularies (risk labels, needs/wants/savings
buckets) that differ from the enums persisted by the backend. Every
translation goes through one of the tables below; unknown input never
silently passes through.
"""

from typing import Dict, FrozenSet, Optional

from .entities import (
    AssetClass,
    BudgetBucket,
    ExpenseCategory,
    RiskAppetite,
    RiskCategory,
)


# User-facing risk label -> recommendation risk category
RISK_LABELS: Dict[str, RiskCategory] = {
    "Conservative": RiskCategory.CONSERVATIVE,
    "Balanced": RiskCategory.BALANCED,
    "Aggressive": RiskCategory.AGGRESSIVE,
}

# Profile risk appetite -> recommendation risk category
RISK_APPETITE_TO_CATEGORY: Dict[RiskAppetite, RiskCategory] = {
    RiskAppetite.CONSERVATIVE: RiskCategory.CONSERVATIVE,
    RiskAppetite.MODERATE: RiskCategory.BALANCED,
    RiskAppetite.AGGRESSIVE: RiskCategory.AGGRESSIVE,
}

# Bucket picked in the client -> backend expense category
BUCKET_TO_EXPENSE_CATEGORY: Dict[BudgetBucket, ExpenseCategory] = {
    BudgetBucket.NEEDS: ExpenseCategory.FOOD_DINING,
    BudgetBucket.WANTS: ExpenseCategory.ENTERTAINMENT,
    BudgetBucket.SAVINGS: ExpenseCategory.SAVINGS,
}

# Backend expense category -> bucket, for budget tracking
EXPENSE_CATEGORY_TO_BUCKET: Dict[ExpenseCategory, BudgetBucket] = {
    ExpenseCategory.HOUSING: BudgetBucket.NEEDS,
    ExpenseCategory.TRANSPORTATION: BudgetBucket.NEEDS,
    ExpenseCategory.FOOD_DINING: BudgetBucket.NEEDS,
    ExpenseCategory.HEALTHCARE: BudgetBucket.NEEDS,
    ExpenseCategory.UTILITIES: BudgetBucket.NEEDS,
    ExpenseCategory.INSURANCE: BudgetBucket.NEEDS,
    ExpenseCategory.EDUCATION: BudgetBucket.NEEDS,
    ExpenseCategory.ENTERTAINMENT: BudgetBucket.WANTS,
    ExpenseCategory.SHOPPING: BudgetBucket.WANTS,
    ExpenseCategory.TRAVEL: BudgetBucket.WANTS,
    ExpenseCategory.OTHER: BudgetBucket.WANTS,
    ExpenseCategory.INVESTMENT: BudgetBucket.SAVINGS,
    ExpenseCategory.SAVINGS: BudgetBucket.SAVINGS,
}

# Risk category -> asset classes eligible for recommendation
RISK_ASSET_CLASSES: Dict[RiskCategory, FrozenSet[AssetClass]] = {
    RiskCategory.CONSERVATIVE: frozenset({AssetClass.MEGA_CAP, AssetClass.LARGE_CAP}),
    RiskCategory.BALANCED: frozenset({AssetClass.MEGA_CAP, AssetClass.LARGE_CAP, AssetClass.MID_CAP}),
    RiskCategory.AGGRESSIVE: frozenset({AssetClass.LARGE_CAP, AssetClass.MID_CAP, AssetClass.SMALL_CAP}),
}


def risk_category_from_label(label: str) -> RiskCategory:
    """
    Resolve a client risk label or a stored enum value.

    Raises ValueError for anything outside both vocabularies.
    """
    if label in RISK_LABELS:
        return RISK_LABELS[label]
    normalized = (label or "").strip().lower()
    for category in RiskCategory:
        if category.value == normalized:
            return category
    try:
        return RISK_APPETITE_TO_CATEGORY[RiskAppetite(normalized)]
    except ValueError:
        raise ValueError(f"Unknown risk category: {label!r}") from None


def expense_category_for_bucket(bucket: Optional[str]) -> ExpenseCategory:
    """needs/wants/savings -> backend category; anything else is Other"""
    try:
        return BUCKET_TO_EXPENSE_CATEGORY[BudgetBucket((bucket or "").strip().lower())]
    except ValueError:
        return ExpenseCategory.OTHER


def bucket_for_expense_category(category: ExpenseCategory) -> BudgetBucket:
    return EXPENSE_CATEGORY_TO_BUCKET[category]
