"""
BUDGET ALLOCATOR

Splits monthly income into needs / wants / savings amounts.

RULES:
- Named rules use fixed fractions
- "custom" multiplies by the user's percentages / 100
- Missing custom config or unknown rule -> all zeros, never raises
- Custom percentages are NOT validated to sum to 100 here
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, Optional, Tuple, Union

from trackmint.domain.models import (
    BudgetAllocation,
    BudgetBucket,
    BudgetRule,
    CustomBudget,
    Expense,
)
from trackmint.domain.models.categories import bucket_for_expense_category


RULE_FRACTIONS: Dict[BudgetRule, Tuple[float, float, float]] = {
    BudgetRule.RULE_50_30_20: (0.5, 0.3, 0.2),
    BudgetRule.RULE_60_20_20: (0.6, 0.2, 0.2),
    BudgetRule.RULE_70_20_10: (0.7, 0.2, 0.1),
}

ZERO_ALLOCATION = BudgetAllocation(needs=0.0, wants=0.0, savings=0.0)


def allocate(
    monthly_income: float,
    rule: Union[BudgetRule, str],
    custom_percentages: Optional[CustomBudget] = None,
) -> BudgetAllocation:
    """
    Allocate monthly income by rule.

    Args:
        monthly_income: Non-negative monthly income
        rule: Budget rule (enum or its string value)
        custom_percentages: Percentages used by the custom rule

    Returns:
        BudgetAllocation of amounts (not percentages)
    """
    try:
        rule = BudgetRule(rule)
    except ValueError:
        return ZERO_ALLOCATION

    if rule == BudgetRule.CUSTOM:
        if custom_percentages is None:
            return ZERO_ALLOCATION
        return BudgetAllocation(
            needs=monthly_income * custom_percentages.needs / 100,
            wants=monthly_income * custom_percentages.wants / 100,
            savings=monthly_income * custom_percentages.savings / 100,
        )

    needs, wants, savings = RULE_FRACTIONS[rule]
    return BudgetAllocation(
        needs=monthly_income * needs,
        wants=monthly_income * wants,
        savings=monthly_income * savings,
    )


@dataclass(frozen=True)
class BucketStatus:
    allocated: float
    spent: float

    @property
    def remaining(self) -> float:
        return self.allocated - self.spent

    @property
    def percentage(self) -> float:
        if self.allocated <= 0:
            return 0.0
        return (self.spent / self.allocated) * 100.0


@dataclass(frozen=True)
class BudgetStatus:
    month: datetime
    allocation: BudgetAllocation
    needs: BucketStatus
    wants: BucketStatus
    savings: BucketStatus


def budget_status(
    allocation: BudgetAllocation,
    expenses: Iterable[Expense],
    month: datetime,
) -> BudgetStatus:
    """
    Compare one month's expenses against an allocation, per bucket.

    Expenses are routed to buckets through the category translation table;
    the caller is responsible for passing only the month's expenses.
    """
    spent = {bucket: 0.0 for bucket in BudgetBucket}
    for expense in expenses:
        spent[bucket_for_expense_category(expense.category)] += expense.amount

    return BudgetStatus(
        month=month,
        allocation=allocation,
        needs=BucketStatus(allocation.needs, spent[BudgetBucket.NEEDS]),
        wants=BucketStatus(allocation.wants, spent[BudgetBucket.WANTS]),
        savings=BucketStatus(allocation.savings, spent[BudgetBucket.SAVINGS]),
    )
