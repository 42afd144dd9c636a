"""
Unit Tests for the budget allocator

✅ Named rules split income by fixed fractions
✅ Custom rule uses stored percentages
✅ Unknown rule / missing custom config -> zeros
"""

import pytest
from datetime import datetime

from trackmint.domain.models import (
    BudgetRule,
    CustomBudget,
    Expense,
    ExpenseCategory,
)
from trackmint.domain.services.budget_allocator import ZERO_ALLOCATION, allocate, budget_status


def test_fifty_thirty_twenty_split():
    allocation = allocate(50000, "50-30-20")
    assert allocation.needs == pytest.approx(25000)
    assert allocation.wants == pytest.approx(15000)
    assert allocation.savings == pytest.approx(10000)


@pytest.mark.parametrize("rule", ["50-30-20", "60-20-20", "70-20-10"])
@pytest.mark.parametrize("income", [0, 1, 12345.67, 250000])
def test_named_rules_sum_to_income(rule, income):
    assert allocate(income, rule).total == pytest.approx(income)


def test_seventy_twenty_ten_split():
    allocation = allocate(10000, BudgetRule.RULE_70_20_10)
    assert (allocation.needs, allocation.wants, allocation.savings) == pytest.approx((7000, 2000, 1000))


def test_custom_rule_uses_percentages():
    allocation = allocate(40000, "custom", CustomBudget(needs=40, wants=40, savings=20))
    assert allocation.needs == pytest.approx(16000)
    assert allocation.wants == pytest.approx(16000)
    assert allocation.savings == pytest.approx(8000)


def test_custom_percentages_are_not_validated_here():
    allocation = allocate(1000, "custom", CustomBudget(needs=80, wants=30, savings=20))
    assert allocation.total == pytest.approx(1300)


def test_custom_rule_without_percentages_is_zero():
    assert allocate(50000, "custom") == ZERO_ALLOCATION


def test_unknown_rule_is_zero():
    assert allocate(50000, "80-10-10") == ZERO_ALLOCATION


def test_budget_status_routes_expenses_to_buckets():
    allocation = allocate(50000, "50-30-20")
    month = datetime(2026, 3, 1)
    expenses = [
        Expense(user_id=1, title="Rent", amount=12000, category=ExpenseCategory.HOUSING, date=month),
        Expense(user_id=1, title="Movie", amount=600, category=ExpenseCategory.ENTERTAINMENT, date=month),
        Expense(user_id=1, title="SIP", amount=5000, category=ExpenseCategory.INVESTMENT, date=month),
        Expense(user_id=1, title="Misc", amount=400, category=ExpenseCategory.OTHER, date=month),
    ]

    status = budget_status(allocation, expenses, month)

    assert status.needs.spent == pytest.approx(12000)
    assert status.needs.remaining == pytest.approx(13000)
    assert status.needs.percentage == pytest.approx(48.0)
    assert status.wants.spent == pytest.approx(1000)
    assert status.savings.spent == pytest.approx(5000)
    assert status.savings.percentage == pytest.approx(50.0)


def test_bucket_percentage_is_zero_without_allocation():
    status = budget_status(
        ZERO_ALLOCATION,
        [Expense(user_id=1, title="Snacks", amount=50, category=ExpenseCategory.FOOD_DINING)],
        datetime(2026, 3, 1),
    )
    assert status.needs.percentage == 0.0
    assert status.needs.remaining == pytest.approx(-50)
