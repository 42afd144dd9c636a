from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from trackmint.domain.models import (
    BudgetBucket,
    ExpenseCategory,
    PaymentMethod,
    RecurringFrequency,
)


class ExpenseCreateRequest(BaseModel):
    """
    New expense.

    Either a backend `category` or a client `bucket` (needs/wants/savings)
    must be given; a bucket is translated to a category.
    """
    title: str = Field(..., min_length=1, max_length=100)
    amount: float = Field(..., ge=0)
    category: Optional[ExpenseCategory] = None
    bucket: Optional[BudgetBucket] = None
    subcategory: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=500)
    date: Optional[datetime] = None
    is_recurring: bool = False
    recurring_frequency: Optional[RecurringFrequency] = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    tags: List[str] = Field(default_factory=list)
    receipt_url: Optional[str] = None
    receipt_filename: Optional[str] = None
    is_planned: bool = False

    @model_validator(mode="after")
    def check_category_and_recurrence(self):
        if self.category is None and self.bucket is None:
            raise ValueError("Either category or bucket is required")
        if self.is_recurring and self.recurring_frequency is None:
            raise ValueError("recurring_frequency is required for recurring expenses")
        return self


class ExpenseUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    amount: Optional[float] = Field(None, ge=0)
    category: Optional[ExpenseCategory] = None
    subcategory: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=500)
    date: Optional[datetime] = None
    is_recurring: Optional[bool] = None
    recurring_frequency: Optional[RecurringFrequency] = None
    payment_method: Optional[PaymentMethod] = None
    tags: Optional[List[str]] = None
    receipt_url: Optional[str] = None
    receipt_filename: Optional[str] = None
    is_planned: Optional[bool] = None


class ExpenseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    amount: float
    category: ExpenseCategory
    subcategory: Optional[str] = None
    description: Optional[str] = None
    date: datetime
    is_recurring: bool
    recurring_frequency: Optional[RecurringFrequency] = None
    payment_method: PaymentMethod
    tags: List[str]
    receipt_url: Optional[str] = None
    receipt_filename: Optional[str] = None
    is_planned: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PaginationSchema(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    has_next: bool
    has_prev: bool


class ExpenseListResponse(BaseModel):
    expenses: List[ExpenseResponse]
    pagination: PaginationSchema


class CategoryStatSchema(BaseModel):
    category: ExpenseCategory
    total_amount: float
    count: int
    avg_amount: float


class MonthlyTrendSchema(BaseModel):
    year: int
    month: int
    total_amount: float
    count: int


class ExpenseStatsResponse(BaseModel):
    period: str
    start_date: datetime
    end_date: datetime
    category_stats: List[CategoryStatSchema]
    total_amount: float
    total_count: int
    monthly_trend: List[MonthlyTrendSchema]
