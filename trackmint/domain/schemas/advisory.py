from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from trackmint.domain.models import AssetClass, BudgetRule, RiskCategory
from trackmint.domain.schemas.users import BudgetAllocationSchema


# Budget

class BucketStatusSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    allocated: float
    spent: float
    remaining: float
    percentage: float


class SavingsStatusSchema(BaseModel):
    allocated: float
    invested: float
    remaining: float
    percentage: float


class BudgetAllocationResponse(BaseModel):
    monthly_income: float
    budget_rule: BudgetRule
    allocation: BudgetAllocationSchema


class BudgetStatusResponse(BaseModel):
    month: datetime
    monthly_income: float
    budget_rule: BudgetRule
    allocation: BudgetAllocationSchema
    needs: BucketStatusSchema
    wants: BucketStatusSchema
    savings: SavingsStatusSchema


# Recommendations

class CandidateSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    symbol: str
    description: str
    current_price: float
    change: float
    change_percent: float
    asset_class: Optional[AssetClass] = None


class FundSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    category: str
    expected_return: str


class BondSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    yield_range: str
    duration: str
    rating: str


class RecommendationResponse(BaseModel):
    risk_category: RiskCategory
    source: str
    stocks: List[CandidateSchema]
    top_performers: List[CandidateSchema]
    worst_performers: List[CandidateSchema]
    mutual_funds: List[FundSchema]
    bonds: List[BondSchema]
    monthly_savings: float


# AI advice

class AdviceRequest(BaseModel):
    question: str = Field(..., min_length=1, max_length=2000)


class AdviceResponse(BaseModel):
    answer: str
    source: str
