from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from trackmint.domain.models import BudgetRule, RiskAppetite

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CustomBudgetSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    needs: float = Field(50.0, ge=0, le=100)
    wants: float = Field(30.0, ge=0, le=100)
    savings: float = Field(20.0, ge=0, le=100)


class CustomBudgetRequest(CustomBudgetSchema):
    """Custom split in percentages; must add up to 100"""

    @model_validator(mode="after")
    def check_total(self):
        total = self.needs + self.wants + self.savings
        if abs(total - 100.0) > 0.01:
            raise ValueError(f"Custom budget percentages must sum to 100 (got {total:g})")
        return self


class UserCreateRequest(BaseModel):
    email: str = Field(..., max_length=254, pattern=EMAIL_PATTERN)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    monthly_income: float = Field(0.0, ge=0)
    budget_rule: BudgetRule = BudgetRule.RULE_50_30_20
    custom_budget: Optional[CustomBudgetRequest] = None
    risk_appetite: RiskAppetite = RiskAppetite.MODERATE
    date_of_birth: Optional[datetime] = None
    phone: Optional[str] = Field(None, max_length=20)
    occupation: Optional[str] = Field(None, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class UserUpdateRequest(BaseModel):
    """Profile update; only the fields sent are changed"""
    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)
    monthly_income: Optional[float] = Field(None, ge=0)
    budget_rule: Optional[BudgetRule] = None
    custom_budget: Optional[CustomBudgetRequest] = None
    risk_appetite: Optional[RiskAppetite] = None
    date_of_birth: Optional[datetime] = None
    phone: Optional[str] = Field(None, max_length=20)
    occupation: Optional[str] = Field(None, max_length=100)


class BudgetAllocationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    needs: float
    wants: float
    savings: float


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    full_name: str
    monthly_income: float
    budget_rule: BudgetRule
    custom_budget: CustomBudgetSchema
    risk_appetite: RiskAppetite
    date_of_birth: Optional[datetime] = None
    phone: Optional[str] = None
    occupation: Optional[str] = None
    profile_complete: bool
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
