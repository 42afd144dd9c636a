from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from trackmint.domain.models import GoalCategory, GoalPriority, GoalStatus


class MilestoneRequest(BaseModel):
    percentage: float = Field(..., ge=0, le=100)
    reward: Optional[str] = Field(None, max_length=100)


class GoalCreateRequest(BaseModel):
    """New goal; quartile milestones are generated when none are given"""
    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    target_amount: float = Field(..., ge=0)
    current_amount: float = Field(0.0, ge=0)
    category: GoalCategory
    priority: GoalPriority = GoalPriority.MEDIUM
    target_date: datetime
    start_date: Optional[datetime] = None
    monthly_contribution: Optional[float] = Field(None, ge=0)
    auto_contribute: bool = False
    milestones: Optional[List[MilestoneRequest]] = None
    tags: List[str] = Field(default_factory=list)


class GoalUpdateRequest(BaseModel):
    """Contributions and current_amount are not editable here"""
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    target_amount: Optional[float] = Field(None, ge=0)
    category: Optional[GoalCategory] = None
    priority: Optional[GoalPriority] = None
    target_date: Optional[datetime] = None
    status: Optional[GoalStatus] = None
    monthly_contribution: Optional[float] = Field(None, ge=0)
    auto_contribute: Optional[bool] = None
    tags: Optional[List[str]] = None


class ContributionRequest(BaseModel):
    # Positivity is checked by the goal service so the error is a 400
    amount: float
    note: Optional[str] = Field(None, max_length=200)


class ContributionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    amount: float
    date: datetime
    note: Optional[str] = None


class MilestoneSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    percentage: float
    amount: float
    achieved: bool
    achieved_date: Optional[datetime] = None
    reward: Optional[str] = None


class GoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    target_amount: float
    current_amount: float
    category: GoalCategory
    priority: GoalPriority
    target_date: datetime
    start_date: datetime
    status: GoalStatus
    monthly_contribution: Optional[float] = None
    auto_contribute: bool
    progress_percentage: float
    remaining_amount: float
    days_remaining: int
    monthly_required_savings: int
    contributions: List[ContributionSchema]
    milestones: List[MilestoneSchema]
    tags: List[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ContributionResponse(BaseModel):
    goal: GoalResponse
    achieved_milestones: List[MilestoneSchema]


class CategoryProgressSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    count: int
    total_target: float
    total_current: float


class GoalStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_goals: int
    active_goals: int
    completed_goals: int
    paused_goals: int
    total_target: float
    total_current: float
    total_remaining: float
    average_progress: float
    category_breakdown: Dict[str, CategoryProgressSchema]
