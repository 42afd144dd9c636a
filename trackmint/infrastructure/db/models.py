"""
Database Models (SQLAlchemy ORM)
Users, expenses, holdings and goals; histories live in child tables
"""

from sqlalchemy import (
    Column, Integer, String, Float, DateTime,
    Boolean, ForeignKey, Text, Enum as SQLEnum, Index, JSON
)
from sqlalchemy.orm import relationship

from trackmint.infrastructure.db.database import Base
from trackmint.domain.models import (
    AlertType,
    BudgetRule,
    ExpenseCategory,
    GoalCategory,
    GoalPriority,
    GoalStatus,
    MarketCap,
    PaymentMethod,
    RecurringFrequency,
    RiskAppetite,
    TransactionType,
)
from trackmint.utils.time import now_local_naive


def _enum(enum_cls, name: str) -> SQLEnum:
    """Store enum values (not member names) as VARCHAR"""
    return SQLEnum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        values_callable=lambda members: [m.value for m in members],
    )


# Tables

class UserModel(Base):
    """User profile and budget preferences"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(254), nullable=False, unique=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    date_of_birth = Column(DateTime, nullable=True)
    phone = Column(String(20), nullable=True)
    occupation = Column(String(100), nullable=True)
    monthly_income = Column(Float, nullable=False, default=0.0)
    budget_rule = Column(_enum(BudgetRule, "budget_rule"), nullable=False, default=BudgetRule.RULE_50_30_20)
    custom_needs = Column(Float, nullable=False, default=50.0)
    custom_wants = Column(Float, nullable=False, default=30.0)
    custom_savings = Column(Float, nullable=False, default=20.0)
    risk_appetite = Column(_enum(RiskAppetite, "risk_appetite"), nullable=False, default=RiskAppetite.MODERATE)
    profile_complete = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_local_naive)
    updated_at = Column(DateTime, nullable=False, default=now_local_naive, onupdate=now_local_naive)


class ExpenseModel(Base):
    """Logged expense"""
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(100), nullable=False)
    amount = Column(Float, nullable=False)
    category = Column(_enum(ExpenseCategory, "expense_category"), nullable=False)
    subcategory = Column(String(50), nullable=True)
    description = Column(String(500), nullable=True)
    date = Column(DateTime, nullable=False, default=now_local_naive)
    is_recurring = Column(Boolean, nullable=False, default=False)
    recurring_frequency = Column(_enum(RecurringFrequency, "recurring_frequency"), nullable=True)
    payment_method = Column(_enum(PaymentMethod, "payment_method"), nullable=False, default=PaymentMethod.CASH)
    tags = Column(JSON, nullable=False, default=list)
    receipt_url = Column(String(500), nullable=True)
    receipt_filename = Column(String(255), nullable=True)
    is_planned = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=now_local_naive)
    updated_at = Column(DateTime, nullable=False, default=now_local_naive, onupdate=now_local_naive)

    __table_args__ = (
        Index("ix_expense_user_date", "user_id", "date"),
        Index("ix_expense_user_category", "user_id", "category"),
    )


class HoldingModel(Base):
    """Position (or watchlist entry) in one symbol"""
    __tablename__ = "holdings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    symbol = Column(String(10), nullable=False)
    company_name = Column(String(100), nullable=False)
    quantity = Column(Float, nullable=False, default=0.0)
    average_cost = Column(Float, nullable=False, default=0.0)
    current_price = Column(Float, nullable=True)
    sector = Column(String(50), nullable=True)
    industry = Column(String(50), nullable=True)
    market_cap = Column(_enum(MarketCap, "market_cap"), nullable=True)
    dividend_yield = Column(Float, nullable=True)
    watchlist = Column(Boolean, nullable=False, default=False)
    tags = Column(JSON, nullable=False, default=list)
    notes = Column(Text, nullable=True)
    last_updated = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_local_naive)
    updated_at = Column(DateTime, nullable=False, default=now_local_naive, onupdate=now_local_naive)

    # Relationships
    transactions = relationship(
        "HoldingTransactionModel",
        back_populates="holding",
        order_by="HoldingTransactionModel.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    alerts = relationship(
        "HoldingAlertModel",
        back_populates="holding",
        order_by="HoldingAlertModel.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_holding_user_symbol", "user_id", "symbol", unique=True),
    )


class HoldingTransactionModel(Base):
    """Append-only transaction history; replayed in position order"""
    __tablename__ = "holding_transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    holding_id = Column(Integer, ForeignKey("holdings.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    type = Column(_enum(TransactionType, "transaction_type"), nullable=False)
    quantity = Column(Float, nullable=False)
    price = Column(Float, nullable=False)
    fees = Column(Float, nullable=False, default=0.0)
    date = Column(DateTime, nullable=False, default=now_local_naive)
    note = Column(String(200), nullable=True)

    holding = relationship("HoldingModel", back_populates="transactions")

    __table_args__ = (
        Index("ix_holding_tx_order", "holding_id", "position", unique=True),
    )


class HoldingAlertModel(Base):
    __tablename__ = "holding_alerts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    holding_id = Column(Integer, ForeignKey("holdings.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    type = Column(_enum(AlertType, "alert_type"), nullable=False)
    value = Column(Float, nullable=True)
    triggered = Column(Boolean, nullable=False, default=False)
    triggered_date = Column(DateTime, nullable=True)
    active = Column(Boolean, nullable=False, default=True)

    holding = relationship("HoldingModel", back_populates="alerts")


class GoalModel(Base):
    """Savings goal"""
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    target_amount = Column(Float, nullable=False)
    current_amount = Column(Float, nullable=False, default=0.0)
    category = Column(_enum(GoalCategory, "goal_category"), nullable=False)
    priority = Column(_enum(GoalPriority, "goal_priority"), nullable=False, default=GoalPriority.MEDIUM)
    target_date = Column(DateTime, nullable=False)
    start_date = Column(DateTime, nullable=False, default=now_local_naive)
    status = Column(_enum(GoalStatus, "goal_status"), nullable=False, default=GoalStatus.ACTIVE)
    monthly_contribution = Column(Float, nullable=True)
    auto_contribute = Column(Boolean, nullable=False, default=False)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=now_local_naive)
    updated_at = Column(DateTime, nullable=False, default=now_local_naive, onupdate=now_local_naive)

    # Relationships
    contributions = relationship(
        "GoalContributionModel",
        back_populates="goal",
        order_by="GoalContributionModel.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    milestones = relationship(
        "GoalMilestoneModel",
        back_populates="goal",
        order_by="GoalMilestoneModel.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_goal_user_status", "user_id", "status"),
    )


class GoalContributionModel(Base):
    __tablename__ = "goal_contributions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    goal_id = Column(Integer, ForeignKey("goals.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    amount = Column(Float, nullable=False)
    date = Column(DateTime, nullable=False, default=now_local_naive)
    note = Column(String(200), nullable=True)

    goal = relationship("GoalModel", back_populates="contributions")


class GoalMilestoneModel(Base):
    __tablename__ = "goal_milestones"

    id = Column(Integer, primary_key=True, autoincrement=True)
    goal_id = Column(Integer, ForeignKey("goals.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    percentage = Column(Float, nullable=False)
    amount = Column(Float, nullable=False)
    achieved = Column(Boolean, nullable=False, default=False)
    achieved_date = Column(DateTime, nullable=True)
    reward = Column(String(100), nullable=True)

    goal = relationship("GoalModel", back_populates="milestones")
