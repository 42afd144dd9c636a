"""
User Repository
Profile persistence; email is unique
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
from typing import Optional

from trackmint.domain.errors import ConflictError, NotFoundError
from trackmint.domain.models import CustomBudget, UserProfile
from trackmint.infrastructure.db.models import UserModel


class UserRepository:
    """Repository for UserProfile"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def get(self, user_id: int) -> Optional[UserProfile]:
        model = await self.session.get(UserModel, user_id)
        return self._to_domain(model) if model else None

    async def get_by_email(self, email: str) -> Optional[UserProfile]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email.strip().lower())
        )
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def save(self, profile: UserProfile) -> UserProfile:
        """
        Insert or update a profile.

        Raises:
            ConflictError: email already registered
        """
        if profile.id is None:
            model = UserModel()
            self.session.add(model)
        else:
            model = await self.session.get(UserModel, profile.id)
            if model is None:
                raise NotFoundError("User", profile.id)

        model.email = profile.email.strip().lower()
        model.first_name = profile.first_name
        model.last_name = profile.last_name
        model.date_of_birth = profile.date_of_birth
        model.phone = profile.phone
        model.occupation = profile.occupation
        model.monthly_income = profile.monthly_income
        model.budget_rule = profile.budget_rule
        model.custom_needs = profile.custom_budget.needs
        model.custom_wants = profile.custom_budget.wants
        model.custom_savings = profile.custom_budget.savings
        model.risk_appetite = profile.risk_appetite
        model.profile_complete = profile.profile_complete
        model.is_active = profile.is_active
        model.last_login = profile.last_login

        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("User already exists with this email") from exc

        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: UserModel) -> UserProfile:
        return UserProfile(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            date_of_birth=model.date_of_birth,
            phone=model.phone,
            occupation=model.occupation,
            monthly_income=model.monthly_income,
            budget_rule=model.budget_rule,
            custom_budget=CustomBudget(
                needs=model.custom_needs,
                wants=model.custom_wants,
                savings=model.custom_savings,
            ),
            risk_appetite=model.risk_appetite,
            profile_complete=model.profile_complete,
            is_active=model.is_active,
            last_login=model.last_login,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
