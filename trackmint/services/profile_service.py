"""
Profile Service
Registration and profile updates
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from trackmint.domain.errors import ConflictError, NotFoundError
from trackmint.domain.models import CustomBudget, UserProfile
from trackmint.domain.schemas.users import UserCreateRequest, UserUpdateRequest
from trackmint.infrastructure.db.repositories.user_repository import UserRepository
from trackmint.utils.time import as_db_naive

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, session: AsyncSession):
        self.users = UserRepository(session)

    async def register(self, request: UserCreateRequest) -> UserProfile:
        if await self.users.get_by_email(request.email) is not None:
            raise ConflictError("User already exists with this email")

        custom = request.custom_budget
        profile = UserProfile(
            email=request.email,
            first_name=request.first_name.strip(),
            last_name=request.last_name.strip(),
            monthly_income=request.monthly_income,
            budget_rule=request.budget_rule,
            custom_budget=CustomBudget(**custom.model_dump()) if custom else CustomBudget(),
            risk_appetite=request.risk_appetite,
            date_of_birth=as_db_naive(request.date_of_birth) if request.date_of_birth else None,
            phone=request.phone,
            occupation=request.occupation,
        )
        saved = await self.users.save(profile)
        logger.info(f"👤 Registered user {saved.id}")
        return saved

    async def get(self, user_id: int) -> UserProfile:
        profile = await self.users.get(user_id)
        if profile is None:
            raise NotFoundError("User", user_id)
        return profile

    async def update(self, user_id: int, request: UserUpdateRequest) -> UserProfile:
        profile = await self.get(user_id)
        changes = request.model_dump(exclude_unset=True, exclude={"custom_budget"})
        for field, value in changes.items():
            if value is None:
                continue
            if field == "date_of_birth":
                value = as_db_naive(value)
            setattr(profile, field, value)
        if request.custom_budget is not None:
            profile.custom_budget = CustomBudget(**request.custom_budget.model_dump())

        # Onboarding is done once income, rule and risk appetite are known
        if not profile.profile_complete and profile.monthly_income > 0 \
                and profile.budget_rule and profile.risk_appetite:
            profile.profile_complete = True

        return await self.users.save(profile)
