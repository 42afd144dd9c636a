"""
Advice Service
Answers a finance question with the user's profile as context
"""

from sqlalchemy.ext.asyncio import AsyncSession

from trackmint.domain.models.categories import RISK_APPETITE_TO_CATEGORY
from trackmint.infrastructure.ai.gemini_client import Advice, AdviceContext, GeminiAdvisor
from trackmint.services.profile_service import ProfileService


class AdviceService:
    def __init__(self, session: AsyncSession, advisor: GeminiAdvisor):
        self.profiles = ProfileService(session)
        self.advisor = advisor

    async def ask(self, user_id: int, question: str) -> Advice:
        profile = await self.profiles.get(user_id)
        context = AdviceContext(
            monthly_income=profile.monthly_income,
            budget_rule=profile.budget_rule.value if profile.budget_rule else None,
            risk_category=RISK_APPETITE_TO_CATEGORY[profile.risk_appetite],
        )
        return await self.advisor.ask(question.strip(), context)
