"""
Gemini advice client.

Calls the Gemini generateContent endpoint over httpx. Without an API key,
or when the upstream call fails, a keyword-matched canned answer is
returned instead so the endpoint never errors on the AI path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from trackmint.domain.models import RiskCategory

logger = logging.getLogger(__name__)

GENERATION_CONFIG = {
    "temperature": 0.7,
    "topK": 40,
    "topP": 0.95,
}

_RISK_LABELS = {
    RiskCategory.CONSERVATIVE: "Conservative",
    RiskCategory.BALANCED: "Balanced",
    RiskCategory.AGGRESSIVE: "Aggressive",
}

_INVESTMENT_MIX = {
    RiskCategory.CONSERVATIVE: "government bonds and blue-chip stocks",
    RiskCategory.BALANCED: "a mix of stocks, bonds, and mutual funds",
    RiskCategory.AGGRESSIVE: "growth stocks and equity mutual funds",
}


@dataclass(frozen=True)
class AdviceContext:
    """Profile facts the advice is personalised with"""
    monthly_income: float
    budget_rule: Optional[str]
    risk_category: RiskCategory


@dataclass(frozen=True)
class Advice:
    answer: str
    source: str  # "gemini" | "fallback"


def build_prompt(question: str, context: AdviceContext) -> str:
    income = f"₹{context.monthly_income:,.0f}" if context.monthly_income else "Not provided"
    annual = f"₹{context.monthly_income * 12:,.0f}" if context.monthly_income else "Not provided"
    return (
        "You are a professional financial advisor for TrackMint, a personal finance management app.\n"
        "Provide helpful, personalized financial advice based on the user's profile.\n\n"
        "User Profile:\n"
        f"- Monthly Income: {income}\n"
        f"- Annual Income: {annual}\n"
        f"- Budget Rule: {context.budget_rule or 'Not set'}\n"
        f"- Risk Appetite: {_RISK_LABELS[context.risk_category]}\n\n"
        f"User Question: {question}\n\n"
        "Please provide:\n"
        "1. A clear, actionable answer to their question\n"
        "2. Personalized recommendations based on their profile\n"
        "3. If relevant, specific investment or budgeting advice\n"
        "4. Risk considerations appropriate to their risk appetite\n\n"
        "Keep the response conversational, helpful, and under 200 words. "
        "Use Indian financial context (₹, NSE, BSE, etc.)."
    )


def fallback_advice(question: str, context: AdviceContext) -> str:
    """Keyword-matched canned answer: budget, investment, saving, or a default"""
    income = context.monthly_income or 0.0
    label = _RISK_LABELS[context.risk_category]
    q = question.lower()

    if any(word in q for word in ("budget", "money", "spend")):
        answer = (
            f"Based on your income of ₹{income:,.0f}, I recommend following the 50-30-20 rule: "
            f"allocate 50% for needs (₹{income * 0.5:,.0f}), 30% for wants (₹{income * 0.3:,.0f}), "
            f"and 20% for savings (₹{income * 0.2:,.0f})."
        )
    elif any(word in q for word in ("invest", "stock", "mutual fund")):
        answer = (
            f"With your {label.lower()} risk profile, consider diversifying across "
            f"{_INVESTMENT_MIX[context.risk_category]}. Start with small amounts and "
            "gradually increase your investments."
        )
    elif any(word in q for word in ("save", "emergency")):
        answer = (
            "Aim to build an emergency fund covering 6 months of expenses first. Then consider "
            f"investing ₹{income * 0.2:,.0f} monthly in a diversified portfolio matching your "
            "risk tolerance."
        )
    else:
        answer = (
            "Thank you for your question! While I'm currently running in demo mode, I recommend "
            "consulting with a financial advisor for personalized advice. General tips: maintain "
            "an emergency fund, diversify investments, and stick to your budget plan."
        )
    return answer


class GeminiAdvisor:
    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-1.5-flash-latest",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout_seconds: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = (api_key or "").strip() or None
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        if not self.api_key:
            logger.warning("⚠️ Gemini API key not set; advice will use fallback responses")

    async def ask(self, question: str, context: AdviceContext) -> Advice:
        if not self.api_key:
            return Advice(fallback_advice(question, context), "fallback")

        text = await self._generate(build_prompt(question, context))
        if not text:
            logger.warning("Gemini unavailable, answering with fallback advice")
            return Advice(fallback_advice(question, context), "fallback")
        return Advice(text, "gemini")

    async def _generate(self, prompt: str) -> Optional[str]:
        url = f"{self.base_url}/models/{self.model}:generateContent"
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": GENERATION_CONFIG,
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(url, params={"key": self.api_key}, json=body)
                if response.status_code != 200:
                    logger.warning(f"Gemini API {response.status_code}")
                    return None
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(f"Gemini request failed: {exc}")
            return None

        try:
            parts = payload["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError):
            logger.warning("Gemini response had no candidates")
            return None
        text = "".join(part.get("text", "") for part in parts).strip()
        return text or None
