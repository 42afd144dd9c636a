import httpx
import pytest

from trackmint.domain.models import RiskCategory
from trackmint.infrastructure.ai.gemini_client import (
    AdviceContext,
    GeminiAdvisor,
    build_prompt,
    fallback_advice,
)

CONTEXT = AdviceContext(monthly_income=60000, budget_rule="50-30-20", risk_category=RiskCategory.BALANCED)


def test_prompt_includes_profile():
    prompt = build_prompt("Should I buy index funds?", CONTEXT)
    assert "₹60,000" in prompt
    assert "₹720,000" in prompt
    assert "50-30-20" in prompt
    assert "Balanced" in prompt
    assert "Should I buy index funds?" in prompt


@pytest.mark.parametrize(
    "question,expected",
    [
        ("How should I budget my salary?", "50-30-20 rule"),
        ("Which stock should I pick?", "a mix of stocks, bonds, and mutual funds"),
        ("How much to save for an emergency?", "emergency fund covering 6 months"),
        ("What is life?", "demo mode"),
    ],
)
def test_fallback_branches(question, expected):
    assert expected in fallback_advice(question, CONTEXT)


async def test_no_key_uses_fallback():
    advice = await GeminiAdvisor(api_key=None).ask("budget help", CONTEXT)
    assert advice.source == "fallback"
    assert "₹30,000" in advice.answer


async def test_generate_content_success():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        return httpx.Response(
            200, json={"candidates": [{"content": {"parts": [{"text": "Invest steadily."}]}}]}
        )

    advisor = GeminiAdvisor(api_key="k", model="gemini-test", transport=httpx.MockTransport(handler))
    advice = await advisor.ask("Where to invest?", CONTEXT)

    assert advice.source == "gemini"
    assert advice.answer == "Invest steadily."
    assert "/models/gemini-test:generateContent" in seen["url"]
    assert "key=k" in seen["url"]


async def test_upstream_failure_falls_back():
    advisor = GeminiAdvisor(
        api_key="k", transport=httpx.MockTransport(lambda request: httpx.Response(500))
    )
    advice = await advisor.ask("How do I save more?", CONTEXT)
    assert advice.source == "fallback"


async def test_empty_candidates_fall_back():
    advisor = GeminiAdvisor(
        api_key="k", transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"candidates": []}))
    )
    assert (await advisor.ask("anything", CONTEXT)).source == "fallback"
