import pytest

pytestmark = pytest.mark.integration


async def test_fallback_advice(client, user_headers):
    response = await client.post(
        "/api/v1/advice", headers=user_headers, json={"question": "How should I budget?"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "fallback"
    assert "₹25,000" in body["answer"]


async def test_empty_question_is_rejected(client, user_headers):
    response = await client.post("/api/v1/advice", headers=user_headers, json={"question": ""})
    assert response.status_code == 422


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["services"]["database"] == "connected"


async def test_root(client):
    response = await client.get("/")
    assert response.json()["docs"] == "/docs"
