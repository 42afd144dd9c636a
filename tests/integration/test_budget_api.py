import pytest

pytestmark = pytest.mark.integration


async def test_allocation_follows_rule(client, user_headers):
    response = await client.get("/api/v1/budget/allocation", headers=user_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["budget_rule"] == "50-30-20"
    assert body["allocation"] == {"needs": 25000, "wants": 15000, "savings": 10000}


async def test_custom_allocation(client, user_headers):
    await client.put(
        "/api/v1/users/me",
        headers=user_headers,
        json={"budget_rule": "custom", "custom_budget": {"needs": 40, "wants": 40, "savings": 20}},
    )
    response = await client.get("/api/v1/budget/allocation", headers=user_headers)
    assert response.json()["allocation"] == {"needs": 20000, "wants": 20000, "savings": 10000}


async def test_status_tracks_month_spend(client, user_headers):
    for payload in (
        {"title": "Rent", "amount": 12000, "category": "Housing"},
        {"title": "Movie", "amount": 1500, "bucket": "wants"},
        {"title": "SIP", "amount": 5000, "category": "Investment"},
    ):
        response = await client.post("/api/v1/expenses", headers=user_headers, json=payload)
        assert response.status_code == 201

    response = await client.get("/api/v1/budget/status", headers=user_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["needs"]["spent"] == pytest.approx(12000)
    assert body["needs"]["remaining"] == pytest.approx(13000)
    assert body["wants"]["percentage"] == pytest.approx(10)
    assert body["savings"]["invested"] == pytest.approx(5000)
    assert body["savings"]["percentage"] == pytest.approx(50)
