import pytest

pytestmark = pytest.mark.integration


async def test_register_and_read_profile(client, user_headers):
    response = await client.get("/api/v1/users/me", headers=user_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "asha@example.com"
    assert body["full_name"] == "Asha Rao"
    assert body["budget_rule"] == "50-30-20"
    assert body["custom_budget"] == {"needs": 50.0, "wants": 30.0, "savings": 20.0}
    assert body["profile_complete"] is False


async def test_duplicate_email_conflicts(client, user_headers):
    response = await client.post(
        "/api/v1/users",
        json={"email": "ASHA@example.com", "first_name": "A", "last_name": "R"},
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "User already exists with this email"


async def test_update_completes_profile(client, user_headers):
    response = await client.put(
        "/api/v1/users/me",
        headers=user_headers,
        json={"monthly_income": 80000, "risk_appetite": "aggressive", "occupation": "Engineer"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["monthly_income"] == 80000
    assert body["risk_appetite"] == "aggressive"
    assert body["profile_complete"] is True


async def test_custom_budget_must_sum_to_100(client, user_headers):
    response = await client.put(
        "/api/v1/users/me",
        headers=user_headers,
        json={"budget_rule": "custom", "custom_budget": {"needs": 60, "wants": 30, "savings": 20}},
    )
    assert response.status_code == 422


@pytest.mark.parametrize("headers", [{}, {"X-User-Id": "abc"}, {"X-User-Id": "0"}, {"X-User-Id": "-3"}])
async def test_identity_header_is_required(client, headers):
    response = await client.get("/api/v1/users/me", headers=headers)
    assert response.status_code == 401


async def test_unknown_user_is_404(client):
    response = await client.get("/api/v1/users/me", headers={"X-User-Id": "999"})
    assert response.status_code == 404
    assert response.json()["detail"] == "User not found"


async def test_invalid_email_is_rejected(client):
    response = await client.post(
        "/api/v1/users", json={"email": "not-an-email", "first_name": "A", "last_name": "B"}
    )
    assert response.status_code == 422
