import pytest

pytestmark = pytest.mark.integration

GOAL = {
    "title": "Emergency fund",
    "target_amount": 10000,
    "category": "Emergency Fund",
    "target_date": "2030-01-01T00:00:00",
}


async def _create(client, headers, **fields):
    payload = dict(GOAL)
    payload.update(fields)
    response = await client.post("/api/v1/goals", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_generates_quartile_milestones(client, user_headers):
    goal = await _create(client, user_headers)
    assert [m["percentage"] for m in goal["milestones"]] == [25, 50, 75, 100]
    assert [m["amount"] for m in goal["milestones"]] == [2500, 5000, 7500, 10000]
    assert goal["status"] == "active"
    assert goal["days_remaining"] > 0
    assert goal["monthly_required_savings"] > 0


async def test_timezone_aware_target_date_is_accepted(client, user_headers):
    goal = await _create(client, user_headers, target_date="2030-01-01T00:00:00+00:00")
    assert goal["days_remaining"] > 0


async def test_contributions_complete_goal(client, user_headers):
    goal = await _create(client, user_headers)
    url = f"/api/v1/goals/{goal['id']}/contributions"

    response = await client.post(url, headers=user_headers, json={"amount": 2500})
    body = response.json()
    assert body["goal"]["progress_percentage"] == pytest.approx(25)
    assert [m["percentage"] for m in body["achieved_milestones"]] == [25]
    assert body["goal"]["status"] == "active"

    response = await client.post(url, headers=user_headers, json={"amount": 7500, "note": "bonus"})
    body = response.json()
    assert body["goal"]["progress_percentage"] == pytest.approx(100)
    assert [m["percentage"] for m in body["achieved_milestones"]] == [50, 75, 100]
    assert body["goal"]["status"] == "completed"
    assert [c["amount"] for c in body["goal"]["contributions"]] == [2500, 7500]

    response = await client.post(url, headers=user_headers, json={"amount": 1})
    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot contribute to inactive goal"


@pytest.mark.parametrize("amount", [0, -100])
async def test_non_positive_contribution_is_400(client, user_headers, amount):
    goal = await _create(client, user_headers)
    response = await client.post(
        f"/api/v1/goals/{goal['id']}/contributions", headers=user_headers, json={"amount": amount}
    )
    assert response.status_code == 400


async def test_paused_goal_rejects_contribution(client, user_headers):
    goal = await _create(client, user_headers)
    await client.put(f"/api/v1/goals/{goal['id']}", headers=user_headers, json={"status": "paused"})
    response = await client.post(
        f"/api/v1/goals/{goal['id']}/contributions", headers=user_headers, json={"amount": 10}
    )
    assert response.status_code == 400


async def test_retarget_keeps_achieved_flags(client, user_headers):
    goal = await _create(client, user_headers)
    await client.post(f"/api/v1/goals/{goal['id']}/contributions", headers=user_headers, json={"amount": 3000})

    response = await client.put(f"/api/v1/goals/{goal['id']}", headers=user_headers, json={"target_amount": 20000})
    body = response.json()
    assert [m["amount"] for m in body["milestones"]] == [5000, 10000, 15000, 20000]
    assert [m["achieved"] for m in body["milestones"]] == [True, False, False, False]
    assert body["progress_percentage"] == pytest.approx(15)


async def test_current_amount_is_not_editable(client, user_headers):
    goal = await _create(client, user_headers)
    response = await client.put(f"/api/v1/goals/{goal['id']}", headers=user_headers, json={"current_amount": 9999})
    assert response.status_code == 422


async def test_list_filter_and_stats(client, user_headers):
    first = await _create(client, user_headers)
    await _create(client, user_headers, title="Trip", category="Vacation", target_amount=2000)
    await client.post(f"/api/v1/goals/{first['id']}/contributions", headers=user_headers, json={"amount": 10000})

    response = await client.get("/api/v1/goals", headers=user_headers, params={"status": "completed"})
    assert [g["title"] for g in response.json()] == ["Emergency fund"]

    response = await client.get("/api/v1/goals/stats", headers=user_headers)
    stats = response.json()
    assert stats["total_goals"] == 2
    assert stats["completed_goals"] == 1
    assert stats["active_goals"] == 1
    assert stats["total_target"] == pytest.approx(12000)
    assert stats["total_remaining"] == pytest.approx(2000)
    assert stats["average_progress"] == pytest.approx(50)
    assert stats["category_breakdown"]["Vacation"]["count"] == 1


async def test_delete_goal(client, user_headers):
    goal = await _create(client, user_headers)
    assert (await client.delete(f"/api/v1/goals/{goal['id']}", headers=user_headers)).status_code == 204
    response = await client.get(f"/api/v1/goals/{goal['id']}", headers=user_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Goal not found"
