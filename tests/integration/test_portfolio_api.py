import pytest

from trackmint.infrastructure.market_data.types import Quote

pytestmark = pytest.mark.integration


async def _add(client, headers, **fields):
    payload = {"symbol": "aapl", "company_name": "Apple Inc", "quantity": 10, "average_buy_price": 100}
    payload.update(fields)
    response = await client.post("/api/v1/portfolio", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def test_add_seeds_initial_purchase(client, user_headers):
    body = await _add(client, user_headers, sector="Technology")
    assert body["symbol"] == "AAPL"
    assert body["quantity"] == 10
    assert body["average_cost"] == 100
    assert body["current_value"] == 1000
    assert body["watchlist"] is False
    assert [t["note"] for t in body["transactions"]] == ["Initial purchase"]


async def test_zero_quantity_is_watchlist_entry(client, user_headers):
    body = await _add(client, user_headers, symbol="TSLA", company_name="Tesla Inc", quantity=0, average_buy_price=None)
    assert body["watchlist"] is True
    assert body["transactions"] == []

    owned = await client.get("/api/v1/portfolio", headers=user_headers)
    assert owned.json() == []
    watchlist = await client.get("/api/v1/portfolio/watchlist", headers=user_headers)
    assert [h["symbol"] for h in watchlist.json()] == ["TSLA"]


async def test_duplicate_symbol_is_409(client, user_headers):
    await _add(client, user_headers)
    response = await client.post(
        "/api/v1/portfolio",
        headers=user_headers,
        json={"symbol": "AAPL", "company_name": "Apple Inc", "quantity": 1, "average_buy_price": 1},
    )
    assert response.status_code == 409
    assert "already exists in portfolio" in response.json()["detail"]


async def test_transactions_recompute_position(client, user_headers):
    holding = await _add(client, user_headers)
    url = f"/api/v1/portfolio/{holding['id']}/transactions"

    response = await client.post(url, headers=user_headers, json={"type": "buy", "quantity": 10, "price": 200})
    assert response.json()["average_cost"] == pytest.approx(150)

    response = await client.post(url, headers=user_headers, json={"type": "sell", "quantity": 5, "price": 250})
    body = response.json()
    assert body["quantity"] == pytest.approx(15)
    assert body["average_cost"] == pytest.approx(150.0)
    assert len(body["transactions"]) == 3


async def test_oversell_is_400(client, user_headers):
    holding = await _add(client, user_headers)
    response = await client.post(
        f"/api/v1/portfolio/{holding['id']}/transactions",
        headers=user_headers,
        json={"type": "sell", "quantity": 11, "price": 120},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot sell more shares than owned"

    unchanged = await client.get(f"/api/v1/portfolio/{holding['id']}", headers=user_headers)
    assert unchanged.json()["quantity"] == 10


async def test_price_update_fires_alert_once(client, user_headers):
    holding = await _add(client, user_headers)
    base = f"/api/v1/portfolio/{holding['id']}"

    response = await client.post(f"{base}/alerts", headers=user_headers, json={"type": "price_above", "value": 200})
    assert response.status_code == 201
    alert_id = response.json()["alerts"][0]["id"]

    response = await client.put(f"{base}/price", headers=user_headers, json={"current_price": 150})
    assert response.json()["triggered_alerts"] == []

    response = await client.put(f"{base}/price", headers=user_headers, json={"current_price": 210})
    body = response.json()
    assert [a["id"] for a in body["triggered_alerts"]] == [alert_id]
    assert body["holding"]["current_value"] == pytest.approx(2100)

    response = await client.put(f"{base}/price", headers=user_headers, json={"current_price": 100})
    body = response.json()
    assert body["triggered_alerts"] == []
    assert body["holding"]["alerts"][0]["triggered"] is True


async def test_price_alert_needs_value(client, user_headers):
    holding = await _add(client, user_headers)
    response = await client.post(
        f"/api/v1/portfolio/{holding['id']}/alerts", headers=user_headers, json={"type": "price_below"}
    )
    assert response.status_code == 422


async def test_alert_toggle(client, user_headers):
    holding = await _add(client, user_headers)
    base = f"/api/v1/portfolio/{holding['id']}"
    created = await client.post(f"{base}/alerts", headers=user_headers, json={"type": "news"})
    alert_id = created.json()["alerts"][0]["id"]

    response = await client.patch(f"{base}/alerts/{alert_id}", headers=user_headers, json={"active": False})
    assert response.json()["alerts"][0]["active"] is False

    response = await client.patch(f"{base}/alerts/9999", headers=user_headers, json={"active": False})
    assert response.status_code == 404


async def test_refresh_price_uses_market_data(client, user_headers, market_data):
    market_data.quotes["AAPL"] = Quote("AAPL", 123.0, 3.0, 2.5)
    holding = await _add(client, user_headers)

    response = await client.post(f"/api/v1/portfolio/{holding['id']}/refresh-price", headers=user_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["holding"]["current_price"] == 123.0
    assert body["source"] == "stub"


async def test_refresh_price_without_quote_is_503(client, user_headers):
    holding = await _add(client, user_headers)
    response = await client.post(f"/api/v1/portfolio/{holding['id']}/refresh-price", headers=user_headers)
    assert response.status_code == 503


async def test_update_metadata_and_toggle_watchlist(client, user_headers):
    holding = await _add(client, user_headers)
    base = f"/api/v1/portfolio/{holding['id']}"

    response = await client.put(base, headers=user_headers, json={"sector": "Technology", "tags": ["core"]})
    assert response.json()["sector"] == "Technology"
    assert response.json()["tags"] == ["core"]

    response = await client.put(base, headers=user_headers, json={"quantity": 999})
    assert response.status_code == 422

    response = await client.post(f"{base}/watchlist", headers=user_headers)
    assert response.json()["watchlist"] is True


async def test_remove_holding(client, user_headers):
    holding = await _add(client, user_headers)
    response = await client.delete(f"/api/v1/portfolio/{holding['id']}", headers=user_headers)
    assert response.status_code == 204

    response = await client.get(f"/api/v1/portfolio/{holding['id']}", headers=user_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Portfolio item not found"


async def test_portfolio_stats(client, user_headers):
    a = await _add(client, user_headers, sector="Technology")
    b = await _add(client, user_headers, symbol="KO", company_name="Coca-Cola Co", quantity=20, average_buy_price=50)
    await client.put(f"/api/v1/portfolio/{a['id']}/price", headers=user_headers, json={"current_price": 150})
    await client.put(f"/api/v1/portfolio/{b['id']}/price", headers=user_headers, json={"current_price": 40})

    response = await client.get("/api/v1/portfolio/stats", headers=user_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["total_holdings"] == 2
    assert body["total_invested"] == pytest.approx(2000)
    assert body["current_value"] == pytest.approx(2300)
    assert body["total_profit_loss_percentage"] == pytest.approx(15)
    assert list(body["sector_breakdown"]) == ["Technology"]
    assert [p["symbol"] for p in body["top_performers"]] == ["AAPL"]
    assert [p["symbol"] for p in body["worst_performers"]] == ["KO"]


async def test_fractional_position_sells_out(client, user_headers):
    holding = await _add(client, user_headers, quantity=0.3)
    url = f"/api/v1/portfolio/{holding['id']}/transactions"

    response = await client.post(url, headers=user_headers, json={"type": "sell", "quantity": 0.1, "price": 100})
    assert response.status_code == 200

    response = await client.post(url, headers=user_headers, json={"type": "sell", "quantity": 0.2, "price": 100})
    assert response.status_code == 200, response.text
    assert response.json()["quantity"] == 0
