"""
Order API integration tests
"""
from config.settings import settings


ORDER = {
    "user_id": "user-42",
    "service_type": "translation",
    "page_count": 3,
    "payment_result": "completed",
    "language_from": "es",
    "language_to": "en",
    "payment_intent_id": "pi_123",
}


def test_quote(client, auth_headers):
    response = client.get("/orders/quote", params={"page_count": 3}, headers=auth_headers)
    data = response.json()["data"]
    assert data["price_per_page"] == settings.default_price_per_page
    assert data["total_amount"] == round(3 * settings.default_price_per_page, 2)

    response = client.get(
        "/orders/quote", params={"page_count": 2, "price_per_page": 12.5}, headers=auth_headers
    )
    assert response.json()["data"]["total_amount"] == 25.0


def test_quote_rejects_zero_pages(client, auth_headers):
    response = client.get("/orders/quote", params={"page_count": 0}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_order_flow(client, auth_headers):
    response = client.post("/orders", json=ORDER, headers=auth_headers)

    assert response.status_code == 200
    order = response.json()["data"]
    assert order["status"] == "paid"
    assert order["payment_intent_id"] == "pi_123"

    items = client.get("/orders", params={"user_id": "user-42"}, headers=auth_headers).json()["data"]["items"]
    assert [item["id"] for item in items] == [order["id"]]

    response = client.get(f"/orders/{order['id']}", headers=auth_headers)
    assert response.json()["data"]["total_amount"] == order["total_amount"]


def test_canceled_payment_creates_no_order(client, auth_headers):
    response = client.post("/orders", json=dict(ORDER, payment_result="canceled"), headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"field": "payment_result"}
    assert client.get("/orders", params={"user_id": "user-42"}, headers=auth_headers).json()["data"]["items"] == []


def test_unknown_order(client, auth_headers):
    assert client.get("/orders/missing", headers=auth_headers).status_code == 404
