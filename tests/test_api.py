"""
HTTP API tests using FastAPI's TestClient.
"""
import os
import sys

import httpx
import pytest
from fastapi.testclient import TestClient

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from gold_calculator.api import state
from gold_calculator.api.main import app
from gold_calculator.config.settings import reset_settings
from gold_calculator.services.price_feed import GoldPriceService


@pytest.fixture
def client(tmp_path, monkeypatch):
    """Fresh settings (credential file under tmp_path) and a fresh session."""
    for name in ("DEFAULT_PRICE_PER_GRAM", "CURRENCY_SYMBOL", "DEFAULT_LANGUAGE", "QUOTE_TIMEOUT"):
        monkeypatch.delenv(f"GOLD_CALC_{name}", raising=False)
    monkeypatch.setenv("GOLD_CALC_CREDENTIAL_PATH", str(tmp_path / "credential"))
    reset_settings()
    state.reset_state()
    yield TestClient(app)
    reset_settings()


def use_transport(handler):
    service = state.price_service
    state.price_service = GoldPriceService(
        credentials=service.credentials,
        endpoint=service.endpoint,
        page_url=service.page_url,
        timeout=service.timeout,
        transport=httpx.MockTransport(handler),
    )


def test_root(client):
    assert client.get("/").json()["status"] == "online"


def test_calculate_percentage_and_fixed(client):
    resp = client.post("/calculate", json={"items": [
        {"weight": 10, "quantity": 1, "price_per_gram": 60, "tax_mode": "percentage", "tax_value": 5},
        {"weight": 10, "quantity": 2, "price_per_gram": 50, "tax_mode": "fixed", "tax_value": 2},
    ]})
    assert resp.status_code == 200
    data = resp.json()

    assert data["item_count"] == 2
    assert data["lines"][0]["totals"]["total"] == pytest.approx(630)
    assert data["lines"][1]["weight_total"] == 20
    assert data["totals"]["total"] == pytest.approx(1670)


def test_calculate_empty(client):
    data = client.post("/calculate", json={"items": []}).json()
    assert data["totals"] == {"subtotal": 0, "tax": 0, "provider_fee": 0, "total": 0}


@pytest.mark.parametrize("bad", [
    {"weight": -1},
    {"quantity": 0},
    {"tax_mode": "flat"},
    {"provider_fee": -5},
])
def test_calculate_rejects_invalid_items(client, bad):
    resp = client.post("/calculate", json={"items": [bad]})
    assert resp.status_code == 422


def test_calculate_overflowing_item_is_400(client):
    resp = client.post("/calculate", json={"items": [
        {"weight": 1e308, "quantity": 10, "price_per_gram": 60},
    ]})
    assert resp.status_code == 400
    assert "overflow" in resp.json()["detail"]


def test_calculate_overflowing_grand_total_is_400(client):
    big = {"weight": 1e308, "quantity": 1, "price_per_gram": 1}
    resp = client.post("/calculate", json={"items": [big, big]})
    assert resp.status_code == 400


def test_add_overflowing_item_stays_usable(client):
    resp = client.post("/api/items", json={"weight": "1e308", "quantity": "10"})
    assert resp.status_code == 200
    item = resp.json()
    assert item["weight"] == 0
    assert item["quantity"] == 10

    totals = client.get("/api/items/totals")
    assert totals.status_code == 200
    assert totals.json()["totals"]["total"] == 0

    patched = client.patch(f"/api/items/{item['id']}", json={"field": "weight", "value": "1.5"})
    assert patched.status_code == 200
    assert patched.json()["totals"]["subtotal"] == pytest.approx(1.5 * 10 * 60)


def test_bulk_overflowing_totals_is_400(client):
    client.post("/api/items/bulk", json={"text": "1e308, 1, 1"})

    resp = client.post("/api/items/bulk", json={"text": "1e308, 1, 1"})

    assert resp.status_code == 400
    assert len(client.get("/api/items").json()) == 1


def test_add_default_item(client):
    resp = client.post("/api/items")
    assert resp.status_code == 200
    item = resp.json()

    assert item["price_per_gram"] == 60
    assert item["quantity"] == 1
    assert item["tax_mode"] == "percentage"
    assert item["totals"]["total"] == 0


def test_add_item_with_fields(client):
    item = client.post("/api/items", json={
        "weight": "10", "quantity": 2, "price_per_gram": 50, "tax_mode": "fixed", "tax_value": 2,
    }).json()

    assert item["tax_mode"] == "fixed"
    assert item["totals"]["total"] == pytest.approx(1040)


def test_patch_coerces_invalid_input(client):
    item_id = client.post("/api/items").json()["id"]

    weight = client.patch(f"/api/items/{item_id}", json={"field": "weight", "value": "abc"}).json()
    qty = client.patch(f"/api/items/{item_id}", json={"field": "quantity", "value": "-3"}).json()

    assert weight["weight"] == 0
    assert qty["quantity"] == 1


def test_patch_unknown_field_and_item(client):
    item_id = client.post("/api/items").json()["id"]

    assert client.patch(f"/api/items/{item_id}", json={"field": "karat", "value": 18}).status_code == 400
    assert client.patch("/api/items/nope", json={"field": "weight", "value": 1}).status_code == 404
    assert client.get("/api/items/nope").status_code == 404


def test_totals_follow_edits(client):
    a = client.post("/api/items", json={"weight": 10, "tax_value": 5}).json()["id"]
    client.post("/api/items", json={"weight": 1, "provider_fee": 4})

    totals = client.get("/api/items/totals").json()["totals"]
    assert totals["total"] == pytest.approx(630 + 60 + 4)

    client.patch(f"/api/items/{a}", json={"field": "weight", "value": 0})
    totals = client.get("/api/items/totals").json()["totals"]
    assert totals["total"] == pytest.approx(64)


def test_delete_is_idempotent(client):
    item_id = client.post("/api/items").json()["id"]

    first = client.delete(f"/api/items/{item_id}").json()
    second = client.delete(f"/api/items/{item_id}").json()

    assert first["removed"] is True
    assert first["notifications"][0]["title"] == "Item removed"
    assert second == {"removed": False, "notifications": []}
    assert client.get("/api/items").json() == []


def test_bulk_and_clear(client):
    resp = client.post("/api/items/bulk", json={"text": "10, 1, 60, percentage, 5\nnope\n2"}).json()

    assert len(resp["added"]) == 2
    assert resp["rejected"][0]["line"] == 2
    assert len(client.get("/api/items").json()) == 2

    client.delete("/api/items")
    assert client.get("/api/items").json() == []


def test_messages(client):
    data = client.get("/messages/ar").json()
    assert data["direction"] == "rtl"
    assert data["messages"]["item.add"] == "إضافة قطعة"

    assert client.get("/messages/xx").json()["language"] == "en"


def test_quote_without_credential(client):
    resp = client.get("/api/prices/quote")
    assert resp.status_code == 502
    assert resp.json()["detail"]["code"] == "missing_credential"


def test_credential_lifecycle(client):
    assert client.get("/api/prices/credential").json() == {"configured": False}
    assert client.put("/api/prices/credential", json={"api_key": "  "}).status_code == 400

    assert client.put("/api/prices/credential", json={"api_key": "fc-key"}).json() == {"configured": True}
    assert client.get("/api/prices/credential").json() == {"configured": True}

    client.delete("/api/prices/credential")
    assert client.get("/api/prices/credential").json() == {"configured": False}


def test_quote_success_does_not_touch_items(client):
    client.put("/api/prices/credential", json={"api_key": "fc-key"})
    use_transport(lambda request: httpx.Response(200, json={"success": True, "data": {"price": "2650.10"}}))
    item = client.post("/api/items").json()

    resp = client.get("/api/prices/quote")

    assert resp.status_code == 200
    assert resp.json()["data"] == {"price": "2650.10"}
    assert client.get(f"/api/items/{item['id']}").json()["price_per_gram"] == 60


def test_quote_failure_maps_to_502(client):
    client.put("/api/prices/credential", json={"api_key": "fc-key"})
    use_transport(lambda request: httpx.Response(500, json={"error": "boom"}))

    resp = client.get("/api/prices/quote")
    assert resp.status_code == 502
    assert "boom" in resp.json()["detail"]["message"]
