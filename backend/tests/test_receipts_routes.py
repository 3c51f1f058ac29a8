from __future__ import annotations

import uuid

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from receipt_points.api.dependencies import get_receipt_store
from receipt_points.api.routes.receipts import router as receipts_router
from receipt_points.services.receipt_store import ReceiptStore


def test_process_then_points_round_trip(client, target_payload):
    resp = client.post("/receipts/process", json=target_payload)
    assert resp.status_code == 200
    receipt_id = resp.json()["id"]
    assert uuid.UUID(receipt_id)

    resp = client.get(f"/receipts/{receipt_id}/points")
    assert resp.status_code == 200
    assert resp.json() == {"points": 28}


def test_corner_market_points(client, corner_market_payload):
    receipt_id = client.post("/receipts/process", json=corner_market_payload).json()["id"]
    assert client.get(f"/receipts/{receipt_id}/points").json() == {"points": 109}


def test_points_are_stable_across_lookups(client, target_payload):
    receipt_id = client.post("/receipts/process", json=target_payload).json()["id"]
    first = client.get(f"/receipts/{receipt_id}/points").json()
    second = client.get(f"/receipts/{receipt_id}/points").json()
    assert first == second


def test_missing_items_key_is_accepted(client, target_payload):
    target_payload.pop("items")
    resp = client.post("/receipts/process", json=target_payload)
    assert resp.status_code == 200


def test_invalid_field_is_rejected_and_not_stored(app, client, target_payload):
    target_payload["purchaseDate"] = "2023-02-30"
    resp = client.post("/receipts/process", json=target_payload)
    assert resp.status_code == 400
    body = resp.json()
    assert body["detail"] == "The receipt is invalid."
    assert body["errors"][0]["field"] == "purchaseDate"
    assert len(app.state.receipt_store) == 0


def test_invalid_item_is_rejected(client, target_payload):
    target_payload["items"][1]["price"] = "12.5"
    resp = client.post("/receipts/process", json=target_payload)
    assert resp.status_code == 400
    assert [e["field"] for e in resp.json()["errors"]] == ["items[1].price"]


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "{",
        "[]",
        '{"retailer": "Target"}',
        '{"retailer": 7, "purchaseDate": "2022-01-01", "purchaseTime": "13:01", "total": "1.00"}',
    ],
)
def test_malformed_body_is_rejected(app, client, content):
    resp = client.post(
        "/receipts/process",
        content=content,
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "The receipt is invalid."
    assert len(app.state.receipt_store) == 0


def test_unknown_id_is_not_found(client):
    resp = client.get(f"/receipts/{uuid.uuid4()}/points")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "No receipt found for that ID."


def test_empty_id_is_not_found(client):
    assert client.get("/receipts//points").status_code == 404


def test_wrong_method_is_not_allowed(client):
    assert client.get("/receipts/process").status_code == 405


def test_each_app_has_its_own_store(target_payload):
    from receipt_points.api.main import create_app

    first, second = TestClient(create_app()), TestClient(create_app())
    receipt_id = first.post("/receipts/process", json=target_payload).json()["id"]
    assert second.get(f"/receipts/{receipt_id}/points").status_code == 404


def test_router_uses_overridden_store(target_payload):
    store = ReceiptStore()
    app = FastAPI()
    app.include_router(receipts_router)
    app.dependency_overrides[get_receipt_store] = lambda: store
    client = TestClient(app)

    receipt_id = client.post("/receipts/process", json=target_payload).json()["id"]
    assert receipt_id in store
    assert client.get(f"/receipts/{receipt_id}/points").json() == {"points": 28}


def test_snake_case_keys_are_rejected(app, client):
    payload = {
        "retailer": "Target",
        "purchase_date": "2022-01-01",
        "purchase_time": "13:01",
        "total": "1.00",
        "items": [{"short_description": "Gum", "price": "1.00"}],
    }
    resp = client.post("/receipts/process", json=payload)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "The receipt is invalid."
    assert len(app.state.receipt_store) == 0
