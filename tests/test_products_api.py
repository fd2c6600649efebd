# tests/test_products_api.py
import logging

import pytest
from fastapi.testclient import TestClient

from app.errors import ApiError


def test_root_welcome(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.text.startswith("Welcome to the Product API")


def test_create_then_get_roundtrip(client, auth, payload, store):
    existing = {p["id"] for p in client.get("/api/products").json()["data"]}
    r = client.post("/api/products", json=payload, headers=auth)
    assert r.status_code == 201
    body = r.json()
    assert body["id"] not in existing
    assert len(store) == 4

    fetched = client.get(f"/api/products/{body['id']}").json()
    assert fetched == {"id": body["id"], **payload}


def test_body_id_is_ignored(client, auth, payload):
    r = client.post("/api/products", json={**payload, "id": "1"}, headers=auth)
    assert r.status_code == 201
    assert r.json()["id"] != "1"


def test_get_unknown_is_404(client):
    r = client.get("/api/products/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_delete_then_get_404(client, auth):
    r = client.delete("/api/products/2", headers=auth)
    assert r.status_code == 200
    assert r.json()["message"] == "Product deleted"
    assert r.json()["product"]["name"] == "Smartphone"
    assert client.get("/api/products/2").status_code == 404
    assert client.delete("/api/products/2", headers=auth).status_code == 404


def test_replace_is_full_overwrite(client, auth, payload):
    r = client.put("/api/products/1", json=payload, headers=auth)
    assert r.status_code == 200
    assert r.json() == {"id": "1", **payload}
    # position kept
    assert client.get("/api/products").json()["data"][0]["id"] == "1"


def test_replace_unknown_is_404(client, auth, payload):
    r = client.put("/api/products/404", json=payload, headers=auth)
    assert r.status_code == 404


# ---------------------------
# Auth gate
# ---------------------------
@pytest.mark.parametrize("headers", [{}, {"x-api-key": "wrong"}, {"x-api-key": ""}])
def test_writes_need_valid_key(client, payload, store, headers):
    for method, url in [("post", "/api/products"), ("put", "/api/products/1")]:
        r = client.request(method, url, json=payload, headers=headers)
        assert r.status_code == 401
        assert r.json() == {"error": "Unauthorized: Invalid API key"}
    assert client.delete("/api/products/1", headers=headers).status_code == 401
    assert len(store) == 3
    assert client.get("/api/products/1").json()["name"] == "Laptop"


def test_auth_runs_before_validation(client):
    r = client.post("/api/products", json={"name": ""})
    assert r.status_code == 401


# ---------------------------
# Validation
# ---------------------------
@pytest.mark.parametrize("change", [
    {"price": None},
    {"price": "35"},
    {"price": True},
    {"name": ""},
    {"description": 7},
    {"category": None},
    {"inStock": "yes"},
    {"inStock": 1},
    {"inStock": None, "in_stock": True},
])
def test_invalid_payload_is_400(client, auth, payload, store, change):
    body = {k: v for k, v in {**payload, **change}.items() if v is not None}
    r = client.post("/api/products", json=body, headers=auth)
    assert r.status_code == 400
    assert r.json() == {"error": "Validation Error: Invalid product data"}
    assert len(store) == 3


def test_non_object_body_is_400(client, auth, store):
    assert client.post("/api/products", json=[1, 2], headers=auth).status_code == 400
    r = client.post("/api/products", content=b"not json", headers={**auth, "content-type": "application/json"})
    assert r.status_code == 400
    assert len(store) == 3


def test_invalid_replace_leaves_record(client, auth, payload):
    r = client.put("/api/products/3", json={**payload, "price": "cheap"}, headers=auth)
    assert r.status_code == 400
    assert client.get("/api/products/3").json()["price"] == 50


# ---------------------------
# List / filter / paginate
# ---------------------------
def test_list_defaults(client):
    body = client.get("/api/products").json()
    assert body["total"] == 3
    assert body["page"] == 1
    assert body["limit"] == 3
    assert [p["id"] for p in body["data"]] == ["1", "2", "3"]


def test_category_filter_is_case_insensitive(client):
    body = client.get("/api/products", params={"category": "ELECTRONICS"}).json()
    assert body["total"] == 2
    assert all(p["category"].lower() == "electronics" for p in body["data"])


def test_page_two_limit_one(client):
    body = client.get("/api/products", params={"page": 2, "limit": 1}).json()
    assert body["total"] == 3
    assert [p["id"] for p in body["data"]] == ["2"]


def test_bad_paging_values_fall_back(client):
    body = client.get("/api/products", params={"page": "abc", "limit": "0"}).json()
    assert body["page"] == 1
    assert body["limit"] == 3
    assert len(body["data"]) == 3


def test_page_past_end_is_empty(client):
    body = client.get("/api/products", params={"page": 5, "limit": 2}).json()
    assert body["total"] == 3
    assert body["data"] == []


# ---------------------------
# Search / stats
# ---------------------------
def test_search_substring(client):
    body = client.get("/api/products/search", params={"name": "PHONE"}).json()
    assert body["total"] == 1
    assert body["data"][0]["name"] == "Smartphone"


def test_search_empty_matches_all(client):
    assert client.get("/api/products/search").json()["total"] == 3
    assert client.get("/api/products/search", params={"name": ""}).json()["total"] == 3


def test_stats_sum_to_total(client, auth, payload):
    client.post("/api/products", json=payload, headers=auth)
    stats = client.get("/api/products/stats").json()
    assert stats == {"electronics": 2, "kitchen": 1, "Lighting": 1}
    assert sum(stats.values()) == client.get("/api/products").json()["total"]


# ---------------------------
# Error translator
# ---------------------------
def test_unknown_route_uses_error_body(client):
    r = client.get("/nowhere")
    assert r.status_code == 404
    assert "error" in r.json()


def test_unexpected_error_is_500(app, store, monkeypatch):
    def boom():
        raise RuntimeError("secret internals")

    monkeypatch.setattr(store, "stats", boom)
    c = TestClient(app, raise_server_exceptions=False)
    r = c.get("/api/products/stats")
    assert r.status_code == 500
    assert r.json() == {"error": "Internal Server Error"}


@pytest.mark.parametrize("price", [b"NaN", b"Infinity", b"-Infinity"])
def test_non_finite_price_is_400(client, auth, store, price):
    body = (b'{"name": "Lamp", "description": "LED lamp", "price": ' + price
            + b', "category": "Lighting", "inStock": true}')
    r = client.post("/api/products", content=body, headers={**auth, "content-type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Validation Error: Invalid product data"}
    assert len(store) == 3
    assert client.get("/api/products").status_code == 200


def test_paging_reads_leading_digits(client):
    body = client.get("/api/products", params={"page": "2abc", "limit": "1.5"}).json()
    assert body["page"] == 2
    assert body["limit"] == 1
    assert [p["id"] for p in body["data"]] == ["2"]


def test_wrong_method_is_405_error_body(client):
    r = client.patch("/api/products/1", json={})
    assert r.status_code == 405
    assert r.json() == {"error": "Method Not Allowed"}


def test_bare_api_error_defaults_to_500(client, store, monkeypatch):
    def broken():
        raise ApiError("store unavailable")

    monkeypatch.setattr(store, "stats", broken)
    r = client.get("/api/products/stats")
    assert r.status_code == 500
    assert r.json() == {"error": "store unavailable"}


def test_rejected_request_is_still_logged(client, payload, caplog):
    caplog.set_level(logging.INFO, logger="app.access")
    r = client.post("/api/products?from=test", json=payload)
    assert r.status_code == 401
    messages = [rec.getMessage() for rec in caplog.records if rec.name == "app.access"]
    assert any("POST /api/products?from=test" in m and "->" not in m for m in messages)
    assert any("POST /api/products?from=test -> 401" in m for m in messages)
