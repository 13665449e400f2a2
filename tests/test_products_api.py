# tests/test_products_api.py
import math

NEW_PRODUCT = {"name": "Desk Lamp", "price": 45.5, "category": "Home", "description": "LED lamp"}


def _assert_error(resp, status):
    assert resp.status_code == status
    body = resp.json()
    assert body["error"]["status"] == status
    assert body["error"]["message"]
    assert body["error"]["timestamp"]


def test_root_is_plaintext(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.text == "Products API is running"
    assert r.headers["content-type"].startswith("text/plain")


# ---------------------------
# Create / get
# ---------------------------
def test_create_then_get(client, auth):
    r = client.post("/api/products", json=NEW_PRODUCT, headers=auth)
    assert r.status_code == 201
    created = r.json()
    assert created["inStock"] is True
    assert created["name"] == "Desk Lamp"

    r2 = client.get(f"/api/products/{created['id']}")
    assert r2.status_code == 200
    assert r2.json() == created


def test_create_honours_in_stock_false(client, auth):
    r = client.post("/api/products", json={**NEW_PRODUCT, "inStock": False}, headers=auth)
    assert r.status_code == 201
    assert r.json()["inStock"] is False


def test_create_keeps_integer_price_and_ignores_unknown_keys(client, auth):
    r = client.post("/api/products", json={**NEW_PRODUCT, "price": 80, "id": "mine", "colour": "red"}, headers=auth)
    assert r.status_code == 201
    created = r.json()
    assert created["price"] == 80
    assert isinstance(created["price"], int)
    assert created["id"] != "mine"
    assert "colour" not in created
    assert isinstance(client.get(f"/api/products/{created['id']}").json()["price"], int)


def test_create_invalid_payloads_rejected(client, store, auth):
    before = len(store)
    bad_payloads = [
        {"price": 10, "category": "Home"},
        {"name": "Lamp", "category": "Home"},
        {"name": "Lamp", "price": 10},
        {"name": "", "price": 10, "category": "Home"},
        {"name": "Lamp", "price": "10", "category": "Home"},
        {"name": "Lamp", "price": True, "category": "Home"},
        {"name": "Lamp", "price": 0, "category": "Home"},
        {"name": "Lamp", "price": -3, "category": "Home"},
        {"name": "Lamp", "price": 10, "category": "Home", "inStock": "no"},
        {"name": "Lamp", "price": 10, "category": 5},
        {"name": "Lamp", "price": 10, "category": "Home", "description": 3},
        ["not", "an", "object"],
    ]
    for payload in bad_payloads:
        r = client.post("/api/products", json=payload, headers=auth)
        _assert_error(r, 400)
    assert len(store) == before


def test_create_rejects_malformed_json(client, store, auth):
    before = len(store)
    r = client.post("/api/products", content=b"{not json", headers={**auth, "content-type": "application/json"})
    _assert_error(r, 400)
    headers = {**auth, "content-type": "application/json"}
    for raw in (b'{"name": "Lamp", "price": NaN, "category": "Home"}',
                b'{"name": "Lamp", "price": Infinity, "category": "Home"}'):
        _assert_error(client.post("/api/products", content=raw, headers=headers), 400)
    assert len(store) == before


def test_get_unknown_id_is_404(client):
    r = client.get("/api/products/does-not-exist")
    _assert_error(r, 404)
    assert r.json()["error"]["message"] == "Product not found"


# ---------------------------
# Update / delete
# ---------------------------
def test_update_keeps_id_and_merges(client, auth):
    created = client.post("/api/products", json=NEW_PRODUCT, headers=auth).json()
    payload = {"id": "hijack", "name": "Floor Lamp", "price": 80, "category": "Home"}
    r = client.put(f"/api/products/{created['id']}", json=payload, headers=auth)
    assert r.status_code == 200
    updated = r.json()
    assert updated["id"] == created["id"]
    assert updated["name"] == "Floor Lamp"
    assert updated["price"] == 80
    assert updated["description"] == "LED lamp"
    assert client.get("/api/products/hijack").status_code == 404


def test_update_validates_payload(client, auth):
    created = client.post("/api/products", json=NEW_PRODUCT, headers=auth).json()
    r = client.put(f"/api/products/{created['id']}", json={"name": "x", "price": -1, "category": "Home"}, headers=auth)
    _assert_error(r, 400)
    assert client.get(f"/api/products/{created['id']}").json()["price"] == 45.5


def test_update_unknown_id_is_404(client, auth):
    r = client.put("/api/products/nope", json=NEW_PRODUCT, headers=auth)
    _assert_error(r, 404)


def test_delete(client, store, auth):
    created = client.post("/api/products", json=NEW_PRODUCT, headers=auth).json()
    before = len(store)
    r = client.delete(f"/api/products/{created['id']}", headers=auth)
    assert r.status_code == 204
    assert r.content == b""
    assert len(store) == before - 1
    assert client.get(f"/api/products/{created['id']}").status_code == 404


def test_delete_unknown_id_is_404(client, auth):
    _assert_error(client.delete("/api/products/nope", headers=auth), 404)


# ---------------------------
# Authentication
# ---------------------------
def test_writes_require_api_key(client, store):
    pid = store.list()[0]["id"]
    before = store.list()
    for headers in ({}, {"x-api-key": "wrong"}):
        _assert_error(client.post("/api/products", json=NEW_PRODUCT, headers=headers), 401)
        _assert_error(client.put(f"/api/products/{pid}", json=NEW_PRODUCT, headers=headers), 401)
        _assert_error(client.delete(f"/api/products/{pid}", headers=headers), 401)
    assert store.list() == before


def test_auth_is_checked_before_validation(client):
    r = client.post("/api/products", json={"name": ""}, headers={"x-api-key": "wrong"})
    _assert_error(r, 401)


def test_writes_rejected_when_no_key_configured(store):
    from fastapi.testclient import TestClient
    from app.config import Settings
    from app.main import create_app

    app = create_app(settings=Settings(_env_file=None, api_key=None), store=store)
    with TestClient(app) as c:
        _assert_error(c.post("/api/products", json=NEW_PRODUCT, headers={"x-api-key": "anything"}), 401)


# ---------------------------
# Listing / pagination
# ---------------------------
def test_list_example_from_seed(client):
    r = client.get("/api/products", params={"category": "electronics", "page": 1, "limit": 1})
    assert r.status_code == 200
    body = r.json()
    assert len(body["data"]) == 1
    assert body["currentPage"] == 1
    assert body["totalPages"] == 2
    assert body["totalItems"] == 2


def test_list_defaults_and_category_filter(client, auth):
    client.post("/api/products", json=NEW_PRODUCT, headers=auth)
    body = client.get("/api/products").json()
    assert body["currentPage"] == 1
    assert body["totalItems"] == 3
    assert body["totalPages"] == 1

    only = client.get("/api/products", params={"category": "ELECTRONICS"}).json()
    assert {p["category"] for p in only["data"]} == {"Electronics"}


def test_pagination_windows(client, auth):
    for i in range(23):
        client.post("/api/products", json={**NEW_PRODUCT, "name": f"Lamp {i}"}, headers=auth)
    body = client.get("/api/products", params={"category": "home", "page": 3, "limit": 10}).json()
    assert body["totalItems"] == 23
    assert body["totalPages"] == math.ceil(23 / 10)
    assert [p["name"] for p in body["data"]] == ["Lamp 20", "Lamp 21", "Lamp 22"]

    past_end = client.get("/api/products", params={"page": 9}).json()
    assert past_end["data"] == []


def test_list_empty_category(client):
    body = client.get("/api/products", params={"category": "garden"}).json()
    assert body == {"data": [], "currentPage": 1, "totalPages": 0, "totalItems": 0}


def test_list_bad_pagination_is_400(client):
    _assert_error(client.get("/api/products", params={"page": 0}), 400)
    _assert_error(client.get("/api/products", params={"limit": -5}), 400)
    _assert_error(client.get("/api/products", params={"page": "two"}), 400)


# ---------------------------
# Search / stats
# ---------------------------
def test_search(client, auth):
    client.post("/api/products", json={**NEW_PRODUCT, "description": "Clamps onto a LAPTOP stand"}, headers=auth)
    r = client.get("/api/products/search", params={"q": "laptop"})
    assert r.status_code == 200
    names = sorted(p["name"] for p in r.json())
    assert names == ["Desk Lamp", "Laptop"]


def test_search_requires_query(client):
    _assert_error(client.get("/api/products/search"), 400)
    _assert_error(client.get("/api/products/search", params={"q": ""}), 400)


def test_stats(client, auth):
    client.post("/api/products", json={**NEW_PRODUCT, "inStock": False}, headers=auth)
    r = client.get("/api/products/stats")
    assert r.status_code == 200
    stats = r.json()
    assert stats["totalProducts"] == 3
    assert stats["byCategory"] == {"Electronics": 2, "Home": 1}
    assert sum(stats["byCategory"].values()) == stats["totalProducts"]
    assert stats["inStock"] == 2
    assert stats["outOfStock"] == 1


def test_unknown_route_uses_error_shape(client):
    _assert_error(client.get("/api/nothing-here"), 404)


def test_unexpected_failure_is_500_with_generic_message(store, settings, monkeypatch, caplog):
    from fastapi.testclient import TestClient
    from app.main import create_app

    def broken_stats():
        raise RuntimeError("stats exploded")

    monkeypatch.setattr(store, "stats", broken_stats)
    with TestClient(create_app(settings=settings, store=store), raise_server_exceptions=False) as c:
        with caplog.at_level("ERROR", logger="app.errors"):
            r = c.get("/api/products/stats")
    _assert_error(r, 500)
    assert r.json()["error"]["message"] == "Internal server error"
    assert "stats exploded" not in r.text

    logged = [rec for rec in caplog.records if rec.name == "app.errors"]
    assert len(logged) == 1
    assert logged[0].exc_info is not None
