"""Products routes, including the ObjectId -> raw key fallback."""

from unittest.mock import patch

from bson import ObjectId
from pymongo.errors import PyMongoError


def test_create_stamps_created_at(client, db):
    resp = client.post("/products", json={"title": "Widget", "price": 9.5, "createdAt": "yesterday"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["acknowledged"] is True

    stored = db["products"].find_one({"_id": ObjectId(body["insertedId"])})
    assert stored["title"] == "Widget"
    assert stored["createdAt"] != "yesterday"
    assert hasattr(stored["createdAt"], "year")


def test_create_requires_object_body(client):
    assert client.post("/products", json=["not", "an", "object"]).status_code == 422


def test_list_returns_everything(client, db):
    db["products"].insert_many([{"title": "a"}, {"title": "b"}, {"_id": "sku-1", "title": "c"}])
    resp = client.get("/products")
    assert resp.status_code == 200
    assert sorted(p["title"] for p in resp.json()) == ["a", "b", "c"]


def test_list_empty(client):
    assert client.get("/products").json() == []


class TestGetProduct:
    def test_by_object_id(self, client, db):
        pid = db["products"].insert_one({"title": "a"}).inserted_id
        resp = client.get(f"/products/{pid}")
        assert resp.status_code == 200
        assert resp.json() == {"_id": str(pid), "title": "a"}

    def test_falls_back_to_raw_key(self, client, db):
        db["products"].insert_one({"_id": "sku-1", "title": "raw"})
        resp = client.get("/products/sku-1")
        assert resp.status_code == 200
        assert resp.json()["title"] == "raw"

    def test_hex_raw_key_found_when_no_object_id_matches(self, client, db):
        key = str(ObjectId())
        db["products"].insert_one({"_id": key, "title": "hex string key"})
        resp = client.get(f"/products/{key}")
        assert resp.status_code == 200
        assert resp.json()["title"] == "hex string key"

    def test_created_through_api_with_raw_key(self, client):
        client.post("/products", json={"_id": "sku-2", "title": "posted"})
        assert client.get("/products/sku-2").json()["title"] == "posted"

    def test_missing_is_404(self, client):
        resp = client.get("/products/nothing-here")
        assert resp.status_code == 404
        assert resp.json() == {"error": True, "message": "product not found"}

    def test_missing_object_id_is_404(self, client):
        assert client.get(f"/products/{ObjectId()}").status_code == 404

    def test_persistence_failure_is_500(self, client):
        with patch("innovation_server.api.server.get_product", side_effect=PyMongoError("down")):
            resp = client.get("/products/sku-1")
        assert resp.status_code == 500
        assert resp.json()["error"] is True
