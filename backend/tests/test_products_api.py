"""HTTP tests for the /api/products routes."""

import uuid
from datetime import datetime, timedelta, timezone

from product_api.api.schemas.product import ProductRead

PRODUCTS_URL = "/api/products"


def create_widget(client, **overrides):
    body = {"name": "Widget", "price": 5}
    body.update(overrides)
    response = client.post(PRODUCTS_URL, json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestListProducts:
    def test_empty_catalog_returns_empty_array(self, client):
        response = client.get(PRODUCTS_URL)

        assert response.status_code == 200
        assert response.json() == []

    def test_lists_created_products_in_creation_order(self, client):
        first = create_widget(client, name="First")
        second = create_widget(client, name="Second")

        response = client.get(PRODUCTS_URL)

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [first["id"], second["id"]]


class TestCreateProduct:
    def test_widget_scenario(self, client):
        response = client.post(PRODUCTS_URL, json={"name": "Widget", "price": 5})

        assert response.status_code == 201
        body = response.json()
        assert uuid.UUID(body["id"])
        assert body["name"] == "Widget"
        assert body["price"] == 5
        assert body["quantity"] == 0
        assert body["img"] is None
        assert body["createdAt"]
        assert body["updatedAt"]
        assert set(body) == {
            "id",
            "name",
            "quantity",
            "price",
            "img",
            "createdAt",
            "updatedAt",
        }

    def test_each_create_assigns_a_new_id(self, client):
        a = create_widget(client)
        b = create_widget(client)

        assert a["id"] != b["id"]

    def test_keeps_supplied_quantity_and_img(self, client):
        body = create_widget(client, quantity=7, img="https://cdn.example/w.png")

        assert body["quantity"] == 7
        assert body["img"] == "https://cdn.example/w.png"

    def test_client_supplied_id_is_ignored(self, client):
        supplied = str(uuid.uuid4())
        body = create_widget(client, id=supplied)

        assert body["id"] != supplied

    def test_accepts_form_encoded_body(self, client):
        response = client.post(PRODUCTS_URL, data={"name": "Gadget", "price": "2.5"})

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Gadget"
        assert body["price"] == 2.5
        assert body["quantity"] == 0

    def test_missing_required_fields_are_rejected(self, client):
        response = client.post(PRODUCTS_URL, json={"quantity": 3})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert {e["field"] for e in body["errors"]} == {"name", "price"}
        assert client.get(PRODUCTS_URL).json() == []

    def test_negative_quantity_is_rejected(self, client):
        response = client.post(
            PRODUCTS_URL, json={"name": "Widget", "price": 5, "quantity": -1}
        )

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == ["quantity"]

    def test_blank_name_is_rejected(self, client):
        response = client.post(PRODUCTS_URL, json={"name": "   ", "price": 5})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "name"

    def test_malformed_json_is_rejected(self, client):
        response = client.post(
            PRODUCTS_URL,
            content=b'{"name": "Widget",',
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Malformed request body"}

    def test_non_object_body_is_rejected(self, client):
        response = client.post(PRODUCTS_URL, json=[{"name": "Widget", "price": 5}])

        assert response.status_code == 400
        assert response.json() == {"message": "Request body must be an object"}


class TestGetProduct:
    def test_round_trip(self, client):
        created = create_widget(client, quantity=2, img="w.png")

        response = client.get(f"{PRODUCTS_URL}/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_unknown_id_returns_404(self, client):
        response = client.get(f"{PRODUCTS_URL}/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"message": "Product not found"}

    def test_malformed_id_returns_500_with_message(self, client):
        response = client.get(f"{PRODUCTS_URL}/not-an-id")

        assert response.status_code == 500
        assert "Malformed product id" in response.json()["message"]


class TestUpdateProduct:
    def test_price_update_is_persisted(self, client):
        created = create_widget(client, quantity=4)

        response = client.put(f"{PRODUCTS_URL}/{created['id']}", json={"price": 9.99})

        assert response.status_code == 200
        fetched = client.get(f"{PRODUCTS_URL}/{created['id']}").json()
        assert fetched == response.json()
        assert fetched["price"] == 9.99
        assert fetched["name"] == created["name"]
        assert fetched["quantity"] == 4
        assert fetched["img"] == created["img"]
        assert fetched["createdAt"] == created["createdAt"]
        assert datetime.fromisoformat(fetched["updatedAt"]) >= datetime.fromisoformat(
            created["updatedAt"]
        )

    def test_img_can_be_cleared(self, client):
        created = create_widget(client, img="w.png")

        response = client.put(f"{PRODUCTS_URL}/{created['id']}", json={"img": None})

        assert response.status_code == 200
        assert response.json()["img"] is None

    def test_required_field_cannot_be_nulled(self, client):
        created = create_widget(client)

        response = client.put(f"{PRODUCTS_URL}/{created['id']}", json={"name": None})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "name"

    def test_unknown_id_returns_404(self, client):
        response = client.put(f"{PRODUCTS_URL}/{uuid.uuid4()}", json={"price": 1})

        assert response.status_code == 404
        assert response.json() == {"message": "Product not found"}


class TestDeleteProduct:
    def test_delete_returns_record_and_removes_it(self, client):
        created = create_widget(client)

        response = client.delete(f"{PRODUCTS_URL}/{created['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]
        follow_up = client.get(f"{PRODUCTS_URL}/{created['id']}")
        assert follow_up.status_code == 404
        assert follow_up.json() == {"message": "Product not found"}

    def test_unknown_id_returns_404(self, client):
        response = client.delete(f"{PRODUCTS_URL}/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"message": "Product not found"}


def test_unknown_route_renders_message(client):
    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert "message" in response.json()


class TestTimestampFormat:
    def test_timestamps_are_utc_aware(self, client):
        created = create_widget(client)

        for key in ("createdAt", "updatedAt"):
            parsed = datetime.fromisoformat(created[key])
            assert parsed.utcoffset() == timedelta(0)

    def test_naive_and_offset_values_serialize_as_utc(self):
        naive = datetime(2026, 1, 2, 3, 4, 5)
        offset = datetime(2026, 1, 2, 5, 4, 5, tzinfo=timezone(timedelta(hours=2)))
        product = ProductRead(
            id="p1",
            name="Widget",
            quantity=0,
            price=5.0,
            created_at=naive,
            updated_at=offset,
        )

        body = product.model_dump(mode="json", by_alias=True)

        assert body["createdAt"] == "2026-01-02T03:04:05+00:00"
        assert body["updatedAt"] == "2026-01-02T03:04:05+00:00"
