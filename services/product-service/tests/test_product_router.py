"""
Tests for the product HTTP API.

Tests cover:
- Create / get / replace / delete round trips through the in-memory Redis
- Cursor pagination over /products
- Mapping of domain errors onto HTTP status codes
- Request validation
"""

import json
import uuid
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from fastapi import status

from app.app import app
from app.dependencies import get_product_repository
from app.domain.entities import Product
from app.domain.exceptions import (
    ProductDecodeException,
    ProductEncodeException,
    StoreException,
)
from app.repositories.keys import product_key
from app.repositories.product_codec import encode_product

PRODUCTS_URL = "/api/v1/products"


@pytest.fixture
def mug_payload():
    return {
        "name": "Mug",
        "description": "Ceramic mug, 350ml",
        "price": "9.99",
        "stock_quantity": 100,
    }


@pytest.fixture
def failing_repository():
    """Repository whose every operation fails, installed as a dependency override."""
    repository = AsyncMock()
    app.dependency_overrides[get_product_repository] = lambda: repository
    yield repository
    app.dependency_overrides.clear()


class TestCreateAndGet:
    """Test POST and GET by id."""

    def test_create_assigns_id(self, client, mug_payload):
        response = client.post(PRODUCTS_URL, json=mug_payload)

        assert response.status_code == 201
        data = response.json()
        assert uuid.UUID(data["product_id"])
        assert data["name"] == "Mug"
        assert data["price"] == "9.99"

    def test_create_then_get(self, client, mug_payload):
        created = client.post(PRODUCTS_URL, json=mug_payload).json()

        response = client.get(f"{PRODUCTS_URL}/{created['product_id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_create_with_explicit_id(self, client, fake_redis, mug_payload):
        product_id = str(uuid.uuid4())

        response = client.post(PRODUCTS_URL, json={**mug_payload, "product_id": product_id})

        assert response.status_code == 201
        assert response.json()["product_id"] == product_id
        assert product_key(uuid.UUID(product_id)) in fake_redis.strings

    def test_create_duplicate_id(self, client, mug_payload):
        body = {**mug_payload, "product_id": str(uuid.uuid4())}
        client.post(PRODUCTS_URL, json=body)

        response = client.post(PRODUCTS_URL, json={**body, "name": "Other"})

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "already_exists"
        assert client.get(f"{PRODUCTS_URL}/{body['product_id']}").json()["name"] == "Mug"

    @pytest.mark.parametrize(
        "override",
        [
            {"stock_quantity": -1},
            {"price": "-1"},
            {"price": "NaN"},
            {"name": ""},
            {"product_id": "not-a-uuid"},
        ],
    )
    def test_create_invalid_body(self, client, mug_payload, override):
        response = client.post(PRODUCTS_URL, json={**mug_payload, **override})

        assert response.status_code == 422

    def test_get_unknown(self, client):
        response = client.get(f"{PRODUCTS_URL}/{uuid.uuid4()}")

        assert response.status_code == 404
        detail = response.json()["detail"]
        assert detail["success"] is False
        assert detail["error"] == "not_found"

    def test_get_invalid_id(self, client):
        response = client.get(f"{PRODUCTS_URL}/not-a-uuid")

        assert response.status_code == 422


class TestUpdate:
    """Test PUT."""

    def test_replace_existing(self, client, mug_payload):
        created = client.post(PRODUCTS_URL, json=mug_payload).json()
        url = f"{PRODUCTS_URL}/{created['product_id']}"
        replacement = {"name": "Big mug", "price": "12.50", "stock_quantity": 3}

        response = client.put(url, json=replacement)

        assert response.status_code == 200
        fetched = client.get(url).json()
        assert fetched["name"] == "Big mug"
        assert fetched["description"] == ""
        assert fetched["price"] == "12.50"
        assert fetched["stock_quantity"] == 3

    def test_replace_unknown(self, client, fake_redis, mug_payload):
        response = client.put(f"{PRODUCTS_URL}/{uuid.uuid4()}", json=mug_payload)

        assert response.status_code == 404
        assert fake_redis.strings == {}

    def test_replace_with_mismatched_body_id(self, client, mug_payload):
        created = client.post(PRODUCTS_URL, json=mug_payload).json()

        response = client.put(
            f"{PRODUCTS_URL}/{created['product_id']}",
            json={**mug_payload, "product_id": str(uuid.uuid4())},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "validation_error"


class TestDelete:
    """Test DELETE."""

    def test_delete_then_gone(self, client, mug_payload):
        created = client.post(PRODUCTS_URL, json=mug_payload).json()
        url = f"{PRODUCTS_URL}/{created['product_id']}"

        assert client.delete(url).status_code == 204
        assert client.get(url).status_code == 404
        assert client.delete(url).status_code == 404


class TestList:
    """Test GET /products."""

    def test_empty(self, client):
        response = client.get(PRODUCTS_URL)

        assert response.status_code == 200
        assert response.json() == {"products": [], "cursor": 0}

    def test_paginates_until_cursor_zero(self, client, mug_payload):
        created = {
            client.post(PRODUCTS_URL, json={**mug_payload, "name": name}).json()["product_id"]
            for name in ("Mug", "Cup", "Plate")
        }

        seen = []
        cursor = 0
        while True:
            page = client.get(PRODUCTS_URL, params={"cursor": cursor, "size": 2}).json()
            assert len(page["products"]) <= 2
            seen.extend(p["product_id"] for p in page["products"])
            cursor = page["cursor"]
            if cursor == 0:
                break

        assert sorted(seen) == sorted(created)

    @pytest.mark.parametrize("params", [{"size": 0}, {"size": 1000}, {"cursor": -1}])
    def test_invalid_query(self, client, params):
        response = client.get(PRODUCTS_URL, params=params)

        assert response.status_code == 422


class TestStoredRecords:
    """Records outside the request limits are still served."""

    def store(self, fake_redis, product_id, record):
        key = product_key(product_id)
        fake_redis.strings[key] = json.dumps(record).encode()
        fake_redis.sets.setdefault("products", set()).add(key)

    def test_get_record_outside_input_limits(self, client, fake_redis):
        product_id = uuid.uuid4()
        product = Product(
            product_id=product_id,
            name="",
            description="",
            price=Decimal("-1"),
            stock_quantity=0,
        )
        fake_redis.strings[product_key(product_id)] = encode_product(product)

        response = client.get(f"{PRODUCTS_URL}/{product_id}")

        assert response.status_code == 200
        assert response.json()["name"] == ""
        assert response.json()["price"] == "-1"

    def test_list_includes_legacy_records(self, client, fake_redis):
        long_id, legacy_id = uuid.uuid4(), uuid.uuid4()
        self.store(
            fake_redis,
            long_id,
            {
                "product_id": str(long_id),
                "name": "x" * 300,
                "description": "",
                "price": "5.00",
                "stock_quantity": 1,
            },
        )
        self.store(
            fake_redis,
            legacy_id,
            {
                "product_id": str(legacy_id),
                "name": "Old mug",
                "description": "",
                "price": -2.5,
                "stock_quantity": 1,
            },
        )

        response = client.get(PRODUCTS_URL, params={"size": 100})

        assert response.status_code == 200
        by_id = {p["product_id"]: p for p in response.json()["products"]}
        assert len(by_id[str(long_id)]["name"]) == 300
        assert by_id[str(legacy_id)]["price"] == "-2.5"


class TestErrorMapping:
    """Domain errors map onto HTTP status codes."""

    def test_store_failure_is_503(self, client, failing_repository):
        failing_repository.get_by_id.side_effect = StoreException(
            "get", "product:x", "Connection refused"
        )

        response = client.get(f"{PRODUCTS_URL}/{uuid.uuid4()}")

        assert response.status_code == 503
        assert response.json()["detail"]["error"] == "store_unavailable"

    def test_corrupt_page_is_500(self, client, failing_repository):
        failing_repository.get_all.side_effect = ProductDecodeException("product:x", "bad")

        response = client.get(PRODUCTS_URL)

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail["error"] == "decode_error"
        assert detail["details"]["key"] == "product:x"

    def test_store_failure_on_create(self, client, failing_repository, mug_payload):
        failing_repository.insert.side_effect = StoreException("insert", "product:x")

        response = client.post(PRODUCTS_URL, json=mug_payload)

        assert response.status_code == 503

    def test_encode_failure_is_422(self, client, failing_repository, mug_payload):
        failing_repository.insert.side_effect = ProductEncodeException(
            "3fa85f64-5717-4562-b3fc-2c963f66afa6", "not serializable"
        )

        response = client.post(PRODUCTS_URL, json=mug_payload)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert response.json()["detail"]["error"] == "encode_error"


class TestServiceEndpoints:
    """Request id, metrics and shutdown handling."""

    def test_request_id_echoed(self, client):
        response = client.get(PRODUCTS_URL, headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"

    def test_metrics(self, client):
        client.get(PRODUCTS_URL)

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "product_service_requests_total" in response.text

    def test_root(self, client):
        assert client.get("/").json()["products"] == PRODUCTS_URL

    def test_requests_rejected_while_shutting_down(self, client):
        app.state.is_shutting_down = True
        try:
            assert client.get(PRODUCTS_URL).status_code == 503
            assert client.get("/api/v1/health").status_code == 200
        finally:
            app.state.is_shutting_down = False
