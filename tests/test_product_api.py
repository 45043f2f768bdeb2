"""
tests/test_product_api.py

HTTP contract tests for the product routers.

The routers are mounted on a bare FastAPI app with repository, store and
settings dependencies overridden, so no database or environment is needed.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from decimal import Decimal
from typing import Any, Mapping

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api.dependencies import get_product_repository, get_product_store
from app.api.routers import product_upload_router, products_router
from app.api.security import UNAUTHORIZED_MESSAGE, authorize
from app.config import ApiSettings, get_api_settings
from app.repositories.product_repository import ProductPersistenceError
from app.schemas.product import ProductCreate, ProductUpdate
from db.models.product import Product

API_KEY = "test-secret"
AUTH = {"X-API-Key": API_KEY}
CSV_BODY = b"name,price,stock,category\nWidget,9.99,5,Tools\n,1.00,3,Misc\n"


class InMemoryProductRepository:
    """Dict-backed stand-in for ProductRepository."""

    def __init__(self) -> None:
        self.products: dict[uuid.UUID, Product] = {}
        self.insert_error: Exception | None = None

    def insert_many(self, records: Sequence[Mapping[str, Any]]) -> list[Product]:
        if self.insert_error is not None:
            raise self.insert_error
        return [self.create(ProductCreate.model_validate(dict(record))) for record in records]

    def create(self, payload: ProductCreate) -> Product:
        product = Product(id=uuid.uuid4(), **payload.model_dump())
        self.products[product.id] = product
        return product

    def list_all(self) -> list[Product]:
        return list(self.products.values())

    def update(self, product_id: uuid.UUID, payload: ProductUpdate) -> Product | None:
        product = self.products.get(product_id)
        if product is None:
            return None
        for field_name, value in payload.model_dump(exclude_unset=True).items():
            setattr(product, field_name, value)
        return product

    def delete(self, product_id: uuid.UUID) -> bool:
        return self.products.pop(product_id, None) is not None


@pytest.fixture()
def repository() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture()
def client(repository: InMemoryProductRepository) -> TestClient:
    application = FastAPI()
    application.include_router(product_upload_router)
    application.include_router(products_router)
    application.dependency_overrides[get_product_repository] = lambda: repository
    application.dependency_overrides[get_product_store] = lambda: repository
    application.dependency_overrides[get_api_settings] = lambda: ApiSettings(api_key=API_KEY)
    return TestClient(application)


def _upload(client: TestClient, body: bytes, *, headers: dict[str, str] = AUTH) -> Any:
    return client.post(
        "/api/products/upload",
        files={"file": ("products.csv", body, "text/csv")},
        headers=headers,
    )


# ---------------------------------------------------------------------------
# Authorization gate
# ---------------------------------------------------------------------------


class TestAuthorize:
    def test_matching_key_is_allowed(self) -> None:
        assert authorize("abc", "abc")

    @pytest.mark.parametrize(
        ("credential", "expected"),
        [(None, "abc"), ("", "abc"), ("abd", "abc"), ("abc", None), ("abc", "")],
    )
    def test_everything_else_is_denied(self, credential: str | None, expected: str | None) -> None:
        assert not authorize(credential, expected)

    def test_missing_header_is_rejected_before_ingestion(
        self, client: TestClient, repository: InMemoryProductRepository
    ) -> None:
        response = _upload(client, CSV_BODY, headers={})

        assert response.status_code == 401
        assert response.json()["detail"] == {"message": UNAUTHORIZED_MESSAGE}
        assert repository.products == {}

    def test_wrong_key_is_rejected(self, client: TestClient) -> None:
        response = client.post(
            "/api/products",
            json={"name": "Widget", "price": "1", "stock": 1, "category": "Tools"},
            headers={"X-API-Key": "nope"},
        )

        assert response.status_code == 401

    def test_listing_is_public(self, client: TestClient) -> None:
        assert client.get("/api/products").status_code == 200


# ---------------------------------------------------------------------------
# CSV upload
# ---------------------------------------------------------------------------


class TestUpload:
    def test_inserts_qualifying_rows(self, client: TestClient, repository: InMemoryProductRepository) -> None:
        response = _upload(client, CSV_BODY)

        assert response.status_code == 201
        assert response.json() == {
            "message": "Products uploaded",
            "count": 1,
            "total_parsed": 2,
            "total_valid": 1,
        }
        (product,) = repository.products.values()
        assert product.name == "Widget"
        assert product.price == Decimal("9.99")

    def test_header_only_is_an_empty_success(self, client: TestClient) -> None:
        response = _upload(client, b"name,price,stock,category\n")

        assert response.status_code == 201
        assert response.json()["count"] == 0

    def test_parse_error_returns_400(self, client: TestClient, repository: InMemoryProductRepository) -> None:
        response = _upload(client, b'name,price,stock,category\nA,1,1,X\n"B,2,2,Y\n')

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["message"] == "CSV parse error"
        assert detail["error"]
        assert repository.products == {}

    def test_store_failure_returns_500(self, client: TestClient, repository: InMemoryProductRepository) -> None:
        repository.insert_error = ProductPersistenceError("connection lost")

        response = _upload(client, CSV_BODY)

        assert response.status_code == 500
        assert response.json()["detail"] == {
            "message": "Error saving products",
            "error": "connection lost",
        }

    def test_missing_file_returns_400(self, client: TestClient) -> None:
        response = client.post(
            "/api/products/upload",
            files={"attachment": ("notes.txt", b"hello", "text/plain")},
            headers=AUTH,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == {"message": "No file uploaded."}

    def test_file_type_is_not_restricted(
        self, client: TestClient, repository: InMemoryProductRepository
    ) -> None:
        response = client.post(
            "/api/products/upload",
            files={"file": ("export.txt", CSV_BODY, "application/octet-stream")},
            headers=AUTH,
        )

        assert response.status_code == 201
        assert response.json()["count"] == 1
        assert len(repository.products) == 1


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------


class TestCrud:
    def test_create_then_list(self, client: TestClient) -> None:
        created = client.post(
            "/api/products",
            json={"name": "Widget", "price": "2.50", "stock": 4, "category": "Tools"},
            headers=AUTH,
        )

        assert created.status_code == 201
        body = created.json()
        assert body["name"] == "Widget"
        assert body["stock"] == 4

        listed = client.get("/api/products").json()
        assert [item["id"] for item in listed] == [body["id"]]

    def test_create_rejects_negative_price(self, client: TestClient) -> None:
        response = client.post(
            "/api/products",
            json={"name": "Widget", "price": "-1", "stock": 4, "category": "Tools"},
            headers=AUTH,
        )

        assert response.status_code == 422

    def test_update_and_delete(self, client: TestClient, repository: InMemoryProductRepository) -> None:
        product = repository.create(
            ProductCreate(name="Widget", price=Decimal("1"), stock=1, category="Tools")
        )

        updated = client.put(f"/api/products/{product.id}", json={"stock": 9}, headers=AUTH)
        assert updated.status_code == 200
        assert updated.json()["stock"] == 9

        deleted = client.delete(f"/api/products/{product.id}", headers=AUTH)
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Product deleted"}
        assert repository.products == {}

    def test_unknown_product_returns_404(self, client: TestClient) -> None:
        missing = uuid.uuid4()

        assert client.put(f"/api/products/{missing}", json={"stock": 1}, headers=AUTH).status_code == 404
        response = client.delete(f"/api/products/{missing}", headers=AUTH)
        assert response.status_code == 404
        assert response.json()["detail"] == {"message": "Product not found"}
