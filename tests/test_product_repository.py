"""
tests/test_product_repository.py

ProductRepository against a mocked SQLAlchemy session.
"""

from __future__ import annotations

import uuid
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.repositories.product_repository import (
    ProductPersistenceError,
    ProductRecordInvalidError,
    ProductRepository,
    ProductStoreError,
)
from app.schemas.product import ProductCreate, ProductUpdate
from db.models.product import Product


@pytest.fixture()
def session() -> MagicMock:
    return MagicMock(spec=Session)


@pytest.fixture()
def repository(session: MagicMock) -> ProductRepository:
    return ProductRepository(session)


class TestInsertMany:
    def test_empty_batch_touches_nothing(self, repository: ProductRepository, session: MagicMock) -> None:
        assert repository.insert_many([]) == []
        session.commit.assert_not_called()

    def test_inserts_typed_products_in_one_commit(
        self, repository: ProductRepository, session: MagicMock
    ) -> None:
        inserted = repository.insert_many(
            [
                {"name": "Widget", "price": "9.99", "stock": "5", "category": "Tools"},
                {"name": "Gadget", "price": "1.5", "stock": "0", "category": "Toys"},
            ]
        )

        assert [product.name for product in inserted] == ["Widget", "Gadget"]
        assert inserted[0].price == Decimal("9.99")
        assert inserted[1].stock == 0
        session.add_all.assert_called_once()
        session.commit.assert_called_once()

    def test_invalid_record_rejects_whole_batch(
        self, repository: ProductRepository, session: MagicMock
    ) -> None:
        with pytest.raises(ProductRecordInvalidError) as excinfo:
            repository.insert_many(
                [
                    {"name": "Widget", "price": "9.99", "stock": "5", "category": "Tools"},
                    {"name": "Gadget", "price": "free", "stock": "1", "category": "Toys"},
                ]
            )

        assert isinstance(excinfo.value, ProductStoreError)
        assert excinfo.value.failures[0]["index"] == 2
        session.add_all.assert_not_called()
        session.commit.assert_not_called()

    def test_commit_failure_rolls_back(self, repository: ProductRepository, session: MagicMock) -> None:
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("db down"))

        with pytest.raises(ProductPersistenceError):
            repository.insert_many(
                [{"name": "Widget", "price": "9.99", "stock": "5", "category": "Tools"}]
            )

        session.rollback.assert_called_once()


class TestSingleRecordOperations:
    def test_create_commits_and_refreshes(self, repository: ProductRepository, session: MagicMock) -> None:
        product = repository.create(
            ProductCreate(name="Widget", price=Decimal("2.50"), stock=3, category="Tools")
        )

        assert isinstance(product, Product)
        session.add.assert_called_once_with(product)
        session.commit.assert_called_once()
        session.refresh.assert_called_once_with(product)

    def test_update_applies_only_set_fields(self, repository: ProductRepository, session: MagicMock) -> None:
        existing = Product(
            id=uuid.uuid4(), name="Widget", price=Decimal("1.00"), stock=1, category="Tools"
        )
        session.get.return_value = existing

        updated = repository.update(existing.id, ProductUpdate(stock=7))

        assert updated is existing
        assert existing.stock == 7
        assert existing.name == "Widget"
        session.commit.assert_called_once()

    def test_update_unknown_id_returns_none(self, repository: ProductRepository, session: MagicMock) -> None:
        session.get.return_value = None

        assert repository.update(uuid.uuid4(), ProductUpdate(stock=1)) is None
        session.commit.assert_not_called()

    def test_delete(self, repository: ProductRepository, session: MagicMock) -> None:
        existing = Product(id=uuid.uuid4(), name="W", price=Decimal("1"), stock=1, category="T")
        session.get.return_value = existing

        assert repository.delete(existing.id) is True
        session.delete.assert_called_once_with(existing)

    def test_delete_unknown_id(self, repository: ProductRepository, session: MagicMock) -> None:
        session.get.return_value = None

        assert repository.delete(uuid.uuid4()) is False
        session.delete.assert_not_called()
