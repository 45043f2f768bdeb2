"""
app/repositories/product_repository.py

Persistence layer for catalog products.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from typing import Any, Mapping, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.schemas.product import ProductCreate, ProductUpdate
from app.validators.product_record_validator import ProductRecordValidator, ProductValidationError
from db.models.product import Product

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ProductStoreError(RuntimeError):
    """
    Base class for failures raised by a product store.
    """


class ProductRecordInvalidError(ProductStoreError):
    """
    Raised when a batch contains records that fail store-level validation.
    """

    def __init__(self, message: str, *, failures: list[dict[str, Any]]) -> None:
        super().__init__(message)
        self.failures = failures


class ProductPersistenceError(ProductStoreError):
    """
    Raised when the database rejects a write.
    """


# ---------------------------------------------------------------------------
# Store contract
# ---------------------------------------------------------------------------


class ProductStore(Protocol):
    """
    Anything that can bulk insert product records.

    insert_many either stores the whole batch and returns the stored rows,
    or raises ProductStoreError having stored nothing.
    """

    def insert_many(self, records: Sequence[Mapping[str, Any]]) -> Sequence[Any]:
        ...


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ProductRepository:
    """
    SQLAlchemy-backed product store.
    """

    def __init__(
        self,
        session: Session,
        *,
        record_validator: ProductRecordValidator | None = None,
    ) -> None:
        self._session = session
        self._record_validator = record_validator or ProductRecordValidator()

    def insert_many(self, records: Sequence[Mapping[str, Any]]) -> list[Product]:
        """
        Validate and insert ``records`` in one transaction.
        """

        if not records:
            return []

        try:
            payloads = self._record_validator.validate_many(records)
        except ProductValidationError as exc:
            raise ProductRecordInvalidError(str(exc), failures=exc.failures) from exc

        products = [Product(**payload.model_dump()) for payload in payloads]
        self._session.add_all(products)
        self._commit("bulk insert")
        logger.info("Inserted products count=%d", len(products))
        return products

    def create(self, payload: ProductCreate) -> Product:
        product = Product(**payload.model_dump())
        self._session.add(product)
        self._commit("create")
        self._session.refresh(product)
        return product

    def list_all(self) -> list[Product]:
        stmt = select(Product).order_by(Product.created_at, Product.id)
        return list(self._session.scalars(stmt).all())

    def get(self, product_id: uuid.UUID) -> Product | None:
        return self._session.get(Product, product_id)

    def update(self, product_id: uuid.UUID, payload: ProductUpdate) -> Product | None:
        """
        Apply the fields set on ``payload``; returns None when the id is unknown.
        """

        product = self.get(product_id)
        if product is None:
            return None

        for field_name, value in payload.model_dump(exclude_unset=True).items():
            if value is None and field_name != "description":
                continue
            setattr(product, field_name, value)

        self._commit("update")
        self._session.refresh(product)
        return product

    def delete(self, product_id: uuid.UUID) -> bool:
        product = self.get(product_id)
        if product is None:
            return False
        self._session.delete(product)
        self._commit("delete")
        return True

    def _commit(self, operation: str) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.error("Product %s failed: %s", operation, exc)
            raise ProductPersistenceError(f"Failed to {operation} products: {exc}") from exc
