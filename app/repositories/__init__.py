"""
app/repositories package marker.
"""

from app.repositories.product_repository import (
    ProductPersistenceError,
    ProductRecordInvalidError,
    ProductRepository,
    ProductStore,
    ProductStoreError,
)

__all__ = [
    "ProductPersistenceError",
    "ProductRecordInvalidError",
    "ProductRepository",
    "ProductStore",
    "ProductStoreError",
]
