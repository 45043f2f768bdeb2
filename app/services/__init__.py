"""
app/services package marker.
"""

from app.services.product_ingestion_service import (
    ProductIngestionService,
    build_product_ingestion_service,
)

__all__ = [
    "ProductIngestionService",
    "build_product_ingestion_service",
]
