"""
app/schemas package marker.
"""

from app.schemas.product import (
    MessageResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    ProductUploadResponse,
)

__all__ = [
    "MessageResponse",
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
    "ProductUploadResponse",
]
