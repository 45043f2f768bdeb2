"""
app/api/routers package marker.
"""

from app.api.routers.product_upload import router as product_upload_router
from app.api.routers.products import router as products_router

__all__ = [
    "product_upload_router",
    "products_router",
]
