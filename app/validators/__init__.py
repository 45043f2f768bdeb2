"""
app/validators package marker.
"""

from app.validators.product_record_validator import ProductRecordValidator, ProductValidationError
from app.validators.product_row_validator import ProductRowValidator, is_valid_product_row

__all__ = [
    "ProductRecordValidator",
    "ProductRowValidator",
    "ProductValidationError",
    "is_valid_product_row",
]
