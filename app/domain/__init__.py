"""
app/domain package marker.
"""

from app.domain.product_ingestion import (
    IngestionError,
    IngestionReport,
    IngestionStages,
    RawRow,
)

__all__ = [
    "IngestionError",
    "IngestionReport",
    "IngestionStages",
    "RawRow",
]
