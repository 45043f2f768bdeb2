"""
app/api/routers/product_upload.py

CSV bulk import endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from app.api.dependencies import get_csv_upload, get_product_ingestion_service
from app.api.security import require_api_key
from app.domain.product_ingestion import IngestionStages
from app.schemas.product import ProductUploadResponse
from app.services.product_ingestion_service import ProductIngestionService

router = APIRouter(prefix="/api/products", tags=["ingestion"])


@router.post(
    "/upload",
    response_model=ProductUploadResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_api_key)],
)
def upload_products(
    file: UploadFile = Depends(get_csv_upload),
    ingestion_service: ProductIngestionService = Depends(get_product_ingestion_service),
) -> ProductUploadResponse:
    """
    Import every qualifying row of one CSV file as a product.

    A file with no qualifying rows is still a success with count 0.
    """

    try:
        buffer = file.file.read()
    finally:
        file.file.close()

    report = ingestion_service.ingest(buffer)

    if report.failed_stage == IngestionStages.PARSE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "CSV parse error", "error": report.errors[0].detail},
        )
    if report.failed_stage == IngestionStages.INSERT:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Error saving products", "error": report.errors[0].detail},
        )

    return ProductUploadResponse(
        message="Products uploaded",
        count=report.total_inserted,
        total_parsed=report.total_parsed,
        total_valid=report.total_valid,
    )
