"""
app/api/dependencies.py

Shared FastAPI dependencies for product endpoints.
"""

from __future__ import annotations

from fastapi import Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.repositories.product_repository import ProductRepository, ProductStore
from app.services.product_ingestion_service import (
    ProductIngestionService,
    build_product_ingestion_service,
)
from db.session import get_db


def get_csv_upload(file: UploadFile | None = File(default=None)) -> UploadFile:
    """
    Require a multipart ``file`` field. Any content type is accepted; the
    parser decides whether the bytes are usable CSV.
    """

    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "No file uploaded."},
        )

    return file


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)


def get_product_store(
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductStore:
    return repository


def get_product_ingestion_service(
    store: ProductStore = Depends(get_product_store),
) -> ProductIngestionService:
    return build_product_ingestion_service(store)
