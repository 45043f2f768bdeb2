"""
app/api/routers/products.py

Single-record product CRUD endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from app.api.dependencies import get_product_repository
from app.api.security import require_api_key
from app.repositories.product_repository import ProductRepository, ProductStoreError
from app.schemas.product import MessageResponse, ProductCreate, ProductResponse, ProductUpdate

router = APIRouter(prefix="/api/products", tags=["products"])

_NOT_FOUND = {"message": "Product not found"}


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_api_key)],
)
def create_product(
    body: ProductCreate,
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductResponse:
    """
    Create one product.
    """
    try:
        product = repository.create(body)
    except ProductStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Error creating product", "error": str(exc)},
        ) from exc
    return ProductResponse.model_validate(product)


@router.get("", response_model=list[ProductResponse])
def list_products(
    repository: ProductRepository = Depends(get_product_repository),
) -> list[ProductResponse]:
    try:
        products = repository.list_all()
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Error fetching products", "error": str(exc)},
        ) from exc
    return [ProductResponse.model_validate(product) for product in products]


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    dependencies=[Depends(require_api_key)],
)
def update_product(
    product_id: uuid.UUID,
    body: ProductUpdate,
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductResponse:
    """
    Update the supplied fields of one product.

    Raises HTTP 404 when the product does not exist.
    """
    try:
        product = repository.update(product_id, body)
    except ProductStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Error updating product", "error": str(exc)},
        ) from exc
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    return ProductResponse.model_validate(product)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_api_key)],
)
def delete_product(
    product_id: uuid.UUID,
    repository: ProductRepository = Depends(get_product_repository),
) -> MessageResponse:
    try:
        deleted = repository.delete(product_id)
    except ProductStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Error deleting product", "error": str(exc)},
        ) from exc
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)
    return MessageResponse(message="Product deleted")
