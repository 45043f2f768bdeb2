"""
db/models/product.py

Product catalog table.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import CheckConstraint, Index, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin

NAME_MAX_LENGTH = 255
CATEGORY_MAX_LENGTH = 120
DESCRIPTION_MAX_LENGTH = 2000


class Product(Base, TimestampMixin):
    """
    One sellable catalog item.

    Rows arrive either through the single-record CRUD endpoints or in bulk
    from a CSV upload. There is no uniqueness constraint on name, so the
    same upload ingested twice produces duplicate products.
    """

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)

    description: Mapped[str | None] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH),
        nullable=True,
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        comment="Unit price in the store currency",
    )

    stock: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Units on hand",
    )

    category: Mapped[str] = mapped_column(String(CATEGORY_MAX_LENGTH), nullable=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
        Index("ix_products_name", "name"),
        Index("ix_products_category", "category"),
    )

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r} category={self.category!r}>"
