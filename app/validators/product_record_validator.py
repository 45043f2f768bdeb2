"""
app/validators/product_record_validator.py

Store-level validation: turns loosely typed product mappings into typed
ProductCreate payloads, or reports why they cannot be stored.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Mapping

from pydantic import ValidationError

from app.schemas.product import ProductCreate


class ProductValidationError(ValueError):
    """
    Raised when one or more records fail store-level validation.
    """

    def __init__(self, message: str, *, failures: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.failures = failures or []


class ProductRecordValidator:
    """
    Validates product records against the ProductCreate schema.
    """

    def validate_many(self, records: Sequence[Mapping[str, Any]]) -> list[ProductCreate]:
        """
        Validate every record; raise once, listing all failures.

        Indexes in the error are 1-based positions within ``records``.
        """

        validated: list[ProductCreate] = []
        failures: list[dict[str, Any]] = []
        messages: list[str] = []

        for index, record in enumerate(records, start=1):
            try:
                validated.append(ProductCreate.model_validate(dict(record)))
            except ValidationError as exc:
                failures.append({"index": index, "fields": _failed_fields(exc)})
                messages.append(f"record {index}: {_describe(exc)}")

        if failures:
            shown = "; ".join(messages[:5])
            if len(messages) > 5:
                shown += f"; and {len(messages) - 5} more"
            raise ProductValidationError(
                f"Product validation failed for {len(failures)} record(s): {shown}",
                failures=failures,
            )
        return validated


def _failed_fields(exc: ValidationError) -> list[str]:
    fields: list[str] = []
    for error in exc.errors():
        name = ".".join(str(part) for part in error.get("loc", ())) or "record"
        if name not in fields:
            fields.append(name)
    return fields


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        name = ".".join(str(part) for part in error.get("loc", ())) or "record"
        parts.append(f"{name} {error.get('msg', 'is invalid')}")
    return ", ".join(parts)
