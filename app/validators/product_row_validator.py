"""
app/validators/product_row_validator.py

Existence checks applied to parsed CSV rows before they reach the store.

These checks only confirm that the fields are there. Numeric and type
validation is left to the store's own record validation.
"""

from __future__ import annotations

from typing import Any, Mapping

REQUIRED_NON_EMPTY_FIELDS: tuple[str, ...] = ("name", "price", "category")
REQUIRED_PRESENT_FIELDS: tuple[str, ...] = ("stock",)


def is_valid_product_row(row: Mapping[str, Any]) -> bool:
    """
    Return True when ``row`` qualifies as a product record.

    name, price and category must be present and non-empty; stock only has
    to be present, so "0" and "" both pass.
    """

    if any(not row.get(field_name) for field_name in REQUIRED_NON_EMPTY_FIELDS):
        return False
    return all(field_name in row for field_name in REQUIRED_PRESENT_FIELDS)


class ProductRowValidator:
    """
    Injectable wrapper around the row existence rule.
    """

    def is_valid(self, row: Mapping[str, Any]) -> bool:
        return is_valid_product_row(row)

    def missing_fields(self, row: Mapping[str, Any]) -> list[str]:
        """
        List the fields that make ``row`` fail, in a stable order.
        """

        missing = [name for name in REQUIRED_NON_EMPTY_FIELDS if not row.get(name)]
        missing.extend(name for name in REQUIRED_PRESENT_FIELDS if name not in row)
        return missing
