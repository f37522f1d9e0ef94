"""Data models module."""

from src.models.product import (
    REQUIRED_PRESENT_FIELDS,
    REQUIRED_TRUTHY_FIELDS,
    Product,
    ProductFormatError,
    missing_required_fields,
)
from src.models.store_result import StoreResult, StoreStatus

__all__ = [
    "REQUIRED_PRESENT_FIELDS",
    "REQUIRED_TRUTHY_FIELDS",
    "Product",
    "ProductFormatError",
    "StoreResult",
    "StoreStatus",
    "missing_required_fields",
]
