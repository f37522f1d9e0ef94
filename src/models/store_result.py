"""Result models returned by the product store."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from src.models.product import Product


class StoreStatus(str, Enum):
    """Outcome of a store operation."""

    OK = "ok"
    IO_ERROR = "io_error"  # Backing file unreadable or unwritable
    PARSE_ERROR = "parse_error"  # Stored content is not a valid product list
    VALIDATION_ERROR = "validation_error"  # Required field missing on add
    DUPLICATE_CODE = "duplicate_code"  # Product code already in use on add
    NOT_FOUND = "not_found"  # No product with the requested id


@dataclass(frozen=True)
class StoreResult:
    """Tagged result of a store operation.

    ``products`` carries the collection for reads, ``product`` the record a
    lookup or mutation acted on, ``message`` a human-readable explanation.
    """

    status: StoreStatus
    products: List[Product] = field(default_factory=list)
    product: Optional[Product] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is StoreStatus.OK

    @classmethod
    def success(
        cls,
        products: Optional[List[Product]] = None,
        product: Optional[Product] = None,
        message: str = "",
    ) -> "StoreResult":
        return cls(StoreStatus.OK, list(products or []), product, message)

    @classmethod
    def failure(cls, status: StoreStatus, message: str) -> "StoreResult":
        return cls(status=status, message=message)
