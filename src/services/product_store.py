"""Product store backed by a single JSON file.

Every operation works on the whole collection:
- Reads load and parse the entire file
- Writes serialize the entire collection and replace the file
- Mutations run load, mutate in memory, then save

Failures are logged and reported as a StoreResult; nothing is raised to the
caller. ``load``, ``save`` and ``get_by_id`` reduce those results to an empty
list, nothing, or None.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, List, Mapping, Optional, Sequence, Union

from src.clients import (
    JsonFileClient,
    JsonFileNotFoundError,
    JsonFileParseError,
    JsonFileReadError,
    JsonFileWriteError,
)
from src.config.configuration import StorageConfig, get_config
from src.models import (
    Product,
    ProductFormatError,
    StoreResult,
    StoreStatus,
    missing_required_fields,
)

logger = logging.getLogger(__name__)


def parse_products(data: Any) -> List[Product]:
    """Turn decoded file content into products.

    A blank file (decoded as None) is an empty collection.

    Raises:
        ProductFormatError: If the content is not a list of product objects.
    """
    if data is None:
        return []
    if not isinstance(data, list):
        raise ProductFormatError(f"Products file must contain a list, got {type(data).__name__}")
    return [Product.from_dict(item) for item in data]


class ProductStore:
    """CRUD operations over a flat JSON file of products."""

    def __init__(
        self,
        path: Union[str, Path],
        indent: int = 2,
        encoding: str = "utf-8",
        atomic_writes: bool = True,
        serialize_writes: bool = True,
    ):
        """Initialize the product store.

        Args:
            path: Path to the JSON file holding the products.
            indent: Indentation used when writing the file.
            encoding: Text encoding of the file.
            atomic_writes: Replace the file through a temporary file and rename.
            serialize_writes: Run each load-mutate-save sequence under a lock so
                concurrent mutations on this instance cannot lose updates.
        """
        self._client = JsonFileClient(
            path, indent=indent, encoding=encoding, atomic_writes=atomic_writes
        )
        self._lock: Optional[asyncio.Lock] = asyncio.Lock() if serialize_writes else None

    @classmethod
    def from_config(cls, config: Optional[StorageConfig] = None) -> "ProductStore":
        """Create a store from the storage section of the application config."""
        storage = config or get_config().storage
        return cls(
            storage.products_path,
            indent=storage.indent,
            encoding=storage.encoding,
            atomic_writes=storage.atomic_writes,
            serialize_writes=storage.serialize_writes,
        )

    @property
    def path(self) -> Path:
        return self._client.path

    @asynccontextmanager
    async def _exclusive(self) -> AsyncIterator[None]:
        """Hold the write lock, if enabled, for a load-mutate-save sequence."""
        if self._lock is None:
            yield
            return
        async with self._lock:
            yield

    # -------------------------- whole collection --------------------------

    async def read(self) -> StoreResult:
        """Load all products, reporting read and parse failures."""
        if not self._client.exists():
            logger.debug(f"Products file {self.path} does not exist, starting empty")
            return StoreResult.success([])

        try:
            data = await self._client.read()
        except JsonFileNotFoundError:
            logger.debug(f"Products file {self.path} disappeared, starting empty")
            return StoreResult.success([])
        except JsonFileReadError as e:
            logger.exception(f"Error reading products file: {e}")
            return StoreResult.failure(StoreStatus.IO_ERROR, str(e))
        except JsonFileParseError as e:
            logger.exception(f"Error parsing products file: {e}")
            return StoreResult.failure(StoreStatus.PARSE_ERROR, str(e))

        try:
            products = parse_products(data)
        except ProductFormatError as e:
            logger.exception(f"Invalid products file {self.path}: {e}")
            return StoreResult.failure(StoreStatus.PARSE_ERROR, str(e))

        return StoreResult.success(products)

    async def write(self, products: Sequence[Product]) -> StoreResult:
        """Replace the file with the given products."""
        try:
            await self._client.write([product.to_dict() for product in products])
        except JsonFileWriteError as e:
            logger.exception(f"Error saving products file: {e}")
            return StoreResult.failure(StoreStatus.IO_ERROR, str(e))
        return StoreResult.success(list(products))

    async def load(self) -> List[Product]:
        """Return all products, or an empty list if the file is missing or unreadable."""
        result = await self.read()
        return result.products

    async def save(self, products: Sequence[Product]) -> None:
        """Write all products; failures are logged, not raised."""
        await self.write(products)

    # -------------------------- single products --------------------------

    async def find(self, product_id: int) -> StoreResult:
        """Look up a product by id."""
        current = await self.read()
        if not current.ok:
            return current

        product = next((p for p in current.products if p.id == product_id), None)
        if product is None:
            message = f"Product not found: id={product_id}"
            logger.error(message)
            return StoreResult.failure(StoreStatus.NOT_FOUND, message)
        return StoreResult.success(current.products, product)

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        """Return the product with ``product_id``, or None."""
        result = await self.find(product_id)
        return result.product

    async def add(self, candidate: Mapping[str, Any]) -> StoreResult:
        """Create a product from ``candidate`` and persist it.

        The store assigns the id (highest existing id + 1, or 1); an id in the
        candidate is ignored. Rejected without writing when a required field is
        missing or the code is already used.
        """
        missing = missing_required_fields(candidate)
        if missing:
            message = f"All fields are required, missing: {', '.join(missing)}"
            logger.error(f"Product not added. {message}")
            return StoreResult.failure(StoreStatus.VALIDATION_ERROR, message)

        async with self._exclusive():
            current = await self.read()
            if not current.ok:
                logger.error(f"Product not added, products file unavailable: {current.message}")
                return current

            products = current.products
            code = candidate["code"]
            if any(p.code == code for p in products):
                message = f'Product code "{code}" already exists'
                logger.error(f"Product not added. {message}")
                return StoreResult.failure(StoreStatus.DUPLICATE_CODE, message)

            new_id = max((p.id for p in products), default=0) + 1
            product = Product.from_dict({**candidate, "id": new_id})
            products.append(product)

            saved = await self.write(products)
            if not saved.ok:
                return saved

        logger.info(f"Product added: {product.to_dict()}")
        return StoreResult.success(products, product)

    async def update(self, product_id: int, patch: Mapping[str, Any]) -> StoreResult:
        """Overwrite fields of an existing product; its id never changes."""
        async with self._exclusive():
            current = await self.read()
            if not current.ok:
                logger.error(f"Product not updated, products file unavailable: {current.message}")
                return current

            products = current.products
            index = next((i for i, p in enumerate(products) if p.id == product_id), None)
            if index is None:
                message = f"Product not found: id={product_id}"
                logger.error(message)
                return StoreResult.failure(StoreStatus.NOT_FOUND, message)

            updated = products[index].merged(patch)
            products[index] = updated

            saved = await self.write(products)
            if not saved.ok:
                return saved

        logger.info(f"Product updated: {updated.to_dict()}")
        return StoreResult.success(products, updated)

    async def delete(self, product_id: int) -> StoreResult:
        """Remove the product with ``product_id``."""
        async with self._exclusive():
            current = await self.read()
            if not current.ok:
                logger.error(f"Product not deleted, products file unavailable: {current.message}")
                return current

            remaining = [p for p in current.products if p.id != product_id]
            if len(remaining) == len(current.products):
                message = f"Product not found: id={product_id}"
                logger.error(message)
                return StoreResult.failure(StoreStatus.NOT_FOUND, message)

            removed = next(p for p in current.products if p.id == product_id)
            saved = await self.write(remaining)
            if not saved.ok:
                return saved

        logger.info(f"Product with id {product_id} removed")
        return StoreResult.success(remaining, removed)
