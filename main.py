"""Walk through the product store operations against the configured file."""

import asyncio

from src.config import configure_logging, get_config
from src.services import ProductStore


async def main() -> None:
    config = get_config()
    configure_logging(config.logging)
    store = ProductStore.from_config(config.storage)

    await store.add({
        "title": "Product 1",
        "description": "Description of product 1",
        "price": 100,
        "thumbnail": "https://example.com/img/product-1.png",
        "code": "PROD1",
        "stock": 10,
    })
    await store.add({
        "title": "Product 2",
        "description": "Description of product 2",
        "price": 200,
        "thumbnail": "https://example.com/img/product-2.png",
        "code": "PROD2",
        "stock": 5,
    })

    print("All products:", [p.to_dict() for p in await store.load()])

    product = await store.get_by_id(1)
    print("Product with id 1:", product.to_dict() if product else None)

    await store.update(1, {"price": 150, "stock": 20})
    await store.delete(2)

    print("Updated products:", [p.to_dict() for p in await store.load()])


if __name__ == "__main__":
    asyncio.run(main())
