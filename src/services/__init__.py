"""Service layer."""

from src.services.product_store import ProductStore, parse_products

__all__ = ["ProductStore", "parse_products"]
