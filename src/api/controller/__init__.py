"""API controllers."""

from src.api.controller.product_controller import get_product_store
from src.api.controller.product_controller import router as product_router

__all__ = ["get_product_store", "product_router"]
