"""REST controller for product CRUD operations."""

import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import BaseModel, ConfigDict

from src.models import StoreResult, StoreStatus
from src.services import ProductStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])

_HTTP_STATUS = {
    StoreStatus.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    StoreStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    StoreStatus.DUPLICATE_CODE: status.HTTP_409_CONFLICT,
    StoreStatus.IO_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StoreStatus.PARSE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ProductFields(BaseModel):
    """Product fields accepted in request bodies.

    Everything is optional here; required fields are checked by the store
    when a product is created. Unknown fields are kept.
    """

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Union[int, float]] = None
    thumbnail: Optional[str] = None
    code: Optional[str] = None
    stock: Optional[Union[int, float]] = None


def get_product_store(request: Request) -> ProductStore:
    """Return the store attached to the running application."""
    return request.app.state.product_store


def _raise_for_result(result: StoreResult) -> None:
    if not result.ok:
        raise HTTPException(status_code=_HTTP_STATUS[result.status], detail=result.message)


@router.get("")
async def list_products(store: ProductStore = Depends(get_product_store)) -> List[Dict[str, Any]]:
    result = await store.read()
    _raise_for_result(result)
    return [product.to_dict() for product in result.products]


@router.get("/{product_id}")
async def get_product(
    product_id: int, store: ProductStore = Depends(get_product_store)
) -> Dict[str, Any]:
    result = await store.find(product_id)
    _raise_for_result(result)
    return result.product.to_dict()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    body: ProductFields, store: ProductStore = Depends(get_product_store)
) -> Dict[str, Any]:
    result = await store.add(body.model_dump(exclude_unset=True))
    _raise_for_result(result)
    logger.info(f"Created product {result.product.id} via API")
    return result.product.to_dict()


@router.put("/{product_id}")
async def update_product(
    product_id: int, body: ProductFields, store: ProductStore = Depends(get_product_store)
) -> Dict[str, Any]:
    result = await store.update(product_id, body.model_dump(exclude_unset=True))
    _raise_for_result(result)
    return result.product.to_dict()


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int, store: ProductStore = Depends(get_product_store)
) -> Response:
    result = await store.delete(product_id)
    _raise_for_result(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
