"""
Product API endpoints.

Each handler runs, in order: identity resolution and the authorization
gate (mutating routes, through `require_capability`), the required-input
check, one repository call, and outcome translation.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from product_api.api.responses import parse_id, require_present, to_response
from product_api.auth.capabilities import ROUTE_CAPABILITIES
from product_api.core.config import Config
from product_api.core.errors import ErrorResponseModel, InputError, InputErrorModel
from product_api.core.logger import logger
from product_api.dependencies.auth import get_caller_identity, require_capability
from product_api.dependencies.product import get_product_repository
from product_api.dependencies.settings import get_settings
from product_api.models.identity import CallerIdentity
from product_api.repositories.product import ProductRepository

PREFIX = "/products"

router = APIRouter()

READ_RESPONSES = {
    400: {"model": InputErrorModel},
    500: {"description": "Data access failure (plain text)"},
}
WRITE_RESPONSES = {
    **READ_RESPONSES,
    403: {"model": ErrorResponseModel},
}

MISSING_PRODUCT = "Bad Request - missing product data"


def _gate(method: str, path: str):
    """Authorization dependency for a write route, taken from the route table"""
    return require_capability(ROUTE_CAPABILITIES[(method, PREFIX + path)])


def _require_product_body(product: Optional[Any]) -> Dict[str, Any]:
    require_present(product, MISSING_PRODUCT)
    if not isinstance(product, dict):
        raise InputError("Bad Request - product data must be a JSON object")
    return product


@router.get("", responses=READ_RESPONSES)
async def list_products(
    identity: CallerIdentity = Depends(get_caller_identity),
    repository: ProductRepository = Depends(get_product_repository),
    settings: Config = Depends(get_settings),
):
    """
    Get all products. Authentication is optional; a bad token is treated
    as no token.
    """
    if identity.is_authenticated:
        logger.info(
            "Product list requested by authenticated user",
            user_id=identity.user_id,
            metadata={"event": "list_products", "email": identity.email},
        )
    return to_response(await repository.find_all(), settings=settings)


@router.get("/bycat/{cat_id}", responses=READ_RESPONSES)
async def list_products_by_category(
    cat_id: str,
    repository: ProductRepository = Depends(get_product_repository),
    settings: Config = Depends(get_settings),
):
    """Get products in a category. An empty category returns an empty list."""
    category_id = parse_id(cat_id, "cat id")
    return to_response(await repository.find_by_category(category_id), settings=settings)


@router.get("/{product_id}", responses={**READ_RESPONSES, 404: {"model": ErrorResponseModel}})
async def get_product(
    product_id: str,
    repository: ProductRepository = Depends(get_product_repository),
    settings: Config = Depends(get_settings),
):
    """Get a product by its id."""
    return to_response(await repository.find_by_id(parse_id(product_id, "product id")), settings=settings)


@router.post("", responses=WRITE_RESPONSES)
async def create_product(
    product: Optional[Any] = Body(None),
    identity: CallerIdentity = Depends(_gate("POST", "")),
    repository: ProductRepository = Depends(get_product_repository),
    settings: Config = Depends(get_settings),
):
    """Add a product. Requires the create capability."""
    data = _require_product_body(product)
    logger.debug("Product data sent", user_id=identity.user_id, metadata={"event": "create_product"})
    return to_response(await repository.upsert(data), settings=settings)


@router.put("", responses=WRITE_RESPONSES)
async def update_product(
    product: Optional[Any] = Body(None),
    identity: CallerIdentity = Depends(_gate("PUT", "")),
    repository: ProductRepository = Depends(get_product_repository),
    settings: Config = Depends(get_settings),
):
    """
    Create or update a product identified by the `id` in the body.
    Requires the update capability.
    """
    data = _require_product_body(product)
    logger.debug("Product data sent", user_id=identity.user_id, metadata={"event": "update_product"})
    return to_response(await repository.upsert(data), settings=settings)


@router.delete("/{product_id}", responses={**WRITE_RESPONSES, 404: {"model": ErrorResponseModel}})
async def delete_product(
    product_id: str,
    identity: CallerIdentity = Depends(_gate("DELETE", "/{product_id}")),
    repository: ProductRepository = Depends(get_product_repository),
    settings: Config = Depends(get_settings),
):
    """Delete a product by id and return it. Requires the delete capability."""
    target = parse_id(product_id, "product id")
    logger.info(
        f"Deleting product {target}",
        user_id=identity.user_id,
        metadata={"event": "delete_product", "product_id": target},
    )
    return to_response(await repository.delete_by_id(target), settings=settings)
