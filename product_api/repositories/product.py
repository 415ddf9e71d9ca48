"""
Product repository for data access following the Repository pattern.

Every method performs at most one logical store operation and reports its
result as an Outcome; store errors are logged and returned as Failure.
"""

from typing import Any, Dict, List

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from product_api.core.logger import logger
from product_api.db.models import Product
from product_api.db.session import Database
from product_api.repositories.outcome import Failure, NotFound, Outcome, Success
from product_api.schemas.product import ProductPayload, ProductRecord

# OverflowError comes unwrapped from drivers given integers outside the column range
STORE_ERRORS = (SQLAlchemyError, ConnectionError, OverflowError)


def _describe_validation_error(exc: ValidationError) -> str:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return f"Invalid product data - {problems}"


class ProductRepository:
    """Repository for product data access operations"""

    def __init__(self, database: Database):
        self.database = database

    async def find_all(self) -> Outcome[List[ProductRecord]]:
        """Get all products ordered by id"""
        try:
            async with self.database.session() as session:
                result = await session.scalars(select(Product).order_by(Product.id))
                products = [ProductRecord.model_validate(p) for p in result.all()]
        except STORE_ERRORS as e:
            logger.error("DB Error - get all products", error=e, metadata={"event": "find_all_products"})
            return Failure(str(e))

        logger.info(
            f"Fetched {len(products)} products",
            metadata={"event": "find_all_products", "count": len(products)},
        )
        return Success(products)

    async def find_by_id(self, product_id: int) -> Outcome[ProductRecord]:
        """Get a single product by id"""
        try:
            async with self.database.session() as session:
                product = await session.get(Product, product_id)
                record = ProductRecord.model_validate(product) if product is not None else None
        except STORE_ERRORS as e:
            logger.error(
                "DB Error - get product by id",
                error=e,
                metadata={"event": "find_product", "product_id": product_id},
            )
            return Failure(str(e))

        if record is None:
            logger.info(
                f"Product {product_id} not found",
                metadata={"event": "find_product", "product_id": product_id},
            )
            return NotFound()
        return Success(record)

    async def find_by_category(self, category_id: int) -> Outcome[List[ProductRecord]]:
        """Get products in a category; an empty category is an empty list"""
        try:
            async with self.database.session() as session:
                result = await session.scalars(
                    select(Product).where(Product.category_id == category_id).order_by(Product.id)
                )
                products = [ProductRecord.model_validate(p) for p in result.all()]
        except STORE_ERRORS as e:
            logger.error(
                "DB Error - get products by category",
                error=e,
                metadata={"event": "find_products_by_category", "category_id": category_id},
            )
            return Failure(str(e))

        logger.info(
            f"Fetched {len(products)} products for category {category_id}",
            metadata={"event": "find_products_by_category", "category_id": category_id, "count": len(products)},
        )
        return Success(products)

    async def upsert(self, data: Dict[str, Any]) -> Outcome[ProductRecord]:
        """
        Create or update a product.

        A payload with an `id` that exists updates the supplied columns of that
        product; otherwise a product is inserted (with the given `id`, if any).
        Repeating the call with the same payload leaves the same stored record.
        """
        try:
            payload = ProductPayload.model_validate(data)
        except ValidationError as e:
            message = _describe_validation_error(e)
            logger.warning(message, metadata={"event": "upsert_product"})
            return Failure(message)

        values = payload.model_dump(exclude_unset=True, exclude={"id"})

        try:
            async with self.database.session() as session:
                product = None
                if payload.id is not None:
                    product = await session.get(Product, payload.id)

                created = product is None
                if created:
                    product = Product(id=payload.id, **values)
                    session.add(product)
                else:
                    for field, value in values.items():
                        setattr(product, field, value)

                await session.commit()
                await session.refresh(product)
                record = ProductRecord.model_validate(product)
        except STORE_ERRORS as e:
            logger.error(
                "DB Error - add or update product",
                error=e,
                metadata={"event": "upsert_product", "product_id": payload.id},
            )
            return Failure(str(e))

        logger.info(
            f"{'Created' if created else 'Updated'} product {record.id}",
            metadata={"event": "create_product" if created else "update_product", "product_id": record.id},
        )
        return Success(record)

    async def delete_by_id(self, product_id: int) -> Outcome[ProductRecord]:
        """Delete a product and return the deleted record"""
        try:
            async with self.database.session() as session:
                product = await session.get(Product, product_id)
                if product is None:
                    record = None
                else:
                    record = ProductRecord.model_validate(product)
                    await session.delete(product)
                    await session.commit()
        except STORE_ERRORS as e:
            logger.error(
                "DB Error - delete product",
                error=e,
                metadata={"event": "delete_product", "product_id": product_id},
            )
            return Failure(str(e))

        if record is None:
            return NotFound()

        logger.info(
            f"Deleted product {product_id}",
            metadata={"event": "delete_product", "product_id": product_id},
        )
        return Success(record)
