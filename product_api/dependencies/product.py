"""
Dependency injection for the store handle and repositories
"""

from fastapi import Depends, Request

from product_api.db.session import Database
from product_api.repositories.product import ProductRepository
from product_api.repositories.user import UserRepository


def get_database(request: Request) -> Database:
    """Store handle created by the application lifespan"""
    return request.app.state.database


def get_product_repository(database: Database = Depends(get_database)) -> ProductRepository:
    return ProductRepository(database)


def get_user_repository(database: Database = Depends(get_database)) -> UserRepository:
    return UserRepository(database)
