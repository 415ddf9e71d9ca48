"""
Application user lookups used to resolve authenticated callers
"""

from typing import List

from sqlalchemy import select

from product_api.core.logger import logger
from product_api.db.models import AppUser
from product_api.db.session import Database
from product_api.repositories.outcome import Failure, NotFound, Outcome, Success
from product_api.repositories.product import STORE_ERRORS
from product_api.schemas.user import UserRecord


class UserRepository:
    """Repository for application users"""

    def __init__(self, database: Database):
        self.database = database

    async def list_users(self) -> Outcome[List[UserRecord]]:
        try:
            async with self.database.session() as session:
                result = await session.scalars(select(AppUser).order_by(AppUser.id))
                return Success([UserRecord.model_validate(u) for u in result.all()])
        except STORE_ERRORS as e:
            logger.error("DB Error - get all users", error=e, metadata={"event": "list_users"})
            return Failure(str(e))

    async def get_by_id(self, user_id: int) -> Outcome[UserRecord]:
        try:
            async with self.database.session() as session:
                user = await session.get(AppUser, user_id)
        except STORE_ERRORS as e:
            logger.error("DB Error - get user by id", error=e, metadata={"event": "get_user", "user_id": user_id})
            return Failure(str(e))

        if user is None:
            return NotFound()
        return Success(UserRecord.model_validate(user))

    async def get_by_email(self, email: str) -> Outcome[UserRecord]:
        try:
            async with self.database.session() as session:
                user = await session.scalar(select(AppUser).where(AppUser.email == email))
        except STORE_ERRORS as e:
            logger.error("DB Error - get user by email", error=e, metadata={"event": "get_user_by_email"})
            return Failure(str(e))

        if user is None:
            return NotFound()
        return Success(UserRecord.model_validate(user))
