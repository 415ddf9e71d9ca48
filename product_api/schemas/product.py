"""
Product schemas shared by the API and the data-access layer
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from product_api.db.models import INTEGER_MAX, INTEGER_MIN


class ProductPayload(BaseModel):
    """
    Writable product fields taken from a request body.
    Keys without a matching column are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = Field(None, ge=INTEGER_MIN, le=INTEGER_MAX)
    category_id: Optional[int] = Field(None, ge=INTEGER_MIN, le=INTEGER_MAX)
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = Field(None, ge=INTEGER_MIN, le=INTEGER_MAX)


class ProductRecord(BaseModel):
    """Stored product as returned to callers"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    category_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = None
