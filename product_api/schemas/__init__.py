from .product import ProductPayload, ProductRecord
from .user import UserRecord

__all__ = ["ProductPayload", "ProductRecord", "UserRecord"]
