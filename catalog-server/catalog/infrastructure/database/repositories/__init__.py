"""SQLAlchemy-backed repository implementations."""

from .product_filters import build_product_statement
from .product_repository import SqlProductRepository

__all__ = [
    "SqlProductRepository",
    "build_product_statement",
]
