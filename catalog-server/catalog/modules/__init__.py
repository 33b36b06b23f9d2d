"""Feature modules."""

from . import products

__all__ = [
    "products",
]
