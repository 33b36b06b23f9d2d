"""Product catalog domain exports."""

from .exceptions import ProductError, ProductNotFoundError, ProductStorageError, ProductValidationError
from .models import UNSET, Product, ProductDraft, ProductPatch, UploadedAsset, canonical_product_id, is_valid_product_id
from .schemas import ProductQuery, parse_product_query
from .service import ProductService

__all__ = [
    "UNSET",
    "Product",
    "ProductDraft",
    "ProductPatch",
    "ProductQuery",
    "ProductService",
    "UploadedAsset",
    "ProductError",
    "ProductNotFoundError",
    "ProductStorageError",
    "ProductValidationError",
    "canonical_product_id",
    "is_valid_product_id",
    "parse_product_query",
]
