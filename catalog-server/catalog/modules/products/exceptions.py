"""Product domain errors.

These are returned as values by the repository and the service rather than
raised, so callers branch with ``isinstance(result, ProductError)``.
"""


class ProductError(Exception):
    """Base class for product domain errors."""

    client_fault = False


class ProductValidationError(ProductError):
    """Raised when query parameters are malformed."""

    client_fault = True


class ProductNotFoundError(ProductError):
    """Raised when the identifier is malformed or matches no product."""

    client_fault = True

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class ProductStorageError(ProductError):
    """Raised when the record store fails to read or write."""
