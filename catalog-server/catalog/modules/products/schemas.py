"""Query options for listing products."""

from __future__ import annotations

from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .exceptions import ProductValidationError

SortField = Literal["name", "price", "created_at", "updated_at"]
SortOrder = Literal["asc", "desc"]


class ProductQuery(BaseModel):
    """Closed set of filter and sort options.

    Field aliases accept the query-string spelling used by HTTP clients
    (``minPrice``, ``maxPrice``, ``sort``, ``order``).
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    name: Optional[str] = None
    min_price: Optional[float] = Field(default=None, ge=0, alias="minPrice")
    max_price: Optional[float] = Field(default=None, ge=0, alias="maxPrice")
    sort_field: Optional[SortField] = Field(default=None, alias="sort")
    sort_order: SortOrder = Field(default="asc", alias="order")

    @model_validator(mode="after")
    def _check_price_range(self) -> "ProductQuery":
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValueError("minPrice must not exceed maxPrice")
        return self


def parse_product_query(raw: ProductQuery | Mapping[str, Any] | None) -> ProductQuery | ProductValidationError:
    if raw is None:
        return ProductQuery()
    if isinstance(raw, ProductQuery):
        return raw
    try:
        # Blank query-string values mean "not supplied".
        supplied = {key: value for key, value in raw.items() if value not in (None, "")}
        return ProductQuery.model_validate(supplied)
    except ValidationError as exc:
        messages = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'query'}: {error['msg']}"
            for error in exc.errors()
        )
        return ProductValidationError(f"Invalid product query: {messages}")
