"""Translate product query options into a SQLAlchemy select."""

from __future__ import annotations

from sqlalchemy import Select, select

from catalog.infrastructure.database.models import Product
from catalog.modules.products.schemas import ProductQuery

SORTABLE_COLUMNS = {
    "name": Product.name,
    "price": Product.price,
    "created_at": Product.created_at,
    "updated_at": Product.updated_at,
}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_product_statement(query: ProductQuery) -> Select:
    """Build the select for ``query``; no options means all rows in storage order."""
    stmt = select(Product)
    if query.name:
        stmt = stmt.where(Product.name.ilike(f"%{_escape_like(query.name)}%", escape="\\"))
    if query.min_price is not None:
        stmt = stmt.where(Product.price >= query.min_price)
    if query.max_price is not None:
        stmt = stmt.where(Product.price <= query.max_price)
    if query.sort_field is not None:
        column = SORTABLE_COLUMNS[query.sort_field]
        stmt = stmt.order_by(column.desc() if query.sort_order == "desc" else column.asc())
    return stmt
