"""SQLAlchemy implementation for the product repository."""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.infrastructure.database.models import Product as ProductModel
from catalog.modules.products.exceptions import ProductNotFoundError, ProductStorageError
from catalog.modules.products.models import Product, ProductDraft, canonical_product_id
from catalog.modules.products.schemas import ProductQuery

from .product_filters import build_product_statement

logger = logging.getLogger(__name__)


class SqlProductRepository:
    """Each call runs in its own transaction and commits before returning."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create(
        self,
        draft: ProductDraft,
        asset_paths: list[str],
    ) -> Product | ProductStorageError:
        try:
            async with self._session_factory.begin() as session:
                model = ProductModel(
                    name=draft.name,
                    price=draft.price,
                    colors=list(draft.colors or []),
                    description=draft.description,
                    asset_paths=list(asset_paths),
                )
                session.add(model)
                await session.flush()
                await session.refresh(model)
                product = self._to_domain(model)
        except SQLAlchemyError as exc:
            logger.error("Failed to insert product %r: %s", draft.name, exc)
            return ProductStorageError("Create product failed")
        return product

    async def get_by_id(self, product_id: str) -> Product | ProductNotFoundError | ProductStorageError:
        key = canonical_product_id(product_id)
        if key is None:
            return ProductNotFoundError(product_id)
        try:
            async with self._session_factory() as session:
                model = await session.get(ProductModel, key)
        except SQLAlchemyError as exc:
            logger.error("Failed to load product %s: %s", product_id, exc)
            return ProductStorageError("Load product failed")
        if model is None:
            return ProductNotFoundError(product_id)
        return self._to_domain(model)

    async def iter_products(self, query: ProductQuery) -> AsyncIterator[Product]:
        stmt = build_product_statement(query)
        try:
            async with self._session_factory() as session:
                result = await session.stream_scalars(stmt)
                async for model in result:
                    yield self._to_domain(model)
        except SQLAlchemyError as exc:
            logger.error("Failed to list products: %s", exc)
            raise ProductStorageError("List products failed") from exc

    async def update(
        self,
        product_id: str,
        changes: dict[str, Any],
    ) -> Product | ProductNotFoundError | ProductStorageError:
        key = canonical_product_id(product_id)
        if key is None:
            return ProductNotFoundError(product_id)
        try:
            async with self._session_factory.begin() as session:
                model = await session.get(ProductModel, key)
                if model is None:
                    return ProductNotFoundError(product_id)
                for field_name, value in changes.items():
                    setattr(model, field_name, value)
                await session.flush()
                await session.refresh(model)
                product = self._to_domain(model)
        except SQLAlchemyError as exc:
            logger.error("Failed to update product %s: %s", product_id, exc)
            return ProductStorageError("Update product failed")
        return product

    async def delete(self, product_id: str) -> Product | ProductNotFoundError | ProductStorageError:
        key = canonical_product_id(product_id)
        if key is None:
            return ProductNotFoundError(product_id)
        try:
            async with self._session_factory.begin() as session:
                model = await session.get(ProductModel, key)
                if model is None:
                    return ProductNotFoundError(product_id)
                snapshot = self._to_domain(model)
                await session.delete(model)
        except SQLAlchemyError as exc:
            logger.error("Failed to delete product %s: %s", product_id, exc)
            return ProductStorageError("Delete product failed")
        return snapshot

    @staticmethod
    def _to_domain(model: ProductModel) -> Product:
        return Product(
            id=str(model.id),
            name=model.name,
            price=model.price,
            colors=list(model.colors or []),
            description=model.description,
            asset_paths=list(model.asset_paths or []),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
