"""Persistence and storage protocols used by the product service."""

from __future__ import annotations

import os
from typing import Any, AsyncIterator, Iterable, Protocol

from .exceptions import ProductNotFoundError, ProductStorageError
from .models import Product, ProductDraft
from .schemas import ProductQuery


class ProductRepository(Protocol):
    async def create(
        self,
        draft: ProductDraft,
        asset_paths: list[str],
    ) -> Product | ProductStorageError:
        ...

    async def get_by_id(self, product_id: str) -> Product | ProductNotFoundError | ProductStorageError:
        ...

    def iter_products(self, query: ProductQuery) -> AsyncIterator[Product]:
        ...

    async def update(
        self,
        product_id: str,
        changes: dict[str, Any],
    ) -> Product | ProductNotFoundError | ProductStorageError:
        ...

    async def delete(self, product_id: str) -> Product | ProductNotFoundError | ProductStorageError:
        ...


class AssetStore(Protocol):
    def normalize(self, path: str | os.PathLike[str]) -> str:
        ...

    async def delete(self, relative_path: str) -> bool:
        ...

    async def delete_many(self, relative_paths: Iterable[str]) -> list[str]:
        ...
