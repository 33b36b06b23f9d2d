"""Product service keeping the record store and the asset files consistent.

The two stores share no transaction. Consistency relies on ordering:

* create normalizes asset paths before the record is written and deletes the
  uploaded files again if the write fails;
* update loads the current record before touching the filesystem, replaces
  all previous assets when new ones arrive (old files are removed *before*
  the write) and deletes the new files if the write fails;
* remove deletes the files first and the record second.

Failures are returned as ``ProductError`` values. File deletion is always
best-effort and never changes the outcome seen by the caller.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Mapping, Sequence

from .exceptions import ProductError, ProductNotFoundError, ProductStorageError, ProductValidationError
from .models import Product, ProductDraft, ProductPatch, UploadedAsset, is_valid_product_id
from .repository import AssetStore, ProductRepository
from .schemas import ProductQuery, parse_product_query

logger = logging.getLogger(__name__)


class ProductService:
    """Coordinates product records and their asset files."""

    def __init__(self, repository: ProductRepository, asset_store: AssetStore) -> None:
        self._repository = repository
        self._asset_store = asset_store

    async def create_product(
        self,
        draft: ProductDraft,
        uploads: Sequence[UploadedAsset] = (),
    ) -> Product | ProductError:
        asset_paths = self._normalize_uploads(uploads)

        result = await self._repository.create(draft, asset_paths)
        if isinstance(result, ProductError):
            await self._discard(asset_paths, reason="create failed")
            return result

        logger.info("Created product %s with %d assets", result.id, len(asset_paths))
        return result

    def list_products(
        self,
        query: ProductQuery | Mapping[str, Any] | None = None,
    ) -> AsyncIterator[Product] | ProductValidationError:
        options = parse_product_query(query)
        if isinstance(options, ProductValidationError):
            return options
        return self._repository.iter_products(options)

    async def get_product(self, product_id: str) -> Product | ProductNotFoundError | ProductStorageError:
        return await self._repository.get_by_id(product_id)

    async def update_product(
        self,
        product_id: str,
        patch: ProductPatch,
        uploads: Sequence[UploadedAsset] = (),
    ) -> Product | ProductError:
        new_paths = self._normalize_uploads(uploads)

        if not is_valid_product_id(product_id):
            await self._discard(new_paths, reason="invalid product id")
            return ProductNotFoundError(product_id)

        current = await self._repository.get_by_id(product_id)
        if isinstance(current, ProductError):
            await self._discard(new_paths, reason="product could not be loaded")
            return current

        # Replace-all: previous assets go away as soon as new ones are supplied.
        # This happens before the write; a failed write cannot bring them back.
        if new_paths and current.asset_paths:
            await self._asset_store.delete_many(current.asset_paths)

        changes = patch.changes()
        if new_paths:
            changes["asset_paths"] = new_paths

        result = await self._repository.update(product_id, changes)
        if isinstance(result, ProductError):
            if new_paths and current.asset_paths:
                logger.warning(
                    "Product %s still references %d deleted assets after a failed update",
                    product_id,
                    len(current.asset_paths),
                )
            await self._discard(new_paths, reason="update failed")
            return result

        logger.info("Updated product %s (%s)", product_id, ", ".join(sorted(changes)) or "no changes")
        return result

    async def remove_product(self, product_id: str) -> Product | ProductNotFoundError | ProductStorageError:
        current = await self._repository.get_by_id(product_id)
        if isinstance(current, ProductError):
            return current

        await self._asset_store.delete_many(current.asset_paths)

        result = await self._repository.delete(product_id)
        if isinstance(result, ProductError):
            logger.error("Assets of product %s were deleted but the record remains: %s", product_id, result)
            return result

        logger.info("Removed product %s and %d assets", product_id, len(current.asset_paths))
        return result

    def _normalize_uploads(self, uploads: Sequence[UploadedAsset]) -> list[str]:
        return [self._asset_store.normalize(upload.temp_path) for upload in uploads]

    async def _discard(self, asset_paths: list[str], *, reason: str) -> None:
        if not asset_paths:
            return
        logger.info("Discarding %d uploaded assets: %s", len(asset_paths), reason)
        orphaned = await self._asset_store.delete_many(asset_paths)
        if orphaned:
            logger.warning("Orphaned asset files left on disk: %s", orphaned)
