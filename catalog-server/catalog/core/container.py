"""Dependency container wiring the product service and its collaborators."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from catalog.core.config import Settings
from catalog.infrastructure.database import build_engine, build_session_factory, init_db
from catalog.infrastructure.database.repositories import SqlProductRepository
from catalog.infrastructure.storage import LocalAssetStore, UploadReceiver
from catalog.modules.products import ProductService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    asset_store: LocalAssetStore
    upload_receiver: UploadReceiver
    products: ProductService

    @classmethod
    def build(cls, settings: Settings) -> "ApplicationContainer":
        engine = build_engine(settings)
        session_factory = build_session_factory(engine)
        storage = settings.storage
        asset_store = LocalAssetStore(
            settings.asset_root,
            max_concurrency=storage.delete_concurrency,
        )
        upload_receiver = UploadReceiver(
            target_dir=settings.product_storage_dir,
            max_bytes=storage.max_upload_bytes,
            allowed_media_types=frozenset(media_type.lower() for media_type in storage.allowed_media_types),
            max_files=storage.max_files_per_request,
        )
        products = ProductService(SqlProductRepository(session_factory), asset_store)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=session_factory,
            asset_store=asset_store,
            upload_receiver=upload_receiver,
            products=products,
        )

    async def startup(self) -> None:
        self.settings.product_storage_dir.mkdir(parents=True, exist_ok=True)
        if self.settings.database.create_tables:
            await init_db(self.engine)
        logger.info("Catalog ready (assets in %s)", self.settings.asset_root.resolve())

    async def shutdown(self) -> None:
        await self.engine.dispose()


__all__ = ["ApplicationContainer"]
