"""Shared fixtures: a throwaway SQLite database and asset root per test."""

from __future__ import annotations

from pathlib import Path

import pytest

from catalog.core.config import DatabaseSettings, Settings, StorageSettings
from catalog.infrastructure.database import build_engine, build_session_factory, init_db
from catalog.infrastructure.database.repositories import SqlProductRepository
from catalog.infrastructure.storage import LocalAssetStore
from catalog.modules.products import ProductService, UploadedAsset


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"),
        storage=StorageSettings(asset_root=tmp_path / "uploads"),
    )


@pytest.fixture
def asset_root(settings: Settings) -> Path:
    settings.product_storage_dir.mkdir(parents=True, exist_ok=True)
    return settings.asset_root


@pytest.fixture
def asset_store(asset_root: Path) -> LocalAssetStore:
    return LocalAssetStore(asset_root, max_concurrency=4)


@pytest.fixture
async def engine(settings: Settings):
    engine = build_engine(settings)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def repository(engine) -> SqlProductRepository:
    return SqlProductRepository(build_session_factory(engine))


@pytest.fixture
def service(repository: SqlProductRepository, asset_store: LocalAssetStore) -> ProductService:
    return ProductService(repository, asset_store)


@pytest.fixture
def make_upload(asset_root: Path):
    """Write a file the way the upload layer would and describe it."""

    counter = 0

    def factory(content: bytes = b"image-bytes", suffix: str = ".jpg") -> UploadedAsset:
        nonlocal counter
        counter += 1
        path = asset_root / "products" / f"upload-{counter}{suffix}"
        path.write_bytes(content)
        return UploadedAsset(temp_path=str(path), size_bytes=len(content), mime_type="image/jpeg")

    return factory


@pytest.fixture
def asset_file(asset_root: Path):
    def resolve(relative_path: str) -> Path:
        assert relative_path.startswith("uploads/")
        return asset_root / relative_path[len("uploads/"):]

    return resolve
