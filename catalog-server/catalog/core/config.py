"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./catalog.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    create_tables: bool = True


class StorageSettings(BaseModel):
    # Served publicly under /uploads by the static file server.
    asset_root: Path = Field(default=Path("uploads"))
    product_dir: str = "products"
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    allowed_media_types: list[str] = Field(
        default_factory=lambda: [
            "image/jpeg",
            "image/jpg",
            "image/png",
            "image/webp",
            "application/pdf",
        ]
    )
    max_files_per_request: int = Field(default=10, gt=0)
    delete_concurrency: int = Field(default=8, gt=0)


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"
    project_name: str = "Product Catalog Server"

    database: DatabaseSettings = DatabaseSettings()
    storage: StorageSettings = StorageSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def asset_root(self) -> Path:
        return self.storage.asset_root

    @property
    def product_storage_dir(self) -> Path:
        return self.storage.asset_root / self.storage.product_dir


@lru_cache()
def get_settings() -> Settings:
    return Settings()
