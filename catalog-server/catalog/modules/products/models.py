"""Domain models for catalog products."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(slots=True)
class Product:
    id: str
    name: str
    price: float
    colors: list[str] = field(default_factory=list)
    description: Optional[str] = None
    asset_paths: list[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class ProductDraft:
    name: str
    price: float
    colors: Optional[list[str]] = None
    description: Optional[str] = None


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class ProductPatch:
    name: str | object = UNSET
    price: float | object = UNSET
    colors: Optional[list[str]] | object = UNSET
    description: Optional[str] | object = UNSET

    def changes(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        if self.name is not UNSET:
            values["name"] = self.name
        if self.price is not UNSET:
            values["price"] = self.price
        if self.colors is not UNSET:
            values["colors"] = list(self.colors or [])
        if self.description is not UNSET:
            values["description"] = self.description
        return values


@dataclass(slots=True, frozen=True)
class UploadedAsset:
    """A file already written to disk by the upload layer."""

    temp_path: str
    size_bytes: int
    mime_type: Optional[str] = None


def canonical_product_id(value: object) -> str | None:
    """Return the stored (lowercase, hyphenated) form of ``value``, or None if it is not a UUID."""
    if not isinstance(value, str):
        return None
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return None


def is_valid_product_id(value: object) -> bool:
    return canonical_product_id(value) is not None
