"""Local filesystem storage for product assets."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


class LocalAssetStore:
    """Maps uploaded files to public-relative paths and deletes them.

    A public-relative path always starts with ``marker`` (the asset root's
    directory name), e.g. ``uploads/products/3f2a.jpg``. Deletion is
    best-effort: failures are logged and reported, never raised.
    """

    def __init__(self, root: Path, *, marker: str | None = None, max_concurrency: int = 8) -> None:
        self.root = Path(root)
        self.marker = (marker or self.root.resolve().name).strip("/")
        if not self.marker:
            raise ValueError("Asset root marker must not be empty")
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.max_concurrency = max_concurrency

    def normalize(self, path: str | os.PathLike[str]) -> str:
        text = os.fspath(path).replace("\\", "/")
        segments = text.split("/")
        if segments[0] == self.marker:
            return text
        relative = self._relative_to_root(text)
        if relative is not None:
            return f"{self.marker}/{relative}" if relative else self.marker
        if self.marker in segments:
            return "/".join(segments[segments.index(self.marker):])
        return f"{self.marker}/{text.lstrip('/')}"

    def _relative_to_root(self, text: str) -> str | None:
        """Return ``text`` relative to the asset root, or None if it lies elsewhere."""
        root = self.root.resolve()
        try:
            candidate = Path(text).resolve()
        except (OSError, ValueError):
            return None
        if candidate == root:
            return ""
        if not candidate.is_relative_to(root):
            return None
        return candidate.relative_to(root).as_posix()

    def resolve(self, relative_path: str) -> Path | None:
        """Return the absolute file for ``relative_path`` or None if it escapes the root."""
        normalized = self.normalize(relative_path)
        remainder = normalized[len(self.marker):].lstrip("/")
        root = self.root.resolve()
        try:
            target = (root / remainder).resolve()
        except (OSError, ValueError) as exc:
            logger.warning("Cannot resolve asset path %s: %s", relative_path, exc)
            return None
        if target == root or not target.is_relative_to(root):
            logger.warning("Refusing to touch %s outside asset root %s", relative_path, root)
            return None
        return target

    async def delete(self, relative_path: str) -> bool:
        target = self.resolve(relative_path)
        if target is None:
            return False
        try:
            await asyncio.to_thread(target.unlink)
        except FileNotFoundError:
            logger.info("Asset %s already absent", relative_path)
            return True
        except (OSError, ValueError) as exc:
            logger.error("Failed to delete asset %s: %s", relative_path, exc)
            return False
        logger.debug("Deleted asset %s", relative_path)
        return True

    async def delete_many(self, relative_paths: Iterable[str]) -> list[str]:
        """Delete all paths concurrently; return those that could not be removed."""
        paths = list(relative_paths)
        if not paths:
            return []
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _bounded(path: str) -> bool:
            async with semaphore:
                return await self.delete(path)

        outcomes = await asyncio.gather(*(_bounded(path) for path in paths))
        failed = [path for path, ok in zip(paths, outcomes) if not ok]
        if failed:
            logger.warning("%d of %d assets could not be deleted: %s", len(failed), len(paths), failed)
        return failed
