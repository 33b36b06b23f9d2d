"""Upload intake: stream incoming files into the asset root."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from fastapi import UploadFile

from catalog.modules.products.models import UploadedAsset

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1 MiB


class UploadRejectedError(ValueError):
    """Raised when an upload violates the size, type or count limits."""


@dataclass(slots=True)
class UploadReceiver:
    target_dir: Path
    max_bytes: int
    allowed_media_types: frozenset[str]
    max_files: int = 10

    async def receive(self, upload: UploadFile) -> UploadedAsset:
        try:
            content_type = (upload.content_type or "").lower()
            if content_type not in self.allowed_media_types:
                raise UploadRejectedError(
                    f"Unsupported media type '{content_type or 'unknown'}'. "
                    f"Allowed: {sorted(self.allowed_media_types)}"
                )

            self.target_dir.mkdir(parents=True, exist_ok=True)
            suffix = Path(_sanitize_filename(upload.filename) or "").suffix.lower()
            target_path = self.target_dir / f"{os.urandom(16).hex()}{suffix}"

            total_size = 0
            try:
                with target_path.open("wb") as buffer:
                    while True:
                        chunk = await upload.read(CHUNK_SIZE)
                        if not chunk:
                            break
                        total_size += len(chunk)
                        if total_size > self.max_bytes:
                            raise UploadRejectedError(f"File too large. Max is {self.max_bytes} bytes.")
                        buffer.write(chunk)
            except BaseException:
                target_path.unlink(missing_ok=True)
                raise
        finally:
            await upload.close()

        if total_size == 0:
            target_path.unlink(missing_ok=True)
            raise UploadRejectedError("Uploaded file is empty")

        logger.info("Stored upload %s as %s (%d bytes)", upload.filename, target_path, total_size)
        return UploadedAsset(
            temp_path=str(target_path),
            size_bytes=total_size,
            mime_type=content_type,
        )

    async def receive_many(self, uploads: Sequence[UploadFile]) -> list[UploadedAsset]:
        """Receive a batch; a rejected file discards the ones already stored."""
        if len(uploads) > self.max_files:
            for upload in uploads:
                await upload.close()
            raise UploadRejectedError(f"Too many files. Max is {self.max_files} per request.")

        received: list[UploadedAsset] = []
        try:
            for upload in uploads:
                received.append(await self.receive(upload))
        except BaseException:
            for asset in received:
                Path(asset.temp_path).unlink(missing_ok=True)
            for upload in uploads[len(received) + 1:]:
                await upload.close()
            raise
        return received


def _sanitize_filename(filename: str | None) -> str | None:
    if not filename:
        return None
    name = os.path.basename(filename.replace("\\", "/"))
    # strip dangerous characters
    return name.replace("\0", "").strip()
