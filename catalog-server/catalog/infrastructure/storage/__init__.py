"""Filesystem storage for uploaded product assets."""

from .asset_store import LocalAssetStore
from .uploads import UploadReceiver, UploadRejectedError

__all__ = [
    "LocalAssetStore",
    "UploadReceiver",
    "UploadRejectedError",
]
