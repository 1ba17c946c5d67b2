"""
VSRAdmin Backend - Restaurant Logo Storage
===========================================

What:  Binds an uploaded logo to a restaurant record by its identifier.
How:   The storage key is derived only from the DID (`{DID}.jpg`), never from
       the uploaded filename, so a re-upload for the same restaurant
       overwrites the previous logo (last write wins, no versioning).
Who:   Called by the POST /api/Restaurant handler before the record is created.

Layering:
    LogoService  ── key derivation, no-op for missing uploads, logging
        │
        ▼
    BlobStore    ── capability: write(key, bytes)
        │
        ▼
    LocalBlobStore (aiofiles) ── files under LOGO_STORAGE_ROOT

    Swapping LocalBlobStore for an object-store client only requires another
    BlobStore implementation.

Directory Structure:
    storage/restaurantlogo/
    ├── 41.jpg
    └── 42.jpg
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import aiofiles
from starlette.datastructures import UploadFile

from vsradmin.config import settings
from vsradmin.exceptions import FileWriteError

logger = logging.getLogger(__name__)


class BlobStore(ABC):
    """Write-only storage capability used by the logo service."""

    @abstractmethod
    async def write(self, key: str, content: bytes) -> None:
        """
        Store `content` under `key`, replacing anything already stored there.

        Raises:
            FileWriteError: the bytes could not be persisted.
        """


class LocalBlobStore(BlobStore):
    """
    Stores blobs as files directly under a root directory.

    The root is created lazily on the first write (parents included). mkdir
    with exist_ok is idempotent, so concurrent first writes are harmless.
    """

    def __init__(self, root: Optional[str] = None):
        self.root = Path(root or settings.logo_storage_root).resolve()
        self._root_ready = False

    def path_for(self, key: str) -> Path:
        # Keys are generated by LogoService; reject anything that could leave the root
        if not key or Path(key).name != key:
            raise FileWriteError(
                message="Invalid storage key.",
                context={"key": key},
            )
        return self.root / key

    def _ensure_root(self) -> None:
        if self._root_ready:
            return
        self.root.mkdir(parents=True, exist_ok=True)
        self._root_ready = True
        logger.info("Logo storage root ready: %s", self.root)

    async def write(self, key: str, content: bytes) -> None:
        path = self.path_for(key)
        try:
            self._ensure_root()
            # 'wb' truncates an existing file: last write wins
            async with aiofiles.open(path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to write %s: %s", path, str(e))
            raise FileWriteError(
                message=f"Failed to save the restaurant logo: {e.strerror or e}",
                context={"path": str(path), "os_error": str(e)},
            )
        logger.info("Stored %s (%d bytes)", key, len(content))


class LogoService:
    """
    Resolves and persists the logo for a restaurant.

    Policy:
        - no upload: nothing happens, the record is created without a logo
        - upload present: stored as `{DID}{extension}`, replacing any previous logo
        - write failure: FileWriteError propagates; the handler fails the request
    """

    def __init__(self, store: BlobStore, extension: Optional[str] = None):
        self.store = store
        self.extension = extension or settings.logo_extension

    def key_for(self, did: int) -> str:
        return f"{did}{self.extension}"

    async def associate(self, did: int, upload: Optional[UploadFile]) -> Optional[str]:
        """
        Store the uploaded logo for restaurant `did`.

        Returns:
            The storage key, or None when there was nothing to store.
        """
        # No file sent: the record is created without a logo
        if upload is None:
            return None

        key = self.key_for(did)
        try:
            content = await upload.read()
        except OSError as e:
            raise FileWriteError(
                message="Failed to read the uploaded logo.",
                context={"did": did, "os_error": str(e)},
            )
        finally:
            # Why finally: the spooled temp file is released even when read() fails
            await upload.close()

        logger.info(
            "Associating logo for DID %s: upload=%s, %d bytes, key=%s",
            did,
            upload.filename or "unknown",
            len(content),
            key,
        )
        await self.store.write(key, content)
        return key
