"""Filesystem-backed object store."""

import logging
from pathlib import Path, PurePosixPath
from typing import Optional

from walletbook.storage.base import ObjectStore

logger = logging.getLogger(__name__)


class LocalObjectStore(ObjectStore):
    """Stores objects as files below a root directory."""

    def __init__(self, root: str | Path, public_url: Optional[str] = None):
        """Initialize local object store.

        Args:
            root: Directory objects are written to (created if missing)
            public_url: Base URL the directory is served from. Defaults to a
                ``file://`` URL of the root.
        """
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self.public_url = (public_url or self.root.as_uri()).rstrip("/")

    def _resolve(self, path: str) -> Optional[Path]:
        """Map an object path to a file below root, rejecting escapes."""
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts or not relative.parts:
            return None
        return self.root.joinpath(*relative.parts)

    def upload(self, path: str, data: bytes, upsert: bool = False) -> bool:
        """Store ``data`` under ``path``."""
        target = self._resolve(path)
        if target is None:
            logger.error("Error uploading %s: invalid object path", path)
            return False
        if target.exists() and not upsert:
            logger.error("Error uploading %s: object already exists", path)
            return False
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            logger.error("Error uploading %s: %s", path, e)
            return False
        return True

    def get_public_url(self, path: str) -> str:
        """Return the URL an object is served from."""
        return f"{self.public_url}/{path.lstrip('/')}"

    def remove(self, path: str) -> bool:
        """Remove an object."""
        target = self._resolve(path)
        if target is None or not target.is_file():
            logger.error("Error removing %s: object not found", path)
            return False
        try:
            target.unlink()
        except OSError as e:
            logger.error("Error removing %s: %s", path, e)
            return False
        return True
