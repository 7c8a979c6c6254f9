"""Abstract object store interface."""

from abc import ABC, abstractmethod


class ObjectStore(ABC):
    """Abstract interface for storing binary attachments.

    Like the database gateway, failures are logged and reported through the
    return value rather than raised.
    """

    @abstractmethod
    def upload(self, path: str, data: bytes, upsert: bool = False) -> bool:
        """Store ``data`` under ``path``.

        Args:
            path: Object path, e.g. ``receipts/1700000000-bill.jpg``
            data: File contents
            upsert: Replace an existing object instead of failing

        Returns:
            True if stored successfully
        """
        pass

    @abstractmethod
    def get_public_url(self, path: str) -> str:
        """Return the URL an object is served from."""
        pass

    @abstractmethod
    def remove(self, path: str) -> bool:
        """Remove an object. Returns False if it could not be removed."""
        pass
