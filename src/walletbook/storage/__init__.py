"""Binary attachment storage for receipts and avatars."""

from walletbook.storage.base import ObjectStore
from walletbook.storage.local import LocalObjectStore

__all__ = ["ObjectStore", "LocalObjectStore"]
