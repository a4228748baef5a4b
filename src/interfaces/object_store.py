"""Abstract base class for the audio object store.

Audio files are written once under a caller-derived object name and served
from a public URL.  Deletion is addressed by object name, which callers
recover from a stored URL via :meth:`IObjectStore.name_from_url`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IObjectStore(ABC):
    """Contract for blob storage with public URLs."""

    @abstractmethod
    async def put(self, name: str, data: bytes, content_type: str) -> str:
        """Upload *data* under *name* without overwriting, return its public URL.

        Raises
        ------
        src.utils.errors.StorageError
            If the upload fails or *name* already exists.
        """

    @abstractmethod
    async def delete(self, name: str) -> None:
        """Remove the object stored under *name*.

        Raises
        ------
        src.utils.errors.StorageError
            If the store rejects the delete.
        """

    @abstractmethod
    def name_from_url(self, url: str) -> str:
        """Return the object name that :meth:`put` returned *url* for."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this store."""
