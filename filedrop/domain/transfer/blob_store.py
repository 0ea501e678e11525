"""
Blob Store Interface

Abstract interface for the object store that holds transfer payloads.
This keeps the coordinators independent of the concrete backend
(local filesystem, Google Cloud Storage).
"""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import BinaryIO, Iterator, Union

BlobContent = Union[bytes, BinaryIO]


class IBlobStore(ABC):
    """
    Interface for payload storage addressed by transfer key.

    Contract Guarantees:
    - put() and presign_get() raise StoreUnavailableError on backend failure
    - presign_get() has no side effects and does not check existence
    - delete() is idempotent
    - exists() never raises
    """

    @abstractmethod
    def put(self, key: str, content: BlobContent, display_name: str) -> None:
        """
        Store ``content`` under ``key``.

        Args:
            key: Transfer key, used verbatim as the object name
            content: Payload bytes or a binary stream positioned at the start
            display_name: Filename suggested to the client on download

        Raises:
            StoreUnavailableError: If the write fails
        """
        pass  # pragma: no cover

    @abstractmethod
    def presign_get(self, key: str, ttl: timedelta) -> str:
        """
        Produce a time-limited URL that lets an anonymous client fetch ``key``.

        Raises:
            StoreUnavailableError: If the URL cannot be signed
        """
        pass  # pragma: no cover

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove the object stored under ``key``.

        Returns:
            True if removed or already absent, False on failure
        """
        pass  # pragma: no cover

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether an object is stored under ``key``."""
        pass  # pragma: no cover

    @abstractmethod
    def list_keys(self) -> Iterator[str]:
        """
        Iterate over the keys of every stored object.

        Raises:
            StoreUnavailableError: If the listing fails
        """
        pass  # pragma: no cover
