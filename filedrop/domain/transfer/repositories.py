"""
Transfer Record Repositories

Repository interface for transfer record persistence. Implementations must
provide the two conditional writes as single atomic operations.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from .entities import TransferRecord


class InsertOutcome(Enum):
    """Result of an insert-if-absent call."""

    INSERTED = "inserted"
    ALREADY_EXISTS = "already_exists"


class RedemptionOutcome(Enum):
    """
    Result of an increment-if-below-limit call.

    The two denial variants stay distinct inside the service so they can be
    logged; the HTTP layer reports both as not found.
    """

    GRANTED = "granted"
    RECORD_ABSENT = "record_absent"
    LIMIT_REACHED = "limit_reached"

    @property
    def granted(self) -> bool:
        return self is RedemptionOutcome.GRANTED


class TransferRecordRepository(ABC):
    """Abstract repository interface for transfer records."""

    @abstractmethod
    def insert_if_absent(self, record: TransferRecord) -> InsertOutcome:
        """
        Store ``record`` only if no record with the same key exists.

        Args:
            record: Record to insert

        Returns:
            INSERTED, or ALREADY_EXISTS when the key is taken

        Raises:
            StoreUnavailableError: If the store could not be reached
        """
        pass  # pragma: no cover

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Delete a record by key.

        Returns:
            True if a record was removed, False if none existed

        Raises:
            StoreUnavailableError: If the store could not be reached
        """
        pass  # pragma: no cover

    @abstractmethod
    def increment_if_below_limit(self, key: str, limit: int) -> RedemptionOutcome:
        """
        Atomically add one to the record's redemption count if the record
        exists and its count is strictly below ``limit``.

        Raises:
            StoreUnavailableError: If the store could not be reached
        """
        pass  # pragma: no cover

    @abstractmethod
    def get(self, key: str) -> Optional[TransferRecord]:
        """
        Retrieve a record by key.

        Returns:
            TransferRecord if found, None otherwise
        """
        pass  # pragma: no cover

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether a record exists for ``key``."""
        pass  # pragma: no cover
