"""
Blob Sweeper

Removes payloads whose transfer record is gone. Records expire through the
record store's TTL; their blobs stay behind until this sweep runs.
"""

import logging
from typing import Dict, Optional

from ..domain.errors import StoreUnavailableError
from ..domain.transfer.blob_store import IBlobStore
from ..domain.transfer.repositories import TransferRecordRepository

logger = logging.getLogger(__name__)


class BlobSweeper:
    """Deletes blobs that no longer have a transfer record."""

    def __init__(self, record_repository: TransferRecordRepository, blob_store: IBlobStore):
        self.record_repository = record_repository
        self.blob_store = blob_store

    def sweep(self) -> Dict[str, int]:
        """
        Scan the blob store once.

        Blobs are only ever written after their record is reserved, so a
        blob without a record belongs to an expired transfer. Candidates are
        collected over the whole listing first, then each record is looked up
        again right before its blob is deleted, since a new registration may
        have reserved the same key in the meantime.

        Returns:
            Counts of ``scanned``, ``deleted`` and ``failed`` blobs

        Raises:
            StoreUnavailableError: If the blob listing fails
        """
        stats = {"scanned": 0, "deleted": 0, "failed": 0}

        orphans = []
        for key in self.blob_store.list_keys():
            stats["scanned"] += 1
            if self._is_orphan(key, stats):
                orphans.append(key)

        for key in orphans:
            orphan = self._is_orphan(key, stats)
            if orphan is False:
                logger.info(f"Blob {key} was reclaimed by a new transfer, keeping it")
            if not orphan:
                continue

            if self.blob_store.delete(key):
                stats["deleted"] += 1
                logger.info(f"Removed orphaned blob: {key}")
            else:
                stats["failed"] += 1

        return stats

    def _is_orphan(self, key: str, stats: Dict[str, int]) -> Optional[bool]:
        """Return None, counted as a failure, when the record lookup fails."""
        try:
            return not self.record_repository.exists(key)
        except StoreUnavailableError as e:
            logger.warning(f"Skipping blob {key}, record lookup failed: {e}")
            stats["failed"] += 1
            return None
