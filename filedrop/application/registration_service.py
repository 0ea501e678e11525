"""
Registration Coordinator

Reserves a unique transfer key in the record store, then writes the payload
to the blob store. A failed blob write is compensated by deleting the
reservation, so a record never outlives a missing payload.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from ..config.settings import TransferSettings
from ..domain.errors import (
    KeyspaceExhaustedError,
    MalformedInputError,
    UploadFailedError,
)
from ..domain.events import (
    KeyCollisionEvent,
    RollbackFailedEvent,
    TransferReservedEvent,
    TransferRolledBackEvent,
    TransferStoredEvent,
)
from ..domain.transfer.blob_store import BlobContent, IBlobStore
from ..domain.transfer.entities import TransferRecord
from ..domain.transfer.repositories import InsertOutcome, TransferRecordRepository
from ..domain.transfer.value_objects import KeyGenerator
from .event_publisher import EventPublisher
from .transfer_result import RegistrationResult

logger = logging.getLogger(__name__)


class RegistrationCoordinator:
    """
    Orchestrates the reserve-then-store registration saga.

    Steps:
    1. Reserve: insert-if-absent a fresh record, retrying on key collision
    2. Store: write the payload under the reserved key
    3. Compensate (only if step 2 failed): delete the reservation
    """

    def __init__(
        self,
        settings: TransferSettings,
        record_repository: TransferRecordRepository,
        blob_store: IBlobStore,
        key_generator: Optional[KeyGenerator] = None,
        event_publisher: Optional[EventPublisher] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        """
        Initialize RegistrationCoordinator.

        Args:
            settings: Transfer settings (retention, key length, attempt budget)
            record_repository: Record store
            blob_store: Blob store
            key_generator: Candidate key source, defaults to one of ``settings.key_length``
            event_publisher: Optional publisher for lifecycle events
            clock: Source of the current UTC time
        """
        self.settings = settings
        self.record_repository = record_repository
        self.blob_store = blob_store
        self.key_generator = key_generator or KeyGenerator(settings.key_length)
        self.event_publisher = event_publisher
        self.clock = clock

    def register(self, filename: str, source_address: str, content: BlobContent) -> RegistrationResult:
        """
        Register an upload and store its payload.

        Args:
            filename: Original filename, used for Content-Disposition only
            source_address: Uploader network origin
            content: Payload bytes or binary stream

        Returns:
            RegistrationResult with the stored record

        Raises:
            MalformedInputError: If filename is blank
            EntropyUnavailableError: If no key could be generated
            KeyspaceExhaustedError: If every candidate key collided
            StoreUnavailableError: If the record store failed
            UploadFailedError: If the payload could not be stored
        """
        if not filename or not filename.strip():
            raise MalformedInputError("Filename must not be empty")

        template = TransferRecord.create(
            key="",
            filename=filename,
            source_address=source_address,
            retention=self.settings.retention,
            now=self.clock(),
        )

        record, attempts = self._reserve(template)
        self._store(record, content)
        return RegistrationResult(record=record, attempts=attempts)

    def _reserve(self, template: TransferRecord) -> tuple[TransferRecord, int]:
        """Insert the record under the first candidate key that is free."""
        for attempt in range(1, self.settings.max_key_attempts + 1):
            record = template.with_key(self.key_generator.generate())

            outcome = self.record_repository.insert_if_absent(record)
            if outcome is InsertOutcome.INSERTED:
                self._publish(TransferReservedEvent(
                    aggregate_id=record.key,
                    occurred_at=self.clock(),
                    filename=record.filename,
                    source_address=record.source_address,
                    expires_at=record.expires_at,
                ))
                return record, attempt

            self._publish(KeyCollisionEvent(
                aggregate_id=record.key, occurred_at=self.clock(), attempt=attempt
            ))

        raise KeyspaceExhaustedError(
            f"No free key after {self.settings.max_key_attempts} attempts "
            f"(key length {self.key_generator.length} bytes)"
        )

    def _store(self, record: TransferRecord, content: BlobContent) -> None:
        try:
            self.blob_store.put(record.key, content, record.filename)
        except Exception as e:
            self._rollback(record, e)
            raise UploadFailedError(
                f"Failed to store payload for {record.key}", key=record.key, original_error=e
            ) from e

        self._publish(TransferStoredEvent(
            aggregate_id=record.key, occurred_at=self.clock(), filename=record.filename
        ))

    def _rollback(self, record: TransferRecord, upload_error: Exception) -> None:
        """Best-effort delete of the reservation; never raises."""
        try:
            self.record_repository.delete(record.key)
        except Exception as e:
            logger.error(f"Rollback of transfer {record.key} failed: {e}")
            self._publish(RollbackFailedEvent(
                aggregate_id=record.key,
                occurred_at=self.clock(),
                upload_error=str(upload_error),
                rollback_error=str(e),
            ))
            return

        self._publish(TransferRolledBackEvent(
            aggregate_id=record.key, occurred_at=self.clock(), error_message=str(upload_error)
        ))

    def _publish(self, event) -> None:
        if self.event_publisher is not None:
            self.event_publisher.publish(event)
