"""
Redemption Coordinator

Gates downloads: a signed URL is handed out only if the record store's
atomic increment-if-below-limit succeeds.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from ..config.settings import TransferSettings
from ..domain.errors import MalformedInputError
from ..domain.events import RedemptionDeniedEvent, TransferRedeemedEvent
from ..domain.transfer.blob_store import IBlobStore
from ..domain.transfer.repositories import TransferRecordRepository
from ..domain.transfer.value_objects import DownloadPath
from .event_publisher import EventPublisher
from .transfer_result import RedemptionResult

logger = logging.getLogger(__name__)

MALFORMED_PATH = "malformed_path"


class RedemptionCoordinator:
    """
    Orchestrates a single redemption.

    The signed URL is prepared first because presigning has no side
    effects; the conditional increment is the last and only gate.
    """

    def __init__(
        self,
        settings: TransferSettings,
        record_repository: TransferRecordRepository,
        blob_store: IBlobStore,
        event_publisher: Optional[EventPublisher] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.settings = settings
        self.record_repository = record_repository
        self.blob_store = blob_store
        self.event_publisher = event_publisher
        self.clock = clock

    def redeem(self, path: str) -> RedemptionResult:
        """
        Redeem a ``key/filename`` download path.

        Args:
            path: Caller-supplied path

        Returns:
            RedemptionResult, granted with a signed URL or denied

        Raises:
            MalformedInputError: If the path is not ``key/filename``
            StoreUnavailableError: If either store failed
        """
        try:
            download_path = DownloadPath.parse(path)
        except MalformedInputError:
            self._publish(RedemptionDeniedEvent(
                aggregate_id=(path or "").split("/", 1)[0],
                occurred_at=self.clock(),
                reason=MALFORMED_PATH,
            ))
            raise

        return self.redeem_key(download_path.key)

    def redeem_key(self, key: str) -> RedemptionResult:
        """
        Redeem an already parsed key.

        Raises:
            StoreUnavailableError: If either store failed
        """
        signed_url = self.blob_store.presign_get(key, self.settings.presign_ttl)

        outcome = self.record_repository.increment_if_below_limit(
            key, self.settings.max_redemptions
        )

        if not outcome.granted:
            self._publish(RedemptionDeniedEvent(
                aggregate_id=key, occurred_at=self.clock(), reason=outcome.value
            ))
            return RedemptionResult.create_denied(key, outcome)

        self._publish(TransferRedeemedEvent(aggregate_id=key, occurred_at=self.clock()))
        return RedemptionResult.create_granted(key, signed_url)

    def _publish(self, event) -> None:
        if self.event_publisher is not None:
            self.event_publisher.publish(event)
