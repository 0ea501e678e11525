"""
Logging Event Handler

Infrastructure event handler for logging transfer lifecycle events.
The coordinators stay unaware of logging; rollback failures and the
reason behind each denied redemption reach operators through here.
"""

import logging

from ..domain.events import (
    DomainEvent,
    KeyCollisionEvent,
    RedemptionDeniedEvent,
    RollbackFailedEvent,
    TransferRedeemedEvent,
    TransferReservedEvent,
    TransferRolledBackEvent,
    TransferStoredEvent,
)


class LoggingEventHandler:
    """
    Infrastructure event handler for logging domain events.
    """

    def __init__(self, logger: logging.Logger):
        """
        Initialize with logger instance.

        Args:
            logger: Python logging.Logger instance
        """
        self.logger = logger

    def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event by logging it.

        Args:
            event: Domain event to log
        """
        try:
            if isinstance(event, KeyCollisionEvent):
                self.logger.info(
                    f"Key collision: candidate={event.aggregate_id}, attempt={event.attempt}"
                )
            elif isinstance(event, TransferReservedEvent):
                self.logger.info(
                    f"Transfer reserved: key={event.aggregate_id}, "
                    f"filename={event.filename}, source={event.source_address}, "
                    f"expires_at={event.expires_at.isoformat()}"
                )
            elif isinstance(event, TransferStoredEvent):
                self.logger.info(f"Transfer stored: key={event.aggregate_id}")
            elif isinstance(event, TransferRolledBackEvent):
                self.logger.warning(
                    f"Transfer rolled back: key={event.aggregate_id}, "
                    f"error={event.error_message}"
                )
            elif isinstance(event, RollbackFailedEvent):
                # Orphan record: stays until its TTL expires
                self.logger.error(
                    f"Rollback failed, orphan record left: key={event.aggregate_id}, "
                    f"upload_error={event.upload_error}, "
                    f"rollback_error={event.rollback_error}"
                )
            elif isinstance(event, TransferRedeemedEvent):
                self.logger.info(f"Transfer redeemed: key={event.aggregate_id}")
            elif isinstance(event, RedemptionDeniedEvent):
                self.logger.info(
                    f"Redemption denied: key={event.aggregate_id}, reason={event.reason}"
                )
            else:
                self.logger.debug(
                    f"Unhandled event: {event.__class__.__name__} "
                    f"(aggregate_id={event.aggregate_id})"
                )
        except Exception as e:
            self.logger.error(
                f"Error in logging event handler for {event.__class__.__name__}: {e}",
                exc_info=True,
            )
