"""
Domain Events

Immutable records of significant state changes in a transfer's lifecycle.
Events decouple side effects (logging, audit) from the coordinators.
"""

from abc import ABC
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Attributes:
        aggregate_id: Transfer key the event is about
        occurred_at: Timestamp when the event occurred
    """
    aggregate_id: str
    occurred_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert event to dictionary for serialization.

        Returns:
            Dictionary representation of the event
        """
        return {
            "event_type": self.__class__.__name__,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
        }


@dataclass(frozen=True)
class KeyCollisionEvent(DomainEvent):
    """
    Event emitted when a candidate key was already taken.

    Attributes:
        aggregate_id: The rejected candidate key
        attempt: 1-based attempt number that collided
    """
    attempt: int

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict["attempt"] = self.attempt
        return base_dict


@dataclass(frozen=True)
class TransferReservedEvent(DomainEvent):
    """
    Event emitted when a key has been reserved in the record store.

    Attributes:
        filename: Original filename
        source_address: Uploader network origin
        expires_at: When the record expires
    """
    filename: str
    source_address: str
    expires_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            "filename": self.filename,
            "source_address": self.source_address,
            "expires_at": self.expires_at.isoformat(),
        })
        return base_dict


@dataclass(frozen=True)
class TransferStoredEvent(DomainEvent):
    """Event emitted when the payload for a reserved key has been written."""
    filename: str


@dataclass(frozen=True)
class TransferRolledBackEvent(DomainEvent):
    """
    Event emitted when a reservation was undone after a failed blob write.

    Attributes:
        error_message: Why the blob write failed
    """
    error_message: str


@dataclass(frozen=True)
class RollbackFailedEvent(DomainEvent):
    """
    Event emitted when the compensating delete itself failed.

    The record is left orphaned until its TTL removes it.

    Attributes:
        upload_error: Why the blob write failed
        rollback_error: Why the delete failed
    """
    upload_error: str
    rollback_error: str

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            "upload_error": self.upload_error,
            "rollback_error": self.rollback_error,
        })
        return base_dict


@dataclass(frozen=True)
class TransferRedeemedEvent(DomainEvent):
    """Event emitted when a redemption was granted."""
    pass


@dataclass(frozen=True)
class RedemptionDeniedEvent(DomainEvent):
    """
    Event emitted when a redemption was refused.

    Attributes:
        reason: ``record_absent``, ``limit_reached`` or ``malformed_path``
    """
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict["reason"] = self.reason
        return base_dict
