"""
Transfer Entities

Domain entity for the persistent transfer record.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from urllib.parse import quote


@dataclass
class TransferRecord:
    """
    Entity representing one uploaded file and its redemption counter.

    ``key``, ``filename``, ``source_address`` and ``expires_at`` never change
    after creation. ``redemption_count`` only grows, and only through the
    record store's conditional increment.
    """
    key: str
    filename: str
    source_address: str
    expires_at: datetime
    created_at: datetime
    redemption_count: int = 0

    @classmethod
    def create(cls, key: str, filename: str, source_address: str,
               retention: timedelta, now: Optional[datetime] = None) -> 'TransferRecord':
        """
        Factory method to create a fresh, unredeemed record.

        Args:
            key: Candidate transfer key
            filename: Original filename
            source_address: Uploader network origin
            retention: How long the record stays valid
            now: Creation time (defaults to the current UTC time)

        Returns:
            New TransferRecord instance
        """
        now = now or datetime.utcnow()
        return cls(
            key=key,
            filename=filename,
            source_address=source_address,
            expires_at=now + retention,
            created_at=now,
        )

    def with_key(self, key: str) -> 'TransferRecord':
        """Return a copy of this record under a different candidate key."""
        return TransferRecord(
            key=key,
            filename=self.filename,
            source_address=self.source_address,
            expires_at=self.expires_at,
            created_at=self.created_at,
            redemption_count=self.redemption_count,
        )

    def is_expired(self) -> bool:
        """Check if the record has passed its retention window."""
        return datetime.utcnow() >= self.expires_at

    def get_remaining_seconds(self) -> int:
        """
        Get remaining seconds until expiration.

        Returns:
            Seconds remaining (0 if expired)
        """
        remaining = self.expires_at - datetime.utcnow()
        return max(0, int(remaining.total_seconds()))

    def is_exhausted(self, max_redemptions: int) -> bool:
        return self.redemption_count >= max_redemptions

    def public_link(self, domain: str) -> str:
        """Compose the shareable ``domain/key/filename`` link."""
        # "?" and "#" in a filename would otherwise cut the path short
        return f"{domain.rstrip('/')}/{self.key}/{quote(self.filename, safe='/')}"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "key": self.key,
            "filename": self.filename,
            "source_address": self.source_address,
            "expires_at": self.expires_at.isoformat(),
            "created_at": self.created_at.isoformat(),
            "redemption_count": self.redemption_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'TransferRecord':
        """Create TransferRecord from dictionary."""
        return cls(
            key=data["key"],
            filename=data["filename"],
            source_address=data.get("source_address", ""),
            expires_at=datetime.fromisoformat(data["expires_at"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            redemption_count=int(data.get("redemption_count", 0)),
        )
