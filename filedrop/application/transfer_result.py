"""
Transfer Result Value Objects

Encapsulate the outcome of registration and redemption operations.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..domain.transfer.entities import TransferRecord
from ..domain.transfer.repositories import RedemptionOutcome


@dataclass(frozen=True)
class RegistrationResult:
    """
    Outcome of a successful registration.

    Attributes:
        record: The reserved and stored transfer record
        attempts: How many candidate keys were tried
    """

    record: TransferRecord
    attempts: int = 1

    @property
    def key(self) -> str:
        return self.record.key

    def to_dict(self, domain: str, max_redemptions: int) -> Dict[str, Any]:
        """
        Convert result to the upload response payload.

        Args:
            domain: Public link prefix
            max_redemptions: Downloads allowed per transfer
        """
        return {
            "key": self.record.key,
            "link": self.record.public_link(domain),
            "expires_at": self.record.expires_at.isoformat(),
            "max_redemptions": max_redemptions,
        }


@dataclass(frozen=True)
class RedemptionResult:
    """
    Outcome of a redemption attempt.

    ``signed_url`` is only set when the outcome is GRANTED.
    """

    key: str
    outcome: RedemptionOutcome
    signed_url: Optional[str] = None

    @property
    def granted(self) -> bool:
        return self.outcome.granted

    @classmethod
    def create_granted(cls, key: str, signed_url: str) -> 'RedemptionResult':
        return cls(key=key, outcome=RedemptionOutcome.GRANTED, signed_url=signed_url)

    @classmethod
    def create_denied(cls, key: str, outcome: RedemptionOutcome) -> 'RedemptionResult':
        if outcome.granted:
            raise ValueError("A denied result cannot carry a granted outcome")
        return cls(key=key, outcome=outcome)
