"""
Application Layer

Coordinators orchestrating the transfer lifecycle, plus the wiring
(container, event publisher) they run with.
"""

from .cleanup_service import BlobSweeper
from .dependency_container import DependencyContainer, DependencyNotFoundError
from .event_publisher import EventPublisher
from .redemption_service import RedemptionCoordinator
from .registration_service import RegistrationCoordinator
from .transfer_result import RedemptionResult, RegistrationResult

__all__ = [
    "BlobSweeper",
    "DependencyContainer",
    "DependencyNotFoundError",
    "EventPublisher",
    "RedemptionCoordinator",
    "RedemptionResult",
    "RegistrationCoordinator",
    "RegistrationResult",
]
