"""
Test fixtures package.

Provides factory functions and in-memory store implementations for testing.
"""

from .containers import build_container
from .domain_fixtures import create_transfer_record, create_settings
from .mock_repositories import (
    InMemoryBlobStore,
    InMemoryTransferRepository,
    SequenceKeyGenerator,
)

__all__ = [
    "build_container",
    "create_transfer_record",
    "create_settings",
    "InMemoryBlobStore",
    "InMemoryTransferRepository",
    "SequenceKeyGenerator",
]
