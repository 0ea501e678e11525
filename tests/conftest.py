"""
Shared pytest fixtures and configuration for the FileDrop test suite.

This module provides:
- Hypothesis configuration for property-based testing
- In-memory store fixtures
- A Flask test client wired to in-memory stores
"""

from datetime import datetime

import pytest
from hypothesis import HealthCheck, settings

from filedrop.app_factory import AppConfig, create_app
from filedrop.application.event_publisher import EventPublisher
from filedrop.config.settings import TransferSettings
from filedrop.domain.events import DomainEvent
from tests.fixtures.containers import build_container
from tests.fixtures.domain_fixtures import create_settings
from tests.fixtures.mock_repositories import InMemoryBlobStore, InMemoryTransferRepository

# Register Hypothesis profiles
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("default")


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def transfer_settings() -> TransferSettings:
    return create_settings()


@pytest.fixture
def record_repository() -> InMemoryTransferRepository:
    return InMemoryTransferRepository()


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def event_publisher():
    """EventPublisher that also records every published event."""
    publisher = EventPublisher()
    publisher.published = []
    publisher.subscribe(DomainEvent, publisher.published.append)
    return publisher


@pytest.fixture
def fixed_now() -> datetime:
    """Provide a fixed datetime for deterministic testing."""
    return datetime(2024, 1, 15, 12, 0, 0)


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def container(transfer_settings, record_repository, blob_store, event_publisher):
    return build_container(transfer_settings, record_repository, blob_store, event_publisher)


@pytest.fixture
def app(transfer_settings, container):
    flask_app = create_app(AppConfig(settings=transfer_settings), container=container)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


# =============================================================================
# Pytest Configuration Hooks
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (require external services)"
    )
    config.addinivalue_line(
        "markers", "property: Property-based tests using Hypothesis"
    )


def pytest_collection_modifyitems(config, items):
    """
    Automatically mark tests based on their location.

    - tests/unit/* -> @pytest.mark.unit
    - tests/integration/* -> @pytest.mark.integration
    - tests/property/* -> @pytest.mark.property
    """
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path or "\\unit\\" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path or "\\integration\\" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/property/" in test_path or "\\property\\" in test_path:
            item.add_marker(pytest.mark.property)
