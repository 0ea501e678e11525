"""
Application Factory

Creates and configures Flask application with all dependencies.
This factory pattern improves testability by allowing dependency injection
and configuration overrides.
"""

import logging
import os
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from .application.cleanup_service import BlobSweeper
from .application.dependency_container import DependencyContainer
from .application.event_publisher import EventPublisher
from .application.redemption_service import RedemptionCoordinator
from .application.registration_service import RegistrationCoordinator
from .config.celery_config import make_celery
from .config.gcs_config import gcs_health_check
from .config.redis_config import get_redis_repository, init_redis, redis_health_check
from .config.settings import TransferSettings
from .domain.errors import ErrorCategory, create_error_response
from .domain.transfer.blob_store import IBlobStore
from .domain.transfer.repositories import TransferRecordRepository
from .infrastructure.gcs_blob_store import GCSBlobStore
from .infrastructure.local_blob_store import LocalBlobStore
from .infrastructure.redis_transfer_repository import RedisTransferRepository
from .infrastructure.storage_factory import StorageFactory

logger = logging.getLogger(__name__)


class AppConfig:
    """Application configuration."""

    def __init__(self, settings: Optional[TransferSettings] = None):
        self.api_version = os.getenv("API_VERSION", "v1")
        self.flask_env = os.getenv("FLASK_ENV", "development")
        self.is_production = self.flask_env == "production"

        # Requests above this size are rejected with 413 before reaching a view
        self.max_upload_bytes = int(os.getenv("MAX_UPLOAD_MB", 512)) * 1024 * 1024

        self.settings = settings or TransferSettings.from_env()


def create_app(
    config: Optional[AppConfig] = None,
    container: Optional[DependencyContainer] = None,
) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Application configuration, uses default if None
        container: Pre-built dependency container; when given, Redis and the
            blob store are not initialized (used by tests)

    Returns:
        Configured Flask application
    """
    if config is None:
        config = AppConfig()

    # Create Flask app
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.max_upload_bytes

    # Configure CORS
    CORS(
        app,
        resources={
            r"/*": {
                "origins": "*",
                "methods": ["GET", "PUT", "OPTIONS"],
                "allow_headers": ["Content-Type", "Content-Length"],
                "expose_headers": ["Content-Type", "Content-Disposition", "Location"],
                "max_age": 3600,
            }
        },
    )

    # Initialize infrastructure
    _initialize_infrastructure(app, init_redis_pool=container is None)

    # Initialize services
    if container is None:
        container = _initialize_services(config.settings)
    app.container = container

    # Register blueprints
    _register_blueprints(app, config)

    # Register health check endpoint and error handlers
    _register_health_endpoint(app)
    _register_error_handlers(app)

    return app


def _initialize_infrastructure(app: Flask, init_redis_pool: bool = True) -> None:
    """
    Initialize infrastructure components (Redis, Celery).

    Args:
        app: Flask application
        init_redis_pool: Whether to set up the Redis connection pool
    """
    if init_redis_pool:
        init_redis()
        logger.info("Redis initialized")

    try:
        celery = make_celery(app)
        app.celery = celery
        logger.info("Celery initialized")
    except Exception as e:
        logger.warning(f"Could not initialize Celery: {e}")
        app.celery = None


def _initialize_services(settings: TransferSettings) -> DependencyContainer:
    """
    Build the dependency container.

    PATTERN:
    --------
    1. Register settings
    2. Register infrastructure adapters (record store, blob store)
    3. Register the event publisher and its handlers
    4. Register application services (coordinators, sweeper)

    Args:
        settings: Transfer settings

    Returns:
        Populated DependencyContainer
    """
    container = DependencyContainer()
    container.register_singleton(TransferSettings, settings)

    record_repository = RedisTransferRepository(get_redis_repository(settings.record_table))
    container.register_singleton(TransferRecordRepository, record_repository)

    blob_store = StorageFactory.create_storage(settings, settings.blob_base_url)
    container.register_singleton(IBlobStore, blob_store)

    event_publisher = EventPublisher()
    container.setup_event_handlers(event_publisher)
    container.register_singleton(EventPublisher, event_publisher)

    container.register_singleton(
        RegistrationCoordinator,
        RegistrationCoordinator(
            settings, record_repository, blob_store, event_publisher=event_publisher
        ),
    )
    container.register_singleton(
        RedemptionCoordinator,
        RedemptionCoordinator(
            settings, record_repository, blob_store, event_publisher=event_publisher
        ),
    )
    container.register_singleton(BlobSweeper, BlobSweeper(record_repository, blob_store))

    logger.info(
        f"Application services initialized ({type(blob_store).__name__}, "
        f"record table {settings.record_table!r})"
    )
    return container


def _register_blueprints(app: Flask, config: AppConfig) -> None:
    """
    Register API blueprints.

    Args:
        app: Flask application
        config: Application configuration
    """
    from .api.v1 import api_v1_bp

    app.register_blueprint(api_v1_bp)

    logger.info(
        f"API {config.api_version} registered at /api/{config.api_version} "
        f"with Swagger UI at /api/{config.api_version}/docs"
    )


def _get_health_status(app: Flask) -> tuple[dict, int]:
    """
    Get health status of all system components.

    Args:
        app: Flask application instance

    Returns:
        Tuple of (health_status_dict, http_status_code)
    """
    health_status = {
        "status": "ok",
        "message": "backend ready",
        "redis": "unknown",
        "storage": "unknown",
    }

    # Check Redis connectivity
    try:
        if redis_health_check():
            health_status["redis"] = "connected"
        else:
            health_status["redis"] = "disconnected"
            health_status["status"] = "degraded"
    except Exception as e:
        health_status["redis"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    # Check blob store
    blob_store = app.container.try_resolve(IBlobStore)
    if blob_store is None:
        health_status["storage"] = "unavailable"
        health_status["status"] = "degraded"
    elif isinstance(blob_store, LocalBlobStore):
        if blob_store.is_available():
            health_status["storage"] = "local"
        else:
            health_status["storage"] = "local: not writable"
            health_status["status"] = "degraded"
    elif isinstance(blob_store, GCSBlobStore):
        if gcs_health_check():
            health_status["storage"] = "gcs"
        else:
            health_status["storage"] = "gcs: bucket unreachable"
            health_status["status"] = "degraded"
    else:
        health_status["storage"] = type(blob_store).__name__

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code


def _register_health_endpoint(app: Flask) -> None:
    """
    Register health check endpoint.

    Args:
        app: Flask application
    """

    @app.route("/health", methods=["GET"])
    def health():
        """
        Health check endpoint.
        Returns overall health status of the application and its dependencies.
        """
        health_status, status_code = _get_health_status(app)
        return jsonify(health_status), status_code


def _register_error_handlers(app: Flask) -> None:
    """Answer routing-level errors with the structured error payload."""

    @app.errorhandler(405)
    def method_not_allowed(error):
        body, status = create_error_response(
            ErrorCategory.METHOD_NOT_ALLOWED, str(error), status_code=405
        )
        return jsonify(body), status

    @app.errorhandler(413)
    def payload_too_large(error):
        body, status = create_error_response(
            ErrorCategory.INVALID_REQUEST, str(error), status_code=413
        )
        return jsonify(body), status
