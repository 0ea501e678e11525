"""
Celery Application Instance

Creates the Celery app instance for use by workers and beat scheduler.
Uses the app factory to ensure all services are properly initialized.

Run with::

    celery -A filedrop.celery_app:celery_app worker -B
"""

from .app_factory import create_app
from .config.logging_config import configure_logging

configure_logging()

# Create Flask app with all services initialized (including dependency container)
flask_app = create_app()

# Get Celery instance from Flask app
celery_app = flask_app.celery

# Task modules are imported by name once the worker starts, when
# `celery_app` is already the current app for shared tasks
celery_app.conf.imports = (
    "filedrop.tasks.cleanup_task",
)
