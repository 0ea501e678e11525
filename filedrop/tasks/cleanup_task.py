"""
Cleanup Task

Celery beat task for periodic removal of blobs whose transfer expired.
Thin wrapper that delegates to the BlobSweeper application service.
"""

import logging

from celery import shared_task
from flask import current_app

from ..application.cleanup_service import BlobSweeper

logger = logging.getLogger(__name__)


@shared_task(bind=True, name="tasks.cleanup_orphaned_blobs")
def cleanup_orphaned_blobs(self):
    """
    Periodic cleanup task that removes blobs without a transfer record.

    Records expire on their own through the record store TTL; this task
    reclaims the payloads they leave behind. It runs inside the Flask app
    context and resolves the sweeper from the DependencyContainer, never
    touching infrastructure directly.

    Returns:
        dict: Sweep statistics and errors
    """
    logger.info("Starting blob sweep")

    try:
        sweeper = current_app.container.resolve(BlobSweeper)
        stats = sweeper.sweep()
    except Exception as e:
        error_msg = f"Blob sweep failed: {e}"
        logger.error(error_msg, exc_info=True)
        return {"scanned": 0, "deleted": 0, "failed": 0, "errors": [error_msg]}

    logger.info(
        f"Blob sweep completed - Scanned: {stats['scanned']}, "
        f"Deleted: {stats['deleted']}, Failed: {stats['failed']}"
    )
    return {**stats, "errors": []}
