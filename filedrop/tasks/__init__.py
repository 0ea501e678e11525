"""
Celery Tasks

This module contains the periodic maintenance tasks.
"""

from .cleanup_task import cleanup_orphaned_blobs

__all__ = ['cleanup_orphaned_blobs']
