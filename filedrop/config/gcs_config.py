"""
Google Cloud Storage Configuration

Manages GCS client initialization and configuration.
"""

import logging
import os
from typing import Optional

from google.api_core.exceptions import GoogleAPIError
from google.cloud import storage
from google.oauth2 import service_account

logger = logging.getLogger(__name__)

# Global GCS client instance
_gcs_client: Optional[storage.Client] = None
_gcs_bucket: Optional[storage.Bucket] = None


def init_gcs(bucket_name: str, region: str = "") -> bool:
    """
    Initialize Google Cloud Storage client.

    Args:
        bucket_name: Bucket holding transfer payloads
        region: Expected bucket location; a mismatch is logged

    Returns:
        True if initialization successful, False otherwise
    """
    global _gcs_client, _gcs_bucket

    if not bucket_name:
        logger.warning("BLOB_BUCKET not set, GCS integration disabled")
        return False

    credentials_path = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")

    try:
        if credentials_path and os.path.exists(credentials_path):
            credentials = service_account.Credentials.from_service_account_file(
                credentials_path
            )
            _gcs_client = storage.Client(credentials=credentials)
            logger.info(f"GCS client initialized with service account: {credentials_path}")
        else:
            # Default credentials (workload identity, GCE metadata server)
            _gcs_client = storage.Client()
            logger.info("GCS client initialized with default credentials")
    except Exception as e:
        logger.warning(f"Could not initialize GCS client: {e}")
        _gcs_client = None
        _gcs_bucket = None
        return False

    _gcs_bucket = _gcs_client.bucket(bucket_name)

    try:
        bucket = _gcs_client.get_bucket(bucket_name)
        if region and bucket.location and bucket.location.lower() != region.lower():
            logger.warning(
                f"GCS bucket '{bucket_name}' is in {bucket.location}, "
                f"configured REGION is {region}"
            )
    except GoogleAPIError as e:
        # Bucket may exist while we lack permission to read its metadata
        logger.warning(f"Could not verify bucket '{bucket_name}': {e}")

    logger.info(f"GCS initialized successfully with bucket: {bucket_name}")
    return True


def get_gcs_client() -> Optional[storage.Client]:
    """Get the GCS client instance, or None if not initialized."""
    return _gcs_client


def get_gcs_bucket() -> Optional[storage.Bucket]:
    """Get the GCS bucket instance, or None if not initialized."""
    return _gcs_bucket


def is_gcs_enabled() -> bool:
    """
    Check if GCS integration is enabled and configured.

    Returns:
        True if GCS is available, False otherwise
    """
    return _gcs_client is not None and _gcs_bucket is not None


def gcs_health_check() -> bool:
    """
    Perform health check on GCS connection.

    Returns:
        True if GCS is healthy, False otherwise
    """
    if not is_gcs_enabled():
        return False

    try:
        return _gcs_bucket.exists()
    except GoogleAPIError as e:
        logger.warning(f"GCS health check failed: {e}")
        return False
