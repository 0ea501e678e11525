"""
Storage Factory

Factory for creating the blob store implementation selected by the
transfer settings: Google Cloud Storage when a bucket is configured,
the local filesystem otherwise.
"""

import logging

from ..config.settings import TransferSettings
from ..domain.transfer.blob_store import IBlobStore
from ..domain.transfer.signed_url_service import SignedUrlService
from .local_blob_store import LocalBlobStore

logger = logging.getLogger(__name__)


class StorageFactory:
    """
    Factory for creating blob store implementations.

    Selection Logic:
    - If ``blob_bucket`` is configured, attempt to use GCS
    - Otherwise, or if GCS cannot be initialized, use the local filesystem
    """

    @staticmethod
    def create_storage(settings: TransferSettings, blob_base_url: str = "/api/v1/blobs") -> IBlobStore:
        """
        Create blob store based on settings.

        Args:
            settings: Transfer settings
            blob_base_url: URL of the local blob download endpoint

        Returns:
            IBlobStore implementation (either local or GCS)
        """
        if settings.uses_gcs:
            store = StorageFactory._create_gcs_storage(settings)
            if store is not None:
                return store
            logger.warning("Falling back to local filesystem storage")

        return StorageFactory.create_local_storage(settings, blob_base_url)

    @staticmethod
    def create_local_storage(settings: TransferSettings, blob_base_url: str) -> LocalBlobStore:
        """
        Create local filesystem blob store.

        Raises:
            StoreUnavailableError: If the blob directory cannot be created
        """
        if not settings.secret_key:
            logger.warning(
                "SECRET_KEY not set; signed blob URLs only verify in this process"
            )

        signer = SignedUrlService(secret_key=settings.secret_key, base_url=blob_base_url)
        store = LocalBlobStore(settings.blob_dir, signer)
        logger.info(f"Storage factory: Using local filesystem storage at {settings.blob_dir}")
        return store

    @staticmethod
    def _create_gcs_storage(settings: TransferSettings):
        """
        Create Google Cloud Storage blob store.

        Returns:
            GCSBlobStore instance, or None if GCS could not be initialized
        """
        from ..config.gcs_config import get_gcs_bucket, get_gcs_client, init_gcs
        from .gcs_blob_store import GCSBlobStore

        if not init_gcs(settings.blob_bucket, settings.region):
            return None

        logger.info(f"Storage factory: Using GCS storage with bucket {settings.blob_bucket}")
        return GCSBlobStore(get_gcs_client(), get_gcs_bucket())
