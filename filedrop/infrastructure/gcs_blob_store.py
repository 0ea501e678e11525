"""
Google Cloud Storage Blob Store Implementation

Concrete implementation of IBlobStore for Google Cloud Storage. Objects are
named by transfer key and carry the download filename as their
Content-Disposition metadata, so V4 signed GET URLs suggest it to clients.
"""

import logging
from datetime import timedelta
from io import BytesIO
from typing import Iterator

from google.api_core.exceptions import GoogleAPIError, NotFound
from google.auth.exceptions import GoogleAuthError
from google.cloud import storage

from ..domain.errors import StoreUnavailableError
from ..domain.transfer.blob_store import BlobContent, IBlobStore
from ..domain.transfer.value_objects import TransferKey, content_disposition

logger = logging.getLogger(__name__)

_GCS_ERRORS = (GoogleAPIError, GoogleAuthError, OSError)


class GCSBlobStore(IBlobStore):
    """
    Google Cloud Storage implementation of IBlobStore.

    Attributes:
        client: Google Cloud Storage client instance
        bucket: GCS bucket object
    """

    def __init__(self, client: storage.Client, bucket: storage.Bucket):
        """
        Initialize the GCS blob store.

        Args:
            client: Initialized storage client
            bucket: Bucket holding transfer payloads
        """
        self.client = client
        self.bucket = bucket

    @classmethod
    def from_bucket_name(cls, bucket_name: str) -> 'GCSBlobStore':
        """
        Build a store with default credentials.

        Raises:
            ValueError: If bucket_name is empty
        """
        if not bucket_name or not bucket_name.strip():
            raise ValueError("bucket_name cannot be empty")

        client = storage.Client()
        return cls(client, client.bucket(bucket_name))

    def put(self, key: str, content: BlobContent, display_name: str) -> None:
        blob = self.bucket.blob(key)
        blob.content_disposition = content_disposition(display_name)

        if isinstance(content, (bytes, bytearray)):
            content = BytesIO(content)
        elif hasattr(content, "seek"):
            content.seek(0)

        try:
            blob.upload_from_file(content, content_type="application/octet-stream")
        except _GCS_ERRORS as e:
            raise StoreUnavailableError(f"Failed to upload blob {key}: {e}", e) from e

        logger.debug(f"Uploaded blob gs://{self.bucket.name}/{key}")

    def presign_get(self, key: str, ttl: timedelta) -> str:
        try:
            return self.bucket.blob(key).generate_signed_url(
                version="v4",
                expiration=ttl,
                method="GET",
            )
        except _GCS_ERRORS + (AttributeError,) as e:
            # Raised by credentials that hold no private key to sign with
            raise StoreUnavailableError(f"Failed to sign URL for blob {key}: {e}", e) from e

    def delete(self, key: str) -> bool:
        try:
            self.bucket.blob(key).delete()
            return True
        except NotFound:
            return True
        except _GCS_ERRORS as e:
            logger.error(f"Error deleting blob {key}: {e}")
            return False

    def exists(self, key: str) -> bool:
        try:
            return self.bucket.blob(key).exists()
        except _GCS_ERRORS:
            return False

    def list_keys(self) -> Iterator[str]:
        try:
            for blob in self.client.list_blobs(self.bucket):
                # Only key-shaped names belong to transfers
                if TransferKey.is_valid(blob.name):
                    yield blob.name
        except _GCS_ERRORS as e:
            raise StoreUnavailableError(f"Failed to list bucket {self.bucket.name}: {e}", e) from e
