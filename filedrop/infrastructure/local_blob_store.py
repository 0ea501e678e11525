"""
Local Blob Store Implementation

Concrete implementation of IBlobStore on the local filesystem. Each payload
is stored as ``<base_path>/<key>`` with a ``<key>.meta.json`` sidecar that
remembers the download filename. Downloads go through HMAC-signed URLs
served by the blobs API namespace.
"""

import json
import logging
import os
import shutil
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterator, Optional

from ..domain.errors import StoreUnavailableError
from ..domain.transfer.blob_store import BlobContent, IBlobStore
from ..domain.transfer.signed_url_service import SignedUrlService
from ..domain.transfer.value_objects import TransferKey, content_disposition

logger = logging.getLogger(__name__)

META_SUFFIX = ".meta.json"


class LocalBlobStore(IBlobStore):
    """
    Local filesystem implementation of IBlobStore.

    Writes go to a temporary file in the same directory and are renamed into
    place, so a reader never sees a partially written payload.

    Attributes:
        base_path: Directory holding the payloads
        signer: Service producing signed download URLs
    """

    def __init__(self, base_path: str, signer: SignedUrlService):
        """
        Initialize the local blob store.

        Args:
            base_path: Base directory for payload storage
            signer: SignedUrlService pointing at the blob download endpoint

        Raises:
            StoreUnavailableError: If the base directory cannot be created
        """
        self.base_path = Path(base_path)
        self.signer = signer
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreUnavailableError(
                f"Failed to create blob directory {self.base_path}", e
            ) from e

    def _blob_path(self, key: str) -> Path:
        # Keys are hex, which also rules out path traversal
        if not TransferKey.is_valid(key):
            raise ValueError(f"Invalid blob key: {key!r}")
        return self.base_path / key

    def _meta_path(self, key: str) -> Path:
        return self.base_path / f"{key}{META_SUFFIX}"

    def put(self, key: str, content: BlobContent, display_name: str) -> None:
        path = self._blob_path(key)
        metadata = {
            "display_name": display_name,
            "content_disposition": content_disposition(display_name),
            "stored_at": datetime.utcnow().isoformat(),
        }

        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                dir=self.base_path, prefix=".upload-", delete=False
            ) as tmp:
                tmp_name = tmp.name
                if isinstance(content, (bytes, bytearray)):
                    tmp.write(content)
                else:
                    if hasattr(content, "seek"):
                        content.seek(0)
                    shutil.copyfileobj(content, tmp)

            self._meta_path(key).write_text(json.dumps(metadata), encoding="utf-8")
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise StoreUnavailableError(f"Failed to write blob {key}: {e}", e) from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning(f"Could not remove temporary upload {tmp_name}")

    def presign_get(self, key: str, ttl: timedelta) -> str:
        return self.signer.generate_signed_url(key, ttl).url

    def delete(self, key: str) -> bool:
        try:
            self._blob_path(key).unlink(missing_ok=True)
            self._meta_path(key).unlink(missing_ok=True)
            return True
        except (OSError, ValueError) as e:
            logger.error(f"Error deleting blob {key}: {e}")
            return False

    def exists(self, key: str) -> bool:
        try:
            return self._blob_path(key).is_file()
        except (OSError, ValueError):
            return False

    def list_keys(self) -> Iterator[str]:
        try:
            entries = list(self.base_path.iterdir())
        except OSError as e:
            raise StoreUnavailableError(f"Failed to list {self.base_path}", e) from e

        for entry in entries:
            if entry.is_file() and TransferKey.is_valid(entry.name):
                yield entry.name

    def open(self, key: str) -> Optional[tuple[Path, str]]:
        """
        Locate a stored payload for serving.

        Returns:
            Tuple of (payload path, download filename), or None if missing
        """
        if not self.exists(key):
            return None

        display_name = "download"
        try:
            metadata = json.loads(self._meta_path(key).read_text(encoding="utf-8"))
            display_name = metadata.get("display_name") or display_name
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Missing or corrupt metadata for blob {key}: {e}")

        return self._blob_path(key), display_name

    def is_available(self) -> bool:
        """Check if the storage directory is writable."""
        return self.base_path.exists() and os.access(self.base_path, os.W_OK)
