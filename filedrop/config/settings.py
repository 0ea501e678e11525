"""
Transfer Settings

Immutable service configuration, read from the environment once at start-up
and handed to the coordinators explicitly.
"""

import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping, Optional

from ..domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_KEY_LENGTH = 5
DEFAULT_RECORD_TABLE = "transfers"
DEFAULT_BLOB_DIR = "/tmp/filedrop"
DEFAULT_BLOB_BASE_URL = "/api/v1/blobs"


@dataclass(frozen=True)
class TransferSettings:
    """
    Transfer service configuration.

    Attributes:
        region: Backend location, checked against the GCS bucket location
        domain: Prefix of public links (``domain/key/filename``)
        blob_bucket: GCS bucket name; empty selects the local blob store
        record_table: Redis key namespace for transfer records
        key_length: Bytes of entropy per key
        blob_dir: Root directory of the local blob store
        blob_base_url: URL of the local signed blob download endpoint
        secret_key: HMAC key for locally signed blob URLs
        retention: How long a transfer stays valid
        max_redemptions: How many downloads a transfer allows
        presign_ttl: Validity of a signed download URL
        max_key_attempts: Candidate keys tried before giving up
    """
    region: str = ""
    domain: str = ""
    blob_bucket: str = ""
    record_table: str = DEFAULT_RECORD_TABLE
    key_length: int = DEFAULT_KEY_LENGTH
    blob_dir: str = DEFAULT_BLOB_DIR
    blob_base_url: str = DEFAULT_BLOB_BASE_URL
    secret_key: Optional[str] = None
    retention: timedelta = timedelta(hours=72)
    max_redemptions: int = 3
    presign_ttl: timedelta = timedelta(minutes=15)
    max_key_attempts: int = 5

    def __post_init__(self):
        if self.key_length <= 0:
            raise ConfigurationError(
                f"KEY_LEN must be a positive number of bytes, got {self.key_length}"
            )
        if self.max_redemptions <= 0:
            raise ConfigurationError(
                f"max_redemptions must be positive, got {self.max_redemptions}"
            )
        if self.max_key_attempts <= 0:
            raise ConfigurationError(
                f"max_key_attempts must be positive, got {self.max_key_attempts}"
            )

    @property
    def uses_gcs(self) -> bool:
        return bool(self.blob_bucket)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'TransferSettings':
        """
        Build settings from environment variables.

        A non-numeric ``KEY_LEN`` falls back to the default; a zero or
        negative one is rejected.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Raises:
            ConfigurationError: If a setting is present but unusable
        """
        env = os.environ if environ is None else environ

        raw_key_len = env.get("KEY_LEN", "")
        try:
            key_length = int(raw_key_len)
        except ValueError:
            if raw_key_len:
                logger.warning(
                    f"KEY_LEN={raw_key_len!r} is not a number, "
                    f"using default {DEFAULT_KEY_LENGTH}"
                )
            key_length = DEFAULT_KEY_LENGTH

        return cls(
            region=env.get("REGION", ""),
            domain=env.get("DOMAIN", ""),
            blob_bucket=env.get("BLOB_BUCKET", ""),
            record_table=env.get("RECORD_TABLE") or DEFAULT_RECORD_TABLE,
            key_length=key_length,
            blob_dir=env.get("BLOB_DIR") or DEFAULT_BLOB_DIR,
            blob_base_url=env.get("BLOB_BASE_URL") or DEFAULT_BLOB_BASE_URL,
            secret_key=env.get("SECRET_KEY") or None,
        )
