"""
Signed URL Service

Generates and validates time-limited HMAC-signed URLs for blobs served by
this application (the local filesystem blob store).
"""

import hashlib
import hmac
import secrets
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional
from urllib.parse import urlencode


@dataclass
class SignedUrl:
    """
    Represents a signed URL with expiration.
    """

    url: str
    key: str
    expires: int
    signature: str

    @property
    def expires_at(self) -> datetime:
        return datetime.utcfromtimestamp(self.expires)

    def is_expired(self) -> bool:
        """Check if the signed URL has expired."""
        return time.time() >= self.expires

    def get_remaining_seconds(self) -> int:
        """Get remaining seconds until expiration."""
        return max(0, int(self.expires - time.time()))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "url": self.url,
            "key": self.key,
            "expires_at": self.expires_at.isoformat(),
            "expires_in": self.get_remaining_seconds(),
            "signature": self.signature,
        }


class SignedUrlService:
    """
    Service for generating and validating signed blob URLs.

    The signature is HMAC-SHA256 over ``key:expires`` where ``expires`` is a
    Unix timestamp carried in the query string.
    """

    def __init__(self, secret_key: Optional[str] = None, base_url: str = "/api/v1/blobs"):
        """
        Initialize SignedUrlService.

        Args:
            secret_key: Secret key for HMAC signing; a random one is generated
                when omitted, which only works for a single process
            base_url: Base URL of the blob download endpoint
        """
        self.secret_key = secret_key or self._generate_secret_key()
        self.base_url = base_url.rstrip("/")

    @staticmethod
    def _generate_secret_key(length: int = 32) -> str:
        """Generate a cryptographically secure secret key."""
        return secrets.token_hex(length)

    def generate_signed_url(self, key: str, ttl: timedelta) -> SignedUrl:
        """
        Generate a signed URL for blob access.

        Args:
            key: Transfer key of the blob
            ttl: How long the URL stays valid

        Returns:
            SignedUrl object with URL and expiration information
        """
        expires = int(time.time() + ttl.total_seconds())
        signature = self._generate_signature(key, expires)
        query = urlencode({"expires": expires, "signature": signature})

        return SignedUrl(
            url=f"{self.base_url}/{key}?{query}",
            key=key,
            expires=expires,
            signature=signature,
        )

    def _generate_signature(self, key: str, expires: int) -> str:
        """
        Generate HMAC signature for key and expiration.

        Returns:
            HMAC signature as hex string
        """
        message = f"{key}:{expires}"
        return hmac.new(
            self.secret_key.encode("utf-8"), message.encode("utf-8"), hashlib.sha256
        ).hexdigest()

    def validate_signature(self, key: str, signature: str, expires: int) -> bool:
        """
        Validate HMAC signature for a key.

        Returns:
            True if signature is valid, False otherwise
        """
        expected_signature = self._generate_signature(key, expires)

        # Constant-time comparison
        return hmac.compare_digest(signature, expected_signature)

    def is_expired(self, expires: int) -> bool:
        return time.time() >= expires
