"""
Unit tests for SignedUrlService.
"""

import time
from datetime import timedelta
from urllib.parse import parse_qs, urlparse

from filedrop.domain.transfer.signed_url_service import SignedUrlService


class TestSignedUrlService:

    def test_url_points_at_base_with_query(self):
        service = SignedUrlService(secret_key="s3cret", base_url="/api/v1/blobs/")

        signed = service.generate_signed_url("abcd", timedelta(minutes=15))
        parsed = urlparse(signed.url)
        query = parse_qs(parsed.query)

        assert parsed.path == "/api/v1/blobs/abcd"
        assert query["expires"] == [str(signed.expires)]
        assert query["signature"] == [signed.signature]

    def test_expiry_follows_ttl(self):
        service = SignedUrlService(secret_key="s3cret")

        signed = service.generate_signed_url("abcd", timedelta(minutes=15))

        assert 890 <= signed.get_remaining_seconds() <= 900
        assert not signed.is_expired()

    def test_signature_validates(self):
        service = SignedUrlService(secret_key="s3cret")
        signed = service.generate_signed_url("abcd", timedelta(minutes=15))

        assert service.validate_signature("abcd", signed.signature, signed.expires)

    def test_signature_is_bound_to_key_and_expiry(self):
        service = SignedUrlService(secret_key="s3cret")
        signed = service.generate_signed_url("abcd", timedelta(minutes=15))

        assert not service.validate_signature("abce", signed.signature, signed.expires)
        assert not service.validate_signature("abcd", signed.signature, signed.expires + 1)

    def test_other_secret_rejects_signature(self):
        signed = SignedUrlService(secret_key="one").generate_signed_url("abcd", timedelta(minutes=1))

        assert not SignedUrlService(secret_key="two").validate_signature(
            "abcd", signed.signature, signed.expires
        )

    def test_random_secret_when_none_given(self):
        assert SignedUrlService().secret_key != SignedUrlService().secret_key

    def test_is_expired(self):
        service = SignedUrlService(secret_key="s3cret")

        assert service.is_expired(int(time.time()) - 1)
        assert not service.is_expired(int(time.time()) + 60)

    def test_to_dict(self):
        signed = SignedUrlService(secret_key="s").generate_signed_url("abcd", timedelta(minutes=1))

        data = signed.to_dict()

        assert data["key"] == "abcd"
        assert data["url"] == signed.url
        assert "expires_at" in data
