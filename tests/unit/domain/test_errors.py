"""
Unit tests for error types and structured error responses.
"""

from filedrop.domain.errors import (
    ERROR_MESSAGES,
    ApplicationError,
    DomainError,
    ErrorCategory,
    StoreUnavailableError,
    UploadFailedError,
    create_error_response,
)


class TestDomainErrors:

    def test_domain_error_keeps_original(self):
        cause = ConnectionError("refused")
        error = StoreUnavailableError("redis down", cause)

        assert isinstance(error, DomainError)
        assert error.original_error is cause
        assert str(error) == "redis down"

    def test_upload_failed_carries_key(self):
        error = UploadFailedError("write failed", key="abcd")

        assert error.key == "abcd"
        assert error.original_error is None


class TestApplicationError:

    def test_every_category_has_a_message(self):
        for category in ErrorCategory:
            assert set(ERROR_MESSAGES[category]) == {"title", "message", "action"}

    def test_to_dict_omits_technical_message(self):
        error = ApplicationError(ErrorCategory.TRANSFER_NOT_FOUND, "record_absent for abcd")

        payload = error.to_dict()

        assert payload["error"] == "transfer_not_found"
        assert "abcd" not in str(payload)
        assert error.technical_message == "record_absent for abcd"

    def test_create_error_response(self):
        body, status = create_error_response(
            ErrorCategory.METHOD_NOT_ALLOWED, status_code=405
        )

        assert status == 405
        assert body["error"] == "method_not_allowed"
        assert body["title"] == "Method Not Allowed"
