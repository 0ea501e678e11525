"""
Unit tests for transfer value objects.

Covers key generation, download path parsing and Content-Disposition
formatting.
"""

from unittest.mock import patch

import pytest

from filedrop.domain.errors import EntropyUnavailableError, MalformedInputError
from filedrop.domain.transfer.value_objects import (
    DownloadPath,
    KeyGenerator,
    TransferKey,
    content_disposition,
)


class TestTransferKey:
    """Test TransferKey generation and validation."""

    def test_generate_default_length_gives_ten_hex_chars(self):
        key = TransferKey.generate(5)

        assert len(key.value) == 10
        assert all(c in "0123456789abcdef" for c in key.value)

    def test_generate_one_byte_gives_two_chars(self):
        assert len(TransferKey.generate(1).value) == 2

    def test_generate_rejects_non_positive_length(self):
        with pytest.raises(ValueError):
            TransferKey.generate(0)
        with pytest.raises(ValueError):
            TransferKey.generate(-3)

    def test_generate_reports_missing_entropy(self):
        with patch(
            "filedrop.domain.transfer.value_objects.secrets.token_bytes",
            side_effect=OSError("getrandom failed"),
        ):
            with pytest.raises(EntropyUnavailableError) as exc_info:
                TransferKey.generate(5)

        assert isinstance(exc_info.value.original_error, OSError)

    def test_hex_encoding_of_known_bytes(self):
        with patch(
            "filedrop.domain.transfer.value_objects.secrets.token_bytes",
            return_value=bytes([0x00, 0xAB, 0xFF]),
        ):
            assert TransferKey.generate(3).value == "00abff"

    @pytest.mark.parametrize("value", ["a1b2c3d4e5", "00", "ff"])
    def test_is_valid_accepts_lowercase_hex(self, value):
        assert TransferKey.is_valid(value)

    @pytest.mark.parametrize("value", ["", "abc", "A1B2", "zz", "a1/b2", None])
    def test_is_valid_rejects_other_shapes(self, value):
        assert not TransferKey.is_valid(value)

    def test_constructor_rejects_invalid_value(self):
        with pytest.raises(MalformedInputError):
            TransferKey("not-a-key")

    def test_str_returns_value(self):
        assert str(TransferKey("0a0b")) == "0a0b"


class TestKeyGenerator:
    """Test KeyGenerator."""

    def test_generates_strings_of_twice_the_length(self):
        generator = KeyGenerator(8)

        assert len(generator.generate()) == 16

    def test_successive_keys_differ(self):
        generator = KeyGenerator(16)

        keys = {generator.generate() for _ in range(50)}

        assert len(keys) == 50

    def test_rejects_non_positive_length(self):
        with pytest.raises(ValueError):
            KeyGenerator(0)


class TestDownloadPath:
    """Test DownloadPath parsing."""

    def test_parse_key_and_filename(self):
        path = DownloadPath.parse("a1b2c3d4e5/report.pdf")

        assert path.key == "a1b2c3d4e5"
        assert path.filename == "report.pdf"

    def test_parse_splits_on_first_slash_only(self):
        path = DownloadPath.parse("a1b2c3d4e5/nested/dir/file.txt")

        assert path.key == "a1b2c3d4e5"
        assert path.filename == "nested/dir/file.txt"

    @pytest.mark.parametrize(
        "raw",
        ["", "a1b2c3d4e5", "a1b2c3d4e5/", "/report.pdf", "/", "XYZ/report.pdf", "abc/report.pdf"],
    )
    def test_parse_rejects_malformed_paths(self, raw):
        with pytest.raises(MalformedInputError):
            DownloadPath.parse(raw)


class TestContentDisposition:
    """Test Content-Disposition header values."""

    def test_plain_ascii_name(self):
        assert content_disposition("report.pdf") == 'attachment; filename="report.pdf"'

    def test_quotes_and_backslashes_are_dropped(self):
        assert content_disposition('a"b\\c.txt') == 'attachment; filename="abc.txt"'

    def test_control_characters_are_dropped(self):
        assert content_disposition("a\r\nb.txt") == 'attachment; filename="ab.txt"'

    def test_non_ascii_name_gets_extended_parameter(self):
        value = content_disposition("résumé.pdf")

        assert value.startswith('attachment; filename="rsum.pdf"')
        assert "filename*=UTF-8''r%C3%A9sum%C3%A9.pdf" in value

    def test_empty_result_falls_back(self):
        assert content_disposition('""') == 'attachment; filename="download"'
