"""
Transfer Value Objects

Immutable value objects for transfer keys and download paths.
"""

import re
import secrets
from dataclasses import dataclass
from urllib.parse import quote

from ..errors import EntropyUnavailableError, MalformedInputError

_HEX_KEY = re.compile(r"^[0-9a-f]+$")


@dataclass(frozen=True)
class TransferKey:
    """
    Value object representing an opaque transfer key.

    A key is the lowercase hex encoding of random bytes, so it is always
    a non-empty string of even length over ``0-9a-f``.
    """
    value: str

    def __post_init__(self):
        if not self.is_valid(self.value):
            raise MalformedInputError(f"Invalid transfer key: {self.value!r}")

    @staticmethod
    def is_valid(value: str) -> bool:
        """Check whether ``value`` has the shape of a generated key."""
        if not value or not isinstance(value, str):
            return False
        return len(value) % 2 == 0 and bool(_HEX_KEY.match(value))

    @classmethod
    def generate(cls, length: int) -> 'TransferKey':
        """
        Generate a new key from ``length`` bytes of OS randomness.

        Args:
            length: Number of random bytes (the key has ``2 * length`` characters)

        Returns:
            New TransferKey

        Raises:
            ValueError: If length is not positive
            EntropyUnavailableError: If the randomness source cannot be read
        """
        if length <= 0:
            raise ValueError(f"Key length must be positive, got {length}")

        try:
            raw = secrets.token_bytes(length)
        except (NotImplementedError, OSError) as e:
            raise EntropyUnavailableError(
                "Secure randomness source unavailable", original_error=e
            ) from e

        return cls(raw.hex())

    def __str__(self) -> str:
        return self.value


class KeyGenerator:
    """
    Produces candidate transfer keys of a fixed length.

    Candidates may collide; uniqueness is established by the record store.
    """

    def __init__(self, length: int):
        if length <= 0:
            raise ValueError(f"Key length must be positive, got {length}")
        self.length = length

    def generate(self) -> str:
        """Return a fresh candidate key as a hex string."""
        return TransferKey.generate(self.length).value


@dataclass(frozen=True)
class DownloadPath:
    """
    A caller-supplied ``key/filename`` path.

    The filename part is only decorative; lookup uses the key alone.
    """
    key: str
    filename: str

    @classmethod
    def parse(cls, path: str) -> 'DownloadPath':
        """
        Split a download path on its first slash.

        Raises:
            MalformedInputError: If the path is not two non-empty segments
                or the key segment is not a valid transfer key
        """
        if not path or not isinstance(path, str):
            raise MalformedInputError("Empty download path")

        parts = path.split("/", 1)
        if len(parts) != 2:
            raise MalformedInputError(f"Download path has no filename: {path!r}")

        key, filename = parts
        if not key or not filename:
            raise MalformedInputError(f"Download path has an empty segment: {path!r}")

        if not TransferKey.is_valid(key):
            raise MalformedInputError(f"Download path key is malformed: {key!r}")

        return cls(key=key, filename=filename)


def content_disposition(filename: str) -> str:
    """
    Build an ``attachment`` Content-Disposition header value for ``filename``.

    Quotes, backslashes and control characters are dropped from the quoted
    form; non-ASCII names additionally get an RFC 5987 ``filename*`` part.
    """
    safe = "".join(
        c for c in filename if c not in '"\\' and ord(c) >= 32 and ord(c) != 127
    ).strip() or "download"

    try:
        safe.encode("ascii")
    except UnicodeEncodeError:
        fallback = safe.encode("ascii", "ignore").decode("ascii").strip() or "download"
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(safe)}"

    return f'attachment; filename="{safe}"'
