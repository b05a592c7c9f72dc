"""C4 identifiers: SHA-512 digests written as 90-character base58 strings."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import BinaryIO, Union

CHARSET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
PREFIX = "c4"
DIGEST_SIZE = 64
ID_LENGTH = 90

_BASE = len(CHARSET)
_BODY_LENGTH = ID_LENGTH - len(PREFIX)
_LIMIT = 1 << (DIGEST_SIZE * 8)
_VALUES = {char: value for value, char in enumerate(CHARSET)}
_CHUNK = 64 * 1024


class IDParseError(ValueError):
    """Raised when a string is not a well formed C4 ID."""


@dataclass(frozen=True, order=True)
class ID:
    """A C4 ID, ordered by its digest bytes."""

    digest: bytes = field(default=bytes(DIGEST_SIZE))

    def __post_init__(self) -> None:
        digest = bytes(self.digest)
        if len(digest) != DIGEST_SIZE:
            raise ValueError(f"a C4 digest is {DIGEST_SIZE} bytes, got {len(digest)}")
        object.__setattr__(self, "digest", digest)

    def is_nil(self) -> bool:
        """True when every byte of the digest is zero."""
        return not any(self.digest)

    def sum(self, other: "ID") -> "ID":
        """Return the ID of the pair: the lesser digest hashed before the greater."""
        low, high = sorted((self, other))
        return ID(hashlib.sha512(low.digest + high.digest).digest())

    def __str__(self) -> str:
        value = int.from_bytes(self.digest, "big")
        chars = []
        while value:
            value, rem = divmod(value, _BASE)
            chars.append(CHARSET[rem])
        body = "".join(reversed(chars)).rjust(_BODY_LENGTH, CHARSET[0])
        return PREFIX + body

    def __repr__(self) -> str:
        return f"ID('{self}')"

    def __bytes__(self) -> bytes:
        return self.digest


def parse(text: str) -> ID:
    """Parse the string form of a C4 ID."""
    if len(text) != ID_LENGTH:
        raise IDParseError(f"a C4 ID is {ID_LENGTH} characters long, got {len(text)}")
    if not text.startswith(PREFIX):
        raise IDParseError(f"a C4 ID starts with {PREFIX!r}: {text!r}")
    value = 0
    for position, char in enumerate(text[len(PREFIX):], start=len(PREFIX)):
        digit = _VALUES.get(char)
        if digit is None:
            raise IDParseError(f"invalid character {char!r} at position {position}")
        value = value * _BASE + digit
    if value >= _LIMIT:
        raise IDParseError(f"value out of range: {text!r}")
    return ID(value.to_bytes(DIGEST_SIZE, "big"))


def identify(data: Union[bytes, bytearray, memoryview, BinaryIO]) -> ID:
    """Return the C4 ID of a bytes-like object or of everything a binary stream yields."""
    hasher = hashlib.sha512()
    if hasattr(data, "read"):
        for chunk in iter(lambda: data.read(_CHUNK), b""):
            hasher.update(chunk)
    else:
        hasher.update(data)
    return ID(hasher.digest())