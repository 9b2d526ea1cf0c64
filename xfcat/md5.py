"""MD5 digests and a streaming hash context."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
DIGEST_SIZE = 16


class DigestError(ValueError):
    """Raised when a textual digest cannot be decoded."""


class InvalidCharacterError(DigestError):
    """A digest string contains a character that is not a hex digit."""

    def __init__(self, char: str, index: int) -> None:
        super().__init__(f"invalid hex character {char!r} at index {index} in hash")
        self.char = char
        self.index = index


class HashLengthError(DigestError):
    """A digest string does not have exactly 32 characters."""

    def __init__(self, length: int) -> None:
        super().__init__(f"invalid hash length ({length})")
        self.length = length


@dataclass(frozen=True)
class Digest:
    """A 16-byte MD5 digest."""

    value: bytes = bytes(DIGEST_SIZE)

    def __post_init__(self) -> None:
        if len(self.value) != DIGEST_SIZE:
            raise ValueError(f"digest must be {DIGEST_SIZE} bytes, got {len(self.value)}")
        object.__setattr__(self, "value", bytes(self.value))

    @classmethod
    def parse(cls, text: str) -> Digest:
        """Decode a 32-character hex string."""
        raw = text.encode("utf-8")
        if len(raw) != DIGEST_SIZE * 2:
            raise HashLengthError(len(raw))
        for index, byte in enumerate(raw):
            if byte not in _HEX_DIGITS:
                raise InvalidCharacterError(chr(byte), index)
        return cls(bytes.fromhex(raw.decode("ascii")))

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return self.value.hex()

    def __format__(self, spec: str) -> str:
        if spec == "#":
            return "0x" + str(self)
        return format(str(self), spec)


class Context:
    """Incremental MD5 computation, usable as a write-only stream.

    A context is consumed by :meth:`finalize`; using it afterwards raises
    ``ValueError``.
    """

    def __init__(self) -> None:
        self._hash = hashlib.md5(usedforsecurity=False)
        self._finalized = False

    def _ensure_open(self) -> None:
        if self._finalized:
            raise ValueError("md5 context has already been finalized")

    def update(self, data: bytes | bytearray | memoryview | str) -> None:
        self._ensure_open()
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._hash.update(data)

    def write(self, data: bytes | bytearray | memoryview) -> int:
        self.update(data)
        return len(data)

    def flush(self) -> None:
        """Check the context can still take data; nothing is buffered."""
        self._ensure_open()

    def finalize(self) -> Digest:
        self._ensure_open()
        self._finalized = True
        return Digest(self._hash.digest())