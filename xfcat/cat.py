"""Reading and writing of package catalog (``.cat``) files."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterator

from .md5 import Digest, DigestError
from .utils import Timestamp

_U64_RE = re.compile(r"\+?[0-9]+")
_U64_MAX = 2**64 - 1


class CatError(Exception):
    """Raised when a catalog cannot be read."""


class ParseError(CatError):
    """A catalog line is malformed."""

    def __init__(self, line: int, message: str) -> None:
        super().__init__(f"parse error at line #{line}: {message}")
        self.line = line
        self.message = message


def _parse_u64(text: str) -> int:
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not _U64_RE.fullmatch(text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    if value > _U64_MAX:
        raise ValueError("number too large to fit in target type")
    return value


class _EntryReader:
    """Reads at most a fixed number of bytes from a source stream."""

    def __init__(self, source: BinaryIO, size: int) -> None:
        self._source = source
        self._remaining = size

    def read(self, size: int = -1) -> bytes:
        if self._remaining <= 0:
            return b""
        wanted = self._remaining if size is None or size < 0 else min(size, self._remaining)
        data = self._source.read(wanted)
        self._remaining -= len(data)
        return data


@dataclass
class Entry:
    """One file stored in a package."""

    path: str = ""
    hash: Digest = field(default_factory=Digest)
    timestamp: Timestamp = field(default_factory=Timestamp)
    size: int = 0
    offset: int = 0

    def reader(self, source: BinaryIO) -> _EntryReader:
        """Position ``source`` at this entry's data and return a reader limited to it."""
        source.seek(self.offset)
        return _EntryReader(source, self.size)


class Reader:
    """Iterates over the entries of a catalog stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self.line = 0
        self.offset = 0

    def read_entry(self) -> Entry | None:
        """Return the next entry, or ``None`` at the end of the stream."""
        raw = self._stream.readline()
        if not raw:
            return None
        if isinstance(raw, bytes):
            try:
                text = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise CatError("stream did not contain valid UTF-8") from exc
        else:
            text = raw

        fields = text.rstrip().rsplit(" ", 3)
        fields.reverse()

        hash_text = fields[0]
        try:
            digest = Digest.parse(hash_text)
        except DigestError as exc:
            raise ParseError(self.line, f"{exc} - '{hash_text}'") from exc

        if len(fields) < 2:
            raise self._format_error(1)
        stamp_text = fields[1]
        try:
            stamp = Timestamp.parse(stamp_text)
        except ValueError as exc:
            raise ParseError(self.line, f"{exc} - '{stamp_text}'") from exc

        if len(fields) < 3:
            raise self._format_error(2)
        size_text = fields[2]
        try:
            size = _parse_u64(size_text)
        except ValueError as exc:
            raise ParseError(self.line, f"{exc} - '{size_text}'") from exc

        if len(fields) < 4:
            raise self._format_error(3)

        entry = Entry(path=fields[3], hash=digest, timestamp=stamp, size=size, offset=self.offset)
        self.offset += size
        self.line += 1
        return entry

    def _format_error(self, actual: int) -> ParseError:
        return ParseError(self.line, f"expected 4 fields, found {actual}")

    def __iter__(self) -> Iterator[Entry]:
        return self

    def __next__(self) -> Entry:
        entry = self.read_entry()
        if entry is None:
            raise StopIteration
        return entry


class Writer:
    """Writes catalog lines to a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def write(self, path: str, size: int, stamp: Timestamp | int, digest: Digest) -> None:
        self._stream.write(f"{path} {size} {stamp} {digest}\n".encode("utf-8"))

    def write_entry(self, entry: Entry) -> None:
        self.write(entry.path, entry.size, entry.timestamp, entry.hash)

    def flush(self) -> None:
        self._stream.flush()

    def __enter__(self) -> Writer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.flush()


def resolve_catalog(path: str | os.PathLike[str]) -> Path:
    """Map a package path given as ``.cat``, ``.dat`` or without extension to its catalog."""
    path = Path(path)
    if path.suffix in ("", ".dat"):
        return path.with_suffix(".cat")
    return path