"""Stream helpers: a reusable copier and a writer that duplicates output."""

from __future__ import annotations

from typing import BinaryIO, Protocol

DEFAULT_BUFSIZE = 32 * 1024


class _Writable(Protocol):
    def write(self, data: bytes) -> int | None: ...


def _write_all(writer: _Writable, data: bytes) -> None:
    view = memoryview(data)
    while view:
        written = writer.write(view)
        if written is None:
            return
        if written == 0:
            raise OSError("failed to write whole buffer")
        view = view[written:]


class StreamCopier:
    """Copies one stream into another through a fixed-size buffer."""

    def __init__(self, capacity: int = DEFAULT_BUFSIZE) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity

    def copy(self, reader: BinaryIO, writer: _Writable) -> int:
        """Copy until the reader is exhausted; return the number of bytes copied."""
        copied = 0
        while chunk := reader.read(self.capacity):
            _write_all(writer, chunk)
            copied += len(chunk)
        return copied


class TeeWriter:
    """Writes everything it receives to two streams."""

    def __init__(self, first: _Writable, second: _Writable) -> None:
        self.first = first
        self.second = second

    def write(self, data: bytes) -> int:
        size = len(data)
        a = self.first.write(data)
        b = self.second.write(data)
        return min(size if a is None else a, size if b is None else b)

    def flush(self) -> None:
        self.first.flush()
        self.second.flush()