"""Recursive directory traversal for packing."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator


@dataclass(frozen=True)
class FsEntry:
    """A file found below a walk root."""

    path: Path
    modified: float
    relative: str
    size: int


def _make_entry(root: Path, path: Path, meta: os.stat_result) -> FsEntry:
    relative = str(path.relative_to(root))
    try:
        relative.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError(f"{path}: path contains invalid utf8 characters") from exc
    return FsEntry(path=path, modified=meta.st_mtime, relative=relative, size=meta.st_size)


def walk(root: str | os.PathLike[str]) -> Iterator[FsEntry]:
    """Yield every non-directory below ``root``.

    Files of a directory come before those of its subdirectories. Symbolic
    links to directories are skipped; links to files are followed.
    """
    root = Path(root)
    deferred = [root]
    while deferred:
        directory = deferred.pop()
        with os.scandir(directory) as entries:
            for item in entries:
                path = Path(item.path)
                if item.is_symlink():
                    meta = os.stat(path)
                    if stat.S_ISDIR(meta.st_mode):
                        continue
                else:
                    meta = item.stat(follow_symlinks=False)
                    if stat.S_ISDIR(meta.st_mode):
                        deferred.append(path)
                        continue
                yield _make_entry(root, path, meta)