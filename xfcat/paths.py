"""Path helpers."""

from __future__ import annotations

import os
from pathlib import Path, PurePath
from typing import Iterable


def as_context(path: str | os.PathLike[str]) -> str:
    """Render a path for use in an error message."""
    return os.fspath(path)


def join_path(base: str | os.PathLike[str], rest: str | os.PathLike[str]) -> Path:
    """Append ``rest`` below ``base``; leading separators of ``rest`` never replace ``base``."""
    rest = os.fspath(rest)
    if not rest:
        raise ValueError("attempted to join_path with an empty sub-path")
    base = os.fspath(base)
    if base:
        rest = rest.lstrip("/\\")
        if not rest:
            raise ValueError("attempted to join_path with a sub-path made only of separators")
    return Path(base) / rest


def common_prefix(paths: Iterable[str | os.PathLike[str]]) -> Path | None:
    """The longest leading run of components shared by all paths, or ``None``."""
    iterator = iter(paths)
    try:
        first = next(iterator)
    except StopIteration:
        return None
    parts = list(PurePath(first).parts)
    for path in iterator:
        shared = 0
        for left, right in zip(parts, PurePath(path).parts):
            if left != right:
                break
            shared += 1
        del parts[shared:]
        if not parts:
            return None
    return Path(*parts) if parts else None