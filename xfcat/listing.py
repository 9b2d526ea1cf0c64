"""Listing of the contents of packages."""

from __future__ import annotations

import os
import sys
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Iterable, TextIO

from . import log
from .cat import CatError, Entry, Reader, resolve_catalog
from .filters import PathFilter
from .utils import SizeFormat


class SortMode(Enum):
    """Order in which entries are listed."""

    NAME = "name"
    SIZE = "size"
    TIME = "time"


def load_entries(
    source: str | os.PathLike[str],
    path_filter: PathFilter | None = None,
    sort: SortMode | None = None,
    reverse: bool = False,
) -> list[Entry]:
    """Read the catalog of a package, keep the entries passing the filter and order them.

    Names sort alphabetically; sizes and times sort largest and newest first.
    ``reverse`` flips the resulting order.
    """
    catalog = resolve_catalog(source)
    with open(catalog, "rb") as stream:
        entries = [
            entry
            for entry in Reader(stream)
            if path_filter is None or not path_filter.is_filtered(entry.path)
        ]

    if sort is SortMode.NAME:
        entries.sort(key=lambda entry: entry.path)
    elif sort is SortMode.SIZE:
        entries.sort(key=lambda entry: entry.size, reverse=True)
    elif sort is SortMode.TIME:
        entries.sort(key=lambda entry: entry.timestamp, reverse=True)

    if reverse:
        entries.reverse()
    return entries


def _write_listing(out: TextIO, source: str, entries: list[Entry], human_readable: bool) -> None:
    out.write(f"\n{source}:\n")
    for entry in entries:
        size = SizeFormat(entry.size, human_readable)
        out.write(f"  {size:>7} {entry.timestamp:#} {entry.path}\n")
    out.write(f"total: {len(entries)} entries.\n\n")


def run(
    inputs: Iterable[str | os.PathLike[str]],
    human_readable: bool = False,
    path_filter: PathFilter | None = None,
    sort: SortMode | None = None,
    reverse: bool = False,
    stream: TextIO | None = None,
) -> None:
    """List every package in ``inputs``; packages that fail to load are reported and skipped."""
    out = sys.stdout if stream is None else stream
    sources = [os.fspath(path) for path in inputs]

    with ThreadPoolExecutor() as pool:
        futures = [pool.submit(load_entries, source, path_filter, sort, reverse) for source in sources]
        for source, future in zip(sources, futures):
            try:
                entries = future.result()
            except BrokenPipeError:
                raise
            except (OSError, CatError) as exc:
                log.error(exc)
                continue
            _write_listing(out, source, entries, human_readable)
            out.flush()