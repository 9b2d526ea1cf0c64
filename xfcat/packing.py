"""Packing a directory into a ``.cat``/``.dat`` package."""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import BinaryIO, Iterable

from tqdm import tqdm

from .cat import Writer
from .filters import PathFilter
from .md5 import Context
from .streams import StreamCopier, TeeWriter
from .utils import Timestamp, create_progress_bar
from .walk import FsEntry, walk


def _announce(progress: tqdm | None, lines: list[str]) -> None:
    for line in lines:
        if progress is None:
            print(line, flush=True)
        else:
            progress.write(line)


def _write_entry(entry: FsEntry, writer: Writer, dat: BinaryIO, copier: StreamCopier) -> int:
    context = Context()
    with open(entry.path, "rb") as source:
        size = copier.copy(source, TeeWriter(context, dat))
    writer.write(entry.relative, size, Timestamp.from_mtime(entry.modified), context.finalize())
    return size


def pack_files(
    sources: Iterable[FsEntry],
    dest: str | os.PathLike[str],
    progress: tqdm | None = None,
) -> int:
    """Write ``sources`` into ``dest``.cat and ``dest``.dat; return the number of entries."""
    dest = Path(dest)
    dest.parent.mkdir(parents=True, exist_ok=True)

    cat_path = dest.with_suffix(".cat")
    dat_path = dest.with_suffix(".dat")
    copier = StreamCopier()
    count = 0

    with open(cat_path, "wb") as cat_stream, open(dat_path, "wb") as dat:
        writer = Writer(cat_stream)
        _announce(progress, [":: packing to:", f"  > {cat_path}", f"  > {dat_path}"])

        for entry in sources:
            if progress is not None:
                progress.set_description(entry.relative)
            try:
                size = _write_entry(entry, writer, dat, copier)
            except OSError as exc:
                raise OSError(f"{entry.relative}: {exc}") from exc
            if progress is not None:
                progress.update(size)
            count += 1

    return count


def run(
    directory: str | os.PathLike[str],
    name: str | None = None,
    out: str | os.PathLike[str] | None = None,
    path_filter: PathFilter | None = None,
) -> int:
    """Pack ``directory`` into ``out``/``name``; return the number of entries written."""
    source = Path(directory).resolve(strict=True)
    if not source.is_dir():
        raise NotADirectoryError(f"{source}: not a directory")

    if name is None:
        name = source.name
        if not name:
            raise ValueError("source directory has no name component, please use the --name option")

    dest = (Path(out) if out is not None else Path.cwd()) / name

    print(":: scanning source files...", flush=True)
    sources = [
        entry
        for entry in walk(source)
        if path_filter is None or not path_filter.is_filtered(entry.relative)
    ]
    total = sum(entry.size for entry in sources)

    started = time.monotonic()
    progress = create_progress_bar(total or None)
    try:
        count = pack_files(sources, dest, progress)
    except BaseException:
        progress.set_description("cancelled")
        progress.close()
        raise

    progress.set_description(f"written {count} entries")
    progress.close()
    print(f":: done in {time.monotonic() - started:.2f}s\n", flush=True)
    return count