"""Extraction of packages into a directory."""

from __future__ import annotations

import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from tqdm import tqdm

from . import log
from .cat import CatError, Entry, Reader, resolve_catalog
from .filters import PathFilter
from .log import Level, format_message
from .md5 import Context
from .paths import common_prefix, join_path
from .streams import StreamCopier, TeeWriter
from .utils import create_progress_bar


@dataclass
class JobData:
    """The entries to extract from one package, and where they go."""

    source: Path
    dest: Path
    entries: list[Entry] = field(default_factory=list)
    total_size: int = 0


def load_entries(
    source: str | os.PathLike[str],
    path_filter: PathFilter | None = None,
) -> tuple[Path, list[Entry]]:
    """Read a package catalog; return its path and the entries passing the filter."""
    catalog = resolve_catalog(source)
    with open(catalog, "rb") as stream:
        entries = [
            entry
            for entry in Reader(stream)
            if path_filter is None or not path_filter.is_filtered(entry.path)
        ]
    return catalog, entries


def _load_canonical(source: str | os.PathLike[str], path_filter: PathFilter | None) -> tuple[Path, list[Entry]]:
    return load_entries(Path(source).resolve(strict=True), path_filter)


def build_jobs(
    inputs: Iterable[str | os.PathLike[str]],
    path_filter: PathFilter | None = None,
    out: str | os.PathLike[str] = "./out",
    subdirs: bool = False,
) -> list[JobData]:
    """Plan the extraction of ``inputs``.

    Later packages take priority: a path present in several packages is only
    extracted from the last one (and the last occurrence within it). Empty
    entries are never extracted. Jobs come back in reverse input order.
    """
    out = Path(out)
    with ThreadPoolExecutor() as pool:
        futures = [pool.submit(_load_canonical, source, path_filter) for source in inputs]

    loaded = []
    for future in futures:
        try:
            loaded.append(future.result())
        except (OSError, CatError) as exc:
            log.error(exc)

    jobs = []
    seen: set[str] = set()
    for catalog, pending in reversed(loaded):
        entries = []
        total_size = 0
        for entry in reversed(pending):
            if entry.path in seen:
                continue
            seen.add(entry.path)
            if entry.size:
                total_size += entry.size
                entries.append(entry)

        source = catalog.with_suffix(".dat")
        dest = out
        if subdirs:
            dest = out / (source.parent.name or source.name.split(".", 1)[0])

        jobs.append(JobData(source=source, dest=dest, entries=entries, total_size=total_size))

    return jobs


def _warn(message: str) -> None:
    with tqdm.external_write_mode(file=sys.stdout):
        log.warn(message)


def extract_all(job: JobData, verify: bool = True, progress: tqdm | None = None) -> int:
    """Extract every entry of ``job``; return the number of files written."""
    copier = StreamCopier()
    with open(job.source, "rb") as dat:
        for entry in job.entries:
            dest = join_path(job.dest, entry.path)
            dest.parent.mkdir(parents=True, exist_ok=True)

            reader = entry.reader(dat)
            with open(dest, "wb") as out:
                if verify:
                    context = Context()
                    written = copier.copy(reader, TeeWriter(out, context))
                    if context.finalize() != entry.hash:
                        _warn(f"{entry.path}: hash mismatch")
                else:
                    written = copier.copy(reader, out)

            if written < entry.size:
                raise EOFError(f"{entry.path}: unexpected end of file")

            os.utime(dest, entry.timestamp.as_file_time())
            if progress is not None:
                progress.update(entry.size)

    return len(job.entries)


def run(
    inputs: Iterable[str | os.PathLike[str]],
    out: str | os.PathLike[str] = "./out",
    threads: int | None = None,
    verify: bool = True,
    use_subdirs: bool = False,
    path_filter: PathFilter | None = None,
) -> int:
    """Extract packages into ``out``; return the number of packages that failed."""
    started = time.monotonic()
    print(":: extracting packages...", flush=True)

    jobs = build_jobs(inputs, path_filter, out, use_subdirs)
    if not jobs:
        print(":: nothing to do\n", flush=True)
        return 0

    if len(jobs) > 1:
        prefix = common_prefix(job.source for job in jobs)
    else:
        prefix = jobs[0].source.parent

    def work(indexed: tuple[int, JobData]) -> bool:
        position, job = indexed
        label = str(job.source.relative_to(prefix)) if prefix is not None else job.source.name
        progress = create_progress_bar(job.total_size or None, label, position)
        try:
            extract_all(job, verify, progress)
        except Exception as exc:
            progress.set_description(format_message(Level.ERROR, exc))
            return False
        finally:
            progress.close()
        return True

    with ThreadPoolExecutor(max_workers=threads or None) as pool:
        results = list(pool.map(work, enumerate(jobs)))

    print(f":: done in {time.monotonic() - started:.2f}s\n", flush=True)
    return results.count(False)