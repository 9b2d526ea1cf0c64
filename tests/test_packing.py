import hashlib
import os
from pathlib import Path

import pytest

from xfcat.cat import Reader
from xfcat.filters import PathFilter
from xfcat.md5 import Digest
from xfcat.packing import pack_files, run
from xfcat.walk import FsEntry, walk

STAMP = 1234567890
FILES = {
    "top.txt": b"top level",
    str(Path("md") / "inner.xml"): b"<xml/>",
    "empty.bin": b"",
}


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "mymod"
    for relative, content in FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        os.utime(path, (STAMP, STAMP))
    return root


def read_catalog(path):
    with open(path, "rb") as stream:
        return list(Reader(stream))


def test_pack_files_writes_catalog_and_data(tree, tmp_path):
    dest = tmp_path / "out" / "pkg"
    count = pack_files(walk(tree), dest)
    assert count == len(FILES)

    entries = read_catalog(dest.with_suffix(".cat"))
    data = dest.with_suffix(".dat").read_bytes()
    assert {e.path for e in entries} == set(FILES)
    assert len(data) == sum(len(c) for c in FILES.values())

    for entry in entries:
        content = FILES[entry.path]
        assert entry.size == len(content)
        assert data[entry.offset : entry.offset + entry.size] == content
        assert entry.hash == Digest(hashlib.md5(content).digest())
        assert int(entry.timestamp) == STAMP


def test_pack_files_replaces_extension(tree, tmp_path):
    pack_files(walk(tree), tmp_path / "pkg.dat")
    assert (tmp_path / "pkg.cat").is_file()
    assert (tmp_path / "pkg.dat").is_file()


def test_pack_files_reports_failing_entry(tmp_path):
    missing = FsEntry(path=tmp_path / "gone", modified=0.0, relative="gone", size=0)
    with pytest.raises(OSError, match="gone"):
        pack_files([missing], tmp_path / "pkg")


def test_run_defaults_to_directory_name(tree, tmp_path, monkeypatch):
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    assert run(tree) == len(FILES)
    assert len(read_catalog(workdir / "mymod.cat")) == len(FILES)


def test_run_with_name_and_out(tree, tmp_path):
    out = tmp_path / "dist"
    assert run(tree, name="custom", out=out) == len(FILES)
    assert (out / "custom.cat").is_file()
    assert (out / "custom.dat").read_bytes() != b"" or False or (out / "custom.dat").stat().st_size == 15


def test_run_with_filter(tree, tmp_path):
    out = tmp_path / "dist"
    assert run(tree, out=out, path_filter=PathFilter("*.txt")) == 1
    assert [e.path for e in read_catalog(out / "mymod.cat")] == ["top.txt"]
    assert (out / "mymod.dat").read_bytes() == FILES["top.txt"]


def test_run_rejects_file(tree, tmp_path):
    with pytest.raises(NotADirectoryError, match="not a directory"):
        run(tree / "top.txt", out=tmp_path)


def test_run_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        run(tmp_path / "absent", out=tmp_path)