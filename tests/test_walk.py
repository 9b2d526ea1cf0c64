import os

import pytest

from xfcat.walk import walk


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "sub" / "deep").mkdir(parents=True)
    (tmp_path / "a.txt").write_bytes(b"alpha")
    (tmp_path / "sub" / "b.txt").write_bytes(b"bravo!")
    (tmp_path / "sub" / "deep" / "c.txt").write_bytes(b"c")
    return tmp_path


def test_walk_finds_all_files(tree):
    found = {entry.relative for entry in walk(tree)}
    assert found == {
        "a.txt",
        os.path.join("sub", "b.txt"),
        os.path.join("sub", "deep", "c.txt"),
    }


def test_walk_entry_metadata(tree):
    for entry in walk(tree):
        assert entry.path == tree / entry.relative
        assert entry.size == len(entry.path.read_bytes())
        assert entry.modified == os.stat(entry.path).st_mtime


def test_walk_files_before_subdirectories(tree):
    order = [entry.relative for entry in walk(tree)]
    assert order.index("a.txt") < order.index(os.path.join("sub", "b.txt"))
    assert order.index(os.path.join("sub", "b.txt")) < order.index(os.path.join("sub", "deep", "c.txt"))


def test_walk_symlinks(tree):
    os.symlink(tree / "sub", tree / "dirlink")
    os.symlink(tree / "a.txt", tree / "filelink")
    entries = {entry.relative: entry for entry in walk(tree)}
    assert "filelink" in entries
    assert entries["filelink"].size == len(b"alpha")
    assert not any(name.startswith("dirlink") for name in entries)


def test_walk_empty_directory(tmp_path):
    assert list(walk(tmp_path)) == []


def test_walk_missing_root(tmp_path):
    with pytest.raises(FileNotFoundError):
        list(walk(tmp_path / "missing"))