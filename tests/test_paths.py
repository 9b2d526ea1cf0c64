from pathlib import Path

import pytest

from xfcat.paths import as_context, common_prefix, join_path

JOIN_CASES = [
    pytest.param("", "/some/file.txt", "/some/file.txt", id="empty base, absolute sub"),
    pytest.param("", "some/file.txt", "some/file.txt", id="empty base, relative sub"),
    pytest.param("", "/", "/", id="empty base, root sub"),
    pytest.param("/", "/some/file.txt", "/some/file.txt", id="root base, absolute sub"),
    pytest.param("/", "some/file.txt", "/some/file.txt", id="root base, relative sub"),
    pytest.param("/some/path", "to/a/file.txt", "/some/path/to/a/file.txt", id="relative sub"),
    pytest.param("/some/path", "/to/a/file.txt", "/some/path/to/a/file.txt", id="leading slash"),
    pytest.param("/some/path", "////to/a/file.txt", "/some/path/to/a/file.txt", id="many slashes"),
]


def _posix(value) -> str:
    return str(value).replace("\\", "/")


def test_as_context():
    target = Path("/some") / "file.txt"
    assert _posix(as_context(target)) == "/some/file.txt"


@pytest.mark.parametrize(("base", "sub", "expected"), JOIN_CASES)
def test_join_path(base, sub, expected):
    original = Path(base)
    joined = join_path(base, sub)
    assert _posix(joined) == expected
    assert Path(base) == original


def test_join_empty_path():
    with pytest.raises(ValueError):
        join_path("/some/path", "")


def test_common_prefix():
    root = Path("/foo/bar")
    members = [root / "baz" / "one.txt", root / "quux" / "quuux" / "two.txt", root / "baz" / "foo" / "bar.txt"]
    assert common_prefix(members) == root


def test_common_prefix_none():
    unrelated = [Path("foo/bar/baz.txt"), Path("bar/baz/qux.txt"), Path("baz/qux.txt")]
    assert common_prefix(unrelated) is None


def test_common_prefix_single_and_empty():
    assert common_prefix([Path("/foo/bar.txt")]) == Path("/foo/bar.txt")
    assert common_prefix([]) is None