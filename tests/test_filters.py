import pytest

from xfcat.filters import PathFilter, glob_match


@pytest.mark.parametrize(
    ("pattern", "path"),
    [
        ("*.xml", "file.xml"),
        ("md/*.xml", "md/file 1.xml"),
        ("**/*.xml", "md/sub/file.xml"),
        ("**/*.xml", "file.xml"),
        ("md/**", "md/a/b/c.txt"),
        ("file?.xml", "file1.xml"),
        ("[a-c]x", "bx"),
        ("[!a]x", "bx"),
        ("[^a]x", "cx"),
        ("{md,aiscripts}/*.xml", "aiscripts/run.xml"),
        ("{a,{b,c}}.txt", "c.txt"),
        ("!*.xml", "file.txt"),
    ],
)
def test_glob_matches(pattern, path):
    assert glob_match(pattern, path)


@pytest.mark.parametrize(
    ("pattern", "path"),
    [
        ("*.xml", "md/file.xml"),
        ("*.xml", "file.txt"),
        ("file?.xml", "file12.xml"),
        ("[a-c]x", "dx"),
        ("[!a]x", "ax"),
        ("{md,aiscripts}/*.xml", "libraries/run.xml"),
        ("!*.xml", "file.xml"),
    ],
)
def test_glob_rejects(pattern, path):
    assert not glob_match(pattern, path)


def test_literal_special_characters():
    assert glob_match("a+b(1).txt", "a+b(1).txt")
    assert not glob_match("a+b(1).txt", "aab1.txt")
    assert glob_match("{unclosed", "{unclosed")
    assert glob_match("[unclosed", "[unclosed")


def test_double_negation_cancels():
    for path in ("file.xml", "file.txt"):
        assert glob_match("!!*.xml", path) == glob_match("*.xml", path)


def test_path_filter_without_pattern():
    assert not PathFilter().is_filtered("anything/at/all")
    assert not PathFilter(None).is_filtered("")


def test_path_filter_with_pattern():
    flt = PathFilter("md/*.xml")
    assert not flt.is_filtered("md/file.xml")
    assert flt.is_filtered("md/file.txt")
    assert flt.is_filtered("other/file.xml")


def test_path_filter_agrees_with_glob():
    flt = PathFilter("**/*.lua")
    for path in ("ui/a.lua", "a.lua", "ui/a.xml"):
        assert flt.is_filtered(path) == (not glob_match("**/*.lua", path))