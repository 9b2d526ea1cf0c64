import pytest

from xfcat import log
from xfcat.log import Level, format_message


def test_format_message():
    assert format_message(Level.ERROR, "boom") == "ERROR: boom"


@pytest.mark.parametrize("level", list(Level))
def test_format_message_prefix(level):
    assert format_message(level, "text") == f"{level.value}: text"


@pytest.mark.parametrize(
    ("level", "label"),
    [(Level.WARN, "WARN"), (Level.ERROR, "ERROR"), (Level.PANIC, "PANIC")],
)
def test_level_labels(level, label):
    assert format_message(level, "x") == f"{label}: x"


def test_error_writes_to_stderr(capsys):
    log.error("disk full")
    captured = capsys.readouterr()
    assert captured.err == format_message(Level.ERROR, "disk full") + "\n"
    assert captured.out == ""


def test_warn_writes_to_stderr(capsys):
    log.warn("hash mismatch")
    assert capsys.readouterr().err == format_message(Level.WARN, "hash mismatch") + "\n"


def test_write_accepts_exceptions(capsys):
    log.write(Level.PANIC, ValueError("bad value"))
    assert capsys.readouterr().err == format_message(Level.PANIC, "bad value") + "\n"