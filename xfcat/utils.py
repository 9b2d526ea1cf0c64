"""Timestamps, size and duration formatting, and progress bars."""

from __future__ import annotations

import math
import re
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from tqdm import tqdm

SIZE_SUFFIXES = ("B", "K", "M", "G")
UNITSIZE = 1024.0

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, order=True)
class Timestamp:
    """Seconds since the Unix epoch."""

    value: int = 0

    @classmethod
    def parse(cls, text: str) -> Timestamp:
        """Parse a signed 64-bit decimal integer."""
        if not text:
            raise ValueError("cannot parse integer from empty string")
        if not _INT_RE.fullmatch(text):
            raise ValueError("invalid digit found in string")
        value = int(text)
        if value > _I64_MAX:
            raise ValueError("number too large to fit in target type")
        if value < _I64_MIN:
            raise ValueError("number too small to fit in target type")
        return cls(value)

    @classmethod
    def from_mtime(cls, mtime: float) -> Timestamp:
        """Whole seconds of a file modification time such as ``st_mtime``."""
        return cls(int(abs(mtime)))

    def as_utc(self) -> datetime:
        try:
            return _EPOCH + timedelta(seconds=self.value)
        except OverflowError as exc:
            raise ValueError("timestamp value out of range") from exc

    def as_system_time(self) -> float:
        return float(self.value)

    def as_file_time(self) -> tuple[float, float]:
        """Access and modification times, as taken by ``os.utime``."""
        stamp = self.as_system_time()
        return (stamp, stamp)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __format__(self, spec: str) -> str:
        if spec == "#":
            utc = self.as_utc()
            month = _MONTHS[utc.month - 1]
            return f"{month} {utc.day:>2} {utc.year} {utc.hour:02}:{utc.minute:02}"
        return format(self.value, spec)


def _round_half_away(value: float) -> float:
    whole = math.floor(value)
    return whole + 1 if value - whole >= 0.5 else whole


@dataclass(frozen=True)
class SizeFormat:
    """A byte count shown either raw or with a binary K/M/G suffix."""

    size: int
    human: bool = False

    def _human_text(self) -> str:
        fsize = float(self.size)
        if fsize <= 0.0:
            return "0" + SIZE_SUFFIXES[0]
        base = math.log10(fsize) / math.log10(UNITSIZE)
        exponent = math.floor(base)
        if exponent >= len(SIZE_SUFFIXES):
            raise ValueError(f"size {self.size} is too large to format")
        mantissa = _round_half_away(UNITSIZE ** (base - exponent) * 10.0) / 10.0
        text = repr(float(mantissa))
        while text.endswith(".0"):
            text = text[:-2]
        return text + SIZE_SUFFIXES[exponent]

    def __str__(self) -> str:
        return self._human_text() if self.human else str(self.size)

    def __format__(self, spec: str) -> str:
        if self.human:
            return format(self._human_text(), spec)
        return format(self.size, spec)


def format_duration(seconds: float | timedelta) -> str:
    """Render as ``mm:ss``, ``hh:mm:ss`` or ``Nd hh:mm:ss``."""
    if isinstance(seconds, timedelta):
        seconds = seconds.total_seconds()
    t = int(seconds)
    secs = t % 60
    t //= 60
    mins = t % 60
    t //= 60
    prefix = ""
    if t > 0:
        hours = t % 24
        t //= 24
        if t > 0:
            prefix = f"{t}d "
        prefix += f"{hours:02}:"
    return f"{prefix}{mins:02}:{secs:02}"


class _ProgressBar(tqdm):
    @property
    def format_dict(self):
        d = super().format_dict
        d["elapsed_hms"] = format_duration(d.get("elapsed", 0))
        return d


_BAR_FORMAT = "{desc} {n_fmt:>10}B {rate_fmt:>13} {elapsed_hms} [{bar}] {percentage:3.0f}%"


def create_progress_bar(total: int | None = None, description: str = "", position: int | None = None) -> tqdm:
    """A byte-counting progress bar drawn on standard output."""
    options = {
        "total": total,
        "desc": description,
        "position": position,
        "unit": "B",
        "unit_scale": True,
        "unit_divisor": 1024,
        "ascii": " >#",
        "file": sys.stdout,
        "leave": True,
        "dynamic_ncols": True,
    }
    if total is not None:
        options["bar_format"] = _BAR_FORMAT
    return _ProgressBar(**options)