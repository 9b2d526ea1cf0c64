"""Command-line interface."""

from __future__ import annotations

import argparse
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from . import listing, log, packing, unpacking
from .filters import PathFilter
from .listing import SortMode

_UNVERSIONED = "0.0.1"

_FILTER_HELP = """glob pattern to match file paths against.

    ?  Matches any single character
    *  Matches zero or more characters, except for path separators
   **  Matches zero or more characters, including path separators
[...]  Matches any character inside the brackets, supports !/^ negation.
[a-b]  Matches any character in range a - b, supports !/^ negation.
{a,b}  Matches one of the patterns a or b, supports nesting.
    !  Negates result of the match."""


def _version() -> str:
    try:
        return version("xfcat")
    except PackageNotFoundError:
        return _UNVERSIONED


def _add_filter(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-f", "--filter", metavar="PATTERN", help=_FILTER_HELP)


def _run_list(args: argparse.Namespace) -> None:
    listing.run(args.inputs, args.human_readable, PathFilter(args.filter), args.sort, args.reverse)


def _run_unpack(args: argparse.Namespace) -> None:
    unpacking.run(
        args.inputs,
        out=args.out,
        threads=args.threads,
        verify=not args.no_verify,
        use_subdirs=args.use_subdirs,
        path_filter=PathFilter(args.filter),
    )


def _run_pack(args: argparse.Namespace) -> None:
    packing.run(args.dir, name=args.name, out=args.out, path_filter=PathFilter(args.filter))


def build_parser() -> argparse.ArgumentParser:
    """The argument parser with its ``list``, ``unpack`` and ``pack`` commands."""
    formatter = argparse.RawTextHelpFormatter
    parser = argparse.ArgumentParser(
        prog="xfcat",
        description="list, extract and create .cat/.dat packages.",
        epilog="note: path extensions can be either .cat/.dat, or be omitted altogether.",
        formatter_class=formatter,
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {_version()}")
    commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    list_cmd = commands.add_parser(
        "list",
        help="list contents specified packages.",
        epilog="note: file times are displayed in UTC.",
        formatter_class=formatter,
    )
    list_cmd.add_argument("inputs", nargs="+", type=Path, help="input files")
    list_cmd.add_argument("-H", "--human-readable", action="store_true", help="display sizes as K/M/G etc.")
    _add_filter(list_cmd)
    order = list_cmd.add_mutually_exclusive_group()
    order.add_argument("-n", "--name", dest="sort", action="store_const", const=SortMode.NAME,
                       help="sort alphabetically by name")
    order.add_argument("-S", "--size", dest="sort", action="store_const", const=SortMode.SIZE,
                       help="sort by file size, largest first")
    order.add_argument("-t", "--time", dest="sort", action="store_const", const=SortMode.TIME,
                       help="sort by time, newest first")
    list_cmd.add_argument("-r", "--reverse", action="store_true", help="reverse order while sorting")
    list_cmd.set_defaults(handler=_run_list, sort=None)

    unpack_cmd = commands.add_parser(
        "unpack", help="extract contents of specified packages.", formatter_class=formatter
    )
    unpack_cmd.add_argument("inputs", nargs="+", type=Path, help="input files")
    unpack_cmd.add_argument("-o", "--out", metavar="DIR", type=Path, default=Path("./out"),
                            help="output directory (default: ./out)")
    unpack_cmd.add_argument("-t", "--threads", metavar="COUNT", type=int, help="number of threads to use")
    unpack_cmd.add_argument("-n", "--no-verify", action="store_true", help="skip verification of file hashes")
    unpack_cmd.add_argument(
        "-u", "--use-subdirs", action="store_true",
        help="create separate subdirectories for each package\n\n"
             "subdirectories are named according to the parent directory of\neach package",
    )
    _add_filter(unpack_cmd)
    unpack_cmd.set_defaults(handler=_run_unpack)

    pack_cmd = commands.add_parser("pack", help="pack a directory into a mod package", formatter_class=formatter)
    pack_cmd.add_argument("dir", type=Path, help="source directory")
    pack_cmd.add_argument("-n", "--name", help="output name\n\n[default: same as source directory name]")
    pack_cmd.add_argument("-o", "--out", type=Path, help="output directory\n\n[default: current directory]")
    _add_filter(pack_cmd)
    pack_cmd.set_defaults(handler=_run_pack)

    return parser


def is_broken_pipe(error: BaseException) -> bool:
    """True when ``error`` or anything in its chain of causes is a broken pipe."""
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        if isinstance(current, BrokenPipeError):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def _silence_stdout() -> None:
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError):
        pass


def main(argv: list[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    args = build_parser().parse_args(argv)
    try:
        args.handler(args)
    except Exception as exc:
        if is_broken_pipe(exc):
            _silence_stdout()
            return 0
        log.error(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())