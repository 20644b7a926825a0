#!/usr/bin/env python3
"""
Print, restore or diff files from the nightly dump.

    yesterday [-c | -C | -d] [-n daysago | -t [[yy]yy]mm]dd] file...

Dumps live under /dump/<hostname>/<year>/<mmdd>. By default the most recently
written dump of the current year is used, which is usually today's dump
since dumps run early in the morning. The printed path is not checked for
existence.

Examples:

    $ yesterday /home/am3/rsc/.profile
    /dump/am/2003/0211/home/am3/rsc/.profile

    $ yesterday -d -n 7 ~/.profile
    diff -c /dump/am/2024/0211/home/mpd/.profile /home/mpd/.profile
"""
import argparse
import os
import socket
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

import file_actions
from dump_dates import Selection, resolve_date
from dump_paths import DEFAULT_DUMP_BASE, absolute, archived_path, dump_root, locate

PROG = "yesterday"
USAGE = "yesterday [-c | -C | -d] [-n daysago | -t [[yy]yy]mm]dd] file..."


@dataclass(frozen=True)
class Options:
    action: str
    selection: Selection
    files: list[str]


def days_ago(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage=USAGE,
        description="Print the names of files in the most recent dump, or copy/diff them.",
    )
    actions = parser.add_mutually_exclusive_group()
    actions.add_argument(
        "-c",
        dest="action",
        action="store_const",
        const=file_actions.COPY,
        help="Copy dump files over the named files.",
    )
    actions.add_argument(
        "-C",
        dest="action",
        action="store_const",
        const=file_actions.COPY_IF_DIFFERENT,
        help="Copy dump files over the named files only if they differ.",
    )
    actions.add_argument(
        "-d",
        dest="action",
        action="store_const",
        const=file_actions.DIFF,
        help="Compare dump files with the named files using diff -c.",
    )
    when = parser.add_mutually_exclusive_group()
    when.add_argument(
        "-n",
        dest="days_ago",
        metavar="daysago",
        type=days_ago,
        help="Select the dump this many days before today.",
    )
    when.add_argument(
        "-t",
        dest="digits",
        metavar="[[yy]yy]mm]dd",
        help="Select another day's dump: d, dd, mmdd, yymmdd or yyyymmdd.",
    )
    parser.add_argument("files", nargs="+", metavar="file")
    return parser


def parse_args(argv=None) -> Options:
    parser = build_parser()
    args = parser.parse_args(argv)
    return Options(
        action=args.action or file_actions.PRINT,
        selection=Selection(days_ago=args.days_ago or 0, digits=args.digits or ""),
        files=args.files,
    )


def run(opts: Options, today: date, root: Path, cwd: str, diff_program: str = "diff"):
    day = resolve_date(today, opts.selection)
    for name in opts.files:
        live = absolute(name, cwd)
        dated_dir = locate(root, day, opts.selection)
        file_actions.apply(opts.action, archived_path(dated_dir, live), live, diff_program)


def main(argv=None):
    load_dotenv()
    opts = parse_args(argv)

    base = os.environ.get("YESTERDAY_DUMP_BASE", DEFAULT_DUMP_BASE)
    diff_program = os.environ.get("YESTERDAY_DIFF", "diff")
    try:
        hostname = os.environ.get("YESTERDAY_HOSTNAME") or socket.gethostname()
        cwd = os.getcwd()
        root = dump_root(base, hostname)
        run(opts, date.today(), root, cwd, diff_program)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"{PROG}: {exc}")


if __name__ == "__main__":
    main()
