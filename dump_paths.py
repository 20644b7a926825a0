"""Locate dump directories and map live files to their archived copies."""
import os
from datetime import date
from pathlib import Path
from typing import Iterable

from dump_dates import Selection

DEFAULT_DUMP_BASE = "/dump"


def dump_root(base: str | Path, hostname: str) -> Path:
    """Return base/hostname, failing if it is not an existing directory."""
    root = Path(base) / hostname
    root.stat()
    if not root.is_dir():
        raise NotADirectoryError(f"not a directory: {root}")
    return root


def newest_entry(entries: Iterable[tuple[str, int]]) -> str | None:
    """
    Pick the name with the latest mtime from (name, mtime) pairs.

    On a tie the pair seen later wins. Returns None for an empty input.
    """
    best = None
    for name, mtime in entries:
        if best is None or mtime >= best[1]:
            best = (name, mtime)
    return best[0] if best else None


def list_subdirs(parent: Path) -> list[tuple[str, int]]:
    """(name, mtime_ns) for each directory directly under parent, sorted by name."""
    found = []
    with os.scandir(parent) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        if not entry.is_dir(follow_symlinks=False):
            continue
        try:
            mtime = entry.stat(follow_symlinks=False).st_mtime_ns
        except FileNotFoundError:
            # removed since the listing was taken; other stat errors propagate
            continue
        found.append((entry.name, mtime))
    return found


def locate(root: Path, day: date, selection: Selection) -> Path:
    year_dir = root / f"{day.year:04d}"
    if not selection.most_recent:
        return year_dir / f"{day.month:02d}{day.day:02d}"

    name = newest_entry(list_subdirs(year_dir))
    if name is None:
        raise FileNotFoundError(f"no directory entries in {year_dir}")
    return year_dir / name


def absolute(path: str, cwd: str) -> str:
    """Join a relative path to cwd and normalise it without touching symlinks."""
    if not os.path.isabs(path):
        path = os.path.join(cwd, path)
    return os.path.normpath(path)


def archived_path(dated_dir: Path, live: str) -> Path:
    live_path = Path(live)
    return dated_dir / live_path.relative_to(live_path.anchor)
