from __future__ import annotations

import concurrent.futures
import errno
import functools
import glob
import gzip
import logging
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable

from pr_bot.errors import ConfigError, GlobError

from .model import FileRecord

LOGGER = logging.getLogger(__name__)

PathTransform = Callable[[str], str]

_NUMERIC_RANGE = re.compile(r"^(-?\d+)\.\.(-?\d+)$")
_ALPHA_RANGE = re.compile(r"^([A-Za-z])\.\.([A-Za-z])$")


@dataclass(frozen=True)
class GlobOptions:
    dot: bool = False
    ignore: tuple[str, ...] = ()


def regex_path_transform(pattern: str, replacement: str) -> PathTransform:
    compiled = re.compile(pattern)

    def _transform(relative_path: str) -> str:
        return compiled.sub(replacement, relative_path)

    return _transform


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives and ``{1..3}`` ranges, left to right.

    Groups without a comma or a valid range are kept literally, as shells do.
    """
    group = _find_brace_group(pattern)
    if group is None:
        return [pattern]
    open_idx, close_idx, alternatives = group
    prefix = pattern[:open_idx]
    suffix = pattern[close_idx + 1 :]
    expanded: list[str] = []
    for alternative in alternatives:
        expanded.extend(expand_braces(f"{prefix}{alternative}{suffix}"))
    return expanded


def _find_brace_group(pattern: str) -> tuple[int, int, list[str]] | None:
    search_from = 0
    while True:
        open_idx = pattern.find("{", search_from)
        if open_idx == -1:
            return None
        depth = 0
        parts: list[str] = []
        part_start = open_idx + 1
        close_idx = -1
        for pos in range(open_idx, len(pattern)):
            ch = pattern[pos]
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    parts.append(pattern[part_start:pos])
                    close_idx = pos
                    break
            elif ch == "," and depth == 1:
                parts.append(pattern[part_start:pos])
                part_start = pos + 1
        if close_idx == -1:
            return None
        if len(parts) > 1:
            return open_idx, close_idx, parts
        values = _range_values(parts[0])
        if values:
            return open_idx, close_idx, values
        search_from = open_idx + 1


def _range_values(body: str) -> list[str]:
    numeric = _NUMERIC_RANGE.match(body)
    if numeric:
        first, last = int(numeric.group(1)), int(numeric.group(2))
        step = 1 if last >= first else -1
        return [str(value) for value in range(first, last + step, step)]
    alpha = _ALPHA_RANGE.match(body)
    if alpha:
        first, last = ord(alpha.group(1)), ord(alpha.group(2))
        step = 1 if last >= first else -1
        return [chr(value) for value in range(first, last + step, step)]
    return []


def _glob_relative(root: Path, pattern: str, include_hidden: bool) -> set[str]:
    found = glob.glob(
        pattern.lstrip("/"),
        root_dir=root,
        recursive=True,
        include_hidden=include_hidden,
    )
    return {Path(match).as_posix() for match in found}


def match_files(
    root_dir: Path | str, glob_pattern: str, options: GlobOptions | None = None
) -> list[str]:
    root = Path(root_dir)
    opts = options or GlobOptions()
    if not root.exists():
        raise GlobError(errno.ENOENT, "snapshot directory does not exist", str(root))
    if not root.is_dir():
        raise GlobError(errno.ENOTDIR, "snapshot path is not a directory", str(root))

    matches: set[str] = set()
    for pattern in expand_braces(glob_pattern):
        matches |= _glob_relative(root, pattern, opts.dot)

    ignored: set[str] = set()
    for ignore_pattern in opts.ignore:
        for pattern in expand_braces(ignore_pattern):
            ignored |= _glob_relative(root, pattern, True)

    return sorted(
        relative for relative in matches - ignored if (root / relative).is_file()
    )


def _file_record(root: Path, relative_path: str) -> FileRecord:
    path = root / relative_path
    stats = path.stat()
    contents = path.read_bytes()
    return FileRecord(
        relative_path=relative_path,
        size_in_bytes=stats.st_size,
        gzip_size_in_bytes=len(gzip.compress(contents, compresslevel=9, mtime=0)),
    )


def build_inventory(
    root_dir: Path | str,
    glob_pattern: str | None,
    *,
    glob_options: GlobOptions | None = None,
    path_transform: PathTransform | None = None,
    max_workers: int | None = None,
) -> dict[str, FileRecord]:
    if not glob_pattern:
        raise ConfigError("glob_pattern is required to build a file inventory")

    root = Path(root_dir)
    matches = match_files(root, glob_pattern, glob_options)
    LOGGER.debug("matched %d files under %s", len(matches), root)
    if not matches:
        return {}

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as pool:
        records = list(pool.map(functools.partial(_file_record, root), matches))

    inventory: dict[str, FileRecord] = {}
    for record in records:
        if path_transform is not None:
            record = replace(record, relative_path=path_transform(record.relative_path))
        inventory[record.relative_path] = record
    return inventory
