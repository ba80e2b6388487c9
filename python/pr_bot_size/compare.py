from __future__ import annotations

import concurrent.futures
import logging
import math
from pathlib import Path
from typing import Mapping

from pr_bot.errors import ConfigError
from pr_bot.plugins import PluginResult, SnapshotPaths

from .formatting import render_report
from .inventory import GlobOptions, PathTransform, build_inventory
from .model import ComparisonRecord, FileRecord

LOGGER = logging.getLogger(__name__)

PLUGIN_NAME = "PR-Bot Size Plugin"


def size_difference_percent(before_size: int, after_size: int) -> float:
    if before_size == 0:
        # 0 -> 0 has no defined ratio; growth from nothing is unbounded.
        return math.inf if after_size > 0 else math.nan
    return (after_size / before_size) - 1


def compare_record(after: FileRecord, before: FileRecord | None) -> ComparisonRecord:
    if before is None:
        return ComparisonRecord(
            relative_path=after.relative_path,
            size_in_bytes=after.size_in_bytes,
            gzip_size_in_bytes=after.gzip_size_in_bytes,
            is_new_file=True,
            previous_size=None,
            size_difference_in_bytes=math.nan,
            size_difference_percent=math.nan,
        )
    return ComparisonRecord(
        relative_path=after.relative_path,
        size_in_bytes=after.size_in_bytes,
        gzip_size_in_bytes=after.gzip_size_in_bytes,
        is_new_file=False,
        previous_size=before.size_in_bytes,
        size_difference_in_bytes=after.size_in_bytes - before.size_in_bytes,
        size_difference_percent=size_difference_percent(
            before.size_in_bytes, after.size_in_bytes
        ),
    )


def diff_inventories(
    before: Mapping[str, FileRecord], after: Mapping[str, FileRecord]
) -> list[ComparisonRecord]:
    # Files that only exist in `before` are not reported.
    return [compare_record(after[key], before.get(key)) for key in sorted(after)]


def compare_snapshots(
    before_dir: Path | str,
    after_dir: Path | str,
    glob_pattern: str | None,
    *,
    glob_options: GlobOptions | None = None,
    path_transform: PathTransform | None = None,
) -> list[ComparisonRecord]:
    if not glob_pattern:
        raise ConfigError("glob_pattern is required to compare snapshots")

    with concurrent.futures.ThreadPoolExecutor(max_workers=2) as pool:
        futures = {
            label: pool.submit(
                build_inventory,
                directory,
                glob_pattern,
                glob_options=glob_options,
                path_transform=path_transform,
            )
            for label, directory in (("before", before_dir), ("after", after_dir))
        }
        done, _ = concurrent.futures.wait(
            futures.values(), return_when=concurrent.futures.FIRST_EXCEPTION
        )
        for future in done:
            future.result()
        before = futures["before"].result()
        after = futures["after"].result()

    LOGGER.debug("inventoried %d before / %d after files", len(before), len(after))
    return diff_inventories(before, after)


class SizePlugin:
    def __init__(
        self,
        glob_pattern: str | None = None,
        glob_options: GlobOptions | None = None,
        path_transform: PathTransform | None = None,
    ) -> None:
        self.name = PLUGIN_NAME
        self.glob_pattern = glob_pattern
        self.glob_options = glob_options
        self.path_transform = path_transform

    def run(self, snapshots: SnapshotPaths) -> PluginResult:
        if not self.glob_pattern:
            raise ConfigError(
                f"The '{self.name}' requires a 'glob_pattern' parameter in the constructor."
            )
        records = compare_snapshots(
            snapshots.before_path,
            snapshots.after_path,
            self.glob_pattern,
            glob_options=self.glob_options,
            path_transform=self.path_transform,
        )
        report = render_report(records)
        return PluginResult(pretty_log=report.pretty_log, markdown_log=report.markdown_log)
