"""File size comparison between two build snapshots."""

from .compare import SizePlugin, compare_snapshots, diff_inventories
from .formatting import render_markdown, render_plain_text, render_report
from .inventory import GlobOptions, build_inventory, regex_path_transform
from .model import ComparisonRecord, FileRecord, SizeReport
from .units import BYTE, KILOBYTE, MEGABYTE, ScaledSize, UnitSpec, convert_size

__all__ = [
    "BYTE",
    "ComparisonRecord",
    "FileRecord",
    "GlobOptions",
    "KILOBYTE",
    "MEGABYTE",
    "ScaledSize",
    "SizePlugin",
    "SizeReport",
    "UnitSpec",
    "build_inventory",
    "compare_snapshots",
    "convert_size",
    "diff_inventories",
    "regex_path_transform",
    "render_markdown",
    "render_plain_text",
    "render_report",
]
