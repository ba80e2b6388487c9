from __future__ import annotations

from typing import Sequence

from .model import ComparisonRecord, SizeReport
from .tables import render_log_table, render_markdown_table
from .units import format_percent, format_size

NO_CHANGES = "No file sizes have changed."
NO_NEW_FILES = "No new files have been added."

SHRANK_EMOJI = "🎉"
GREW_EMOJI = "☠️"
EMOJI_THRESHOLD = 0.1

CHANGED_HEADINGS = ["File", "Before", "After", "Change", "GZipped", ""]
NEW_HEADINGS = ["File", "Size", "GZipped"]


def _changed(records: Sequence[ComparisonRecord]) -> list[ComparisonRecord]:
    return [record for record in records if record.is_changed]


def _new(records: Sequence[ComparisonRecord]) -> list[ComparisonRecord]:
    return [record for record in records if record.is_new_file]


def _section(title: str, body: str) -> str:
    return "\n".join([title, "-" * len(title), body])


def render_plain_text(records: Sequence[ComparisonRecord]) -> str:
    changed_rows = [
        [
            record.relative_path,
            format_size(record.previous_size),
            ">",
            format_size(record.size_in_bytes),
            format_percent(record.size_difference_percent, 0),
        ]
        for record in _changed(records)
    ]
    new_rows = [
        [record.relative_path, format_size(record.size_in_bytes)]
        for record in _new(records)
    ]

    changed_table = render_log_table(changed_rows) or NO_CHANGES
    new_table = render_log_table(new_rows) or NO_NEW_FILES
    sections = [
        _section("Changed File Sizes", changed_table),
        _section("New Files", new_table),
    ]
    return "\n" + "\n\n".join(sections) + "\n"


def _emoji(percent: float) -> str:
    if percent > EMOJI_THRESHOLD:
        return GREW_EMOJI
    if percent < -EMOJI_THRESHOLD:
        return SHRANK_EMOJI
    return ""


def _markdown_size_rows(records: Sequence[ComparisonRecord]) -> list[list[str]]:
    return [
        [
            record.relative_path,
            format_size(record.previous_size),
            format_size(record.size_in_bytes),
            format_percent(record.size_difference_percent, 2),
            format_size(record.gzip_size_in_bytes),
            _emoji(record.size_difference_percent),
        ]
        for record in records
    ]


def render_markdown(records: Sequence[ComparisonRecord]) -> str:
    new_rows = [
        [
            record.relative_path,
            format_size(record.size_in_bytes),
            format_size(record.gzip_size_in_bytes),
        ]
        for record in _new(records)
    ]
    changed_table = (
        render_markdown_table(CHANGED_HEADINGS, _markdown_size_rows(_changed(records)))
        or NO_CHANGES
    )
    new_table = render_markdown_table(NEW_HEADINGS, new_rows) or NO_NEW_FILES
    full_table = render_markdown_table(CHANGED_HEADINGS, _markdown_size_rows(records))

    return f"""#### Changed File Sizes

{changed_table}

#### New Files

{new_table}

#### All File Sizes

<details>
<summary>View Table</summary>

{full_table}

</details>"""


def render_report(records: Sequence[ComparisonRecord]) -> SizeReport:
    return SizeReport(
        pretty_log=render_plain_text(records),
        markdown_log=render_markdown(records),
    )
