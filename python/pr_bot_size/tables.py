from __future__ import annotations

from typing import Sequence

Row = Sequence[str]


def _column_widths(rows: Sequence[Row], column_count: int) -> list[int]:
    widths = [0] * column_count
    for row in rows:
        if len(row) != column_count:
            raise ValueError(
                f"table row has {len(row)} cells, expected {column_count}: {list(row)!r}"
            )
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))
    return widths


def _pad_row(row: Row, widths: Sequence[int]) -> list[str]:
    return [cell.ljust(width) for cell, width in zip(row, widths)]


def pad_columns(rows: Sequence[Row]) -> list[str]:
    if not rows:
        return []
    widths = _column_widths(rows, len(rows[0]))
    return ["  ".join(_pad_row(row, widths)).rstrip() for row in rows]


def render_log_table(rows: Sequence[Row]) -> str:
    return "\n".join(pad_columns(rows))


def _escape_cell(cell: str) -> str:
    return cell.replace("|", r"\|")


def render_markdown_table(headings: Row, rows: Sequence[Row]) -> str:
    if not rows:
        return ""
    escaped = [[_escape_cell(cell) for cell in row] for row in rows]
    widths = _column_widths(escaped, len(headings))
    lines = [
        f"| {' | '.join(headings)} |",
        "|" + " --- |" * len(headings),
    ]
    for row in escaped:
        lines.append(f"| {' | '.join(_pad_row(row, widths)).strip()} |")
    return "\n".join(lines)
