from __future__ import annotations

import pytest

from pr_bot_size.tables import pad_columns, render_log_table, render_markdown_table


def test_pad_columns_aligns_to_widest_cell() -> None:
    rows = [["a", "bb"], ["ccc", "d"]]
    assert pad_columns(rows) == ["a    bb", "ccc  d"]
    assert render_log_table(rows) == "a    bb\nccc  d"


def test_empty_rows_render_empty_string() -> None:
    assert pad_columns([]) == []
    assert render_log_table([]) == ""
    assert render_markdown_table(["File", "Size"], []) == ""


def test_markdown_table_pads_cells() -> None:
    out = render_markdown_table(
        ["File", "Size"], [["a.txt", "21 B"], ["long.txt", "1 B"]]
    )
    assert out == (
        "| File | Size |\n"
        "| --- | --- |\n"
        "| a.txt    | 21 B |\n"
        "| long.txt | 1 B |"
    )


def test_markdown_table_trailing_empty_cell() -> None:
    out = render_markdown_table(["File", ""], [["a", ""]])
    assert out.splitlines() == ["| File |  |", "| --- | --- |", "| a | |"]


def test_markdown_table_escapes_pipes_in_cells() -> None:
    out = render_markdown_table(["File", "Size"], [["a|b.js", "1 B"], ["c.js", "2 B"]])
    assert out.splitlines() == [
        "| File | Size |",
        "| --- | --- |",
        r"| a\|b.js | 1 B |",
        "| c.js    | 2 B |",
    ]


def test_row_shape_mismatch_raises() -> None:
    with pytest.raises(ValueError, match="cells"):
        pad_columns([["a", "b"], ["c"]])
    with pytest.raises(ValueError, match="cells"):
        render_markdown_table(["File", "Size"], [["a.txt"]])
