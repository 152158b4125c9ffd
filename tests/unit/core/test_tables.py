"""Unit tests for core/utils/tables.py"""

from docsect.core.utils.tables import format_table_md


def test_format_table_md():
    """Header line, separator and one line per row, newline-joined."""
    md = format_table_md(["A", "B"], [["1", "2"], ["3", "4"]])
    assert md == "| A | B |\n| --- | --- |\n| 1 | 2 |\n| 3 | 4 |"


def test_format_table_md_no_rows():
    """A header-only table keeps the header and separator lines."""
    md = format_table_md(["Prop"], [])
    assert md.splitlines() == ["| Prop |", "| --- |"]


def test_format_table_md_pipes_not_escaped():
    """Pipe characters inside cells are written verbatim."""
    md = format_table_md(["Type"], [["'a' | 'b'"]])
    assert md.splitlines()[-1] == "| 'a' | 'b' |"
