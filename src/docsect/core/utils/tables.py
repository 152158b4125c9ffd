"""Markdown table reconstruction from extracted header and row cells"""


def _row_md(cells: list[str]) -> str:
    return f"| {' | '.join(cells)} |"


def format_table_md(headers: list[str], rows: list[list[str]]) -> str:
    """Return a pipe table: header line, '---' separator line, then one line per row.

    Cell content is not escaped; a '|' inside a cell is written as-is.
    """
    header = _row_md(headers)
    separator = _row_md(['---' for _ in headers])
    body = '\n'.join(_row_md(row) for row in rows)
    return '\n'.join([header, separator, body])
