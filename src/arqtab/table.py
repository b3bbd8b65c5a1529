"""Bordered, fixed-width text tables.

Rendering is done in two passes: every cell is measured first, then the
lines are drawn with the shared column widths. Output looks like::

    ------------
    | a | bb   |
    ============
    | x | yyyy |
    ------------
"""

from __future__ import annotations

from collections.abc import Sequence

__all__ = [
    "TableShapeError",
    "column_widths",
    "format_row",
    "render_table",
    "rule_width",
]


class TableShapeError(ValueError):
    """Raised when a header/rows combination cannot be rendered."""


def _check_shape(columns: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    if not columns:
        raise TableShapeError("Cannot render a table with zero columns")
    for index, row in enumerate(rows):
        if len(row) != len(columns):
            raise TableShapeError(
                f"Row {index} has {len(row)} cells, expected {len(columns)}"
            )


def column_widths(
    columns: Sequence[str], rows: Sequence[Sequence[str]]
) -> list[int]:
    """Return the widest cell (in characters) of each column, header included."""
    widths = [len(name) for name in columns]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    return widths


def rule_width(widths: Sequence[int]) -> int:
    """Total line length for a table with the given column widths."""
    return sum(widths) + 4 + 3 * (len(widths) - 1)


def format_row(cells: Sequence[str], widths: Sequence[int]) -> str:
    """Format one header or body line, left-aligned."""
    parts = [f"| {cell.ljust(width)} " for cell, width in zip(cells, widths)]
    return "".join(parts) + "|"


def render_table(
    columns: Sequence[str], rows: Sequence[Sequence[str]]
) -> list[str]:
    """Render ``columns`` and ``rows`` as a list of text lines.

    Parameters
    ----------
    columns:
        Header cells. Must not be empty.
    rows:
        Body rows, each with exactly ``len(columns)`` cells. May be empty.

    Returns
    -------
    list[str]
        Top rule, header, ``=`` separator, body lines, bottom rule.

    Raises
    ------
    TableShapeError
        If there are no columns or a row has the wrong number of cells.
    """
    _check_shape(columns, rows)

    widths = column_widths(columns, rows)
    total = rule_width(widths)

    lines = ["-" * total, format_row(columns, widths), "=" * total]
    lines.extend(format_row(row, widths) for row in rows)
    lines.append("-" * total)
    return lines
