"""Turn a :class:`~arqtab.query.QueryResult` into table lines.

IRI cells are routed through the query's :class:`PrefixRegistry`.
Literals are shown as-is except that line breaks and tabs are escaped,
so every cell stays on one line.
"""

from __future__ import annotations

from .prefixes import PrefixRegistry
from .query import QueryResult, ResultCell
from .table import render_table

__all__ = [
    "format_cell",
    "render_result",
    "result_to_matrix",
]

_CONTROL_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t"})


def format_cell(cell: ResultCell | None, registry: PrefixRegistry) -> str:
    """Return the display string for one cell (``None`` means unbound)."""
    if cell is None:
        return ""
    if cell.type == "uri":
        return registry.compact(f"<{cell.value}>")
    if cell.type == "bnode":
        return f"_:{cell.value}"
    return cell.value.translate(_CONTROL_ESCAPES)


def result_to_matrix(
    result: QueryResult, registry: PrefixRegistry
) -> list[list[str]]:
    """Convert every row of ``result`` to display strings, in variable order."""
    return [
        [format_cell(row.get(var), registry) for var in result.variables]
        for row in result.rows
    ]


def render_result(result: QueryResult, registry: PrefixRegistry) -> list[str]:
    """Render ``result`` as a bordered table, one string per line."""
    return render_table(result.variables, result_to_matrix(result, registry))
