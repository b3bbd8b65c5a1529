"""arqtab: SPARQL results as aligned text tables.

Main modules:
- prefixes: PrefixRegistry for compacting IRIs with a query's PREFIX lines
- table: two-pass bordered table renderer
- query: result models and local/remote query execution
- render: glue between query results, prefixes and the table renderer
"""

from .prefixes import PrefixRegistry
from .query import QueryResult, ResultCell, execute_local, execute_sparql, load_graph
from .render import render_result
from .table import TableShapeError, render_table

# Import version information
from .version import VERSION

__all__ = [
    "VERSION",
    "PrefixRegistry",
    "QueryResult",
    "ResultCell",
    "TableShapeError",
    "execute_local",
    "execute_sparql",
    "load_graph",
    "render_result",
    "render_table",
]
