"""SPARQL query execution over local RDF files or remote endpoints.

Evaluation itself is delegated to third parties: :mod:`rdflib` for
in-memory graphs loaded from disk, and
:class:`~arqtab.sparql_helper.SparqlHelper` for HTTP endpoints. This
module adds:

* Pydantic result models (:class:`ResultCell`, :class:`QueryResult`)
  shared by both execution paths.
* :func:`execute_local` and :func:`execute_sparql`, which never raise
  for evaluation failures and report them in ``QueryResult.error``.
* :func:`to_sparql_json` for the W3C SPARQL results JSON shape.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from rdflib import BNode, Graph, Literal, URIRef
from rdflib.util import guess_format

from .sparql_helper import SparqlHelper

logger = logging.getLogger(__name__)

ASK_VARIABLE = "boolean"


class DataFormatError(ValueError):
    """Raised when the RDF serialization of a data file cannot be determined."""


# ── Result models ─────────────────────────────────────────────────


class ResultCell(BaseModel):
    """One cell in a SPARQL result row."""

    value: str
    type: str  # "uri" | "literal" | "bnode"
    lang: str | None = None
    datatype: str | None = None


class QueryResult(BaseModel):
    """Structured result from a SPARQL query execution."""

    query: str
    source: str
    variables: list[str]
    rows: list[dict[str, ResultCell]] = Field(default_factory=list)
    boolean: bool | None = None
    row_count: int = 0
    duration_ms: int = 0
    error: str | None = None


def _elapsed_ms(t0: float) -> int:
    return int((time.monotonic() - t0) * 1000)


def _failed(query: str, source: str, t0: float, exc: Exception) -> QueryResult:
    logger.debug("Query against %s failed: %s", source, exc)
    return QueryResult(
        query=query,
        source=source,
        variables=[],
        duration_ms=_elapsed_ms(t0),
        error=str(exc),
    )


def _ask_result(query: str, source: str, answer: bool, t0: float) -> QueryResult:
    literal = "true" if answer else "false"
    return QueryResult(
        query=query,
        source=source,
        variables=[ASK_VARIABLE],
        rows=[{ASK_VARIABLE: ResultCell(value=literal, type="literal")}],
        boolean=answer,
        row_count=1,
        duration_ms=_elapsed_ms(t0),
    )


# ── Local evaluation ──────────────────────────────────────────────


def load_graph(path: str | Path, rdf_format: str | None = None) -> Graph:
    """Load an RDF file into a new in-memory graph.

    Parameters
    ----------
    path:
        File to parse.
    rdf_format:
        rdflib format name. Guessed from the file extension when omitted.

    Raises
    ------
    DataFormatError
        If no format is given and the extension is not recognised.
    """
    path = Path(path)
    fmt = rdf_format or guess_format(str(path))
    if fmt is None:
        raise DataFormatError(
            f"Cannot determine RDF format of '{path}' from its extension"
        )

    graph = Graph()
    graph.parse(source=str(path), format=fmt)
    logger.info("Loaded %d triples from %s (%s)", len(graph), path, fmt)
    return graph


def _term_to_cell(term: Any) -> ResultCell:
    if isinstance(term, URIRef):
        return ResultCell(value=str(term), type="uri")
    if isinstance(term, BNode):
        return ResultCell(value=str(term), type="bnode")
    if isinstance(term, Literal):
        return ResultCell(
            value=str(term),
            type="literal",
            lang=term.language,
            datatype=str(term.datatype) if term.datatype is not None else None,
        )
    return ResultCell(value=str(term), type="literal")


def execute_local(query: str, graph: Graph, source: str = "") -> QueryResult:
    """Evaluate ``query`` against an in-memory rdflib graph.

    SELECT results are converted cell by cell; unbound variables are left
    out of their row. ASK results become a single ``boolean`` column.
    Other query forms are reported through ``error``.
    """
    t0 = time.monotonic()

    try:
        result = graph.query(query)

        if result.type == "ASK":
            return _ask_result(query, source, bool(result.askAnswer), t0)
        if result.type != "SELECT":
            raise ValueError(
                f"{result.type} results cannot be shown as a table"
            )

        variables = [str(var) for var in result.vars or []]
        rows: list[dict[str, ResultCell]] = []
        for solution in result:
            row: dict[str, ResultCell] = {}
            for var in result.vars or []:
                term = solution[var]
                if term is not None:
                    row[str(var)] = _term_to_cell(term)
            rows.append(row)
    except Exception as exc:
        return _failed(query, source, t0, exc)

    return QueryResult(
        query=query,
        source=source,
        variables=variables,
        rows=rows,
        row_count=len(rows),
        duration_ms=_elapsed_ms(t0),
    )


# ── Remote evaluation ─────────────────────────────────────────────


def _binding_to_cell(cell_data: dict[str, Any]) -> ResultCell:
    cell_type = cell_data.get("type", "literal")
    if cell_type == "uri":
        rtype = "uri"
    elif cell_type == "bnode":
        rtype = "bnode"
    else:
        rtype = "literal"
    return ResultCell(
        value=cell_data["value"],
        type=rtype,
        lang=cell_data.get("xml:lang"),
        datatype=cell_data.get("datatype"),
    )


def execute_sparql(
    query: str,
    endpoint: str,
    *,
    method: str = "GET",
    timeout: int = 30,
    max_retries: int = 3,
) -> QueryResult:
    """Execute a SELECT or ASK query against a remote endpoint.

    Parameters
    ----------
    query:
        Full SPARQL query string.
    endpoint:
        URL of the SPARQL endpoint.
    method:
        HTTP method (``"GET"`` or ``"POST"``). If ``"GET"`` fails the
        underlying :class:`SparqlHelper` will retry with POST.
    timeout:
        Request timeout in seconds.
    max_retries:
        Attempts before giving up on transient failures.
    """
    t0 = time.monotonic()

    try:
        with SparqlHelper(
            endpoint,
            use_post=(method.upper() == "POST"),
            timeout=float(timeout),
            max_retries=max_retries,
        ) as helper:
            json_result = helper.select(query)
    except Exception as exc:
        return _failed(query, endpoint, t0, exc)

    if "boolean" in json_result:
        return _ask_result(query, endpoint, bool(json_result["boolean"]), t0)

    variables: list[str] = json_result.get("head", {}).get("vars", [])
    bindings: list[dict[str, Any]] = (
        json_result.get("results", {}).get("bindings", [])
    )

    rows: list[dict[str, ResultCell]] = []
    for binding in bindings:
        row: dict[str, ResultCell] = {}
        for var in variables:
            cell_data = binding.get(var)
            if cell_data:
                row[var] = _binding_to_cell(cell_data)
        rows.append(row)

    return QueryResult(
        query=query,
        source=endpoint,
        variables=variables,
        rows=rows,
        row_count=len(rows),
        duration_ms=_elapsed_ms(t0),
    )


# ── Export ────────────────────────────────────────────────────────


def to_sparql_json(result: QueryResult) -> dict[str, Any]:
    """Return ``result`` in SPARQL 1.1 Query Results JSON format."""
    if result.boolean is not None:
        return {"head": {}, "boolean": result.boolean}

    bindings: list[dict[str, Any]] = []
    for row in result.rows:
        binding: dict[str, Any] = {}
        for var, cell in row.items():
            entry: dict[str, str] = {"type": cell.type, "value": cell.value}
            if cell.lang:
                entry["xml:lang"] = cell.lang
            elif cell.datatype:
                entry["datatype"] = cell.datatype
            binding[var] = entry
        bindings.append(binding)

    return {
        "head": {"vars": list(result.variables)},
        "results": {"bindings": bindings},
    }
