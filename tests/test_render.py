"""Tests for rendering query results with compacted IRIs."""

import pytest

from arqtab.prefixes import PrefixRegistry
from arqtab.query import QueryResult, ResultCell
from arqtab.render import format_cell, render_result, result_to_matrix
from arqtab.table import TableShapeError


@pytest.fixture
def registry():
    return PrefixRegistry.from_query("PREFIX ex: <http://example.com/ns#>")


@pytest.fixture
def result():
    return QueryResult(
        query="",
        source="",
        variables=["s", "o"],
        rows=[
            {
                "s": ResultCell(value="http://example.com/ns#alice", type="uri"),
                "o": ResultCell(value="http://example.com/ns#bob", type="literal"),
            },
            {"s": ResultCell(value="http://other.org/x", type="uri")},
        ],
        row_count=2,
    )


class TestFormatCell:
    """Test per-cell type dispatch."""

    def test_uri_is_compacted(self, registry):
        cell = ResultCell(value="http://example.com/ns#alice", type="uri")
        assert format_cell(cell, registry) == "ex:alice"

    def test_unmatched_uri_keeps_brackets(self, registry):
        cell = ResultCell(value="http://other.org/x", type="uri")
        assert format_cell(cell, registry) == "<http://other.org/x>"

    def test_literal_is_never_compacted(self, registry):
        cell = ResultCell(value="http://example.com/ns#alice", type="literal")
        assert format_cell(cell, registry) == "http://example.com/ns#alice"

    def test_bnode(self, registry):
        assert format_cell(ResultCell(value="b1", type="bnode"), registry) == "_:b1"

    def test_unbound(self, registry):
        assert format_cell(None, registry) == ""


def test_result_to_matrix(result, registry):
    assert result_to_matrix(result, registry) == [
        ["ex:alice", "http://example.com/ns#bob"],
        ["<http://other.org/x>", ""],
    ]


def test_render_result(result, registry):
    lines = render_result(result, registry)
    assert lines[1] == "| s                    | o                         |"
    assert lines[3] == "| ex:alice             | http://example.com/ns#bob |"
    assert lines[4] == "| <http://other.org/x> |                           |"
    assert len(lines) == 6


def test_render_result_without_variables(registry):
    empty = QueryResult(query="", source="", variables=[])
    with pytest.raises(TableShapeError):
        render_result(empty, registry)


def test_multiline_literal_stays_on_one_line(registry):
    comment = QueryResult(
        query="",
        source="",
        variables=["comment"],
        rows=[{"comment": ResultCell(value="first line\nsecond\tline\r", type="literal")}],
        row_count=1,
    )
    assert format_cell(comment.rows[0]["comment"], registry) == "first line\\nsecond\\tline\\r"

    lines = render_result(comment, registry)
    printed = "\n".join(lines).splitlines()
    assert len(printed) == 5
    assert len({len(line) for line in printed}) == 1
