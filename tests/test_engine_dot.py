"""Tests for the DOT syntax tree and printer."""

import pytest

from open_hypergraphs_dot.engine.dot import (
    Attribute,
    AttrStmt,
    DotGraph,
    EdgeStmt,
    Escaped,
    NodeRef,
    NodeStmt,
    escape_label,
    escape_record_field,
    format_id,
)


class TestFormatId:
    @pytest.mark.parametrize("value", ["n_0", "rankdir", "LR", "_x", "42", "-1.5", ".5"])
    def test_plain_ids_unquoted(self, value):
        assert format_id(value) == value

    @pytest.mark.parametrize("value", ["node", "edge", "graph", "Digraph", "subgraph", "strict"])
    def test_keywords_quoted(self, value):
        assert format_id(value) == f'"{value}"'

    def test_colour_quoted(self):
        assert format_id("#4a4a4a") == '"#4a4a4a"'

    def test_empty_quoted(self):
        assert format_id("") == '""'

    def test_quotes_escaped(self):
        assert format_id('say "hi"') == '"say \\"hi\\""'

    def test_escaped_not_escaped_again(self):
        assert format_id(Escaped("a\\|b")) == '"a\\|b"'

    def test_unicode_identifier(self):
        assert format_id("Δ") == "Δ"


class TestEscaping:
    def test_escape_label(self):
        assert escape_label('a"b\\c\nd') == 'a\\"b\\\\c\\nd'

    def test_escape_record_field(self):
        assert escape_record_field("{a|b}<c>") == "\\{a\\|b\\}\\<c\\>"

    def test_escape_record_field_plain_text(self):
        assert escape_record_field("Copy") == "Copy"


class TestStatements:
    def test_attribute(self):
        assert Attribute("bgcolor", "white").to_dot() == "bgcolor=white"

    def test_attr_stmt(self):
        stmt = AttrStmt("node", [Attribute("shape", "record"), Attribute("style", "rounded")])
        assert stmt.to_dot() == "node [shape=record, style=rounded]"

    def test_attr_stmt_rejects_unknown_kind(self):
        with pytest.raises(ValueError, match="kind"):
            AttrStmt("cluster")

    def test_node_stmt_without_attributes(self):
        assert NodeStmt("n_0").to_dot() == "n_0"

    def test_node_ref_with_port(self):
        assert NodeRef("e_0", "t_1").to_dot() == "e_0:t_1"

    def test_edge_stmt_directed(self):
        stmt = EdgeStmt(NodeRef("n_0"), NodeRef("e_0", "s_0"))
        assert stmt.to_dot() == "n_0 -> e_0:s_0"

    def test_edge_stmt_undirected_with_attributes(self):
        stmt = EdgeStmt(NodeRef("a"), NodeRef("b"), [Attribute("style", "dotted")])
        assert stmt.to_dot(directed=False) == "a -- b [style=dotted]"


class TestDotGraph:
    def test_empty_digraph(self):
        assert DotGraph().to_dot() == "digraph G {\n}\n"

    def test_strict_undirected_header(self):
        g = DotGraph(id="H", directed=False, strict=True)
        g.add_stmt(EdgeStmt(NodeRef("a"), NodeRef("b")))
        assert g.to_dot() == "strict graph H {\n  a -- b;\n}\n"

    def test_statement_order_preserved(self):
        g = DotGraph()
        g.add_stmt(Attribute("rankdir", "LR"))
        g.extend([NodeStmt("a"), NodeStmt("b"), EdgeStmt(NodeRef("a"), NodeRef("b"))])
        assert g.to_dot().splitlines() == [
            "digraph G {",
            "  rankdir=LR;",
            "  a;",
            "  b;",
            "  a -> b;",
            "}",
        ]

    def test_node_and_edge_stmt_views(self):
        g = DotGraph()
        g.extend([Attribute("k", "v"), NodeStmt("a"), EdgeStmt(NodeRef("a"), NodeRef("a"))])
        assert [n.id for n in g.node_stmts] == ["a"]
        assert len(g.edge_stmts) == 1
