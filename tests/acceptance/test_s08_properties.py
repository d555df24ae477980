"""Acceptance tests for the DOT output properties.

Covers: determinism, operator consistency, quoting, order preservation,
empty-table suppression, indentation and the golden scenarios.
"""

import re

import pytest

from dot_builder.attributes import EdgeStyle, NodeShape
from dot_builder.examples import EXAMPLES
from dot_builder.exporters.dot import export_dot
from dot_builder.graph import digraph, graph
from dot_builder.models import RootGraph, Subgraph

pytestmark = pytest.mark.acceptance


def _nested(directed: bool, depth: int) -> RootGraph:
    g = digraph() if directed else graph()
    body: RootGraph | Subgraph = g
    for level in range(depth):
        body = body.subgraph(f"level{level}")
        body.edge(f"a{level}", f"b{level}")
    return g


class TestDeterminism:
    @pytest.mark.parametrize("name", sorted(EXAMPLES))
    def test_serializing_twice_is_identical(self, name: str) -> None:
        root = EXAMPLES[name]()
        assert export_dot(root) == export_dot(root)


class TestOperatorConsistency:
    def test_directed_uses_arrow_at_every_depth(self) -> None:
        text = export_dot(_nested(True, 4))
        edge_lines = [line for line in text.splitlines() if re.search(r"a\d", line)]
        assert len(edge_lines) == 4
        assert all("->" in line and "--" not in line for line in edge_lines)

    def test_undirected_uses_dashes_at_every_depth(self) -> None:
        text = export_dot(_nested(False, 4))
        assert text.count(" -- ") == 4
        assert "->" not in text


class TestQuoting:
    def test_strings_quoted_once_others_bare(self) -> None:
        g = digraph()
        g.node("a", label="hello", shape=NodeShape.BOX, width=1.5, fixedsize=True)
        g.edge("a", "b", color="red", style=EdgeStyle.BOLD, weight=3, constraint=False)
        text = export_dot(g)
        assert 'a[label="hello",shape=box,width=1.5,fixedsize=true]' in text
        assert 'a -> b[color="red",style=bold,weight=3,constraint=false]' in text
        assert '""' not in text


class TestOrderPreservation:
    def test_statements_listed_in_insertion_order(self) -> None:
        g = digraph()
        names = [f"n{i}" for i in range(25)]
        for name in reversed(names):
            g.node(name)
        lines = export_dot(g).splitlines()[1:-1]
        assert lines == [f"  {name}" for name in reversed(names)]

    def test_defaults_keep_their_position(self) -> None:
        g = digraph()
        g.node("before")
        g.node_defaults(color="red")
        g.node("after")
        lines = export_dot(g).splitlines()
        assert lines[1:4] == ["  before", '  node[color="red"]', "  after"]


class TestEmptyTableSuppression:
    def test_node_and_edge_without_attributes(self) -> None:
        g = digraph()
        g.node("a")
        g.edge("a", "b")
        assert "[" not in export_dot(g)

    @pytest.mark.parametrize("kind", ["node", "edge", "graph"])
    def test_empty_default_block(self, kind: str) -> None:
        g = digraph()
        getattr(g, f"{kind}_defaults")()
        assert export_dot(g) == f"digraph {{\n  {kind}[]\n}}\n"


class TestIndentation:
    @pytest.mark.parametrize("depth", [1, 2, 5])
    def test_statement_one_level_below_its_header(self, depth: int) -> None:
        lines = export_dot(_nested(True, depth)).splitlines()
        for level in range(depth):
            header = next(line for line in lines if line.strip() == f"subgraph level{level} {{")
            edge = next(line for line in lines if line.strip() == f"a{level} -> b{level}")
            header_indent = len(header) - len(header.lstrip(" "))
            edge_indent = len(edge) - len(edge.lstrip(" "))
            assert header_indent == 2 * (level + 1)
            assert edge_indent == header_indent + 2


class TestScenarios:
    def test_single_directed_edge(self) -> None:
        g = digraph()
        g.edge("a", "b")
        assert export_dot(g) == "digraph {\n  a -> b\n}\n"

    def test_node_with_color(self) -> None:
        g = digraph()
        g.node("a", color="blue")
        assert '  a[color="blue"]' in export_dot(g).splitlines()

    def test_ranked_subgraph(self, ranked_graph: RootGraph) -> None:
        block = "\n".join(export_dot(ranked_graph).splitlines()[1:-1])
        assert block == (
            "  subgraph {\n"
            "  rank=same\n"
            "    A1\n"
            "    A2\n"
            "    A3\n"
            "  }"
        )

    def test_empty_node_defaults(self) -> None:
        g = digraph()
        g.node_defaults()
        assert "  node[]" in export_dot(g).splitlines()


class TestSubgraphDuplication:
    def test_subgraph_written_once_per_reference(self) -> None:
        g = digraph()
        sub = g.subgraph("s")
        sub.node("x")
        g.edge(sub, "a")
        g.edge("b", sub)
        text = export_dot(g)
        assert text == (
            "digraph {\n"
            "  subgraph s {\n"
            "    x\n"
            "  }\n"
            "  subgraph s {\n"
            "    x\n"
            "  } -> a\n"
            "  b -> subgraph s {\n"
            "    x\n"
            "  }\n"
            "}\n"
        )
        assert len(re.findall(r"subgraph s \{", text)) == 3
