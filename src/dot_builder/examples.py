"""Bundled sample graphs, used by the CLI and as golden fixtures."""

from __future__ import annotations

from collections.abc import Callable

from dot_builder.attributes import CompassPoint, EdgeStyle, NodeShape, RankType, SubgraphStyle
from dot_builder.graph import digraph
from dot_builder.models import RootGraph, Subgraph


def basic() -> RootGraph:
    """Node and edge attributes, defaults and an appended subgraph."""
    g = digraph()
    g.node_defaults(color="green", shape=NodeShape.BOX3D)
    g.node("a", color="blue")
    g.edge("a", "b", color="orange")
    g.edge("a", "c", color="black", style=EdgeStyle.DASHED)

    def inner(sub: Subgraph) -> None:
        sub.node_defaults(color="yellow")
        sub.edge("e", "f")

    g.subgraph(build=inner)
    return g


def commutative() -> RootGraph:
    """A commutative diagram with two ranked rows."""
    g = digraph("g")
    g.node_defaults(shape=NodeShape.PLAINTEXT)
    g.edge("A1", "B1")
    g.edge("A2", "B2")
    g.edge("A3", "B3")

    g.edge("A1", "A2", label="f")
    g.edge("A2", "A3", label="g")
    g.edge("B2", "B3", label="g'")
    g.edge("B1", "B3", label="(g o f)'", tailport=CompassPoint.S, headport=CompassPoint.S)

    for row in ("A", "B"):
        sub = g.subgraph()
        sub.set(rank=RankType.SAME)
        for i in range(1, 4):
            sub.node(f"{row}{i}")
    return g


def clusters() -> RootGraph:
    """Two clustered processes joined by start and end nodes."""
    g = digraph("G")

    def process_one(sub: Subgraph) -> None:
        sub.set(style=SubgraphStyle.FILLED, color="lightgrey", label="process #1")
        sub.node_defaults(style="filled", color="white")
        sub.edge("a0", "a1")
        sub.edge("a1", "a2")
        sub.edge("a2", "a3")

    def process_two(sub: Subgraph) -> None:
        sub.set(color="blue", label="process #2")
        sub.node_defaults(style="filled")
        sub.edge("b0", "b1")
        sub.edge("b1", "b2")
        sub.edge("b2", "b3")

    g.subgraph("cluster_0", process_one)
    g.subgraph("cluster_1", process_two)

    for tail, head in [
        ("start", "a0"), ("start", "b0"), ("a1", "b3"), ("b2", "a3"),
        ("a3", "a0"), ("a3", "end"), ("b3", "end"),
    ]:
        g.edge(tail, head)

    g.node("start", shape=NodeShape.MDIAMOND)
    g.node("end", shape=NodeShape.MSQUARE)
    return g


def subgraph_edge() -> RootGraph:
    """A floating subgraph used only as an edge endpoint."""
    g = digraph()

    def pair(sub: Subgraph) -> None:
        sub.node_defaults(color="blue")
        sub.node("x")
        sub.node("y")

    g.edge(g.subgraph(build=pair, append=False), "a")
    return g


def numbered(count: int = 101) -> RootGraph:
    """A graph with ``count`` bare numbered nodes."""
    g = digraph()
    for i in range(count):
        g.node(str(i))
    return g


EXAMPLES: dict[str, Callable[[], RootGraph]] = {
    "basic": basic,
    "commutative": commutative,
    "clusters": clusters,
    "subgraph-edge": subgraph_edge,
    "numbered": numbered,
}
