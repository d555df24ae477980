"""Graph construction entry points and conversions to other representations."""

from __future__ import annotations

import json
from collections.abc import Callable
from enum import Enum
from typing import Any

import networkx as nx

from dot_builder.models import (
    AttrDefaultStatement,
    EdgeOperator,
    EdgeStatement,
    NodeId,
    NodeStatement,
    RootGraph,
    Statement,
    Subgraph,
    Vertex,
)


def graph(
    name: str | None = None,
    strict: bool = False,
    build: Callable[[RootGraph], Any] | None = None,
) -> RootGraph:
    """Create an undirected root graph and run ``build`` against it."""
    return _root(name, strict, EdgeOperator.UNDIRECTED, build)


def digraph(
    name: str | None = None,
    strict: bool = False,
    build: Callable[[RootGraph], Any] | None = None,
) -> RootGraph:
    """Create a directed root graph and run ``build`` against it."""
    return _root(name, strict, EdgeOperator.DIRECTED, build)


def _root(
    name: str | None,
    strict: bool,
    operator: EdgeOperator,
    build: Callable[[RootGraph], Any] | None,
) -> RootGraph:
    root = RootGraph(name, strict, operator)
    if build is not None:
        build(root)
    return root


def to_networkx(root: RootGraph) -> nx.Graph:
    """Convert a RootGraph to a NetworkX graph.

    Node statements and edge endpoints become nodes. An edge with a
    subgraph endpoint connects every node mentioned inside that subgraph.
    Attribute values are copied as plain Python values.
    """
    g: nx.Graph = nx.DiGraph() if root.directed else nx.Graph()
    g.graph.update(_plain(root.attrs.items()))
    _collect(g, root.statements)
    return g


def _collect(g: nx.Graph, statements: tuple[Statement, ...]) -> None:
    for stmt in statements:
        if isinstance(stmt, NodeStatement):
            g.add_node(stmt.node_id.name, **_plain(stmt.attrs.items()))
        elif isinstance(stmt, EdgeStatement):
            for tail in _endpoint_names(stmt.edge.tail):
                for head in _endpoint_names(stmt.edge.head):
                    g.add_edge(tail, head, **_plain(stmt.attrs.items()))
        elif isinstance(stmt, Subgraph):
            _collect(g, stmt.statements)


def _endpoint_names(vertex: Vertex) -> list[str]:
    if isinstance(vertex, NodeId):
        return [vertex.name]
    names: list[str] = []
    for stmt in vertex.statements:
        if isinstance(stmt, NodeStatement):
            candidates = [stmt.node_id.name]
        elif isinstance(stmt, EdgeStatement):
            candidates = _endpoint_names(stmt.edge.tail) + _endpoint_names(stmt.edge.head)
        elif isinstance(stmt, Subgraph):
            candidates = _endpoint_names(stmt)
        else:
            candidates = []
        names.extend(n for n in candidates if n not in names)
    return names


def _plain(items: list[tuple[str, Any]]) -> dict[str, Any]:
    return {k: v.value if isinstance(v, Enum) else v for k, v in items}


def from_networkx(nxg: nx.Graph, name: str | None = None, strict: bool = False) -> RootGraph:
    """Build a RootGraph from a NetworkX graph.

    Node and edge data keys that are declared DOT attributes are carried
    over; other keys are ignored.
    """
    factory = digraph if nxg.is_directed() else graph
    root = factory(name, strict)
    root.set(**_declared(root.attrs.schema, nxg.graph))
    for node, data in nxg.nodes(data=True):
        stmt = root.node(str(node))
        stmt.set(**_declared(stmt.attrs.schema, data))
    for tail, head, data in nxg.edges(data=True):
        stmt = root.edge(str(tail), str(head))
        stmt.set(**_declared(stmt.attrs.schema, data))
    return root


def _declared(schema: Any, data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if k in schema}


def graph_to_json(root: RootGraph) -> dict:
    """Export a RootGraph as a JSON-serializable dictionary."""
    return {
        "name": root.name,
        "strict": root.strict,
        "directed": root.directed,
        "attrs": _plain(root.attrs.items()),
        "statements": [_statement_to_json(s) for s in root.statements],
    }


def export_json(root: RootGraph, indent: int = 2) -> str:
    """Export a RootGraph as a JSON string."""
    return json.dumps(graph_to_json(root), indent=indent)


def _statement_to_json(stmt: Statement) -> dict:
    if isinstance(stmt, NodeStatement):
        return {"type": "node", "id": _vertex_to_json(stmt.node_id), "attrs": _plain(stmt.attrs.items())}
    if isinstance(stmt, EdgeStatement):
        return {
            "type": "edge",
            "kind": stmt.edge.kind.value,
            "tail": _vertex_to_json(stmt.edge.tail),
            "head": _vertex_to_json(stmt.edge.head),
            "attrs": _plain(stmt.attrs.items()),
        }
    if isinstance(stmt, AttrDefaultStatement):
        return {"type": "defaults", "kind": stmt.kind.value, "attrs": _plain(stmt.attrs.items())}
    return _subgraph_to_json(stmt)


def _subgraph_to_json(sub: Subgraph) -> dict:
    return {
        "type": "subgraph",
        "name": sub.name,
        "attrs": _plain(sub.attrs.items()),
        "statements": [_statement_to_json(s) for s in sub.statements],
    }


def _vertex_to_json(vertex: Vertex) -> dict:
    if isinstance(vertex, NodeId):
        return {"name": vertex.name, "port": vertex.port.value if vertex.port else None}
    return _subgraph_to_json(vertex)
