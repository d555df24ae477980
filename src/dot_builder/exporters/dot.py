"""Graphviz DOT export for constructed graphs."""

from __future__ import annotations

import logging

from dot_builder.attributes import AttributeTable
from dot_builder.models import (
    AttrDefaultStatement,
    Edge,
    EdgeStatement,
    NodeId,
    NodeStatement,
    RenderConfig,
    RootGraph,
    Statement,
    Subgraph,
    Vertex,
)

logger = logging.getLogger(__name__)


class DotWriter:
    """Recursive, depth-first writer for a graph and its statements.

    A subgraph is written wherever it is reached: once from its position in
    a statement list and again, in full, from every edge that uses it as an
    endpoint.
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()

    def graph(self, root: RootGraph) -> str:
        header = [root.operator.keyword]
        if root.strict:
            header.insert(0, "strict")
        if root.name is not None:
            header.append(root.name)
        header.append("{")

        lines = [" ".join(header)]
        if not root.attrs.is_empty():
            lines.append(self._bare_attributes(root.attrs, 1))
            lines.append("")
        for stmt in root.statements:
            lines.append(self.statement(stmt, 1))
        lines.append("}")
        return "\n".join(lines) + "\n"

    def statement(self, stmt: Statement, indent: int) -> str:
        if isinstance(stmt, NodeStatement):
            return self._indent(indent) + self.node_id(stmt.node_id) + self.attr_list(stmt.attrs)
        if isinstance(stmt, EdgeStatement):
            return self._indent(indent) + self.edge(stmt.edge, indent) + self.attr_list(stmt.attrs)
        if isinstance(stmt, AttrDefaultStatement):
            return self._indent(indent) + self.defaults(stmt)
        if isinstance(stmt, Subgraph):
            return self.subgraph(stmt, indent)
        raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    def subgraph(self, sub: Subgraph, indent: int, inline: bool = False) -> str:
        """Write ``sub`` at ``indent``; ``inline`` omits the header's leading indent."""
        header = "subgraph {" if sub.name is None else f"subgraph {sub.name} {{"
        lines = [header if inline else self._indent(indent) + header]
        if not sub.attrs.is_empty():
            lines.append(self._bare_attributes(sub.attrs, indent))
        for stmt in sub.statements:
            lines.append(self.statement(stmt, indent + 1))
        lines.append(self._indent(indent) + "}")
        return "\n".join(lines)

    def edge(self, edge: Edge, indent: int = 0) -> str:
        return f"{self.vertex(edge.tail, indent)} {edge.operator.serialize()} {self.vertex(edge.head, indent)}"

    def vertex(self, vertex: Vertex, indent: int = 0) -> str:
        if isinstance(vertex, NodeId):
            return self.node_id(vertex)
        return self.subgraph(vertex, indent, inline=True)

    def node_id(self, node_id: NodeId) -> str:
        return node_id.serialize(self.config.port_separator)

    def defaults(self, stmt: AttrDefaultStatement) -> str:
        if not stmt.standalone:
            return self.attr_list(stmt.attrs)
        return f"{stmt.kind.value}[{stmt.attrs.serialize(unit=self.config.indent)}]"

    def attr_list(self, attrs: AttributeTable) -> str:
        # Empty lists are dropped entirely
        if attrs.is_empty():
            return ""
        return f"[{attrs.serialize(unit=self.config.indent)}]"

    def _bare_attributes(self, attrs: AttributeTable, indent: int) -> str:
        return attrs.serialize(indent, "\n", self.config.indent)

    def _indent(self, level: int) -> str:
        return self.config.indent * level


def export_dot(root: RootGraph, config: RenderConfig | None = None) -> str:
    """Export a RootGraph as a Graphviz DOT string."""
    logger.debug("Exporting %r", root)
    return DotWriter(config).graph(root)
