"""Core data models for dot-builder: identifiers, edges, statements and graph bodies."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from dot_builder.attributes import (
    EDGE_ATTRS,
    GRAPH_DEFAULT_ATTRS,
    INDENT,
    NODE_ATTRS,
    ROOT_GRAPH_ATTRS,
    SUBGRAPH_ATTRS,
    AttributeTable,
    CompassPoint,
)
from dot_builder.errors import InvalidIdentifierError, StructureError

logger = logging.getLogger(__name__)

_ALNUM_ID = re.compile(r"[A-Za-z_\u0080-\uffff][A-Za-z0-9_\u0080-\uffff]*")
_NUMERAL_ID = re.compile(r"-?(\.[0-9]+|[0-9]+(\.[0-9]*)?)")
_KEYWORDS = {"node", "edge", "graph", "digraph", "subgraph", "strict"}


def is_identifier(name: object) -> bool:
    """Whether ``name`` can be written as an unquoted DOT ID."""
    if not isinstance(name, str):
        return False
    if name.lower() in _KEYWORDS:
        return False
    return bool(_ALNUM_ID.fullmatch(name) or _NUMERAL_ID.fullmatch(name))


class EdgeOperator(Enum):
    """Edge operator of a root graph, shared by all of its subgraphs."""

    DIRECTED = "->"
    UNDIRECTED = "--"

    @property
    def keyword(self) -> str:
        return "digraph" if self is EdgeOperator.DIRECTED else "graph"

    def serialize(self) -> str:
        return self.value


class DefaultKind(Enum):
    """Target of an attribute-default statement."""

    GRAPH = "graph"
    NODE = "node"
    EDGE = "edge"


class EdgeKind(Enum):
    """Endpoint-kind pair of an edge."""

    NODE_NODE = "node-node"
    NODE_SUBGRAPH = "node-subgraph"
    SUBGRAPH_NODE = "subgraph-node"
    SUBGRAPH_SUBGRAPH = "subgraph-subgraph"


@dataclass(frozen=True)
class NodeId:
    """A node name with an optional compass-point port."""

    name: str
    port: CompassPoint | None = None

    def __post_init__(self) -> None:
        if not is_identifier(self.name):
            raise InvalidIdentifierError(f"Invalid node name: {self.name!r}")
        if self.port is not None and not isinstance(self.port, CompassPoint):
            object.__setattr__(self, "port", _compass_point(self.port))

    def serialize(self, port_separator: str = " ") -> str:
        if self.port is None:
            return self.name
        return f"{self.name}{port_separator}{self.port.serialize()}"


def _compass_point(value: Any) -> CompassPoint:
    for point in CompassPoint:
        if point.value == value:
            return point
    raise InvalidIdentifierError(f"Invalid port: {value!r}")


@dataclass(frozen=True)
class RenderConfig:
    """Formatting settings used when serializing a graph."""

    indent: str = INDENT
    port_separator: str = " "

    def __post_init__(self) -> None:
        if not isinstance(self.indent, str) or self.indent.strip(" \t"):
            raise ValueError(f"Indent must be spaces or tabs: {self.indent!r}")
        if self.port_separator not in (" ", ":"):
            raise ValueError(f"Invalid port separator: {self.port_separator!r}")


@dataclass(eq=False)
class Edge:
    """A connection between two vertices."""

    tail: Vertex
    head: Vertex
    operator: EdgeOperator

    def __post_init__(self) -> None:
        for endpoint in (self.tail, self.head):
            if not isinstance(endpoint, (NodeId, Subgraph)):
                raise StructureError(f"Edge endpoint must be a NodeId or Subgraph: {endpoint!r}")
            if isinstance(endpoint, Subgraph) and endpoint.operator is not self.operator:
                raise StructureError(
                    f"Subgraph uses {endpoint.operator.value!r} but edge uses "
                    f"{self.operator.value!r}"
                )

    @property
    def kind(self) -> EdgeKind:
        if isinstance(self.tail, NodeId):
            if isinstance(self.head, NodeId):
                return EdgeKind.NODE_NODE
            return EdgeKind.NODE_SUBGRAPH
        if isinstance(self.head, NodeId):
            return EdgeKind.SUBGRAPH_NODE
        return EdgeKind.SUBGRAPH_SUBGRAPH


class _Statement:
    """Shared handle behaviour: attribute updates and body ownership."""

    attrs: AttributeTable
    _parent: GraphBody | None = None

    def set(self, **attrs: Any) -> Any:
        """Update this statement's attributes and return the statement."""
        self.attrs.update(attrs)
        return self

    @property
    def parent(self) -> GraphBody | None:
        return self._parent


@dataclass(eq=False)
class NodeStatement(_Statement):
    """``node_id [attr_list]``"""

    node_id: NodeId
    attrs: AttributeTable = field(default_factory=lambda: AttributeTable(NODE_ATTRS, "node"))


@dataclass(eq=False)
class EdgeStatement(_Statement):
    """``vertex edgeop vertex [attr_list]``"""

    edge: Edge
    attrs: AttributeTable = field(default_factory=lambda: AttributeTable(EDGE_ATTRS, "edge"))


_DEFAULT_SCHEMAS = {
    DefaultKind.GRAPH: GRAPH_DEFAULT_ATTRS,
    DefaultKind.NODE: NODE_ATTRS,
    DefaultKind.EDGE: EDGE_ATTRS,
}


@dataclass(eq=False)
class AttrDefaultStatement(_Statement):
    """``(graph | node | edge) [attr_list]``

    Sets default attributes for entities of ``kind`` declared after it in
    the same body. A standalone block renders even when empty.
    """

    kind: DefaultKind
    standalone: bool = True
    attrs: AttributeTable = field(init=False)

    def __post_init__(self) -> None:
        self.attrs = AttributeTable(_DEFAULT_SCHEMAS[self.kind], self.kind.value)


class GraphBody:
    """Ordered statement list plus the body's own bare attributes.

    Shared by the root graph and subgraphs. Every append operation returns
    the appended statement so its attributes can be updated afterwards.
    """

    def __init__(
        self,
        name: str | None,
        operator: EdgeOperator,
        attrs: AttributeTable,
    ) -> None:
        if name is not None and not is_identifier(name):
            raise InvalidIdentifierError(f"Invalid graph name: {name!r}")
        self.name = name
        self.operator = operator
        self.attrs = attrs
        self._statements: list[Statement] = []

    @property
    def directed(self) -> bool:
        return self.operator is EdgeOperator.DIRECTED

    @property
    def statements(self) -> tuple[Statement, ...]:
        return tuple(self._statements)

    def set(self, **attrs: Any) -> Any:
        """Update the body's own bare ``key=value`` attributes."""
        self.attrs.update(attrs)
        return self

    def add(self, statement: Statement) -> Statement:
        """Append a statement to this body and return it."""
        if not isinstance(statement, (NodeStatement, EdgeStatement, AttrDefaultStatement, Subgraph)):
            raise StructureError(f"Not a statement: {statement!r}")
        if isinstance(statement, AttrDefaultStatement) and not statement.standalone:
            raise StructureError("Only standalone attribute statements can be appended to a body")
        if statement.parent is not None:
            raise StructureError(f"Statement already belongs to {statement.parent!r}")
        if isinstance(statement, Subgraph):
            self._check_link(statement)
        elif isinstance(statement, EdgeStatement):
            if statement.edge.operator is not self.operator:
                raise StructureError(
                    f"Edge uses {statement.edge.operator.value!r} but graph uses "
                    f"{self.operator.value!r}"
                )
            for endpoint in (statement.edge.tail, statement.edge.head):
                if isinstance(endpoint, Subgraph):
                    self._check_link(endpoint)
        statement._parent = self
        self._statements.append(statement)
        return statement

    def node(self, name: str | NodeId, port: CompassPoint | str | None = None, **attrs: Any) -> NodeStatement:
        """Append a node statement."""
        if isinstance(name, NodeId):
            if port is not None:
                raise StructureError(f"Port given twice for node {name.name!r}")
            node_id = name
        else:
            node_id = NodeId(name, port)
        stmt = NodeStatement(node_id)
        stmt.set(**attrs)
        self.add(stmt)
        return stmt

    def edge(self, tail: VertexLike, head: VertexLike, **attrs: Any) -> EdgeStatement:
        """Append an edge statement between two vertices."""
        stmt = EdgeStatement(Edge(self._vertex(tail), self._vertex(head), self.operator))
        stmt.set(**attrs)
        self.add(stmt)
        return stmt

    def node_defaults(self, **attrs: Any) -> AttrDefaultStatement:
        return self._defaults(DefaultKind.NODE, attrs)

    def edge_defaults(self, **attrs: Any) -> AttrDefaultStatement:
        return self._defaults(DefaultKind.EDGE, attrs)

    def graph_defaults(self, **attrs: Any) -> AttrDefaultStatement:
        return self._defaults(DefaultKind.GRAPH, attrs)

    def subgraph(
        self,
        name: str | None = None,
        build: Callable[[Subgraph], Any] | None = None,
        append: bool = True,
    ) -> Subgraph:
        """Create a subgraph, run ``build`` against it and optionally append it.

        With ``append=False`` the subgraph is floating: it is only rendered
        where an edge uses it as an endpoint.
        """
        sub = Subgraph(name, self.operator)
        if build is not None:
            build(sub)
        if append:
            self.add(sub)
        logger.debug(
            "Created subgraph %s (%d statements, appended=%s)",
            name or "<anonymous>", len(sub.statements), append,
        )
        return sub

    def _defaults(self, kind: DefaultKind, attrs: dict[str, Any]) -> AttrDefaultStatement:
        stmt = AttrDefaultStatement(kind)
        stmt.set(**attrs)
        self.add(stmt)
        return stmt

    def _vertex(self, value: VertexLike) -> Vertex:
        if isinstance(value, str):
            return NodeId(value)
        if isinstance(value, (NodeId, Subgraph)):
            return value
        raise StructureError(f"Edge endpoint must be a node name, NodeId or Subgraph: {value!r}")

    def _check_link(self, sub: Subgraph) -> None:
        """Reject a subgraph whose rendering would include this body."""
        if sub.operator is not self.operator:
            raise StructureError(
                f"Subgraph uses {sub.operator.value!r} but graph uses {self.operator.value!r}"
            )
        if sub.renders(self):
            raise StructureError(f"Subgraph {sub!r} would contain itself")


class Subgraph(GraphBody, _Statement):
    """``subgraph [ID] { stmt_list }``: both a statement and an edge endpoint."""

    def __init__(self, name: str | None = None, operator: EdgeOperator = EdgeOperator.UNDIRECTED) -> None:
        super().__init__(name, operator, AttributeTable(SUBGRAPH_ATTRS, "subgraph"))
        self._parent = None

    def renders(self, body: GraphBody) -> bool:
        """Whether serializing this subgraph would emit ``body``."""
        seen: set[int] = set()
        stack: list[Subgraph] = [self]
        while stack:
            current = stack.pop()
            if current is body:
                return True
            if id(current) in seen:
                continue
            seen.add(id(current))
            for stmt in current._statements:
                if isinstance(stmt, Subgraph):
                    stack.append(stmt)
                elif isinstance(stmt, EdgeStatement):
                    for endpoint in (stmt.edge.tail, stmt.edge.head):
                        if isinstance(endpoint, Subgraph):
                            stack.append(endpoint)
        return False

    def __repr__(self) -> str:
        return f"Subgraph({self.name!r}, {len(self._statements)} statements)"


class RootGraph(GraphBody):
    """``[strict] (graph | digraph) [ID] { stmt_list }``"""

    def __init__(
        self,
        name: str | None = None,
        strict: bool = False,
        operator: EdgeOperator = EdgeOperator.UNDIRECTED,
    ) -> None:
        super().__init__(name, operator, AttributeTable(ROOT_GRAPH_ATTRS, "graph"))
        self.strict = strict

    def dot(self, config: RenderConfig | None = None) -> str:
        """Serialize this graph to DOT source."""
        from dot_builder.exporters.dot import export_dot

        return export_dot(self, config)

    def __repr__(self) -> str:
        return f"RootGraph({self.name!r}, {self.operator.keyword}, {len(self._statements)} statements)"


Vertex = Union[NodeId, Subgraph]
VertexLike = Union[str, NodeId, Subgraph]
Statement = Union[NodeStatement, EdgeStatement, AttrDefaultStatement, Subgraph]
