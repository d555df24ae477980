"""Build Graphviz DOT graphs in Python and serialize them to DOT source."""

from dot_builder.attributes import (
    ArrowType,
    AttributeTable,
    DirType,
    EdgeStyle,
    LabelLoc,
    NodeShape,
    RankDir,
    RankType,
    Splines,
    SubgraphStyle,
)
from dot_builder.errors import DotError, InvalidAttributeError, StructureError
from dot_builder.graph import digraph, from_networkx, graph, to_networkx
from dot_builder.models import (
    AttrDefaultStatement,
    CompassPoint,
    DefaultKind,
    Edge,
    EdgeKind,
    EdgeOperator,
    EdgeStatement,
    NodeId,
    NodeStatement,
    RenderConfig,
    RootGraph,
    Subgraph,
)

__version__ = "0.1.0"

__all__ = [
    "ArrowType",
    "AttrDefaultStatement",
    "AttributeTable",
    "CompassPoint",
    "DefaultKind",
    "DirType",
    "DotError",
    "Edge",
    "EdgeKind",
    "EdgeOperator",
    "EdgeStatement",
    "EdgeStyle",
    "InvalidAttributeError",
    "LabelLoc",
    "NodeId",
    "NodeShape",
    "NodeStatement",
    "RankDir",
    "RankType",
    "RenderConfig",
    "RootGraph",
    "Splines",
    "StructureError",
    "Subgraph",
    "SubgraphStyle",
    "digraph",
    "from_networkx",
    "graph",
    "to_networkx",
]
