"""Attribute vocabularies, per-entity schemas and the attribute table.

Every entity that carries DOT attributes owns an ``AttributeTable`` bound to
a schema: a mapping of attribute name to ``AttrSpec``. The schema decides
which names are accepted and how a value is rendered (quoted string, bare
number, bare boolean or bare enum token).
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from dot_builder.errors import InvalidAttributeError

INDENT = "  "


class AttrKind(Enum):
    """How an attribute value is validated and rendered."""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    ENUM = "enum"


class CompassPoint(Enum):
    """Compass point used as a node port or as an edge head/tail port."""

    N = "n"
    NE = "ne"
    E = "e"
    SE = "se"
    S = "s"
    SW = "sw"
    W = "w"
    NW = "nw"
    C = "c"
    DEFAULT = "_"

    def serialize(self) -> str:
        return self.value


class NodeShape(Enum):
    BOX = "box"
    BOX3D = "box3d"
    CIRCLE = "circle"
    CYLINDER = "cylinder"
    DIAMOND = "diamond"
    DOUBLECIRCLE = "doublecircle"
    ELLIPSE = "ellipse"
    FOLDER = "folder"
    HEXAGON = "hexagon"
    HOUSE = "house"
    MCIRCLE = "Mcircle"
    MDIAMOND = "Mdiamond"
    MSQUARE = "Msquare"
    NOTE = "note"
    OVAL = "oval"
    PLAIN = "plain"
    PLAINTEXT = "plaintext"
    POINT = "point"
    POLYGON = "polygon"
    RECORD = "record"
    RECT = "rect"
    SQUARE = "square"
    TAB = "tab"
    TRIANGLE = "triangle"
    NONE = "none"


class EdgeStyle(Enum):
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"
    BOLD = "bold"
    INVIS = "invis"
    TAPERED = "tapered"


class SubgraphStyle(Enum):
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"
    BOLD = "bold"
    ROUNDED = "rounded"
    FILLED = "filled"
    STRIPED = "striped"
    INVIS = "invis"


class RankType(Enum):
    SAME = "same"
    MIN = "min"
    MAX = "max"
    SOURCE = "source"
    SINK = "sink"


class RankDir(Enum):
    TB = "TB"
    LR = "LR"
    BT = "BT"
    RL = "RL"


class ArrowType(Enum):
    NORMAL = "normal"
    INV = "inv"
    DOT = "dot"
    INVDOT = "invdot"
    ODOT = "odot"
    INVODOT = "invodot"
    NONE = "none"
    TEE = "tee"
    EMPTY = "empty"
    INVEMPTY = "invempty"
    DIAMOND = "diamond"
    ODIAMOND = "odiamond"
    EDIAMOND = "ediamond"
    CROW = "crow"
    BOX = "box"
    OBOX = "obox"
    OPEN = "open"
    HALFOPEN = "halfopen"
    VEE = "vee"


class DirType(Enum):
    FORWARD = "forward"
    BACK = "back"
    BOTH = "both"
    NONE = "none"


class LabelLoc(Enum):
    TOP = "t"
    CENTER = "c"
    BOTTOM = "b"


class Splines(Enum):
    NONE = "none"
    LINE = "line"
    POLYLINE = "polyline"
    CURVED = "curved"
    ORTHO = "ortho"
    SPLINE = "spline"


@dataclass(frozen=True)
class AttrSpec:
    """A declared attribute: its DOT name and the kind of value it takes."""

    name: str
    kind: AttrKind = AttrKind.STRING
    choices: type[Enum] | None = None

    def __post_init__(self) -> None:
        if (self.kind is AttrKind.ENUM) != (self.choices is not None):
            raise ValueError(f"Attribute {self.name!r}: enum kind requires choices")

    def coerce(self, value: Any) -> Any:
        """Validate ``value`` for this attribute and return the stored form."""
        if self.kind is AttrKind.STRING:
            if isinstance(value, str):
                return value
        elif self.kind is AttrKind.BOOL:
            if isinstance(value, bool):
                return value
        elif self.kind is AttrKind.NUMBER:
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                if isinstance(value, float) and not math.isfinite(value):
                    raise InvalidAttributeError(
                        f"Invalid value {value!r} for attribute {self.name!r}; number must be finite"
                    )
                return value
        else:
            assert self.choices is not None
            if isinstance(value, self.choices):
                return value
            if isinstance(value, str):
                for member in self.choices:
                    if member.value == value:
                        return member
                allowed = ", ".join(m.value for m in self.choices)
                raise InvalidAttributeError(
                    f"Invalid value {value!r} for attribute {self.name!r}; "
                    f"expected one of: {allowed}"
                )
        expected = self.choices.__name__ if self.choices else self.kind.value
        raise InvalidAttributeError(
            f"Invalid value {value!r} for attribute {self.name!r}; expected {expected}"
        )


def _schema(*specs: AttrSpec) -> dict[str, AttrSpec]:
    return {spec.name: spec for spec in specs}


def _string(*names: str) -> list[AttrSpec]:
    return [AttrSpec(name) for name in names]


def _number(*names: str) -> list[AttrSpec]:
    return [AttrSpec(name, AttrKind.NUMBER) for name in names]


def _flag(*names: str) -> list[AttrSpec]:
    return [AttrSpec(name, AttrKind.BOOL) for name in names]


def _enum(name: str, choices: type[Enum]) -> AttrSpec:
    return AttrSpec(name, AttrKind.ENUM, choices)


ROOT_GRAPH_ATTRS: dict[str, AttrSpec] = _schema(
    *_flag("center", "compound", "concentrate", "newrank"),
    _enum("rankdir", RankDir),
    _enum("splines", Splines),
    _enum("labelloc", LabelLoc),
    *_string("label", "bgcolor", "fontname", "fontcolor", "size", "ratio", "layout", "ordering"),
    *_number("fontsize", "nodesep", "ranksep", "dpi", "pad"),
)

SUBGRAPH_ATTRS: dict[str, AttrSpec] = _schema(
    _enum("rank", RankType),
    _enum("style", SubgraphStyle),
    _enum("labelloc", LabelLoc),
    *_string(
        "color", "bgcolor", "fillcolor", "pencolor", "label", "labeljust",
        "fontname", "fontcolor",
    ),
    *_number("penwidth", "fontsize", "margin", "peripheries"),
    *_flag("cluster"),
)

GRAPH_DEFAULT_ATTRS: dict[str, AttrSpec] = {**ROOT_GRAPH_ATTRS, **SUBGRAPH_ATTRS}

NODE_ATTRS: dict[str, AttrSpec] = _schema(
    _enum("shape", NodeShape),
    *_string(
        "color", "fillcolor", "fontcolor", "fontname", "label", "xlabel",
        "style", "tooltip", "URL", "group",
    ),
    *_number("fontsize", "width", "height", "penwidth", "peripheries"),
    *_flag("fixedsize"),
)

EDGE_ATTRS: dict[str, AttrSpec] = _schema(
    _enum("style", EdgeStyle),
    _enum("arrowhead", ArrowType),
    _enum("arrowtail", ArrowType),
    _enum("dir", DirType),
    _enum("headport", CompassPoint),
    _enum("tailport", CompassPoint),
    *_string(
        "color", "fontcolor", "fontname", "label", "xlabel", "headlabel",
        "taillabel", "lhead", "ltail", "tooltip", "URL",
    ),
    *_number("fontsize", "arrowsize", "penwidth", "weight", "minlen"),
    *_flag("constraint"),
)


def format_value(value: Any) -> str:
    """Render a stored attribute value as DOT text."""
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float):
        # DOT numerals have no exponent form
        return format(Decimal(repr(value)), "f")
    return str(value)


class AttributeTable:
    """Schema-checked mapping of attribute name to value.

    Keys keep the position of their first assignment; assigning ``None``
    removes the key.
    """

    def __init__(self, schema: Mapping[str, AttrSpec], owner: str = "entity") -> None:
        self._schema = schema
        self._owner = owner
        self._values: dict[str, Any] = {}

    @property
    def schema(self) -> Mapping[str, AttrSpec]:
        return self._schema

    def set(self, name: str, value: Any) -> AttributeTable:
        spec = self._schema.get(name)
        if spec is None:
            raise InvalidAttributeError(f"Unknown {self._owner} attribute: {name!r}")
        if value is None:
            self._values.pop(name, None)
            return self
        self._values[name] = spec.coerce(value)
        return self

    def update(self, values: Mapping[str, Any] | None = None, **kwargs: Any) -> AttributeTable:
        """Set several attributes; nothing is applied if any of them is invalid."""
        merged = {**(values or {}), **kwargs}
        staged = AttributeTable(self._schema, self._owner)
        for name, value in merged.items():
            staged.set(name, value)
        for name, value in merged.items():
            self.set(name, value)
        return self

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def unset(self, name: str) -> AttributeTable:
        return self.set(name, None)

    def is_empty(self) -> bool:
        return not self._values

    def items(self) -> list[tuple[str, Any]]:
        return list(self._values.items())

    def serialize(self, indent: int = 0, separator: str = ",", unit: str = INDENT) -> str:
        """Render as ``name=value`` entries joined by ``separator``."""
        prefix = unit * indent
        return separator.join(
            f"{prefix}{name}={format_value(value)}" for name, value in self._values.items()
        )

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeTable):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"AttributeTable({self._owner}, {self._values!r})"
