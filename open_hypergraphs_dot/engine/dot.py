"""A small GraphViz DOT syntax tree and printer.

Only the subset needed to describe rendered hypergraphs is modelled:
graph-level attributes, default attribute statements, node statements
and single-hop edge statements with optional ports.

Values are plain strings. The printer leaves valid DOT identifiers and
numerals unquoted and quotes everything else. Strings that already carry
DOT escape sequences (record labels, ``\\n`` line breaks) are wrapped in
``Escaped`` so the printer quotes them without escaping a second time.
"""

import re
from dataclasses import dataclass, field
from typing import Union

_PLAIN_ID = re.compile(r"[A-Za-z_\x80-\uffff][A-Za-z0-9_\x80-\uffff]*")
_NUMERAL = re.compile(r"-?(\.[0-9]+|[0-9]+(\.[0-9]*)?)")
_KEYWORDS = frozenset({"node", "edge", "graph", "digraph", "subgraph", "strict"})
_RECORD_SPECIAL = frozenset("{}|<>")

ATTR_KINDS = ("graph", "node", "edge")


class Escaped(str):
    """A string whose contents are already escaped for a DOT quoted string."""

    __slots__ = ()


def escape_label(text: str) -> str:
    """Escape text for use inside an ordinary quoted DOT label."""
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def escape_record_field(text: str) -> str:
    """Escape text for use as a field of a ``shape=record`` label.

    On top of ``escape_label``, the record metacharacters ``{ } | < >``
    are backslash-escaped so they render literally.
    """
    return "".join("\\" + ch if ch in _RECORD_SPECIAL else ch for ch in escape_label(text))


def format_id(value: str) -> str:
    """Format a string as a DOT ID, quoting only when required."""
    if isinstance(value, Escaped):
        return f'"{value}"'
    if value.lower() not in _KEYWORDS and (
        _PLAIN_ID.fullmatch(value) or _NUMERAL.fullmatch(value)
    ):
        return value
    return f'"{escape_label(value)}"'


@dataclass
class Attribute:
    key: str
    value: str

    def to_dot(self) -> str:
        return f"{format_id(self.key)}={format_id(self.value)}"


def _format_attributes(attributes: list[Attribute]) -> str:
    if not attributes:
        return ""
    return " [" + ", ".join(a.to_dot() for a in attributes) + "]"


@dataclass
class NodeRef:
    """A node ID with an optional record port, e.g. ``e_0:t_1``."""

    id: str
    port: str | None = None

    def to_dot(self) -> str:
        if self.port is None:
            return format_id(self.id)
        return f"{format_id(self.id)}:{format_id(self.port)}"


@dataclass
class AttrStmt:
    """Default attributes for all subsequent graphs, nodes or edges.

    Raises:
        ValueError: If kind is not 'graph', 'node' or 'edge'
    """

    kind: str
    attributes: list[Attribute] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.kind not in ATTR_KINDS:
            raise ValueError(f"AttrStmt kind must be one of {ATTR_KINDS}, got: {self.kind!r}")

    def to_dot(self) -> str:
        return f"{self.kind}{_format_attributes(self.attributes)}"


@dataclass
class NodeStmt:
    id: str
    attributes: list[Attribute] = field(default_factory=list)

    def to_dot(self) -> str:
        return f"{format_id(self.id)}{_format_attributes(self.attributes)}"


@dataclass
class EdgeStmt:
    source: NodeRef
    target: NodeRef
    attributes: list[Attribute] = field(default_factory=list)

    def to_dot(self, directed: bool = True) -> str:
        op = "->" if directed else "--"
        return (
            f"{self.source.to_dot()} {op} {self.target.to_dot()}"
            f"{_format_attributes(self.attributes)}"
        )


Stmt = Union[Attribute, AttrStmt, NodeStmt, EdgeStmt]


@dataclass
class DotGraph:
    """A DOT graph: a header plus an ordered list of statements."""

    id: str = "G"
    directed: bool = True
    strict: bool = False
    stmts: list[Stmt] = field(default_factory=list)

    def add_stmt(self, stmt: Stmt) -> None:
        self.stmts.append(stmt)

    def extend(self, stmts: list[Stmt]) -> None:
        self.stmts.extend(stmts)

    @property
    def node_stmts(self) -> list[NodeStmt]:
        return [s for s in self.stmts if isinstance(s, NodeStmt)]

    @property
    def edge_stmts(self) -> list[EdgeStmt]:
        return [s for s in self.stmts if isinstance(s, EdgeStmt)]

    def to_dot(self) -> str:
        """Print the graph as DOT text, one statement per line."""
        header = ("strict " if self.strict else "") + ("digraph" if self.directed else "graph")
        lines = [f"{header} {format_id(self.id)} {{"]
        for stmt in self.stmts:
            if isinstance(stmt, EdgeStmt):
                lines.append(f"  {stmt.to_dot(self.directed)};")
            else:
                lines.append(f"  {stmt.to_dot()};")
        lines.append("}")
        return "\n".join(lines) + "\n"
