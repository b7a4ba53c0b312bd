"""Convert a lax open hypergraph into a DOT syntax tree.

Rendering scheme:
    - every hypergraph node becomes a point ``n_i`` with its label as ``xlabel``
    - every hyperedge becomes a record ``e_k`` with one port per source
      (``s_j``) and per target (``t_j``) around the edge label
    - boundaries become invisible records ``sources``/``targets`` with one
      port ``p_i`` per boundary position, joined to nodes by dashed lines
    - every distinct quotient pair becomes a dotted, undirected line
"""

import logging
from typing import Any

from open_hypergraphs_dot.engine.core import OpenHypergraph
from open_hypergraphs_dot.engine.dot import (
    Attribute,
    AttrStmt,
    DotGraph,
    EdgeStmt,
    Escaped,
    NodeRef,
    NodeStmt,
    Stmt,
    escape_label,
    escape_record_field,
)
from open_hypergraphs_dot.models import Options

logger = logging.getLogger(__name__)


def node_name(node_id: int) -> str:
    return f"n_{node_id}"


def edge_name(edge_id: int) -> str:
    return f"e_{edge_id}"


def _ports(prefix: str, count: int) -> str:
    return " | ".join(f"<{prefix}_{i}>" for i in range(count))


def _record_label(label: str, n_sources: int, n_targets: int) -> Escaped:
    """Record label ``{ { <s_0> | ... } | label | { <t_0> | ... } }``.

    Port groups with no ports are omitted entirely.
    """
    sources = _ports("s", n_sources)
    targets = _ports("t", n_targets)
    if not sources and not targets:
        return Escaped(label)
    if not sources:
        return Escaped(f"{{ {label} | {{ {targets} }} }}")
    if not targets:
        return Escaped(f"{{ {{ {sources} }} | {label} }}")
    return Escaped(f"{{ {{ {sources} }} | {label} | {{ {targets} }} }}")


def generate_dot(graph: OpenHypergraph) -> DotGraph:
    """Generate a DOT graph for ``graph`` using default ``Options``."""
    return generate_dot_with(graph, Options())


def generate_dot_with(graph: OpenHypergraph, options: Options) -> DotGraph:
    """Generate a DOT graph for a lax open hypergraph.

    Args:
        graph: The hypergraph to render. It is only read, never modified.
        options: Orientation, theme and label functions

    Returns:
        A ``DotGraph``; call ``to_dot()`` for the text.

    Raises:
        ValueError: If the hypergraph references nodes that do not exist
    """
    report = graph.validate()
    if not report["valid"]:
        raise ValueError(f"Cannot render invalid hypergraph: {report['errors']}")

    theme = options.theme
    dot_graph = DotGraph(id="G", directed=True, strict=False)

    dot_graph.add_stmt(Attribute("rankdir", str(options.orientation)))
    dot_graph.add_stmt(Attribute("bgcolor", theme.bgcolor))
    dot_graph.add_stmt(
        AttrStmt(
            "node",
            [
                Attribute("shape", "record"),
                Attribute("style", "rounded"),
                Attribute("fontcolor", theme.fontcolor),
                Attribute("color", theme.color),
            ],
        )
    )
    dot_graph.add_stmt(
        AttrStmt(
            "edge",
            [
                Attribute("fontcolor", theme.fontcolor),
                Attribute("color", theme.color),
                Attribute("arrowhead", "none"),
            ],
        )
    )

    dot_graph.extend(generate_node_stmts(graph, options))
    dot_graph.extend(generate_edge_stmts(graph, options))
    dot_graph.extend(generate_interface_stmts(graph))
    dot_graph.extend(generate_connection_stmts(graph))
    dot_graph.extend(generate_quotient_stmts(graph))

    logger.debug(
        "Generated DOT graph: %d nodes, %d hyperedges, %d statements",
        len(graph.nodes),
        len(graph.edges),
        len(dot_graph.stmts),
    )
    return dot_graph


def _label(fn: Any, value: Any, what: str) -> str:
    text = fn(value)
    if not isinstance(text, str):
        raise TypeError(f"{what} label function must return a string, got: {type(text).__name__}")
    return text


def generate_node_stmts(graph: OpenHypergraph, options: Options) -> list[Stmt]:
    """One point per hypergraph node, labelled externally."""
    return [
        NodeStmt(
            node_name(i),
            [
                Attribute("shape", "point"),
                Attribute("xlabel", Escaped(escape_label(_label(options.node_label, lbl, "Node")))),
            ],
        )
        for i, lbl in enumerate(graph.nodes)
    ]


def generate_edge_stmts(graph: OpenHypergraph, options: Options) -> list[Stmt]:
    """One record per hyperedge, with a port for every source and target."""
    stmts: list[Stmt] = []
    for i, (lbl, hyperedge) in enumerate(zip(graph.edges, graph.adjacency)):
        label = escape_record_field(_label(options.edge_label, lbl, "Edge"))
        record = _record_label(label, len(hyperedge.sources), len(hyperedge.targets))
        stmts.append(
            NodeStmt(edge_name(i), [Attribute("label", record), Attribute("shape", "record")])
        )
    return stmts


def generate_interface_stmts(graph: OpenHypergraph) -> list[Stmt]:
    """Invisible boundary records and dashed lines to the boundary nodes."""
    stmts: list[Stmt] = []

    if graph.sources:
        ports = _ports("p", len(graph.sources))
        stmts.append(
            NodeStmt(
                "sources",
                [
                    Attribute("label", Escaped(f"{{ {{}} | {{ {ports} }} }}")),
                    Attribute("shape", "record"),
                    Attribute("style", "invisible"),
                    Attribute("rank", "source"),
                ],
            )
        )
        for i, node_id in enumerate(graph.sources):
            stmts.append(
                EdgeStmt(
                    NodeRef("sources", f"p_{i}"),
                    NodeRef(node_name(node_id)),
                    [Attribute("style", "dashed")],
                )
            )

    if graph.targets:
        ports = _ports("p", len(graph.targets))
        stmts.append(
            NodeStmt(
                "targets",
                [
                    Attribute("label", Escaped(f"{{ {{ {ports} }} | {{}} }}")),
                    Attribute("shape", "record"),
                    Attribute("style", "invisible"),
                    Attribute("rank", "sink"),
                ],
            )
        )
        for i, node_id in enumerate(graph.targets):
            stmts.append(
                EdgeStmt(
                    NodeRef(node_name(node_id)),
                    NodeRef("targets", f"p_{i}"),
                    [Attribute("style", "dashed")],
                )
            )

    return stmts


def generate_connection_stmts(graph: OpenHypergraph) -> list[Stmt]:
    """Lines from source nodes into edge ports and from edge ports to target nodes."""
    stmts: list[Stmt] = []
    for i, hyperedge in enumerate(graph.adjacency):
        for j, node_id in enumerate(hyperedge.sources):
            stmts.append(EdgeStmt(NodeRef(node_name(node_id)), NodeRef(edge_name(i), f"s_{j}")))
        for j, node_id in enumerate(hyperedge.targets):
            stmts.append(EdgeStmt(NodeRef(edge_name(i), f"t_{j}"), NodeRef(node_name(node_id))))
    return stmts


def generate_quotient_stmts(graph: OpenHypergraph) -> list[Stmt]:
    """Dotted lines between unified nodes, one per unordered pair."""
    stmts: list[Stmt] = []
    seen: set[tuple[int, int]] = set()
    for left, right in graph.hypergraph.quotient_pairs():
        key = (min(left, right), max(left, right))
        if key in seen:
            continue
        seen.add(key)
        stmts.append(
            EdgeStmt(
                NodeRef(node_name(left)),
                NodeRef(node_name(right)),
                [Attribute("style", "dotted"), Attribute("dir", "none")],
            )
        )
    return stmts
