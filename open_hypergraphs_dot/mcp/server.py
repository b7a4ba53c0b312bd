"""open-hypergraphs-dot MCP server: exposes hypergraph rendering as tools for AI agents."""

from __future__ import annotations

import functools
import logging
import sys
from collections.abc import Callable
from typing import Any

from mcp.server.fastmcp import FastMCP

from open_hypergraphs_dot.engine.core import OpenHypergraph
from open_hypergraphs_dot.engine.generate import generate_dot_with
from open_hypergraphs_dot.examples import EDGE_LABELS, EXAMPLES, get_example
from open_hypergraphs_dot.models import THEMES, Options, Orientation, ValidationResult
from open_hypergraphs_dot.render import render_dot

# stdout carries JSON-RPC, so logs go to stderr
logging.basicConfig(stream=sys.stderr, level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger("open_hypergraphs_dot.mcp")


mcp = FastMCP(
    "open-hypergraphs-dot",
    instructions=(
        "Renders lax open hypergraphs as GraphViz DOT. "
        "A hypergraph is a JSON object with 'nodes' (labels), 'edges' (labels), "
        "'adjacency' (one {sources, targets} list of node indices per edge), "
        "'quotient' ([left, right] node pairs that are unified), "
        "and 'sources'/'targets' (boundary node indices). "
        "Use validate_hypergraph before render_hypergraph when building graphs by hand."
    ),
)


def _safe_tool(fn: Callable[..., dict]) -> Callable[..., dict]:
    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> dict:
        try:
            return fn(*args, **kwargs)
        except Exception as exc:
            logger.exception("Tool %s failed", fn.__name__)
            return {"error": True, "message": f"{type(exc).__name__}: {exc}"}
    return wrapper


def _options(orientation: str, theme: str, hide_node_labels: bool) -> Options:
    if theme not in THEMES:
        raise ValueError(f"Unknown theme {theme!r}; choose from {sorted(THEMES)}")
    opts = Options(orientation=Orientation(orientation), theme=THEMES[theme]())
    if hide_node_labels:
        opts.node_label = lambda _: ""
    return opts


def _summary(graph: OpenHypergraph) -> dict:
    return {
        "node_count": len(graph.nodes),
        "edge_count": len(graph.edges),
        "source_count": len(graph.sources),
        "target_count": len(graph.targets),
    }


# ===================================================================
# Tools (4)
# ===================================================================


@mcp.tool()
@_safe_tool
def render_hypergraph(
    graph: dict[str, Any],
    orientation: str = "TB",
    theme: str = "dark",
    hide_node_labels: bool = False,
    quotient: bool = False,
) -> dict:
    """Render a hypergraph as GraphViz DOT text.

    Args:
        graph: Hypergraph JSON (nodes, edges, adjacency, quotient, sources, targets).
        orientation: "TB" (top to bottom) or "LR" (left to right).
        theme: "dark" or "light".
        hide_node_labels: Leave node labels empty.
        quotient: Merge unified nodes before rendering.
    """
    hg = OpenHypergraph.from_dict(graph)
    if quotient:
        hg = hg.quotient()
    dot = render_dot(generate_dot_with(hg, _options(orientation, theme, hide_node_labels)))
    return {"dot": dot, **_summary(hg)}


@mcp.tool()
@_safe_tool
def validate_hypergraph(graph: dict[str, Any]) -> dict:
    """Check a hypergraph for dangling node references and label conflicts.

    Args:
        graph: Hypergraph JSON (nodes, edges, adjacency, quotient, sources, targets).
    """
    hg = OpenHypergraph.from_dict(graph)
    return ValidationResult(**hg.validate()).model_dump()


@mcp.tool()
@_safe_tool
def build_example(
    name: str,
    bits: int = 1,
    forget: bool = False,
    orientation: str = "TB",
    theme: str = "dark",
) -> dict:
    """Build one of the sample hypergraphs and render it.

    Args:
        name: Example name (see list_examples).
        bits: Width of the adder example.
        forget: Replace explicit Copy gates with plain wires.
        orientation: "TB" or "LR".
        theme: "dark" or "light".
    """
    hg = get_example(name, bits=bits, forget_vars=forget)
    opts = _options(orientation, theme, hide_node_labels=False)
    if name in EDGE_LABELS:
        opts.edge_label = EDGE_LABELS[name]
    dot = render_dot(generate_dot_with(hg, opts))
    return {"graph": hg.to_dict(), "dot": dot, **_summary(hg)}


@mcp.tool()
@_safe_tool
def list_examples() -> dict:
    """List the names of the sample hypergraphs."""
    return {"examples": sorted(EXAMPLES)}


# ===================================================================
# Resources (1)
# ===================================================================


@mcp.resource("open-hypergraphs-dot://format")
def format_resource() -> str:
    """Hypergraph JSON format and DOT rendering reference."""
    return (
        "# Hypergraph JSON\n\n"
        "- `nodes`: list of node labels; node i is referenced by index i\n"
        "- `edges`: list of hyperedge labels\n"
        "- `adjacency`: per edge, `{\"sources\": [...], \"targets\": [...]}` node indices\n"
        "- `quotient`: list of `[left, right]` node pairs declared equal\n"
        "- `sources` / `targets`: ordered boundary node indices\n\n"
        "# DOT rendering\n\n"
        "- node i -> point `n_i` with its label as `xlabel`\n"
        "- edge k -> record `e_k` with ports `s_j` (sources) and `t_j` (targets)\n"
        "- boundaries -> invisible records `sources`/`targets`, dashed lines\n"
        "- quotient pairs -> dotted undirected lines\n"
    )


# ===================================================================
# Entry point
# ===================================================================


def run_server() -> None:
    """Run the MCP server over stdio."""
    logger.info("Starting open-hypergraphs-dot MCP server")
    mcp.run(transport="stdio")
