"""open-hypergraphs-dot MCP server: exposes hypergraph rendering as tools for AI agents."""

from open_hypergraphs_dot.mcp.server import mcp, run_server

__all__ = ["mcp", "run_server"]
