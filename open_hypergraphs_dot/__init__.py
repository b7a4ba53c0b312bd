"""open-hypergraphs-dot: render lax open hypergraphs as GraphViz DOT."""

__version__ = "0.1.0"

from open_hypergraphs_dot.engine import (
    Hyperedge,
    OpenHypergraph,
    generate_dot,
    generate_dot_with,
    load_graph,
    save_graph,
)
from open_hypergraphs_dot.models import (
    Options,
    Orientation,
    Theme,
    ValidationResult,
    dark_theme,
    light_theme,
)
from open_hypergraphs_dot.render import (
    GraphvizNotFoundError,
    RenderError,
    hypergraph_to_dot,
    render_dot,
    render_image,
    write_dot,
)

__all__ = [
    "GraphvizNotFoundError",
    "Hyperedge",
    "OpenHypergraph",
    "Options",
    "Orientation",
    "RenderError",
    "Theme",
    "ValidationResult",
    "__version__",
    "dark_theme",
    "generate_dot",
    "generate_dot_with",
    "hypergraph_to_dot",
    "light_theme",
    "load_graph",
    "render_dot",
    "render_image",
    "save_graph",
    "write_dot",
]
