"""DOT text output and image rendering through the GraphViz ``dot`` program."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path

from open_hypergraphs_dot.engine.core import OpenHypergraph
from open_hypergraphs_dot.engine.dot import DotGraph
from open_hypergraphs_dot.engine.generate import generate_dot_with
from open_hypergraphs_dot.models import Options

logger = logging.getLogger(__name__)

DOT_BINARY_ENV = "OPEN_HYPERGRAPHS_DOT_BIN"

IMAGE_FORMATS = ("png", "svg", "pdf", "jpg", "gif")


class GraphvizNotFoundError(RuntimeError):
    """The GraphViz ``dot`` executable could not be located."""


class RenderError(RuntimeError):
    """``dot`` ran but failed to produce an image."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


def render_dot(graph: DotGraph) -> str:
    """Render a DOT graph to a string."""
    return graph.to_dot()


def hypergraph_to_dot(graph: OpenHypergraph, options: Options | None = None) -> str:
    """Generate and print DOT text for an open hypergraph in one call."""
    return render_dot(generate_dot_with(graph, options or Options()))


def write_dot(graph: DotGraph | str, path: str | Path) -> Path:
    """Write DOT text to ``path`` as UTF-8, creating parent directories."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    text = graph if isinstance(graph, str) else render_dot(graph)
    out.write_text(text, encoding="utf-8")
    logger.debug("Wrote DOT file %s", out)
    return out


def find_dot_binary() -> str | None:
    """Locate the ``dot`` executable.

    ``$OPEN_HYPERGRAPHS_DOT_BIN`` takes precedence over ``PATH``.
    """
    configured = os.environ.get(DOT_BINARY_ENV)
    if configured:
        return shutil.which(configured) or (configured if Path(configured).is_file() else None)
    return shutil.which("dot")


def render_image(
    dot_source: DotGraph | str,
    output: str | Path,
    format: str = "png",
    *,
    dot_binary: str | None = None,
) -> Path:
    """Render DOT text to an image file with GraphViz.

    Args:
        dot_source: DOT text, or a ``DotGraph`` to print first
        output: Image file path to write
        format: GraphViz output format (e.g. "png", "svg")
        dot_binary: Explicit path to ``dot``; defaults to ``find_dot_binary()``

    Returns:
        The output path

    Raises:
        ValueError: If the format is not supported
        GraphvizNotFoundError: If no ``dot`` executable is available
        RenderError: If ``dot`` exits with a non-zero status
    """
    if format not in IMAGE_FORMATS:
        raise ValueError(f"Unsupported image format: {format!r}; choose from {IMAGE_FORMATS}")

    binary = dot_binary or find_dot_binary()
    if binary is None:
        raise GraphvizNotFoundError(
            f"GraphViz 'dot' not found; install GraphViz or set ${DOT_BINARY_ENV}"
        )

    text = dot_source if isinstance(dot_source, str) else render_dot(dot_source)
    out = Path(output)
    out.parent.mkdir(parents=True, exist_ok=True)

    cmd = [binary, f"-T{format}", "-o", str(out)]
    logger.info("Running %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, input=text, capture_output=True, text=True, encoding="utf-8")
    except OSError as exc:
        raise GraphvizNotFoundError(f"Could not execute {binary}: {exc}") from exc

    if proc.returncode != 0:
        stderr = proc.stderr.strip()
        raise RenderError(
            f"dot exited with status {proc.returncode}: {stderr}",
            returncode=proc.returncode,
            stderr=stderr,
        )
    logger.info("Rendered %s", out)
    return out
