"""Save and load open hypergraphs as JSON.

File layout (see ``OpenHypergraph.to_dict``):
    {
      "nodes": ["A", "B", ...],
      "edges": ["Copy", ...],
      "adjacency": [{"sources": [0], "targets": [1, 2]}, ...],
      "quotient": [[1, 3], ...],
      "sources": [0],
      "targets": [5]
    }

Labels must be JSON values; enum members with ``str`` values are written
as their value.
"""

from __future__ import annotations

import json
from pathlib import Path

from .core import OpenHypergraph


def _validate_path(path: str | Path) -> Path:
    """Resolve a file path, rejecting null bytes.

    Raises:
        ValueError: If the path contains null bytes
    """
    if "\x00" in str(path):
        raise ValueError(f"Invalid path (contains null bytes): {str(path)!r}")
    return Path(path).resolve()


def save_graph(graph: OpenHypergraph, path: str | Path) -> Path:
    """Write ``graph`` to ``path`` as indented JSON.

    Raises:
        ValueError: If path is invalid
        TypeError: If a label is not JSON-serializable
    """
    validated_path = _validate_path(path)
    validated_path.parent.mkdir(parents=True, exist_ok=True)
    with open(validated_path, "w", encoding="utf-8") as f:
        json.dump(graph.to_dict(), f, indent=2, ensure_ascii=False)
    return validated_path


def load_graph(path: str | Path) -> OpenHypergraph:
    """Read a graph written by ``save_graph``.

    Raises:
        ValueError: If path is invalid, does not exist, or holds invalid JSON
        TypeError: If the JSON does not have the expected shape
    """
    validated_path = _validate_path(path)
    if not validated_path.exists():
        raise ValueError(f"Path does not exist: {path}")
    with open(validated_path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    return OpenHypergraph.from_dict(data)
