"""Pydantic models for the open-hypergraphs-dot public API.

Rendering configuration (orientation, colour theme, label functions) and
the validation report returned for hypergraphs.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def default_label(value: Any) -> str:
    """Default label for a node or edge value.

    Enum members render as their name (``Gate.Xor`` -> ``"Xor"``); anything
    else uses ``str()``.
    """
    if isinstance(value, Enum):
        return value.name
    return str(value)


class Orientation(str, Enum):
    """Graph orientation, used as the DOT ``rankdir`` attribute."""

    LR = "LR"  # left to right
    TB = "TB"  # top to bottom

    def __str__(self) -> str:
        return self.value


class Theme(BaseModel):
    """Colours applied to the graph background, text and lines.

    Any colour GraphViz understands is accepted: names (``"white"``) or
    ``#rrggbb`` strings.
    """

    bgcolor: str
    fontcolor: str
    color: str


def light_theme() -> Theme:
    return Theme(bgcolor="white", fontcolor="black", color="black")


def dark_theme() -> Theme:
    """A dark theme preset."""
    return Theme(bgcolor="#4a4a4a", fontcolor="white", color="white")


THEMES: dict[str, Callable[[], Theme]] = {
    "dark": dark_theme,
    "light": light_theme,
}


class Options(BaseModel):
    """Options controlling how a hypergraph is turned into DOT.

    ``node_label`` and ``edge_label`` map node and edge labels to display
    text; return ``""`` to hide a label.

    Example:
        ```python
        opts = Options(orientation=Orientation.LR, node_label=lambda _: "")
        ```
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    orientation: Orientation = Orientation.TB
    theme: Theme = Field(default_factory=dark_theme)
    node_label: Callable[[Any], str] = default_label
    edge_label: Callable[[Any], str] = default_label


class ValidationResult(BaseModel):
    """Result of a hypergraph consistency check.

    Contains a pass/fail flag, a list of errors, and a list of warnings
    found during validation.
    """

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
