"""open-hypergraphs-dot CLI: render hypergraph JSON files as DOT or images."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

import click

from open_hypergraphs_dot.engine.core import OpenHypergraph
from open_hypergraphs_dot.engine.generate import generate_dot_with
from open_hypergraphs_dot.engine.persistence import load_graph, save_graph
from open_hypergraphs_dot.examples import EDGE_LABELS, EXAMPLES, get_example
from open_hypergraphs_dot.models import THEMES, Options, Orientation, ValidationResult
from open_hypergraphs_dot.render import (
    IMAGE_FORMATS,
    GraphvizNotFoundError,
    RenderError,
    render_dot,
    render_image,
    write_dot,
)

OUTPUT_FORMATS = ("dot", *IMAGE_FORMATS)


def _load(path: str) -> OpenHypergraph:
    try:
        return load_graph(path)
    except (ValueError, TypeError) as exc:
        raise click.ClickException(str(exc)) from exc


def _options(
    orientation: str,
    theme: str,
    hide_node_labels: bool,
    edge_label: Callable[[Any], str] | None = None,
) -> Options:
    kwargs: dict = {"orientation": Orientation(orientation), "theme": THEMES[theme]()}
    if hide_node_labels:
        kwargs["node_label"] = lambda _: ""
    if edge_label is not None:
        kwargs["edge_label"] = edge_label
    return Options(**kwargs)


def _emit(graph: OpenHypergraph, options: Options, output: str | None, fmt: str) -> None:
    try:
        dot_text = render_dot(generate_dot_with(graph, options))
    except (ValueError, TypeError) as exc:
        raise click.ClickException(str(exc)) from exc

    if fmt == "dot":
        if output:
            try:
                write_dot(dot_text, output)
            except OSError as exc:
                raise click.ClickException(f"Cannot write {output}: {exc}") from exc
            click.echo(f"DOT file saved to {output}", err=True)
        else:
            click.echo(dot_text, nl=False)
        return

    if not output:
        raise click.UsageError(f"--output is required for format {fmt!r}")
    try:
        render_image(dot_text, output, fmt)
    except (GraphvizNotFoundError, RenderError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"{fmt.upper()} image rendered to {output}", err=True)


def _render_options(fn):
    fn = click.option(
        "--hide-node-labels", is_flag=True, help="Leave node labels empty."
    )(fn)
    fn = click.option(
        "--theme", type=click.Choice(sorted(THEMES)), default="dark", show_default=True
    )(fn)
    fn = click.option(
        "--orientation",
        type=click.Choice([o.value for o in Orientation]),
        default=Orientation.TB.value,
        show_default=True,
    )(fn)
    fn = click.option(
        "--format",
        "fmt",
        type=click.Choice(OUTPUT_FORMATS),
        default="dot",
        show_default=True,
        help="Output format; image formats need GraphViz installed.",
    )(fn)
    fn = click.option("-o", "--output", default=None, help="Output file (default: stdout).")(fn)
    return fn


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """open-hypergraphs-dot: visualize lax open hypergraphs with GraphViz."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@_render_options
@click.option("--quotient", is_flag=True, help="Merge unified nodes before rendering.")
def render(
    input_file: str,
    output: str | None,
    fmt: str,
    orientation: str,
    theme: str,
    hide_node_labels: bool,
    quotient: bool,
) -> None:
    """Render a hypergraph JSON file as DOT or an image."""
    graph = _load(input_file)
    if quotient:
        try:
            graph = graph.quotient()
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc
    _emit(graph, _options(orientation, theme, hide_node_labels), output, fmt)


@cli.command()
@click.argument("name", type=click.Choice(sorted(EXAMPLES)))
@click.option(
    "--bits", default=1, show_default=True, type=click.IntRange(min=1), help="Adder width."
)
@click.option("--forget", "forget_vars", is_flag=True, help="Replace Copy gates with wires.")
@click.option("--save", default=None, help="Also save the hypergraph as JSON to this path.")
@_render_options
def example(
    name: str,
    bits: int,
    forget_vars: bool,
    save: str | None,
    output: str | None,
    fmt: str,
    orientation: str,
    theme: str,
    hide_node_labels: bool,
) -> None:
    """Build a sample hypergraph and render it."""
    graph = get_example(name, bits=bits, forget_vars=forget_vars)
    if save:
        path = save_graph(graph, save)
        click.echo(f"Hypergraph saved to {path}", err=True)
    options = _options(orientation, theme, hide_node_labels, EDGE_LABELS.get(name))
    _emit(graph, options, output, fmt)


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
def validate(input_file: str, as_json: bool) -> None:
    """Check a hypergraph JSON file for dangling references."""
    graph = _load(input_file)
    result = ValidationResult(**graph.validate())
    if as_json:
        click.echo(json.dumps(result.model_dump(), indent=2))
    elif result.valid:
        click.echo("Hypergraph is valid.")
    else:
        click.echo("Validation errors:")
        for err in result.errors:
            click.echo(f"  ERROR: {err}")
    if not as_json:
        for warn in result.warnings:
            click.echo(f"  WARNING: {warn}")
    if not result.valid:
        raise SystemExit(1)


@cli.command()
def mcp() -> None:
    """Start the MCP server for AI agent integration."""
    from open_hypergraphs_dot.mcp.server import run_server

    run_server()


if __name__ == "__main__":
    cli()
