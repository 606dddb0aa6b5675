"""CLI entry point for diagram-layout."""

import json
import logging
import sys

import click

from diagram_layout.config import LayoutOptions
from diagram_layout.pipeline import layout_diagram
from diagram_layout.serialization import dump_diagram, load_diagram


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--direction", "-d", "direction", type=click.Choice(["TB", "LR"], case_sensitive=False), default="TB")
@click.option(
    "--layering",
    "-l",
    "layering",
    type=click.Choice(["auto", "manual"], case_sensitive=False),
    default="manual",
    help="Rank nodes from the edges (auto) or pin them by node type (manual)",
)
@click.option("--node-sep", "node_sep", type=float, default=80, help="Gap between nodes of the same rank")
@click.option("--rank-sep", "rank_sep", type=float, default=120, help="Gap between ranks")
@click.option("--edge-spacing", "edge_spacing", type=float, default=10, help="Width reserved for an edge passing through a rank")
@click.option("--padding", "-p", "padding", type=float, default=50, help="Outer margin")
@click.option("--grid-size", "-g", "grid_size", type=float, default=20, help="Snap positions to this grid")
@click.option("--overlap-padding", "overlap_padding", type=float, default=20, help="Minimum gap kept between repaired boxes")
@click.option("--overlap-passes", "overlap_passes", type=int, default=1, help="Overlap repair passes")
@click.option("--indent", "indent", type=int, default=2, help="JSON indentation of the output")
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Log pipeline details to stderr")
def main(
    input: str | None,
    output: str | None,
    direction: str,
    layering: str,
    node_sep: float,
    rank_sep: float,
    edge_spacing: float,
    padding: float,
    grid_size: float,
    overlap_padding: float,
    overlap_passes: int,
    indent: int,
    verbose: bool,
) -> None:
    """Lay out a diagram JSON document ({"nodes": [...], "edges": [...]})."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if input:
        try:
            with open(input) as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        doc = json.loads(text)
        nodes, edges = load_diagram(doc)
        options = LayoutOptions(
            direction=direction,
            layer_assignment=layering,
            node_separation=node_sep,
            rank_separation=rank_sep,
            edge_spacing=edge_spacing,
            padding=padding,
            grid_size=grid_size,
            overlap_padding=overlap_padding,
            overlap_passes=overlap_passes,
        )
    except ValueError as e:
        click.echo(f"error: invalid input: {e}", err=True)
        sys.exit(1)

    positioned = layout_diagram(nodes, edges, options)
    rendered = json.dumps(dump_diagram(doc, positioned), indent=indent) + "\n"

    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
