"""CLI entry point for diagram-geometry."""

import json
import logging
import sys

import click

from diagram_geometry.config import LayoutConfig, RouterConfig
from diagram_geometry.errors import SnapshotError
from diagram_geometry.ir.model import node_lookup
from diagram_geometry.layout.engine import layout
from diagram_geometry.layout.viewport import fit_to_content
from diagram_geometry.routing.router import ArrowRouter
from diagram_geometry.snapshot import dump_positions, dump_routes, dump_viewport, load_snapshot


def _load(input: str | None):
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
        return load_snapshot(text)
    except SnapshotError as e:
        click.echo(f"snapshot error:\n{e}", err=True)
        sys.exit(1)


def _emit(payload: object) -> None:
    click.echo(json.dumps(payload, indent=2, sort_keys=True))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
def main(verbose: bool) -> None:
    """Diagram geometry: layout, arrow routing and viewport fitting for node diagrams."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")


@main.command("layout")
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--h-gap", "h_gap", type=float, default=120.0, help="Horizontal gap between boxes")
@click.option("--v-gap", "v_gap", type=float, default=100.0, help="Vertical gap between rows")
@click.option("--break-cycles", is_flag=True, help="Reverse back edges before levelling")
@click.option("--adaptive-rows", is_flag=True, help="Stack rows by their tallest node")
def layout_cmd(input: str | None, h_gap: float, v_gap: float, break_cycles: bool, adaptive_rows: bool) -> None:
    """Print auto-layout target positions as JSON."""
    nodes, arrows = _load(input)
    try:
        config = LayoutConfig(
            horizontal_gap=h_gap,
            vertical_gap=v_gap,
            adaptive_rows=adaptive_rows,
            cycle_strategy="break" if break_cycles else "promote",
        )
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)
    _emit(dump_positions(layout(nodes, arrows, config)))


@main.command("route")
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--clearance", type=float, default=30.0, help="Distance travelled along the anchor normal")
def route_cmd(input: str | None, clearance: float) -> None:
    """Print routed arrow paths (SVG path data) as JSON."""
    nodes, arrows = _load(input)
    router = ArrowRouter(RouterConfig(clearance=clearance))
    _emit(dump_routes(router.route_all(arrows, node_lookup(nodes))))


@main.command("fit")
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--width", type=float, required=True, help="Viewport width in pixels")
@click.option("--height", type=float, required=True, help="Viewport height in pixels")
@click.option("--padding", type=float, default=0.0, help="Margin kept around the content")
def fit_cmd(input: str | None, width: float, height: float, padding: float) -> None:
    """Print the viewport transform that frames all nodes."""
    nodes, _ = _load(input)
    _emit(dump_viewport(fit_to_content(nodes, width, height, padding)))


if __name__ == "__main__":
    main()
