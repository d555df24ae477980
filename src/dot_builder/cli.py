"""Click CLI entry point for dot-builder."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from dot_builder import __version__
from dot_builder.config import is_initialized, load_config_or_default, save_config
from dot_builder.errors import DotError
from dot_builder.models import RenderConfig


@click.group()
@click.version_option(version=__version__, prog_name="dot-builder")
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Build Graphviz DOT graphs and print their source."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@cli.command()
@click.option("--indent", default=2, type=click.IntRange(0, 8), help="Spaces per nesting level")
@click.option("--colon-ports", is_flag=True, default=False, help="Write ports as name:port")
def init(indent: int, colon_ports: bool) -> None:
    """Write a default render config for this directory."""
    project_root = Path.cwd()
    already = is_initialized(project_root)
    config = RenderConfig(indent=" " * indent, port_separator=":" if colon_ports else " ")
    path = save_config(config, project_root)
    if already:
        click.echo(f"Configuration updated: {path}")
    else:
        click.echo(f"Initialized dot-builder config: {path}")


@cli.command()
def examples() -> None:
    """List the bundled example graphs."""
    from dot_builder.examples import EXAMPLES

    for name, factory in EXAMPLES.items():
        doc = (factory.__doc__ or "").strip().splitlines()
        click.echo(f"{name:<15} {doc[0] if doc else ''}")


@cli.command()
@click.argument("name")
@click.option("--format", "fmt", type=click.Choice(["dot", "json"]), default="dot")
@click.option("--output", "output", type=click.Path(dir_okay=False), default=None)
@click.pass_context
def render(ctx: click.Context, name: str, fmt: str, output: str | None) -> None:
    """Render a bundled example graph."""
    from dot_builder.examples import EXAMPLES
    from dot_builder.exporters.dot import export_dot
    from dot_builder.graph import export_json

    factory = EXAMPLES.get(name)
    if factory is None:
        click.echo(f"Error: Unknown example {name!r}. Run `dot-builder examples`.")
        ctx.exit(1)
        return

    root = factory()
    if fmt == "json":
        text = export_json(root) + "\n"
    else:
        config = _render_config(ctx)
        if config is None:
            return
        text = export_dot(root, config)
    _emit(text, output)


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--name", default=None, help="Graph name")
@click.option("--strict", is_flag=True, default=False)
@click.option("--output", "output", type=click.Path(dir_okay=False), default=None)
@click.pass_context
def convert(
    ctx: click.Context, file_path: str, name: str | None, strict: bool, output: str | None
) -> None:
    """Convert a NetworkX node-link JSON file to DOT."""
    import networkx as nx
    from networkx.readwrite import json_graph

    from dot_builder.exporters.dot import export_dot
    from dot_builder.graph import from_networkx

    try:
        data = json.loads(Path(file_path).read_text())
        nxg = json_graph.node_link_graph(data, edges="links")
    except (json.JSONDecodeError, nx.NetworkXError, KeyError, TypeError, AttributeError) as e:
        click.echo(f"Error: Cannot read node-link graph from {file_path}: {e}")
        ctx.exit(1)
        return

    try:
        root = from_networkx(nxg, name=name, strict=strict)
    except DotError as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)
        return

    config = _render_config(ctx)
    if config is None:
        return
    _emit(export_dot(root, config), output)


def _render_config(ctx: click.Context) -> RenderConfig | None:
    """Load the project render config, reporting a broken file as an error."""
    try:
        return load_config_or_default(Path.cwd())
    except (ValueError, TypeError, AttributeError) as e:
        click.echo(f"Error: Invalid config file: {e}")
        ctx.exit(1)
        return None


def _emit(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text)
        click.echo(f"Wrote {output}")
    else:
        click.echo(text, nl=False)
