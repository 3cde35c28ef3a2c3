"""Click CLI for desmos-graph — inspect graph sources, pages and the cache."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from desmos_graph.config.hierarchy import load_settings
from desmos_graph.config.schema import CacheLocation
from desmos_graph.errors.exceptions import ParseError
from desmos_graph.types import Spec

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, default_level: str = "WARNING") -> None:
    """Configure logging based on verbosity level."""
    level = logging.getLevelName(default_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


def _load_spec(source_file: str) -> Spec:
    from desmos_graph.dsl.parser import parse

    try:
        source = Path(source_file).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        error_console.print(f"[red]Parse error:[/red] {source_file} is not valid UTF-8 ({e.reason})")
        sys.exit(1)
    try:
        return parse(source)
    except ParseError as e:
        error_console.print(f"[red]Parse error:[/red] {e.message}")
        sys.exit(1)


@click.group()
@click.version_option(package_name="desmos-graph")
def cli() -> None:
    """desmos-graph — compile, render and cache Desmos graph blocks."""


@cli.command("parse")
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def parse_command(source_file: str, verbose: int) -> None:
    """Parse a graph source file and show its fingerprint and contents."""
    settings = load_settings()
    _setup_logging(verbose, settings.log_level)

    spec = _load_spec(source_file)
    fields = spec.fields

    console.print(f"[cyan]Fingerprint:[/cyan] {spec.fingerprint}")
    console.print(
        f"[cyan]Viewport:[/cyan] x [{fields.left}, {fields.right}], "
        f"y [{fields.bottom}, {fields.top}] at {fields.width}x{fields.height}px"
    )

    table = Table(title="Equations", show_header=True)
    table.add_column("#", style="dim")
    table.add_column("Expression", style="cyan")
    table.add_column("Style")
    table.add_column("Color")
    table.add_column("Restriction")

    for i, eq in enumerate(spec.equations, start=1):
        table.add_row(
            str(i),
            eq.expression,
            str(eq.style) if eq.style else "-",
            str(eq.color) if eq.color else "-",
            eq.restriction or "-",
        )

    console.print(table)


@cli.command("page")
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(), help="Output HTML file path.")
@click.option("--origin", type=str, default=None, help="Origin the page posts results to.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def page_command(source_file: str, output: str | None, origin: str | None, verbose: int) -> None:
    """Build the calculator page that renders a graph source file."""
    from desmos_graph.renderer.commands import build_render_job
    from desmos_graph.renderer.page import build_calculator_page

    settings = load_settings(origin=origin)
    _setup_logging(verbose, settings.log_level)
    spec = _load_spec(source_file)
    html = build_calculator_page(build_render_job(spec), origin=settings.origin)

    if output:
        p = Path(output)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(html, encoding="utf-8")
        console.print(f"[green]Written to {p}[/green]")
    else:
        click.echo(html)


@cli.group()
def cache() -> None:
    """Cache inspection commands."""


@cache.command("info")
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--root", type=click.Path(file_okay=False), help="Root a relative cache directory resolves against.")
@click.option("--location", type=click.Choice([loc.value for loc in CacheLocation]), default=None)
@click.option("--directory", type=str, default=None, help="Cache directory override.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def cache_info(
    source_file: str,
    root: str | None,
    location: str | None,
    directory: str | None,
    verbose: int,
) -> None:
    """Show where a graph source file's image is cached and whether it is present."""
    from desmos_graph.cache.manager import CacheManager

    settings = load_settings(cache_location=location, cache_directory=directory)
    _setup_logging(verbose, settings.log_level)
    spec = _load_spec(source_file)
    mgr = CacheManager(settings.cache)

    table = Table(title="Cache Entry", show_header=True)
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Enabled", "yes" if mgr.enabled else "no")
    table.add_row("Backend", str(mgr.location))
    table.add_row("Fingerprint", spec.fingerprint)

    if mgr.location == CacheLocation.FILESYSTEM:
        disk = mgr.disk(root)
        target = mgr.target_path(spec.fingerprint, root)
        table.add_row("Directory", str(disk.directory))
        table.add_row("Directory exists", "yes" if disk.directory.is_dir() else "no")
        table.add_row("Target", str(target))

    present = asyncio.run(mgr.lookup(spec.fingerprint, root)) is not None
    table.add_row("Present", "yes" if present else "no")

    console.print(table)
    mgr.close()


@cache.command("stats")
@click.option("--root", type=click.Path(file_okay=False), help="Root a relative cache directory resolves against.")
@click.option("--directory", type=str, default=None, help="Cache directory override.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def cache_stats(root: str | None, directory: str | None, verbose: int) -> None:
    """Show statistics for the durable cache directory."""
    from desmos_graph.cache.manager import CacheManager

    settings = load_settings(cache_location=CacheLocation.FILESYSTEM.value, cache_directory=directory)
    _setup_logging(verbose, settings.log_level)
    mgr = CacheManager(settings.cache)

    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    stats = mgr.stats(root)
    table.add_row("Directory", str(mgr.disk(root).directory))
    table.add_row("Entries", str(stats.entries))
    table.add_row("Size (MB)", f"{stats.size_mb:.1f}")

    console.print(table)
    mgr.close()


def main() -> None:
    """Entry point for the CLI."""
    cli()
