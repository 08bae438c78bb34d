"""Command line interface for treecut."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from treecut import __version__
from treecut.config import PartitionConfig, parse_output_dirs
from treecut.exceptions import InvalidConfigurationError, TreecutError
from treecut.pipeline import make_partitions, remove_partitions


console = Console()
err_console = Console(stderr=True)
app = typer.Typer(help="treecut - split a file tree into symlinked partitions")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _version_callback(value: bool) -> None:
    if value:
        console.print(__version__)
        raise typer.Exit()


def _fail(exc: Exception) -> None:
    err_console.print(f"[red]ERROR:[/red] {escape(str(exc))}", soft_wrap=True)
    raise typer.Exit(code=1)


def _print_summary(links_per_dir: dict[Path, int]) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Partition")
    table.add_column("Links", justify="right")
    for output_dir, count in links_per_dir.items():
        table.add_row(str(output_dir), str(count))
    console.print(table)


@app.command()
def main(
    ctx: typer.Context,
    source: Optional[Path] = typer.Option(None, "--source", "-s", help="Source directory to partition"),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Comma-separated list of output directories"
    ),
    by_size: bool = typer.Option(False, "--by-size", "-b", help="Balance partitions by total file size"),
    by_count: bool = typer.Option(False, "--by-count", "-c", help="Deal files round-robin by count"),
    by_type: bool = typer.Option(
        False, "--by-type", "-t", help="Group files by detected content type (default)"
    ),
    unlink: bool = typer.Option(
        False, "--unlink", "-u", help="Remove symlinks and the partition directories"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose logging"),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Print the treecut version",
    ),
) -> None:
    """Partition a directory tree into output directories of symlinks."""
    if not any(ctx.params.values()):
        typer.echo(ctx.get_help())
        raise typer.Exit()

    _setup_logging(verbose)

    if output is None:
        _fail(InvalidConfigurationError("missing required --output option"))

    try:
        output_dirs = parse_output_dirs(output)
    except TreecutError as exc:
        _fail(exc)

    if unlink:
        console.print("Removing partitions and symlinks...")
        try:
            remove_partitions(output_dirs)
        except TreecutError as exc:
            _fail(exc)
        console.print("[green]Partitions removed successfully[/green]")
        return

    if source is None:
        _fail(InvalidConfigurationError("missing required --source option"))
    if by_type and (by_size or by_count):
        _fail(InvalidConfigurationError("--by-type cannot be combined with --by-size or --by-count"))

    config = PartitionConfig(
        source_dir=source,
        output_dirs=output_dirs,
        by_size=by_size,
        by_file=by_count,
    )

    console.print(f"Creating partitions from [bold]{source}[/bold] by {config.strategy.value}...")
    try:
        result = make_partitions(config)
    except TreecutError as exc:
        _fail(exc)

    if result.links_created == 0:
        console.print("[yellow]No files found.[/yellow]")
    else:
        _print_summary(result.links_per_dir)
    console.print("[green]Partitions created successfully[/green]")
