"""Command-line interface for SnippetCore."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import click
import structlog
from rich.console import Console
from rich.table import Table

from snippetcore import __version__
from snippetcore.config.config import Config, load_config
from snippetcore.extractor.dom import ParseError
from snippetcore.extractor.main_content import MainContentPipeline
from snippetcore.fetcher.http_client import FetchError, PageFetcher
from snippetcore.observability.logging import configure_logging

console = Console()
logger = structlog.get_logger(__name__)


def _read_source(source: str, config: Config) -> bytes:
    """Read HTML from a local file or an http(s) URL."""
    if source.startswith(("http://", "https://")):

        async def _fetch() -> bytes:
            async with PageFetcher(config.fetch) as fetcher:
                return await fetcher.fetch(source)

        try:
            return asyncio.run(_fetch())
        except FetchError as e:
            raise click.ClickException(str(e)) from e

    path = Path(source)
    if not path.is_file():
        raise click.ClickException(f"No such file: {source}")
    return path.read_bytes()


@click.group()
@click.version_option(__version__, prog_name="snippetcore")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None)
@click.option("--log-level", default=None, help="Override the configured log level.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], log_level: Optional[str]) -> None:
    """Extract the readable content of web pages."""
    config = load_config(config_path)
    if log_level:
        config.monitoring.log_level = log_level
    configure_logging(config.monitoring)
    ctx.obj = config


@cli.command()
@click.argument("source")
@click.option("--json", "as_json", is_flag=True, help="Print paragraphs as a JSON array.")
@click.pass_obj
def extract(config: Config, source: str, as_json: bool) -> None:
    """Print the main content paragraphs of SOURCE (file path or URL)."""
    html = _read_source(source, config)
    try:
        result = MainContentPipeline(config).run(html, url=source)
    except ParseError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps(list(result.paragraphs), ensure_ascii=False, indent=2))
        return

    if result.is_empty:
        console.print("[yellow]No qualifying paragraphs found.[/yellow]")
        return
    for paragraph in result.paragraphs:
        click.echo(paragraph)
        click.echo()


@cli.command()
@click.argument("source")
@click.pass_obj
def score(config: Config, source: str) -> None:
    """Show which node of SOURCE wins and why."""
    html = _read_source(source, config)
    pipeline = MainContentPipeline(config)
    try:
        tree = pipeline.load(html)
    except ParseError as e:
        raise click.ClickException(str(e)) from e

    best = pipeline.locate(tree)
    breakdown = pipeline.scorer.explain(tree, best.index)

    console.print(f"[bold]Winner:[/bold] {tree.path(best.index)}")
    console.print(f"[bold]Score:[/bold] {best.score:.4f}")

    table = Table(title="Score breakdown")
    table.add_column("Factor", style="cyan")
    table.add_column("Value", justify="right")
    for name, value in breakdown.as_dict().items():
        table.add_row(name, f"{value:.4f}" if isinstance(value, float) else str(value))
    console.print(table)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
