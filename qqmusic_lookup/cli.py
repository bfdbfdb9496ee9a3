"""
Command-line interface for qqmusic-lookup.

This module implements the CLI using Click; rich-click is used for the
help output colors.

Commands:
    qqmusic rank [TYPE]          Show a chart (default: hot)
    qqmusic search KEYWORD       Search songs
    qqmusic lyrics SONG SINGER   Show the lyric of a song
    qqmusic charts               List the known chart types

Options:
    --config <path>              YAML configuration file
    -v, --verbose                Log INFO messages (twice for DEBUG)

Usage:
    qqmusic rank japan
    qqmusic search "晴天"
    qqmusic --config ~/qqmusic.yaml lyrics 晴天 周杰伦
"""

import asyncio
import sys
from pathlib import Path

import rich_click as click

# Configure rich-click for better help formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.MAX_WIDTH = 100

from qqmusic_lookup import __version__
from qqmusic_lookup.api.requester import Requester
from qqmusic_lookup.core import (
    ConfigError,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from qqmusic_lookup.facade import get_lyrics_data, get_rank_data, get_search_data
from qqmusic_lookup.music.models import ChartType

logger = get_logger(__name__)


@click.group()
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    metavar="<config.yaml>",
    help="Path to a YAML configuration file"
)
@click.option(
    "-v", "--verbose",
    count=True,
    help="Show INFO logs (-vv for DEBUG)"
)
@click.version_option(__version__, prog_name="qqmusic")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: int) -> None:
    """
    [bold]qqmusic[/bold] - QQ Music charts, search and lyrics.
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        sys.exit(1)

    level = config.logging.level
    if verbose == 1:
        level = "INFO"
    elif verbose >= 2:
        level = "DEBUG"
    setup_logging(level, log_file=config.logging.file)
    ctx.call_on_close(shutdown_logging)

    ctx.obj = {
        "config": config,
        "requester": Requester.from_config(config),
    }


@cli.command()
@click.argument(
    "chart_type",
    required=False,
    default="hot",
    type=click.Choice(ChartType.keys(), case_sensitive=False)
)
@click.pass_obj
def rank(obj: dict, chart_type: str) -> None:
    """Show the top 20 of a chart."""
    click.echo(asyncio.run(get_rank_data(chart_type, obj["config"], obj["requester"])))


@cli.command()
@click.argument("keyword")
@click.pass_obj
def search(obj: dict, keyword: str) -> None:
    """Search songs by KEYWORD."""
    click.echo(asyncio.run(get_search_data(keyword, obj["config"], obj["requester"])))


@cli.command()
@click.argument("song_name")
@click.argument("singer")
@click.pass_obj
def lyrics(obj: dict, song_name: str, singer: str) -> None:
    """Show the lyric of SONG_NAME by SINGER."""
    click.echo(asyncio.run(get_lyrics_data(song_name, singer, obj["config"], obj["requester"])))


@cli.command()
def charts() -> None:
    """List the known chart types."""
    for chart in ChartType:
        click.echo(f"{chart.key:<10} {chart.top_id:>3}  {chart.title}")


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `qqmusic` from the command line.
    """
    cli()


if __name__ == "__main__":
    main()
