"""CLI interface for Lingostage.

Command-line tool for planning and serving multi-language sites.
"""

import asyncio
import logging
import sys
from pathlib import Path

import click

from lingostage.build import build_page_set, write_manifest
from lingostage.config import Config
from lingostage.core.errors import PathCollisionError


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(message: str) -> None:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover lingostage.toml)",
)

source_dir_option = click.option(
    "--source-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Documentation source directory (overrides config)",
)

verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (log every planned page)",
)


@click.group()
def cli() -> None:
    """Lingostage - one page source, every language."""


@cli.command()
@config_option
@source_dir_option
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory for the page manifest (overrides config)",
)
@click.option(
    "--site-url",
    default=None,
    help="Absolute site URL for alternate links (overrides config)",
)
@verbose_option
def build(
    config_path: Path | None,
    source_dir: Path | None,
    output_dir: Path | None,
    site_url: str | None,
    verbose: bool,
) -> None:
    """Plan every page in every language and write the page manifest."""
    _configure_logging(verbose)

    try:
        config = Config.load(config_path).with_overrides(
            source_dir=source_dir,
            output_dir=output_dir,
            site_url=site_url,
        )
        page_set = asyncio.run(build_page_set(config))
    except (PathCollisionError, ValueError, FileNotFoundError) as e:
        _fail(str(e))
        return

    manifest_path = write_manifest(
        page_set,
        config.docs.output_dir,
        config.i18n.i18next_options,
    )

    click.echo(f"Languages: {', '.join(config.i18n.languages)}")
    click.echo(f"Default language: {config.i18n.default_language}")
    click.echo(f"Pages: {len(page_set)}")
    click.echo(click.style(f"Manifest written to {manifest_path}", fg="green"))


@cli.command()
@config_option
@source_dir_option
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--redirect/--no-redirect",
    default=None,
    help="Enable/disable first-visit language redirect (overrides config)",
)
@verbose_option
def serve(
    config_path: Path | None,
    source_dir: Path | None,
    host: str | None,
    port: int | None,
    redirect: bool | None,
    verbose: bool,
) -> None:
    """Start the page server."""
    from lingostage.server import run_server

    _configure_logging(verbose)

    try:
        config = Config.load(config_path).with_overrides(
            host=host,
            port=port,
            source_dir=source_dir,
            redirect=redirect,
        )
        page_set = asyncio.run(build_page_set(config))
    except (PathCollisionError, ValueError, FileNotFoundError) as e:
        _fail(str(e))
        return

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Source directory: {config.docs.source_dir}")
    click.echo(f"Languages: {', '.join(config.i18n.languages)}")
    if config.i18n.redirect:
        click.echo("Language redirect: enabled")
    else:
        click.echo("Language redirect: disabled")

    run_server(config, page_set)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
