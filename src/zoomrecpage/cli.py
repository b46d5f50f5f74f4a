"""
zoomrecpage – unified CLI entrypoint (Click group)

Subcommands:
- render: render the recordings page once and write the HTML
- list: show the files the page would link to
- serve: run the page on a local development server
- check-config: report missing or invalid settings
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

import rich_click as click
from flask import Flask
from rich.console import Console

from zoomrecpage import __version__
from zoomrecpage.config import Config
from zoomrecpage.exceptions import ConfigError, ZoomRecPageError
from zoomrecpage.handler import RecordingsPageHandler, handle_request
from zoomrecpage.logger import setup_logging
from zoomrecpage.output import OutputFormatter

# Rich-click configuration
click.rich_click.TEXT_MARKUP = "rich"
click.rich_click.SHOW_ARGUMENTS = True

console = Console()
logger = logging.getLogger(__name__)


def _autoload_dotenv() -> None:
    """Automatically load a local .env file for CLI usage.

    Notes:
    - Skipped when the environment variable ZOOMRECPAGE_NO_DOTENV is set (e.g., tests).
    - Does not override existing environment variables.
    - Searches from the current working directory upwards for a .env file.
    """
    if os.getenv("ZOOMRECPAGE_NO_DOTENV"):
        return
    from dotenv import find_dotenv, load_dotenv

    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path, override=False)


def _setup(verbose: bool, debug: bool, config_file: str | None = None) -> None:
    """Flags win; otherwise log at the configured LOG_LEVEL"""
    if debug or verbose:
        setup_logging(level="DEBUG" if debug else "INFO", verbose=debug)
        return
    try:
        level = Config(config_file=config_file).log_level
    except ConfigError:
        # The command reports the broken config file itself
        level = "WARNING"
    setup_logging(level=level)


config_option = click.option(
    "--config", type=click.Path(exists=True), help="Path to config file (JSON/YAML/.env)"
)
verbose_option = click.option("--verbose", "-v", is_flag=True, help="Verbose output")
debug_option = click.option("--debug", "-d", is_flag=True, help="Debug output")


@click.group(help="zoomrecpage – Render a Zoom meeting's cloud recordings as a web page")
@click.version_option(version=__version__)
def cli() -> None:
    """Top-level Click group."""
    _autoload_dotenv()


@cli.command(name="render", help="Render the recordings page once")
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the HTML to this file instead of stdout",
)
@config_option
@verbose_option
@debug_option
def render(output_path: str | None, config: str | None, verbose: bool, debug: bool) -> None:
    _setup(verbose, debug, config)
    formatter = OutputFormatter()

    response = handle_request(config_file=config)
    if response.status_code != 200:
        formatter.output_error(response.body)
        sys.exit(1)

    if output_path:
        Path(output_path).write_text(response.body, encoding="utf-8")
        formatter.output_success(f"Wrote {output_path}")
    else:
        click.echo(response.body)


@cli.command(name="list", help="List the recording links the page would show")
@click.option("--json", "-j", "json_mode", is_flag=True, help="JSON output mode")
@click.option("--tsv", "tsv_mode", is_flag=True, help="Tab-separated output")
@config_option
@verbose_option
@debug_option
def list_entries(
    json_mode: bool, tsv_mode: bool, config: str | None, verbose: bool, debug: bool
) -> None:
    _setup(verbose, debug, config)
    mode = "json" if json_mode else ("tsv" if tsv_mode else "human")
    formatter = OutputFormatter(mode)

    try:
        cfg = Config(config_file=config)
        handler = RecordingsPageHandler(cfg)
        meetings = handler.load_meetings()
        renderer = handler.renderer()

        rows: list[dict[str, Any]] = []
        for meeting, block in zip(meetings, renderer.build_blocks(meetings), strict=True):
            for entry in block.entries:
                rows.append(
                    {
                        "meeting_id": meeting.id,
                        "start_time": entry.timestamp or block.start_time,
                        "label": entry.label,
                        "url": entry.url,
                    }
                )
        formatter.output_entries(rows, title=cfg.page_title)

    except ZoomRecPageError as e:
        formatter.output_error(e.message)
        if e.details and mode == "human":
            console.print(f"[dim]{e.details}[/dim]")
        if debug:
            raise
        sys.exit(1)
    except Exception as e:
        logger.debug("Unexpected exception caught:", exc_info=True)
        formatter.output_error(f"Unexpected error: {e}")
        if debug or verbose:
            raise
        sys.exit(1)


@cli.command(name="serve", help="Serve the recordings page on a local development server")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", default=8888, show_default=True, type=int, help="Port to listen on")
@config_option
@verbose_option
@debug_option
def serve(host: str, port: int, config: str | None, verbose: bool, debug: bool) -> None:
    _setup(verbose, debug, config)
    app = create_app(config_file=config)
    console.print(f"Serving recordings page on [bold]http://{host}:{port}/[/bold]")
    app.run(host=host, port=port, debug=debug)


def create_app(config_file: str | None = None) -> Flask:
    """Flask app answering every path and method with the recordings page"""
    app = Flask(__name__)
    methods = ["GET", "POST", "PUT", "PATCH", "DELETE"]

    def recordings_page(path: str = "") -> tuple[str, int, dict[str, str]]:
        return handle_request(config_file=config_file).as_tuple()

    app.add_url_rule("/", "recordings", recordings_page, methods=methods)
    app.add_url_rule("/<path:path>", "recordings_path", recordings_page, methods=methods)
    return app


@cli.command(name="check-config", help="Check that the required settings are present")
@click.option("--json", "-j", "json_mode", is_flag=True, help="JSON output mode")
@config_option
def check_config(json_mode: bool, config: str | None) -> None:
    formatter = OutputFormatter("json" if json_mode else "human")
    try:
        cfg = Config(config_file=config)
        cfg.validate()
    except ConfigError as e:
        if json_mode:
            print(json.dumps({"status": "error", "error": e.to_dict()}, indent=2))
        else:
            formatter.output_error(e.message)
            if e.details:
                console.print(f"[dim]{e.details}[/dim]")
        sys.exit(1)

    formatter.output_success(f"Configuration OK: {cfg!r}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
