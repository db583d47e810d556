"""Main Typer application for the wpctl CLI.

This module contains the main Typer app instance and registers all command
groups. It handles global options like the configuration file, debug mode
and output formatting, and sets up logging.
"""

import functools
import logging
import sys
from typing import Optional
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install

from . import __version__
from .render import OutputFormatter
from .exceptions import WpCtlError, ConfigError, NotFoundError
from .utils.exceptions import format_error_for_user

# Install rich traceback handler for better error display
install()

app = typer.Typer(
    name="wpctl",
    help="Command-line client for the WordPress REST API",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)
output_formatter = OutputFormatter(console)

_registered = False

# Global options of the running invocation
state = {"debug": False}


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"wpctl {__version__}")
        raise typer.Exit()


def configure_logging(debug: bool) -> None:
    """Send log records through rich, at DEBUG when ``debug`` is set."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=debug)],
        force=True,
    )
    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.INFO if debug else logging.WARNING)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (YAML)",
        envvar="WPCTL_CONFIG",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output",
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format (table, json, yaml)",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """wpctl - Command-line client for the WordPress REST API.

    Examples:
        # List posts by author 1
        wpctl posts list --author 1

        # Create a tag
        wpctl terms create post_tag --name "python"

        # Update a post meta entry
        wpctl meta update 42 7 --key color --value blue
    """
    configure_logging(debug)
    state["debug"] = debug

    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = config
    ctx.obj["output_format"] = output_format
    ctx.obj["console"] = console
    ctx.obj["output_formatter"] = output_formatter


def handle_exceptions(func):
    """Decorator to handle common exceptions in commands."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except NotFoundError as e:
            console.print(f"[yellow]{format_error_for_user(e)}[/yellow]")
            raise typer.Exit(1)
        except WpCtlError as e:
            debug = state["debug"]
            console.print(f"[red]{format_error_for_user(e, debug)}[/red]")
            if not debug and not isinstance(e, ConfigError):
                console.print("[dim]Use --debug for more details[/dim]")
            raise typer.Exit(1)
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(2)
    return wrapper


def register_commands() -> None:
    """Register all command groups with the main app."""
    global _registered
    if _registered:
        return

    from .cmds import posts_app, meta_app, terms_app, taxonomies_app

    app.add_typer(posts_app, name="posts", help="Manage posts")
    app.add_typer(meta_app, name="meta", help="Manage post meta")
    app.add_typer(terms_app, name="terms", help="Manage taxonomy terms")
    app.add_typer(taxonomies_app, name="taxonomies", help="Inspect taxonomies")
    _registered = True


def cli():
    """Entry point for the CLI."""
    register_commands()

    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    cli()
