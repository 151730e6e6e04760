"""Macros CLI - Main application entry point and app structure."""

from importlib.metadata import version
from typing import Annotated

from rich.console import Console
import typer

from src.config import get_logger, log_startup_info, settings, setup_loguru_logger
from src.infrastructure.cli.macro_commands import register_macro_commands

VERSION = version("cms-macro-service")

# Initialize console and logger with reasonable width
console = Console(width=80)
logger = get_logger(__name__)

app = typer.Typer(
    help=f"🧩 Macros v{VERSION} - Manage CMS macro definitions",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
)

register_macro_commands(app)


@app.command(name="version", rich_help_panel="⚙️ System")
def version_command() -> None:
    """Show version information."""
    console.print(f"[bold bright_blue]🧩 Macros[/bold bright_blue] [dim]v{VERSION}[/dim]")


@app.callback()
def init_cli(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output"),
    ] = False,
) -> None:
    """Initialize the macros CLI."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    setup_loguru_logger(verbose)
    log_startup_info()

    settings.data_dir.mkdir(parents=True, exist_ok=True)


def main() -> int:
    """Application entry point."""
    try:
        return app() or 0
    except Exception:
        logger.exception("Unhandled exception")
        return 1
