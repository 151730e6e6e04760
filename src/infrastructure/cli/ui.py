"""UI helpers for CLI interaction.

This module provides reusable UI components and helpers for the CLI,
keeping the presentation logic separate from business logic.
"""

from collections.abc import Callable, Sequence
import functools
from typing import ParamSpec, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
import typer

from src.config import get_logger
from src.domain.entities import Macro, MacroPropertyType

# Initialize console and logger
console = Console()
logger = get_logger(__name__)

# Type variables for command handler decorator
P = ParamSpec("P")
R = TypeVar("R")


def command_error_handler(func: Callable[P, R]) -> Callable[P, R]:
    """Decorator to standardize error handling for CLI commands.

    This decorator wraps a command function to:
    1. Provide consistent error handling using Typer's Exit mechanism
    2. Log errors using Loguru with proper context
    3. Display user-friendly error messages with Rich

    Args:
        func: The command function to wrap

    Returns:
        Wrapped function with integrated error handling
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        operation = func.__name__.strip("_").replace("_", " ")

        with logger.contextualize(operation=operation):
            try:
                logger.debug(f"Executing {operation}")
                return func(*args, **kwargs)

            except (typer.Exit, typer.BadParameter):
                raise

            except typer.Abort:
                logger.info(f"Operation {operation} aborted by user")
                raise

            except Exception as e:
                logger.exception(f"Error during {operation}")
                console.print(f"\n[bold red]✗ Error during {operation}:[/bold red] {escape(str(e))}")
                raise typer.Exit(code=1) from e

    return wrapper


def display_macros(macros: Sequence[Macro]) -> None:
    """Print macros as a table, or a hint when there are none."""
    if not macros:
        console.print("[yellow]No macros found[/yellow]")
        return

    table = Table(title="Macros")
    table.add_column("Alias", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Type", style="magenta")
    table.add_column("Properties", justify="right")

    for macro in macros:
        table.add_row(
            escape(macro.alias),
            escape(macro.name),
            macro.macro_type.value,
            str(len(macro.properties)),
        )

    console.print(table)


def display_macro(
    macro: Macro, property_types: dict[str, MacroPropertyType] | None = None
) -> None:
    """Print a single macro with its properties."""
    property_types = property_types or {}

    details = [
        f"[bold]Name:[/bold] {escape(macro.name)}",
        f"[bold]Type:[/bold] {macro.macro_type.value}",
        f"[bold]Source:[/bold] {escape(macro.macro_source) or '-'}",
        f"[bold]Use in editor:[/bold] {'yes' if macro.use_in_editor else 'no'}",
        f"[bold]Cache:[/bold] {macro.cache_duration}s",
    ]
    console.print(
        Panel(
            "\n".join(details),
            title=f"[bold cyan]{escape(macro.alias)}[/bold cyan]",
            border_style="blue",
            expand=False,
        )
    )

    if not macro.properties:
        return

    table = Table(title="Properties")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Alias", style="cyan")
    table.add_column("Name")
    table.add_column("Type", style="magenta")

    for prop in macro.properties:
        property_type = property_types.get(prop.property_type_alias)
        type_label = (
            escape(property_type.name)
            if property_type
            else f"[red]{escape(prop.property_type_alias)} (unknown)[/red]"
        )
        table.add_row(
            str(prop.sort_order), escape(prop.alias), escape(prop.name), type_label
        )

    console.print(table)


def display_property_types(property_types: Sequence[MacroPropertyType]) -> None:
    """Print registered property types as a table."""
    table = Table(title="Macro Property Types")
    table.add_column("Alias", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Base type", style="magenta")

    for property_type in property_types:
        table.add_row(
            escape(property_type.alias),
            escape(property_type.name),
            property_type.base_type.value,
        )

    console.print(table)
