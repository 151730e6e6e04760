"""Macro management commands for the macros CLI."""

from typing import Annotated

from rich.console import Console
from rich.markup import escape
import typer

from src.application.services.macro_service import MacroService
from src.config import get_logger, resilient_operation, settings
from src.domain.entities import Macro, MacroProperty, MacroType
from src.infrastructure.cli.async_helpers import run_async
from src.infrastructure.cli.ui import (
    command_error_handler,
    display_macro,
    display_macros,
    display_property_types,
)

console = Console()
logger = get_logger(__name__)

PANEL = "🧩 Macros"


def register_macro_commands(app: typer.Typer) -> None:
    """Register macro commands with the Typer app."""
    app.command(name="init-db", help="Create the macro tables", rich_help_panel="⚙️ System")(
        init_db_command
    )
    app.command(name="list", help="List macros", rich_help_panel=PANEL)(list_macros)
    app.command(name="show", help="Show a macro and its properties", rich_help_panel=PANEL)(
        show_macro
    )
    app.command(name="create", help="Create or update a macro", rich_help_panel=PANEL)(
        create_macro
    )
    app.command(name="delete", help="Delete a macro", rich_help_panel=PANEL)(delete_macro)
    app.command(
        name="property-types",
        help="List registered macro property types",
        rich_help_panel=PANEL,
    )(list_property_types)


async def _build_service() -> MacroService:
    logger.debug("Building macro service", warm=settings.macros.warm_cache_on_start)
    if settings.macros.warm_cache_on_start:
        return await MacroService.create()
    return MacroService()


def parse_property(value: str, sort_order: int) -> MacroProperty:
    """Parse an ``alias:name[:type]`` option value into a macro property."""
    parts = value.split(":")
    if len(parts) not in (2, 3) or not parts[0]:
        raise typer.BadParameter(
            f"Invalid property '{value}', expected alias:name[:type]",
            param_hint="--property",
        )

    alias, name, *rest = parts
    return MacroProperty(
        alias=alias,
        name=name,
        property_type_alias=rest[0] if rest else "text",
        sort_order=sort_order,
    )


# -----------------------------------------------------------------------------
# init-db
# -----------------------------------------------------------------------------


@command_error_handler
def init_db_command() -> None:
    """Create the macro tables if they don't exist."""
    from src.infrastructure.persistence.database.db_models import init_db

    run_async(init_db)
    console.print("[green]✓ Database ready[/green]")


# -----------------------------------------------------------------------------
# list / show
# -----------------------------------------------------------------------------


@command_error_handler
def list_macros(
    aliases: Annotated[
        list[str] | None,
        typer.Argument(help="Only show these aliases (default: all macros)"),
    ] = None,
) -> None:
    """List macros, optionally filtered by alias."""
    macros = run_async(_list_macros, aliases or [])
    display_macros(macros)


@resilient_operation("list_macros")
async def _list_macros(aliases: list[str]) -> list[Macro]:
    service = await _build_service()
    return await service.get_all(*aliases)


@command_error_handler
def show_macro(
    alias: Annotated[str, typer.Argument(help="Macro alias")],
) -> None:
    """Show a macro and its properties."""
    macro, service = run_async(_show_macro, alias)
    if macro is None:
        console.print(f"[red]Macro '{escape(alias)}' not found[/red]")
        raise typer.Exit(code=1)

    display_macro(
        macro,
        {
            p.property_type_alias: service.get_macro_property_type_by_alias(
                p.property_type_alias
            )
            for p in macro.properties
        },
    )


@resilient_operation("show_macro")
async def _show_macro(alias: str) -> tuple[Macro | None, MacroService]:
    service = await _build_service()
    return await service.get_by_alias(alias), service


# -----------------------------------------------------------------------------
# create / delete
# -----------------------------------------------------------------------------


@command_error_handler
def create_macro(
    alias: Annotated[str, typer.Argument(help="Unique macro alias")],
    name: Annotated[str, typer.Argument(help="Display name")],
    macro_type: Annotated[
        MacroType, typer.Option("--type", "-t", help="Rendering engine")
    ] = MacroType.PARTIAL_VIEW,
    source: Annotated[
        str, typer.Option("--source", "-s", help="Path of the macro source")
    ] = "",
    use_in_editor: Annotated[
        bool, typer.Option("--use-in-editor/--no-editor", help="Offer in the editor")
    ] = False,
    cache_duration: Annotated[
        int, typer.Option("--cache", min=0, help="Cache duration in seconds")
    ] = 0,
    properties: Annotated[
        list[str] | None,
        typer.Option(
            "--property",
            "-p",
            help="Macro parameter as alias:name[:type], repeatable",
        ),
    ] = None,
) -> None:
    """Create a macro, or update the one with the same alias."""
    macro = Macro(
        alias=alias,
        name=name,
        macro_type=macro_type,
        macro_source=source,
        use_in_editor=use_in_editor,
        cache_duration=cache_duration,
        properties=[parse_property(p, i) for i, p in enumerate(properties or [])],
    )

    service = MacroService()
    for prop in macro.properties:
        if service.get_macro_property_type_by_alias(prop.property_type_alias) is None:
            raise typer.BadParameter(
                f"Unknown property type '{prop.property_type_alias}'",
                param_hint="--property",
            )

    saved = run_async(_save_macro, macro)
    console.print(f"[green]✓ Saved macro[/green] [cyan]{escape(saved.alias)}[/cyan] (id {saved.id})")


@resilient_operation("save_macro")
async def _save_macro(macro: Macro) -> Macro:
    service = await _build_service()
    return await service.save(macro)


@command_error_handler
def delete_macro(
    alias: Annotated[str, typer.Argument(help="Macro alias")],
) -> None:
    """Delete a macro and its properties."""
    deleted = run_async(_delete_macro, alias)
    if not deleted:
        console.print(f"[red]Macro '{escape(alias)}' not found[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ Deleted macro[/green] [cyan]{escape(alias)}[/cyan]")


@resilient_operation("delete_macro")
async def _delete_macro(alias: str) -> bool:
    service = await _build_service()
    macro = await service.get_by_alias(alias)
    if macro is None:
        return False

    await service.delete(macro)
    return True


# -----------------------------------------------------------------------------
# property-types
# -----------------------------------------------------------------------------


@command_error_handler
def list_property_types() -> None:
    """List the registered macro property types."""
    service = MacroService()
    display_property_types(service.get_macro_property_types())
