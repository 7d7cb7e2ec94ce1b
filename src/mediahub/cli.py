#!/usr/bin/env python3
"""Command-line interface for mediahub.

This CLI is primarily for debugging and development.
For production use, import mediahub as a library.
"""

import json
import logging
import sys
from datetime import UTC, datetime

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from mediahub import create_manager, create_stats_services
from mediahub.exceptions import MediaHubError
from mediahub.models import SearchResult, ServerInfo, ServerType, UserInfo
from mediahub.services import MediaServerManager
from mediahub.settings import Settings, get_settings
from mediahub.utils.format import format_bytes, format_duration, media_type_icon

logger = logging.getLogger("mediahub")

SERVER_CHOICE = click.Choice([t.value for t in ServerType])


def setup_logging(
    verbose: bool = False,
    console: Console | None = None,
    level: str = "WARNING",
) -> None:
    """Configure logging with Rich handler.

    Clears existing handlers first, so it can be called more than once.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise `level`.
        console: Optional Console instance to use for RichHandler.
        level: Log level name used when not verbose.
    """
    level = "DEBUG" if verbose else level

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = RichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # Request lines from httpx are only useful when debugging
    logging.getLogger("httpx").setLevel(level)


def format_timestamp(millis: int) -> str:
    """Format a millisecond epoch timestamp, dimmed dash when unknown."""
    if not millis:
        return "[dim]-[/dim]"
    return datetime.fromtimestamp(millis / 1000, tz=UTC).strftime("%Y-%m-%d %H:%M")


def print_section_header(console: Console, title: str, subtitle: str = "") -> None:
    """Print a section header with optional subtitle."""
    header = f"  {title.upper()}"
    if subtitle:
        header += f"  [dim]│[/dim]  {subtitle}"
    console.print()
    console.rule(style="dim")
    console.print(header)
    console.rule(style="dim")


def print_server_card(
    console: Console, server_type: ServerType, info: ServerInfo
) -> None:
    """Print one server's info as a vertical card."""
    table = Table(
        show_header=False,
        padding=(0, 1),
        title=f"[bold yellow]{server_type.label}[/bold yellow]",
        title_justify="left",
    )
    table.add_column("Field", style="bold cyan", width=14)
    table.add_column("Value", overflow="fold")

    table.add_row("Name", info.name)
    table.add_row("Version", info.version)
    if info.api_version:
        table.add_row("API", info.api_version)
    if info.id:
        table.add_row("ID", info.id)
    if info.language:
        table.add_row("Language", info.language)
    if info.os:
        table.add_row("OS", f"{info.os} {info.arch}".strip())
    if info.local_address:
        table.add_row("Local address", info.local_address)
    if info.wan_address:
        table.add_row("WAN address", info.wan_address)

    console.print()
    console.print(table)


def print_users(
    console: Console, server_type: ServerType, users: list[UserInfo]
) -> None:
    table = Table(title=f"{server_type.label} users", title_justify="left")
    table.add_column("Username", style="bold")
    table.add_column("Type")
    table.add_column("Active")
    table.add_column("Last seen")
    for user in users:
        table.add_row(
            user.username,
            user.type,
            "[green]yes[/green]" if user.is_active else "[red]no[/red]",
            format_timestamp(user.last_seen),
        )
    console.print(table)


def print_search_results(
    console: Console, server_type: ServerType, results: list[SearchResult]
) -> None:
    """Print search hits of one server as a table.

    Args:
        console: Rich console for output.
        server_type: Server the hits came from.
        results: Hits to display.
    """
    table = Table(
        title=f"{server_type.label} ({len(results)} results)", title_justify="left"
    )
    table.add_column("", width=2)
    table.add_column("Title", style="bold", overflow="fold")
    table.add_column("Author")
    table.add_column("Library")
    table.add_column("Year", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Size", justify="right")
    for result in results:
        table.add_row(
            media_type_icon(result.type),
            result.title,
            result.author,
            result.library,
            str(result.year) if result.year else "",
            format_duration(result.run_time) if result.run_time else "",
            format_bytes(result.size) if result.size else "",
        )
    console.print(table)


def load_manager(settings: Settings) -> MediaServerManager:
    """Build the manager, turning configuration problems into CLI errors."""
    try:
        manager = create_manager(settings)
    except MediaHubError as e:
        raise click.ClickException(e.message) from e
    click.get_current_context().call_on_close(manager.close)
    return manager


def selected_types(
    manager: MediaServerManager, server: str | None
) -> list[ServerType]:
    """Resolve the --server option against the configured servers."""
    if server is None:
        return manager.get_server_types()
    server_type = ServerType(server)
    if server_type not in manager.get_server_types():
        raise click.ClickException(f"{server_type.label} is not configured")
    return [server_type]


def dump_json(data: object) -> None:
    json.dump(data, sys.stdout, indent=2, ensure_ascii=False, default=str)
    sys.stdout.write("\n")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Query Audiobookshelf and Emby servers through one interface."""
    ctx.ensure_object(dict)
    settings = get_settings()
    ctx.obj["settings"] = settings
    setup_logging(
        verbose=verbose or settings.debug,
        console=Console(stderr=True),
        level=settings.log_level,
    )


@main.command(name="servers")
@click.pass_context
def servers_cmd(ctx: click.Context) -> None:
    """List configured servers and whether they answer."""
    console = Console()
    manager = load_manager(ctx.obj["settings"])
    infos = manager.get_server_info_across_servers()

    table = Table(title="Media servers", title_justify="left")
    table.add_column("Server", style="bold")
    table.add_column("Status")
    table.add_column("Version")
    for server_type in manager.get_server_types():
        info = infos.get(server_type)
        if info is None:
            table.add_row(server_type.label, "[red]unreachable[/red]", "")
        else:
            table.add_row(server_type.label, "[green]online[/green]", info.version)
    console.print(table)


@main.command(name="info")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def info_cmd(ctx: click.Context, as_json: bool) -> None:
    """Show identity and version details of every reachable server."""
    console = Console()
    manager = load_manager(ctx.obj["settings"])
    infos = manager.get_server_info_across_servers()

    if as_json:
        dump_json({t.value: info.model_dump() for t, info in infos.items()})
        return

    print_section_header(console, "Servers", f"{len(infos)} reachable")
    for server_type, info in infos.items():
        print_server_card(console, server_type, info)
    for server_type in manager.get_server_types():
        if server_type not in infos:
            console.print(f"[yellow]{server_type.label}: unreachable[/yellow]")


@main.command(name="libraries")
@click.option("-s", "--server", type=SERVER_CHOICE, help="Only this server.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def libraries_cmd(ctx: click.Context, server: str | None, as_json: bool) -> None:
    """List libraries with their item counts.

    \b
    Examples:
      mediahub libraries
      mediahub libraries --server emby --json
    """
    console = Console()
    settings: Settings = ctx.obj["settings"]
    manager = load_manager(settings)
    services = create_stats_services(manager, settings.aggregation_config())

    output: dict[str, list[dict]] = {}
    for server_type in selected_types(manager, server):
        try:
            libraries = services[server_type].get_libraries_with_stats()
        except MediaHubError as e:
            logger.error("%s: %s", server_type.label, e.message)
            continue

        if as_json:
            output[server_type.value] = [lib.model_dump() for lib in libraries]
            continue

        table = Table(title=f"{server_type.label} libraries", title_justify="left")
        table.add_column("", width=2)
        table.add_column("Name", style="bold")
        table.add_column("Type")
        table.add_column("Items", justify="right")
        for library in libraries:
            count = str(library.item_count)
            if not library.count_resolved:
                count = "[yellow]?[/yellow]"
            table.add_row(
                media_type_icon(library.media_type),
                library.name,
                library.media_type,
                count,
            )
        console.print(table)

    if as_json:
        dump_json(output)


@main.command(name="users")
@click.option("-s", "--server", type=SERVER_CHOICE, help="Only this server.")
@click.pass_context
def users_cmd(ctx: click.Context, server: str | None) -> None:
    """List user accounts of every server."""
    console = Console()
    manager = load_manager(ctx.obj["settings"])

    for server_type in selected_types(manager, server):
        try:
            users = manager.get_server(server_type).get_users()
        except MediaHubError as e:
            logger.error("%s: %s", server_type.label, e.message)
            continue
        print_users(console, server_type, users)


@main.command(name="search")
@click.argument("query", metavar="QUERY")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def search_cmd(ctx: click.Context, query: str, as_json: bool) -> None:
    """Search every configured server.

    Servers that fail are skipped; results of the others are still shown.

    \b
    Examples:
      mediahub search "project hail mary"
      mediahub search dune --json
    """
    if not query.strip():
        raise click.BadParameter("query cannot be empty", param_hint="QUERY")

    console = Console()
    manager = load_manager(ctx.obj["settings"])
    results = manager.search_across_servers(query.strip())

    if as_json:
        dump_json(
            {t.value: [r.model_dump() for r in hits] for t, hits in results.items()}
        )
        return

    total = sum(len(hits) for hits in results.values())
    print_section_header(console, "Search", f"{query!r}: {total} result(s)")
    for server_type, hits in results.items():
        if hits:
            print_search_results(console, server_type, hits)
    missing = [t.label for t in manager.get_server_types() if t not in results]
    if missing:
        console.print(f"[yellow]No answer from: {', '.join(missing)}[/yellow]")


@main.command(name="stats")
@click.option("-s", "--server", type=SERVER_CHOICE, help="Only this server.")
@click.pass_context
def stats_cmd(ctx: click.Context, server: str | None) -> None:
    """Dump listening statistics of the current user as JSON."""
    manager = load_manager(ctx.obj["settings"])

    output: dict[str, object] = {}
    for server_type in selected_types(manager, server):
        try:
            output[server_type.value] = manager.get_server(
                server_type
            ).get_listening_stats()
        except MediaHubError as e:
            logger.error("%s: %s", server_type.label, e.message)
    dump_json(output)


if __name__ == "__main__":
    main()
