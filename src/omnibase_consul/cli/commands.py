# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""
ONEX Consul CLI Commands.

Provides a CLI for inspecting and editing a Consul agent through
ConsulClient: key/value entries, events, services, health checks and ACL
tokens.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click
from rich.console import Console
from rich.table import Table

from omnibase_consul.clients import ConsulClient
from omnibase_consul.errors import InfraError
from omnibase_consul.models import ModelEvent

T = TypeVar("T")

console = Console()


def _run(ctx: click.Context, action: Callable[[ConsulClient], Awaitable[T]]) -> T:
    """Run ``action`` against a fresh client; infra errors exit with status 1."""

    async def runner() -> T:
        async with ConsulClient(ctx.obj) as client:
            return await action(client)

    try:
        return asyncio.run(runner())
    except InfraError as e:
        console.print(f"[red]{type(e).__name__}: {e.message}[/red]")
        raise SystemExit(1)


@click.group()
@click.option("--host", default="localhost", envvar="CONSUL_HOST", show_default=True)
@click.option("--port", default=8500, type=int, envvar="CONSUL_PORT", show_default=True)
@click.option(
    "--scheme",
    default="http",
    type=click.Choice(["http", "https"]),
    envvar="CONSUL_SCHEME",
    show_default=True,
)
@click.option("--token", default=None, envvar="CONSUL_HTTP_TOKEN", help="ACL token")
@click.option("--datacenter", default=None, envvar="CONSUL_DC", help="Target datacenter")
@click.pass_context
def cli(
    ctx: click.Context,
    host: str,
    port: int,
    scheme: str,
    token: str | None,
    datacenter: str | None,
) -> None:
    """ONEX Consul CLI."""
    ctx.obj = {
        "host": host,
        "port": port,
        "scheme": scheme,
        "token": token,
        "datacenter": datacenter,
    }


# =============================================================================
# Key/value store
# =============================================================================


@cli.group()
def kv() -> None:
    """Key/value store commands."""


@kv.command("get")
@click.argument("key")
@click.pass_context
def kv_get_cmd(ctx: click.Context, key: str) -> None:
    """Print the value stored under KEY."""
    pair = _run(ctx, lambda client: client.get_value(key))
    click.echo(pair.value)


@kv.command("put")
@click.argument("key")
@click.argument("value")
@click.pass_context
def kv_put_cmd(ctx: click.Context, key: str, value: str) -> None:
    """Store VALUE under KEY."""
    _run(ctx, lambda client: client.put_value(key, value))
    console.print(f"[green]Stored {key}[/green]")


@kv.command("list")
@click.argument("prefix", default="")
@click.pass_context
def kv_list_cmd(ctx: click.Context, prefix: str) -> None:
    """List entries whose key starts with PREFIX."""
    pairs = _run(ctx, lambda client: client.get_values(prefix))
    if not pairs:
        console.print(f"[yellow]No keys under '{prefix}'[/yellow]")
        return

    table = Table(title=f"Keys ({len(pairs)})")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for pair in pairs:
        table.add_row(pair.key, pair.value)
    console.print(table)


@kv.command("delete")
@click.argument("key")
@click.option("--recurse", is_flag=True, help="Delete every key under KEY")
@click.pass_context
def kv_delete_cmd(ctx: click.Context, key: str, recurse: bool) -> None:
    """Delete KEY (or every key under it with --recurse)."""
    if recurse:
        _run(ctx, lambda client: client.delete_values(key))
    else:
        _run(ctx, lambda client: client.delete_value(key))
    console.print(f"[green]Deleted {key}[/green]")


# =============================================================================
# Events
# =============================================================================


@cli.group()
def event() -> None:
    """User event commands."""


@event.command("fire")
@click.argument("name")
@click.option("--payload", default=None)
@click.option("--node", "node_filter", default=None, help="Node name filter")
@click.option("--service", "service_filter", default=None, help="Service filter")
@click.option("--tag", "tag_filter", default=None, help="Service tag filter")
@click.pass_context
def event_fire_cmd(
    ctx: click.Context,
    name: str,
    payload: str | None,
    node_filter: str | None,
    service_filter: str | None,
    tag_filter: str | None,
) -> None:
    """Fire event NAME."""
    fired = _run(
        ctx,
        lambda client: client.fire_event(
            ModelEvent(
                name=name,
                payload=payload,
                node_filter=node_filter,
                service_filter=service_filter,
                tag_filter=tag_filter,
            )
        ),
    )
    console.print(f"[green]Fired {fired.name}[/green] id={fired.id}")


@event.command("list")
@click.pass_context
def event_list_cmd(ctx: click.Context) -> None:
    """List recent events."""
    events = _run(ctx, lambda client: client.list_events())

    table = Table(title=f"Events ({len(events)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Payload", style="dim")
    for item in events:
        table.add_row(item.id or "", item.name, item.payload or "")
    console.print(table)


# =============================================================================
# Services
# =============================================================================


@cli.group()
def service() -> None:
    """Service registration and discovery commands."""


@service.command("list")
@click.pass_context
def service_list_cmd(ctx: click.Context) -> None:
    """List services registered on the local agent."""
    services = _run(ctx, lambda client: client.local_services())

    table = Table(title=f"Local Services ({len(services)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Address")
    table.add_column("Port")
    table.add_column("Tags", style="dim")
    for item in services:
        table.add_row(
            item.id or "",
            item.name,
            item.address or "",
            str(item.port) if item.port is not None else "",
            ", ".join(item.tags),
        )
    console.print(table)


@service.command("info")
@click.argument("name")
@click.pass_context
def service_info_cmd(ctx: click.Context, name: str) -> None:
    """Show catalog instances of service NAME."""
    instances = _run(ctx, lambda client: client.info_service(name))
    if not instances:
        console.print(f"[yellow]No instances of '{name}'[/yellow]")
        return

    table = Table(title=f"{name} ({len(instances)})")
    table.add_column("Node", style="cyan")
    table.add_column("ID", style="bold")
    table.add_column("Address")
    table.add_column("Port")
    for item in instances:
        table.add_row(
            item.node or "",
            item.id or "",
            item.address or "",
            str(item.port) if item.port is not None else "",
        )
    console.print(table)


@service.command("deregister")
@click.argument("service_id")
@click.pass_context
def service_deregister_cmd(ctx: click.Context, service_id: str) -> None:
    """Deregister SERVICE_ID from the local agent."""
    _run(ctx, lambda client: client.deregister_service(service_id))
    console.print(f"[green]Deregistered {service_id}[/green]")


# =============================================================================
# Health checks
# =============================================================================


@cli.group()
def check() -> None:
    """Health check commands."""


@check.command("list")
@click.pass_context
def check_list_cmd(ctx: click.Context) -> None:
    """List checks registered on the local agent."""
    checks = _run(ctx, lambda client: client.local_checks())

    table = Table(title=f"Local Checks ({len(checks)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Status")
    table.add_column("Output", style="dim")
    for item in checks:
        table.add_row(
            item.id or "",
            item.name or "",
            item.status.value if item.status is not None else "",
            item.output or "",
        )
    console.print(table)


@check.command("pass")
@click.argument("check_id")
@click.option("--note", default=None)
@click.pass_context
def check_pass_cmd(ctx: click.Context, check_id: str, note: str | None) -> None:
    """Mark TTL check CHECK_ID passing."""
    _run(ctx, lambda client: client.pass_check(check_id, note))
    console.print(f"[green]{check_id}: passing[/green]")


@check.command("warn")
@click.argument("check_id")
@click.option("--note", default=None)
@click.pass_context
def check_warn_cmd(ctx: click.Context, check_id: str, note: str | None) -> None:
    """Mark TTL check CHECK_ID warning."""
    _run(ctx, lambda client: client.warn_check(check_id, note))
    console.print(f"[yellow]{check_id}: warning[/yellow]")


@check.command("fail")
@click.argument("check_id")
@click.option("--note", default=None)
@click.pass_context
def check_fail_cmd(ctx: click.Context, check_id: str, note: str | None) -> None:
    """Mark TTL check CHECK_ID critical."""
    _run(ctx, lambda client: client.fail_check(check_id, note))
    console.print(f"[red]{check_id}: critical[/red]")


@check.command("deregister")
@click.argument("check_id")
@click.pass_context
def check_deregister_cmd(ctx: click.Context, check_id: str) -> None:
    """Deregister CHECK_ID from the local agent."""
    _run(ctx, lambda client: client.deregister_check(check_id))
    console.print(f"[green]Deregistered {check_id}[/green]")


# =============================================================================
# ACL tokens
# =============================================================================


@cli.group()
def acl() -> None:
    """ACL token commands."""


@acl.command("info")
@click.argument("token_id")
@click.pass_context
def acl_info_cmd(ctx: click.Context, token_id: str) -> None:
    """Show ACL token TOKEN_ID."""
    token = _run(ctx, lambda client: client.info_acl_token(token_id))

    table = Table(title="ACL Token")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("ID", token.id or "")
    table.add_row("Name", token.name or "")
    table.add_row("Type", token.type.value)
    table.add_row("Rules", token.rules or "")
    console.print(table)


@acl.command("destroy")
@click.argument("token_id")
@click.pass_context
def acl_destroy_cmd(ctx: click.Context, token_id: str) -> None:
    """Destroy ACL token TOKEN_ID."""
    _run(ctx, lambda client: client.destroy_acl_token(token_id))
    console.print(f"[green]Destroyed {token_id}[/green]")


if __name__ == "__main__":
    cli()
