"""Entrance scan commands."""

import click
from gymledger.cli.clock import cli_now, cli_today
from gymledger.cli.error_handling import domain_errors
from gymledger.domain.access import AccessService


@click.group()
def access_group():
    """Log client entrances."""
    pass


@access_group.command("scan")
@click.argument("client_id", type=int)
@click.pass_context
def scan(ctx, client_id: int):
    """Log an entrance scan and show whether the client may enter."""
    db = ctx.obj["db"]
    service = AccessService(db)

    with domain_errors(ctx):
        decision = service.register_entry(client_id, cli_now(ctx))

    if decision.granted:
        click.echo(f"ALLOWED - {decision.client.full_name}")
    else:
        click.echo(f"BLOCKED - {decision.client.full_name} ({decision.client.status.value})")
        ctx.exit(3)


@access_group.command("log")
@click.pass_context
def access_log(ctx):
    """List today's entrance scans."""
    db = ctx.obj["db"]
    service = AccessService(db)

    with domain_errors(ctx):
        entries = service.list_entries(cli_today(ctx))
    if not entries:
        click.echo("No entrances logged today.")
        return
    for entry in entries:
        click.echo(f"{entry.timestamp:%H:%M:%S}  client {entry.client_id}  by {entry.admin_id or '-'}")


def register_commands(cli):
    """Register access commands with main CLI."""
    cli.add_command(access_group, name="access")
