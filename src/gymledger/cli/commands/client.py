"""Client management commands."""

import click
from gymledger.cli.clock import cli_today
from gymledger.cli.error_handling import domain_errors
from gymledger.domain.client import ClientService
from gymledger.domain.entities import ClientStatus, MonthStatus
from gymledger.domain.reconciliation import ReconciliationService
from gymledger.utils.amount_parser import parse_amount
from gymledger.utils.date_parser import parse_date

STATUS_MARKS = {
    MonthStatus.NOT_APPLICABLE: "-",
    MonthStatus.PAID: "paid",
    MonthStatus.OVERDUE: "OVERDUE",
    MonthStatus.UPCOMING: "upcoming",
}


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("create")
@click.argument("full_name", metavar="FULL_NAME")
@click.option("--fee", required=True, help="Monthly fee (e.g., 120.00)")
@click.option(
    "--enrolled",
    default="today",
    show_default=True,
    help="Enrollment date (YYYY-MM-DD or relative like 'today')",
)
@click.option("--email", help="Email address")
@click.option("--phone", help="Phone number")
@click.pass_context
def create_client(ctx, full_name: str, fee: str, enrolled: str, email: str | None, phone: str | None):
    """Create a new client.

    Examples:
        gymledger client create "Ana Souza" --fee 120
        gymledger client create "Bruno Lima" --fee 99.90 --enrolled 2024-03-15
    """
    db = ctx.obj["db"]
    service = ClientService(db)

    with domain_errors(ctx):
        monthly_fee = parse_amount(fee)
        enrollment_date = parse_date(enrolled, today=cli_today(ctx))
        client_id = service.create_client(
            full_name=full_name,
            enrollment_date=enrollment_date,
            monthly_fee=monthly_fee,
            email=email,
            phone=phone,
        )
    click.echo(f"Created client '{full_name}' (ID: {client_id})")
    click.echo(f"  Enrolled: {enrollment_date}")
    click.echo(f"  Monthly fee: {monthly_fee:,.2f}")


@client_group.command("list")
@click.option(
    "--status",
    type=click.Choice([s.value for s in ClientStatus]),
    help="Only list clients with this stored status",
)
@click.pass_context
def list_clients(ctx, status: str | None):
    """List clients."""
    db = ctx.obj["db"]
    service = ClientService(db)

    with domain_errors(ctx):
        clients = service.list_clients(status=ClientStatus(status) if status else None)
    if not clients:
        click.echo("No clients found.")
        return

    click.echo("\nClients:")
    click.echo("-" * 72)
    for c in clients:
        click.echo(
            f"ID: {c.id:3d} | {c.full_name:25s} | {c.status.value:9s} | "
            f"Fee: {c.monthly_fee:>8,.2f} | Since {c.enrollment_date}"
        )


@client_group.command("timeline")
@click.argument("client_id", type=int)
@click.option("--year", type=int, help="Year to show (defaults to the current year)")
@click.pass_context
def client_timeline(ctx, client_id: int, year: int | None):
    """Show a client's month-by-month payment status for a year."""
    db = ctx.obj["db"]
    service = ReconciliationService(db)
    today = cli_today(ctx)

    with domain_errors(ctx):
        client = ClientService(db).require_client(client_id)
        months = service.client_timeline(client_id, year or today.year, today)

    click.echo(f"\n{client.full_name} - {year or today.year}")
    click.echo("-" * 30)
    for key, status in months:
        click.echo(f"{key}  {STATUS_MARKS[status]}")


@client_group.command("status")
@click.argument("client_id", type=int)
@click.argument("status", type=click.Choice([s.value for s in ClientStatus]))
@click.pass_context
def set_client_status(ctx, client_id: int, status: str):
    """Set a client's stored status (e.g. suspend or cancel)."""
    db = ctx.obj["db"]
    service = ClientService(db)

    with domain_errors(ctx):
        service.set_status(client_id, ClientStatus(status))
    click.echo(f"Client {client_id} is now {status}")


@client_group.command("refresh")
@click.pass_context
def refresh_statuses(ctx):
    """Recompute every client's stored status from payment history."""
    db = ctx.obj["db"]
    service = ReconciliationService(db)

    with domain_errors(ctx):
        changed = service.refresh_all(cli_today(ctx))
    if not changed:
        click.echo("All client statuses are up to date.")
        return
    for client_id, status in sorted(changed.items()):
        click.echo(f"Client {client_id}: {status.value}")


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
