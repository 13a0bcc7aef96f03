"""Payment commands."""

import click
from gymledger.cli.clock import cli_today
from gymledger.cli.error_handling import domain_errors
from gymledger.domain.client import ClientService
from gymledger.domain.entities import PaymentMethod
from gymledger.utils.amount_parser import parse_amount
from gymledger.utils.date_parser import parse_date


@click.group()
def payment_group():
    """Record and list monthly-fee payments."""
    pass


@payment_group.command("record")
@click.argument("client_id", type=int)
@click.option("--amount", required=True, help="Amount collected (e.g., 120.00)")
@click.option(
    "--month",
    "months",
    multiple=True,
    required=True,
    help="Month covered, YYYY-MM (repeat for several months)",
)
@click.option(
    "--method",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.CASH.value,
    show_default=True,
)
@click.option("--date", "paid_on", help="Payment date (defaults to today)")
@click.pass_context
def record_payment(ctx, client_id: int, amount: str, months: tuple[str, ...], method: str, paid_on: str | None):
    """Record a payment covering one or more months.

    Examples:
        gymledger payment record 1 --amount 120 --month 2024-03
        gymledger payment record 1 --amount 240 --month 2024-04 --month 2024-05 --method card
    """
    db = ctx.obj["db"]
    service = ClientService(db)
    today = cli_today(ctx)

    with domain_errors(ctx):
        payment = service.record_payment(
            client_id=client_id,
            amount=parse_amount(amount),
            months_covered=months,
            payment_date=parse_date(paid_on, today=today) if paid_on else today,
            today=today,
            method=PaymentMethod(method),
        )
        client = service.require_client(client_id)

    click.echo(f"Recorded payment {payment.id} for '{client.full_name}'")
    click.echo(f"  Amount: {payment.amount:,.2f} ({payment.method.value})")
    click.echo(f"  Months: {', '.join(str(m) for m in payment.months_covered)}")
    click.echo(f"  Client status: {client.status.value}")


@payment_group.command("list")
@click.option("--client", "client_id", type=int, help="Only this client's payments")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.pass_context
def list_payments(ctx, client_id: int | None, start_date: str | None, end_date: str | None):
    """List payments."""
    db = ctx.obj["db"]
    service = ClientService(db)
    today = cli_today(ctx)

    with domain_errors(ctx):
        start = parse_date(start_date, today=today) if start_date else None
        end = parse_date(end_date, today=today) if end_date else None
        payments = service.list_payments(client_id=client_id, start_date=start, end_date=end)

    if not payments:
        click.echo("No payments found.")
        return

    for p in payments:
        months = ", ".join(str(m) for m in p.months_covered)
        click.echo(
            f"{p.payment_date}  #{p.id:<4d} client {p.client_id:<4d} "
            f"{p.amount:>10,.2f} {p.method.value:8s} [{months}]"
        )


def register_commands(cli):
    """Register payment commands with main CLI."""
    cli.add_command(payment_group, name="payment")
