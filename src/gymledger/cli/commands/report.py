"""Metrics and closing report commands."""

import click
from gymledger.cli.clock import cli_today
from gymledger.cli.error_handling import domain_errors
from gymledger.domain.metrics import MetricsService
from gymledger.utils.date_parser import get_date_range, parse_date


@click.group()
def report_group():
    """Dashboards and financial reports."""
    pass


@report_group.command("metrics")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--this-year", is_flag=True, help="Current year to date")
@click.option("--last-year", is_flag=True, help="Previous calendar year")
@click.option("--cumulative", is_flag=True, help="Show running revenue totals")
@click.pass_context
def metrics(ctx, start_date, end_date, this_year: bool, last_year: bool, cumulative: bool):
    """Revenue and enrollments per month.

    Defaults to the current year to date.
    """
    db = ctx.obj["db"]
    service = MetricsService(db)
    today = cli_today(ctx)

    if this_year and last_year:
        click.echo("Error: --this-year and --last-year cannot be combined.", err=True)
        ctx.exit(1)
    if (this_year or last_year) and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.", err=True
        )
        ctx.exit(1)

    with domain_errors(ctx):
        if last_year:
            start, end = get_date_range("last-year", today)
        elif start_date or end_date:
            start = parse_date(start_date, today) if start_date else today.replace(month=1, day=1)
            end = parse_date(end_date, today) if end_date else today
        else:
            start, end = get_date_range("this-year", today)
        report = service.period_report(start, end)

    running = dict(report.cumulative_revenue())
    click.echo(f"\nMetrics {report.range_start} to {report.range_end}")
    click.echo("-" * 50)
    for key, bucket in report.per_period.items():
        line = f"{key}  revenue {bucket.revenue:>12,.2f}  enrollments {bucket.enrollments:3d}"
        if cumulative:
            line += f"  cumulative {running[key]:>12,.2f}"
        click.echo(line)
    click.echo("-" * 50)
    click.echo(
        f"Total    revenue {report.total_revenue:>12,.2f}  enrollments {report.total_enrollments:3d}"
    )


@report_group.command("dashboard")
@click.pass_context
def dashboard(ctx):
    """Headline numbers for this month."""
    db = ctx.obj["db"]
    service = MetricsService(db)

    with domain_errors(ctx):
        m = service.dashboard(cli_today(ctx))
    click.echo(f"Active clients:      {m.active_clients}")
    click.echo(f"Overdue clients:     {m.overdue_clients}")
    click.echo(f"New this month:      {m.new_clients_this_month}")
    click.echo(f"Revenue this month:  {m.revenue_this_month:,.2f}")


@report_group.command("closing")
@click.option("--date", "day", help="Day to close (defaults to today)")
@click.pass_context
def closing(ctx, day: str | None):
    """Daily cash closing: payments and sales received."""
    db = ctx.obj["db"]
    service = MetricsService(db)
    today = cli_today(ctx)

    with domain_errors(ctx):
        summary = service.daily_closing(parse_date(day, today) if day else today)

    click.echo(f"\nDaily closing {summary.day} ({summary.operator or 'unknown operator'})")
    click.echo("-" * 50)
    for p in summary.payments:
        click.echo(f"Fee      client {p.client_id:<4d} {p.amount:>10,.2f} {p.method.value}")
    for s in summary.sales:
        click.echo(f"Sale     product {s.product_id:<3d} {s.total_price:>10,.2f} {s.method.value}")
    click.echo("-" * 50)
    click.echo(f"Fees received:   {summary.payments_total:>12,.2f}")
    click.echo(f"Sales received:  {summary.sales_total:>12,.2f}")
    click.echo(f"Total received:  {summary.total_received:>12,.2f}")
    click.echo(f"Overdue fees:    {summary.overdue_total:>12,.2f}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
