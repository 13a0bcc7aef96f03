"""Main CLI entry point."""

import logging

import click
from gymledger.database.factories import create_sqlite_database
from gymledger.utils.date_parser import parse_date

# Import and register all commands at module level
from gymledger.cli.commands import (
    access,
    client,
    payment,
    product,
    report,
    staff,
)

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(level_name: str) -> None:
    """Configure root logging once for the command line."""
    level = getattr(logging, str(level_name).upper(), logging.WARNING)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    else:
        logging.getLogger().setLevel(level)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides GYMLEDGER_DB_PATH environment variable)",
    envvar="GYMLEDGER_DB_PATH",
)
@click.option(
    "--operator",
    help="Operator name stamped on payments and access logs",
    envvar="GYMLEDGER_OPERATOR",
)
@click.option(
    "--today",
    help="Reference date for status and attendance (defaults to the system date)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar="GYMLEDGER_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, operator: str | None, today: str | None, log_level: str):
    """Gymledger - Gym billing and front-desk ledger.

    Track client monthly fees, point-of-sale stock, staff check-ins and
    entrance scans.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    try:
        ctx.obj["today"] = parse_date(today) if today else None
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--today")

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path, principal=operator)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
client.register_commands(cli)
payment.register_commands(cli)
product.register_commands(cli)
staff.register_commands(cli)
access.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
