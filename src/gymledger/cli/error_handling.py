"""CLI error handling helpers."""

from contextlib import contextmanager

import click

from gymledger.domain.errors import DomainError, StoreUnavailableError

# Exit code when the store is unreachable; the outcome of a write is unknown.
STORE_UNAVAILABLE_EXIT = 2


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_store_error(ctx: click.Context, error: StoreUnavailableError) -> None:
    """Render a transport error and exit with a distinct code."""
    click.echo(f"Error: database unavailable: {error}", err=True)
    click.echo("The operation may or may not have been applied; check before retrying.", err=True)
    ctx.exit(STORE_UNAVAILABLE_EXIT)


@contextmanager
def domain_errors(ctx: click.Context):
    """Translate domain and store errors raised inside a command into exits."""
    try:
        yield
    except StoreUnavailableError as e:
        handle_store_error(ctx, e)
    except ValueError as e:
        handle_domain_error(ctx, e)
