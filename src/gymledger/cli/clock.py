"""Reference date and time for CLI commands."""

from datetime import date, datetime, time

import click


def cli_today(ctx: click.Context) -> date:
    """The --today override, or the system date."""
    return ctx.obj.get("today") or date.today()


def cli_now(ctx: click.Context) -> datetime:
    """Current time on the reference date."""
    today = ctx.obj.get("today")
    now = datetime.now()
    if today is None:
        return now
    return datetime.combine(today, time(now.hour, now.minute, now.second))
