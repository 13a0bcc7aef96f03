"""Staff and attendance commands."""

import click
from gymledger.cli.clock import cli_now, cli_today
from gymledger.cli.error_handling import domain_errors
from gymledger.domain.attendance import AttendanceService
from gymledger.domain.errors import (
    AlreadyCheckedInError,
    ReferencedByHistoryError,
    UnknownStaffCodeError,
)
from gymledger.domain.staff import StaffService
from gymledger.utils.amount_parser import parse_amount


@click.group()
def staff_group():
    """Manage staff members."""
    pass


@staff_group.command("create")
@click.argument("name", metavar="NAME")
@click.option("--role", required=True, help="Job role (e.g., Instructor)")
@click.option("--schedule", help="Working schedule, free text")
@click.option("--salary", default="0", show_default=True, help="Monthly salary")
@click.option("--code", help="Check-in code (random four digits if omitted)")
@click.pass_context
def create_staff(ctx, name: str, role: str, schedule: str | None, salary: str, code: str | None):
    """Create a staff member.

    Examples:
        gymledger staff create "Carla Dias" --role Instructor --schedule "Mon-Fri 08-17"
        gymledger staff create "Davi Rocha" --role Reception --code 1234
    """
    db = ctx.obj["db"]
    service = StaffService(db)

    with domain_errors(ctx):
        staff_id = service.create_staff(
            name=name,
            role=role,
            schedule=schedule,
            salary=parse_amount(salary),
            staff_code=code,
        )
        staff = service.get_staff(staff_id)
    click.echo(f"Created staff member '{staff.name}' (ID: {staff.id})")
    click.echo(f"  Check-in code: {staff.staff_code}")


@staff_group.command("list")
@click.pass_context
def list_staff(ctx):
    """List staff members."""
    db = ctx.obj["db"]
    service = StaffService(db)

    with domain_errors(ctx):
        staff_list = service.list_staff()
    if not staff_list:
        click.echo("No staff found.")
        return

    click.echo("\nStaff:")
    click.echo("-" * 60)
    for s in staff_list:
        click.echo(f"ID: {s.id:3d} | {s.name:20s} | {s.role:12s} | Code: {s.staff_code}")


@staff_group.command("delete")
@click.argument("staff_id", type=int)
@click.option("--cascade", is_flag=True, help="Also delete the member's attendance records")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_staff(ctx, staff_id: int, cascade: bool, yes: bool) -> None:
    """Delete a staff member.

    A member with attendance records is only deleted with --cascade.
    """
    db = ctx.obj["db"]
    service = StaffService(db)

    with domain_errors(ctx):
        staff = service.get_staff(staff_id)
        if staff is None:
            click.echo(f"Error: Staff member {staff_id} not found", err=True)
            ctx.exit(1)

        if not yes and not click.confirm(
            f"Are you sure you want to delete staff member '{staff.name}' (ID: {staff_id})?"
        ):
            click.echo("Deletion cancelled.")
            return

        try:
            service.delete_staff(staff_id, cascade=cascade)
        except ReferencedByHistoryError as e:
            click.echo(f"Error: {e}", err=True)
            click.echo("Use --cascade to delete the attendance history too.", err=True)
            ctx.exit(1)
    click.echo(f"Deleted staff member '{staff.name}'")


@click.command("checkin")
@click.argument("staff_code")
@click.pass_context
def check_in(ctx, staff_code: str):
    """Check a staff member in with their code."""
    db = ctx.obj["db"]
    service = AttendanceService(db)

    with domain_errors(ctx):
        try:
            record = service.check_in(staff_code, cli_now(ctx))
        except UnknownStaffCodeError:
            click.echo("Invalid code.", err=True)
            ctx.exit(1)
        except AlreadyCheckedInError as e:
            click.echo(str(e))
            return
        staff = db.get_staff(record.staff_id)
    click.echo(f"Check-in recorded for {staff.name} at {record.check_in_time:%H:%M}")


@click.command("attendance")
@click.pass_context
def attendance(ctx):
    """Show today's attendance (older records are discarded)."""
    db = ctx.obj["db"]
    service = AttendanceService(db)
    today = cli_today(ctx)

    with domain_errors(ctx):
        entries = service.todays_attendance(today)
    if not entries:
        click.echo(f"No check-ins on {today}.")
        return

    click.echo(f"\nAttendance {today}:")
    click.echo("-" * 50)
    for entry in entries:
        click.echo(
            f"{entry.record.check_in_time:%H:%M}  {entry.staff_name:20s} {entry.staff_role}"
        )


def register_commands(cli):
    """Register staff commands with main CLI."""
    cli.add_command(staff_group, name="staff")
    cli.add_command(check_in)
    cli.add_command(attendance)
