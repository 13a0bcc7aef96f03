"""End-to-end tests for the command line."""

import pytest

from gymledger.cli.main import cli


@pytest.fixture
def run(cli_runner, tmp_path):
    """Invoke the CLI against a fresh database on a fixed day."""
    db_path = str(tmp_path / "gym.db")

    def invoke(*args, today="2024-06-10"):
        return cli_runner.invoke(
            cli,
            ["--db-path", db_path, "--operator", "frontdesk", "--today", today, *args],
        )

    return invoke


def test_client_payment_and_timeline(run):
    result = run("client", "create", "Ana Souza", "--fee", "100", "--enrolled", "2024-03-15")
    assert result.exit_code == 0, result.output
    assert "Created client 'Ana Souza' (ID: 1)" in result.output

    result = run("payment", "record", "1", "--amount", "200", "--month", "2024-03", "--month", "2024-04")
    assert result.exit_code == 0, result.output
    assert "Months: 2024-03, 2024-04" in result.output
    assert "Client status: late" in result.output

    result = run("client", "timeline", "1")
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert "2024-02  -" in lines
    assert "2024-03  paid" in lines
    assert "2024-05  OVERDUE" in lines
    assert "2024-06  upcoming" in lines


def test_backdated_payment_uses_today_for_status(run):
    run("client", "create", "Bruno Lima", "--fee", "90", "--enrolled", "2024-01-05")

    result = run(
        "payment", "record", "1", "--amount", "90", "--month", "2024-01", "--date", "2024-02-01"
    )
    assert result.exit_code == 0, result.output
    assert "Client status: late" in result.output

    result = run("payment", "list", "--client", "1")
    assert "2024-02-01" in result.output


def test_payment_with_bad_month_fails(run):
    run("client", "create", "Ana Souza", "--fee", "100")
    result = run("payment", "record", "1", "--amount", "100", "--month", "June")
    assert result.exit_code == 1
    assert "Invalid period key" in result.output


def test_unknown_client_timeline(run):
    result = run("client", "timeline", "42")
    assert result.exit_code == 1
    assert "Client 42 not found" in result.output


def test_sell_and_stock(run):
    run("product", "create", "Whey Protein", "--price", "15", "--stock", "5")

    result = run("sell", "1:6")
    assert result.exit_code == 1
    assert "Sale cancelled" in result.output

    result = run("sell", "1:3")
    assert result.exit_code == 0, result.output
    assert "3 x Whey Protein: 45.00" in result.output
    assert "Total: 45.00" in result.output

    result = run("product", "list")
    assert "Stock:    2" in result.output


def test_checkin_flow(run):
    run("staff", "create", "Carla Dias", "--role", "Instructor", "--code", "1234")

    result = run("checkin", "9999")
    assert result.exit_code == 1
    assert "Invalid code." in result.output

    result = run("checkin", "1234")
    assert result.exit_code == 0, result.output
    assert "Check-in recorded for Carla Dias" in result.output

    result = run("checkin", "1234")
    assert result.exit_code == 0
    assert "already checked in on 2024-06-10" in result.output

    result = run("attendance")
    assert "Carla Dias" in result.output

    result = run("attendance", today="2024-06-11")
    assert "No check-ins on 2024-06-11." in result.output


def test_staff_delete_needs_cascade(run):
    run("staff", "create", "Carla Dias", "--role", "Instructor", "--code", "1234")
    run("checkin", "1234")

    result = run("staff", "delete", "1", "--yes")
    assert result.exit_code == 1
    assert "--cascade" in result.output

    result = run("staff", "delete", "1", "--yes", "--cascade")
    assert result.exit_code == 0, result.output
    assert "Deleted staff member 'Carla Dias'" in result.output


def test_access_scan(run):
    run("client", "create", "Ana Souza", "--fee", "100", "--enrolled", "2024-06-01")
    run("client", "create", "Bruno Lima", "--fee", "100", "--enrolled", "2024-03-01")
    run("client", "refresh")

    result = run("access", "scan", "1")
    assert result.exit_code == 0
    assert "ALLOWED - Ana Souza" in result.output

    result = run("access", "scan", "2")
    assert result.exit_code == 3
    assert "BLOCKED - Bruno Lima (late)" in result.output

    result = run("access", "log")
    assert "by frontdesk" in result.output


def test_report_commands(run):
    run("client", "create", "Ana Souza", "--fee", "100", "--enrolled", "2024-06-01")
    run("payment", "record", "1", "--amount", "100", "--month", "2024-06")

    result = run("report", "dashboard")
    assert result.exit_code == 0, result.output
    assert "Active clients:      1" in result.output
    assert "Revenue this month:  100.00" in result.output

    result = run("report", "metrics")
    assert result.exit_code == 0, result.output
    assert "2024-06  revenue       100.00  enrollments   1" in result.output

    result = run("report", "closing")
    assert result.exit_code == 0, result.output
    assert "Total received:        100.00" in result.output


def test_metrics_rejects_combined_periods(run):
    result = run("report", "metrics", "--this-year", "--last-year")
    assert result.exit_code == 1
    assert "cannot be combined" in result.output
