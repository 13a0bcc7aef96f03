"""Tests for month status reconciliation."""

import pytest
from datetime import date
from decimal import Decimal

from gymledger.domain.entities import ClientStatus, MonthStatus
from gymledger.domain.errors import NotFoundError
from gymledger.domain.period import PeriodKey
from gymledger.domain.reconciliation import (
    month_status,
    overdue_periods,
    project_status,
    timeline,
)


TODAY = date(2024, 6, 10)


class TestMonthStatus:
    """Tests for the pure month_status rules."""

    def test_months_before_enrollment_are_not_applicable(self, make_client, make_payment):
        client = make_client(enrollment_date=date(2024, 3, 15))
        payments = [make_payment(["2024-01", "2024-02"])]
        for month in (1, 2):
            assert (
                month_status(client, payments, PeriodKey(2024, month), TODAY)
                == MonthStatus.NOT_APPLICABLE
            )

    def test_covered_month_is_paid_regardless_of_today(self, make_client, make_payment):
        client = make_client(enrollment_date=date(2024, 3, 15))
        payments = [make_payment(["2024-09"], amount=Decimal("1.00"))]
        for today in (date(2024, 1, 1), TODAY, date(2030, 1, 1)):
            assert month_status(client, payments, PeriodKey(2024, 9), today) == MonthStatus.PAID

    def test_single_payment_covers_several_months(self, make_client, make_payment):
        client = make_client()
        payments = [make_payment(["2024-04", "2024-05", "2024-06"])]
        statuses = {
            month: month_status(client, payments, PeriodKey(2024, month), TODAY)
            for month in (4, 5, 6)
        }
        assert set(statuses.values()) == {MonthStatus.PAID}

    def test_unpaid_past_month_is_overdue(self, make_client, make_payment):
        client = make_client(enrollment_date=date(2024, 3, 15))
        assert month_status(client, [], PeriodKey(2024, 3), TODAY) == MonthStatus.OVERDUE
        assert month_status(client, [], PeriodKey(2024, 5), TODAY) == MonthStatus.OVERDUE

    def test_current_and_future_unpaid_months_are_upcoming(self, make_client, make_payment):
        client = make_client(enrollment_date=date(2024, 3, 15))
        assert month_status(client, [], PeriodKey(2024, 6), TODAY) == MonthStatus.UPCOMING
        assert month_status(client, [], PeriodKey(2024, 11), TODAY) == MonthStatus.UPCOMING

    def test_other_clients_payments_are_ignored(self, make_client, make_payment):
        client = make_client(client_id=1)
        payments = [make_payment(["2024-04"], client_id=2)]
        assert month_status(client, payments, PeriodKey(2024, 4), TODAY) == MonthStatus.OVERDUE

    def test_new_client_without_payments(self, make_client, make_payment):
        client = make_client(enrollment_date=date(2024, 6, 1))
        assert month_status(client, [], PeriodKey(2024, 6), TODAY) == MonthStatus.UPCOMING
        assert month_status(client, [], PeriodKey(2024, 5), TODAY) == MonthStatus.NOT_APPLICABLE

    def test_repeated_calls_return_same_result(self, make_client, make_payment):
        client = make_client()
        payments = [make_payment(["2024-04"])]
        key = PeriodKey(2024, 5)
        first = month_status(client, payments, key, TODAY)
        second = month_status(client, payments, key, TODAY)
        assert first == second == MonthStatus.OVERDUE


def test_timeline_scenario_january_to_june(make_client, make_payment):
    """Enrolled 2024-03-15, paid March and April, viewed on 2024-06-10."""
    client = make_client(enrollment_date=date(2024, 3, 15))
    payments = [make_payment(["2024-03", "2024-04"])]

    result = timeline(client, payments, 2024, TODAY)

    assert len(result) == 12
    assert [status for _, status in result[:6]] == [
        MonthStatus.NOT_APPLICABLE,
        MonthStatus.NOT_APPLICABLE,
        MonthStatus.PAID,
        MonthStatus.PAID,
        MonthStatus.OVERDUE,
        MonthStatus.UPCOMING,
    ]
    assert all(status == MonthStatus.UPCOMING for _, status in result[6:])


def test_overdue_periods_lists_unpaid_past_months(make_client, make_payment):
    client = make_client(enrollment_date=date(2024, 1, 20))
    payments = [make_payment(["2024-01", "2024-03"])]
    assert [str(k) for k in overdue_periods(client, payments, TODAY)] == [
        "2024-02",
        "2024-04",
        "2024-05",
    ]


def test_overdue_periods_empty_for_client_enrolled_this_month(make_client):
    client = make_client(enrollment_date=date(2024, 6, 2))
    assert overdue_periods(client, [], TODAY) == []


class TestProjectStatus:
    """Tests for deriving the stored client status."""

    def test_late_when_any_month_is_overdue(self, make_client, make_payment):
        client = make_client()
        assert project_status(client, [make_payment(["2024-03"])], TODAY) == ClientStatus.LATE

    def test_active_when_everything_past_is_paid(self, make_client, make_payment):
        client = make_client(status=ClientStatus.LATE)
        payments = [make_payment(["2024-03", "2024-04", "2024-05"])]
        assert project_status(client, payments, TODAY) == ClientStatus.ACTIVE

    @pytest.mark.parametrize("status", [ClientStatus.SUSPENDED, ClientStatus.CANCELLED])
    def test_administrative_statuses_are_kept(self, status, make_client):
        client = make_client(status=status)
        assert project_status(client, [], TODAY) == status


class TestReconciliationService:
    """Tests for the store-backed reconciliation service."""

    def test_client_timeline_from_store(self, client_service, reconciliation_service, sample_client):
        client_service.record_payment(
            sample_client.id, Decimal("200.00"), ["2024-03", "2024-04"], payment_date=TODAY, today=TODAY
        )

        result = dict(reconciliation_service.client_timeline(sample_client.id, 2024, TODAY))

        assert result[PeriodKey(2024, 2)] == MonthStatus.NOT_APPLICABLE
        assert result[PeriodKey(2024, 4)] == MonthStatus.PAID
        assert result[PeriodKey(2024, 5)] == MonthStatus.OVERDUE
        assert result[PeriodKey(2024, 6)] == MonthStatus.UPCOMING

    def test_missing_client_raises(self, reconciliation_service):
        with pytest.raises(NotFoundError):
            reconciliation_service.client_timeline(999, 2024, TODAY)

    def test_refresh_client_status_writes_projection(
        self, temp_db, reconciliation_service, sample_client
    ):
        assert sample_client.status == ClientStatus.ACTIVE

        status = reconciliation_service.refresh_client_status(sample_client.id, TODAY)

        assert status == ClientStatus.LATE
        assert temp_db.get_client(sample_client.id).status == ClientStatus.LATE

    def test_refresh_all_reports_changed_clients(
        self, client_service, reconciliation_service, sample_client
    ):
        paid_up = client_service.create_client(
            full_name="Bruno Lima",
            enrollment_date=date(2024, 6, 1),
            monthly_fee=Decimal("90.00"),
        )

        changed = reconciliation_service.refresh_all(TODAY)

        assert changed == {sample_client.id: ClientStatus.LATE}
        assert paid_up not in changed
        assert reconciliation_service.refresh_all(TODAY) == {}

    def test_overdue_amount_sums_fees_of_overdue_months(
        self, client_service, reconciliation_service, sample_client
    ):
        client_service.record_payment(
            sample_client.id, Decimal("100.00"), ["2024-03"], payment_date=TODAY, today=TODAY
        )
        # April and May are overdue
        assert reconciliation_service.overdue_amount(TODAY) == Decimal("200.00")

    def test_overdue_amount_skips_cancelled_clients(
        self, client_service, reconciliation_service, sample_client
    ):
        client_service.set_status(sample_client.id, ClientStatus.CANCELLED)
        assert reconciliation_service.overdue_amount(TODAY) == Decimal("0")
