"""Period metrics for dashboards and reports."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from gymledger.database.base import Database
from gymledger.domain.entities import (
    Client,
    ClientStatus,
    DailyClosing,
    DashboardMetrics,
    MetricsReport,
    Payment,
    PeriodBucket,
)
from gymledger.domain.errors import ValidationError
from gymledger.domain.period import period_range, to_period_key
from gymledger.domain.reconciliation import ReconciliationService


def aggregate(
    payments: Iterable[Payment],
    clients: Iterable[Client],
    range_start: date,
    range_end: date,
) -> MetricsReport:
    """Bucket revenue and enrollments by period over an inclusive date range.

    Revenue goes to the month the payment was collected in, not to the months
    it covers. Every period in the range gets a bucket, even an empty one.

    Args:
        payments: Payments to consider; those outside the range are ignored
        clients: Clients whose enrollment dates are counted
        range_start: First day of the range
        range_end: Last day of the range

    Returns:
        MetricsReport with one bucket per period key

    Raises:
        ValidationError: If range_start is after range_end
    """
    if range_start > range_end:
        raise ValidationError(
            f"Range start {range_start.isoformat()} is after range end {range_end.isoformat()}"
        )

    revenue = {
        key: Decimal("0")
        for key in period_range(to_period_key(range_start), to_period_key(range_end))
    }
    enrollments = dict.fromkeys(revenue, 0)

    for payment in payments:
        if range_start <= payment.payment_date <= range_end:
            revenue[to_period_key(payment.payment_date)] += payment.amount

    for client in clients:
        if range_start <= client.enrollment_date <= range_end:
            enrollments[to_period_key(client.enrollment_date)] += 1

    per_period = {
        key: PeriodBucket(revenue=revenue[key], enrollments=enrollments[key]) for key in revenue
    }
    return MetricsReport(
        range_start=range_start,
        range_end=range_end,
        per_period=per_period,
        total_revenue=sum(revenue.values(), Decimal("0")),
        total_enrollments=sum(enrollments.values()),
    )


def active_count_as_of(clients: Iterable[Client], as_of: date) -> int:
    """Count clients stored as active that had enrolled by the given date."""
    return sum(
        1
        for client in clients
        if client.status == ClientStatus.ACTIVE and client.enrollment_date <= as_of
    )


def overdue_count(clients: Iterable[Client]) -> int:
    """Count clients stored as late."""
    return sum(1 for client in clients if client.status == ClientStatus.LATE)


class MetricsService:
    """Service that loads records and builds metrics from them."""

    def __init__(self, db: Database):
        """Initialize metrics service.

        Args:
            db: Database instance
        """
        self.db = db

    def period_report(self, range_start: date, range_end: date) -> MetricsReport:
        """Build the per-period report for a date range."""
        payments = self.db.list_payments(start_date=range_start, end_date=range_end)
        clients = self.db.list_clients()
        return aggregate(payments, clients, range_start, range_end)

    def dashboard(self, today: date) -> DashboardMetrics:
        """Headline numbers for the current month."""
        clients = self.db.list_clients()
        month_start = today.replace(day=1)
        report = self.period_report(month_start, today)
        bucket = report.per_period[to_period_key(today)]
        return DashboardMetrics(
            as_of=today,
            active_clients=active_count_as_of(clients, today),
            overdue_clients=overdue_count(clients),
            new_clients_this_month=bucket.enrollments,
            revenue_this_month=bucket.revenue,
        )

    def daily_closing(self, day: date) -> DailyClosing:
        """Snapshot of the day's payments and sales for the closing report."""
        payments: Sequence[Payment] = self.db.list_payments(start_date=day, end_date=day)
        sales = self.db.list_sales(start_date=day, end_date=day)
        return DailyClosing(
            day=day,
            operator=self.db.current_principal(),
            payments=tuple(payments),
            sales=tuple(sales),
            payments_total=sum((p.amount for p in payments), Decimal("0")),
            sales_total=sum((s.total_price for s in sales), Decimal("0")),
            overdue_total=ReconciliationService(self.db).overdue_amount(day),
        )
