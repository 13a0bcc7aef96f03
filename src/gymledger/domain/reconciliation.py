"""Month-by-month payment reconciliation.

``month_status`` and ``timeline`` are pure: they see only the data passed in
and the explicit ``today``. ``ReconciliationService`` loads that data from the
store and keeps the client's stored status in line with the derived one.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from gymledger.database.base import Database
from gymledger.domain.entities import Client, ClientStatus, MonthStatus, Payment
from gymledger.domain.errors import NotFoundError, client_not_found
from gymledger.domain.period import PeriodKey, period_range, to_period_key, year_periods

logger = logging.getLogger(__name__)

# Statuses set by staff decisions rather than by payment history.
ADMINISTRATIVE_STATUSES = frozenset({ClientStatus.SUSPENDED, ClientStatus.CANCELLED})


def month_status(
    client: Client,
    payments: Iterable[Payment],
    period_key: PeriodKey,
    today: date,
) -> MonthStatus:
    """Derive the billing status of one month for one client.

    Rules are checked in order, first match wins:
    months before the enrollment month are not applicable, a month listed in
    any of the client's payments is paid (whatever the amount), an unpaid month
    before the current one is overdue, anything else is upcoming.
    """
    if period_key < to_period_key(client.enrollment_date):
        return MonthStatus.NOT_APPLICABLE

    for payment in payments:
        if payment.client_id == client.id and payment.covers(period_key):
            return MonthStatus.PAID

    if period_key < to_period_key(today):
        return MonthStatus.OVERDUE

    return MonthStatus.UPCOMING


def timeline(
    client: Client,
    payments: Sequence[Payment],
    year: int,
    today: date,
) -> list[tuple[PeriodKey, MonthStatus]]:
    """Return the status of each month of a year."""
    return [(key, month_status(client, payments, key, today)) for key in year_periods(year)]


def overdue_periods(client: Client, payments: Sequence[Payment], today: date) -> list[PeriodKey]:
    """Return every overdue month between enrollment and the month before today."""
    current = to_period_key(today)
    start = to_period_key(client.enrollment_date)
    if start >= current:
        return []
    return [
        key
        for key in period_range(start, current.previous())
        if month_status(client, payments, key, today) == MonthStatus.OVERDUE
    ]


def project_status(client: Client, payments: Sequence[Payment], today: date) -> ClientStatus:
    """Project the stored client status from the payment timeline.

    Suspended and cancelled clients keep their status.
    """
    if client.status in ADMINISTRATIVE_STATUSES:
        return client.status
    if overdue_periods(client, payments, today):
        return ClientStatus.LATE
    return ClientStatus.ACTIVE


class ReconciliationService:
    """Service that reconciles stored clients against their payments."""

    def __init__(self, db: Database):
        """Initialize reconciliation service.

        Args:
            db: Database instance
        """
        self.db = db

    def _load(self, client_id: int) -> tuple[Client, list[Payment]]:
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))
        return client, self.db.list_payments(client_id=client_id)

    def month_status(self, client_id: int, period_key: PeriodKey, today: date) -> MonthStatus:
        """Derive one month's status for a stored client."""
        client, payments = self._load(client_id)
        return month_status(client, payments, period_key, today)

    def client_timeline(
        self, client_id: int, year: int, today: date
    ) -> list[tuple[PeriodKey, MonthStatus]]:
        """Return a stored client's twelve-month timeline.

        Raises:
            NotFoundError: If the client doesn't exist
        """
        client, payments = self._load(client_id)
        return timeline(client, payments, year, today)

    def overdue_periods(self, client_id: int, today: date) -> list[PeriodKey]:
        """Return a stored client's overdue months."""
        client, payments = self._load(client_id)
        return overdue_periods(client, payments, today)

    def refresh_client_status(self, client_id: int, today: date) -> ClientStatus:
        """Recompute the stored status of a client and write it if it changed.

        Returns:
            The client's status after the refresh
        """
        client, payments = self._load(client_id)
        projected = project_status(client, payments, today)
        if projected != client.status:
            self.db.update_client_status(client_id, projected)
            logger.info(
                "Client %s status %s -> %s", client_id, client.status.value, projected.value
            )
        return projected

    def refresh_all(self, today: date) -> dict[int, ClientStatus]:
        """Refresh every client's stored status. Returns the changed ones."""
        changed: dict[int, ClientStatus] = {}
        payments = self.db.list_payments()
        by_client: dict[int, list[Payment]] = {}
        for payment in payments:
            by_client.setdefault(payment.client_id, []).append(payment)

        for client in self.db.list_clients():
            projected = project_status(client, by_client.get(client.id, []), today)
            if projected != client.status:
                self.db.update_client_status(client.id, projected)
                changed[client.id] = projected
        if changed:
            logger.info("Refreshed status of %d client(s)", len(changed))
        return changed

    def overdue_amount(self, today: date, client_id: Optional[int] = None) -> Decimal:
        """Sum monthly fees over overdue months of non-cancelled clients."""
        total = Decimal("0")
        clients = (
            [self._load(client_id)[0]] if client_id is not None else self.db.list_clients()
        )
        for client in clients:
            if client.status == ClientStatus.CANCELLED:
                continue
            payments = self.db.list_payments(client_id=client.id)
            total += client.monthly_fee * len(overdue_periods(client, payments, today))
        return total
