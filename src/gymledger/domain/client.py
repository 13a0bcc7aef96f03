"""Client and payment domain service."""

import logging
from typing import Iterable, Optional, Union
from datetime import date
from decimal import Decimal

from gymledger.database.base import Database
from gymledger.domain.entities import (
    Client as ClientEntity,
    ClientStatus,
    Payment as PaymentEntity,
    PaymentMethod,
)
from gymledger.domain.errors import NotFoundError, ValidationError, client_not_found
from gymledger.domain.period import PeriodKey
from gymledger.domain.reconciliation import ReconciliationService

logger = logging.getLogger(__name__)


def normalize_months(months_covered: Iterable[Union[PeriodKey, str]]) -> tuple[PeriodKey, ...]:
    """Parse and validate the months a payment covers.

    Raises:
        ValidationError: If the list is empty, malformed, or repeats a month
    """
    keys = [m if isinstance(m, PeriodKey) else PeriodKey.parse(m) for m in months_covered]
    if not keys:
        raise ValidationError("A payment must cover at least one month")
    if len(set(keys)) != len(keys):
        repeated = sorted({str(k) for k in keys if keys.count(k) > 1})
        raise ValidationError(f"Months covered repeat: {', '.join(repeated)}")
    return tuple(sorted(keys))


class ClientService:
    """Service for managing clients and recording their payments."""

    def __init__(self, db: Database):
        """Initialize client service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_client(
        self,
        full_name: str,
        enrollment_date: date,
        monthly_fee: Decimal,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> int:
        """Create a new active client.

        Args:
            full_name: Client full name
            enrollment_date: Day the client joined
            monthly_fee: Fee charged per month
            email: Optional email address
            phone: Optional phone number

        Returns:
            Client ID

        Raises:
            ValidationError: If name is blank or fee is negative
        """
        if not full_name or not full_name.strip():
            raise ValidationError("Client name cannot be empty")
        if monthly_fee < 0:
            raise ValidationError(f"Monthly fee cannot be negative: {monthly_fee}")

        client_id = self.db.create_client(
            full_name=full_name.strip(),
            enrollment_date=enrollment_date,
            monthly_fee=monthly_fee,
            email=email,
            phone=phone,
        )
        logger.info("Created client %s (%s)", client_id, full_name)
        return client_id

    def get_client(self, client_id: int) -> Optional[ClientEntity]:
        """Get client by ID.

        Returns:
            Client entity or None if not found
        """
        return self.db.get_client(client_id)

    def require_client(self, client_id: int) -> ClientEntity:
        """Get client by ID or raise NotFoundError."""
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))
        return client

    def list_clients(self, status: Optional[ClientStatus] = None) -> list[ClientEntity]:
        """List clients, optionally by stored status."""
        return self.db.list_clients(status=status)

    def set_status(self, client_id: int, status: ClientStatus) -> None:
        """Set a client's stored status by hand (e.g. suspend or cancel).

        Raises:
            NotFoundError: If the client doesn't exist
        """
        self.require_client(client_id)
        self.db.update_client_status(client_id, status)
        logger.info("Client %s status set to %s", client_id, status.value)

    def record_payment(
        self,
        client_id: int,
        amount: Decimal,
        months_covered: Iterable[Union[PeriodKey, str]],
        payment_date: date,
        today: date,
        method: PaymentMethod = PaymentMethod.CASH,
    ) -> PaymentEntity:
        """Record a monthly-fee payment and refresh the client's status.

        Args:
            client_id: Paying client
            amount: Amount collected, must be positive
            months_covered: Months (``YYYY-MM`` or PeriodKey) the payment settles
            payment_date: Day the money was collected
            today: Reference day for the refreshed status; may be later than
                payment_date when a payment is entered after the fact
            method: Payment method

        Returns:
            The stored Payment

        Raises:
            NotFoundError: If the client doesn't exist
            ValidationError: If the amount or months are invalid
        """
        if amount <= 0:
            raise ValidationError(f"Payment amount must be positive: {amount}")
        months = normalize_months(months_covered)
        self.require_client(client_id)

        # The payment and the status it implies are committed together.
        with self.db.atomic():
            payment_id = self.db.create_payment(
                client_id=client_id,
                amount=amount,
                payment_date=payment_date,
                months_covered=months,
                method=method,
                created_by=self.db.current_principal(),
            )
            ReconciliationService(self.db).refresh_client_status(client_id, today)
        logger.info(
            "Recorded payment %s for client %s: %s covering %s",
            payment_id,
            client_id,
            amount,
            ", ".join(str(m) for m in months),
        )
        return self.db.get_payment(payment_id)

    def list_payments(
        self,
        client_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[PaymentEntity]:
        """List payments with optional filters."""
        return self.db.list_payments(client_id=client_id, start_date=start_date, end_date=end_date)
