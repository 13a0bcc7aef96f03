"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional, Sequence
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from gymledger.domain.entities import (
    AccessLog,
    AttendanceEntry,
    AttendanceRecord,
    Client,
    ClientStatus,
    Payment,
    PaymentMethod,
    Product,
    Sale,
    Staff,
)
from gymledger.domain.period import PeriodKey


class Database(ABC):
    """Abstract database interface for gymledger.

    Every write commits on its own unless it runs inside ``atomic()``, in which
    case the whole block commits or rolls back as one unit.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group several writes into one all-or-nothing unit."""
        pass

    @abstractmethod
    def current_principal(self) -> Optional[str]:
        """Identity of the operator issuing writes."""
        pass

    # Client operations
    @abstractmethod
    def create_client(
        self,
        full_name: str,
        enrollment_date: date,
        monthly_fee: Decimal,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        status: ClientStatus = ClientStatus.ACTIVE,
    ) -> int:
        """Create a client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def list_clients(self, status: Optional[ClientStatus] = None) -> list[Client]:
        """List clients, optionally filtered by stored status."""
        pass

    @abstractmethod
    def update_client_status(self, client_id: int, status: ClientStatus) -> None:
        """Overwrite the stored status of a client."""
        pass

    # Payment operations
    @abstractmethod
    def create_payment(
        self,
        client_id: int,
        amount: Decimal,
        payment_date: date,
        months_covered: Sequence[PeriodKey],
        method: PaymentMethod,
        created_by: Optional[str] = None,
    ) -> int:
        """Create a payment. Returns payment ID."""
        pass

    @abstractmethod
    def get_payment(self, payment_id: int) -> Optional[Payment]:
        """Get payment by ID."""
        pass

    @abstractmethod
    def list_payments(
        self,
        client_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Payment]:
        """List payments with optional client and payment-date filters."""
        pass

    # Product operations
    @abstractmethod
    def create_product(
        self,
        name: str,
        price: Decimal,
        stock_quantity: int = 0,
        min_stock_level: int = 0,
        category: Optional[str] = None,
    ) -> int:
        """Create a product. Returns product ID."""
        pass

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]:
        """Get product by ID, always reading the current stock from the store."""
        pass

    @abstractmethod
    def list_products(self) -> list[Product]:
        """List all products."""
        pass

    @abstractmethod
    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """Conditionally decrement stock.

        The update only applies if the resulting stock would not be negative.

        Returns:
            True if the stock was decremented, False otherwise
        """
        pass

    @abstractmethod
    def increment_stock(self, product_id: int, quantity: int) -> None:
        """Add units to a product's stock."""
        pass

    # Sale operations
    @abstractmethod
    def create_sale(
        self,
        product_id: int,
        quantity: int,
        total_price: Decimal,
        method: PaymentMethod,
        sold_at: datetime,
    ) -> int:
        """Append a sale line. Returns sale ID."""
        pass

    @abstractmethod
    def get_sale(self, sale_id: int) -> Optional[Sale]:
        """Get sale by ID."""
        pass

    @abstractmethod
    def list_sales(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        product_id: Optional[int] = None,
    ) -> list[Sale]:
        """List sales with optional day-range and product filters."""
        pass

    # Staff operations
    @abstractmethod
    def create_staff(
        self,
        name: str,
        role: str,
        staff_code: str,
        schedule: Optional[str] = None,
        salary: Decimal = Decimal("0"),
    ) -> int:
        """Create a staff member. Returns staff ID.

        Raises:
            DuplicateStaffCodeError: If the store rejects the staff code
        """
        pass

    @abstractmethod
    def get_staff(self, staff_id: int) -> Optional[Staff]:
        """Get staff member by ID."""
        pass

    @abstractmethod
    def get_staff_by_code(self, staff_code: str) -> Optional[Staff]:
        """Get staff member by check-in code."""
        pass

    @abstractmethod
    def list_staff(self) -> list[Staff]:
        """List all staff members."""
        pass

    @abstractmethod
    def delete_staff(self, staff_id: int) -> None:
        """Delete a staff member along with its attendance records."""
        pass

    @abstractmethod
    def get_staff_attendance_count(self, staff_id: int) -> int:
        """Count attendance records referencing a staff member."""
        pass

    # Attendance operations
    @abstractmethod
    def create_attendance(self, staff_id: int, day: date, check_in_time: datetime) -> int:
        """Insert an attendance record. Returns record ID.

        Raises:
            AlreadyCheckedInError: If a record for (staff_id, day) already exists
        """
        pass

    @abstractmethod
    def get_attendance(self, staff_id: int, day: date) -> Optional[AttendanceRecord]:
        """Get the attendance record of a staff member for a day."""
        pass

    @abstractmethod
    def list_attendance(self, day: date) -> list[AttendanceEntry]:
        """List a day's attendance joined with staff, by check-in time."""
        pass

    @abstractmethod
    def purge_attendance_except(self, day: date) -> int:
        """Delete attendance records of every other day. Returns deleted count."""
        pass

    # Access log operations
    @abstractmethod
    def create_access_log(
        self, client_id: int, timestamp: datetime, admin_id: Optional[str] = None
    ) -> int:
        """Append an access log entry. Returns entry ID."""
        pass

    @abstractmethod
    def get_access_log(self, log_id: int) -> Optional[AccessLog]:
        """Get access log entry by ID."""
        pass

    @abstractmethod
    def list_access_logs(self, day: Optional[date] = None) -> list[AccessLog]:
        """List access log entries, optionally for one day."""
        pass
