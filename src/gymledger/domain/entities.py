"""Domain model entities for gymledger.

These are pure data classes representing business concepts, independent of
database schema. Services and the pure reconciliation/metrics functions only
ever see these, never ORM rows.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from gymledger.domain.period import PeriodKey


class ClientStatus(str, Enum):
    """Stored client status."""

    ACTIVE = "active"
    LATE = "late"
    SUSPENDED = "suspended"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    """How money was collected."""

    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"


class MonthStatus(str, Enum):
    """Derived billing state of one client for one calendar month."""

    NOT_APPLICABLE = "not-applicable"
    PAID = "paid"
    OVERDUE = "overdue"
    UPCOMING = "upcoming"


@dataclass(frozen=True)
class Client:
    """Gym client domain entity."""

    id: int
    full_name: str
    email: Optional[str]
    phone: Optional[str]
    enrollment_date: date
    monthly_fee: Decimal
    status: ClientStatus
    created_at: datetime


@dataclass(frozen=True)
class Payment:
    """Monthly-fee payment domain entity.

    ``months_covered`` is sorted and never empty. Payments are append-only.
    """

    id: int
    client_id: int
    amount: Decimal
    payment_date: date
    months_covered: tuple[PeriodKey, ...]
    method: PaymentMethod
    created_by: Optional[str]
    created_at: datetime

    def covers(self, period_key: PeriodKey) -> bool:
        return period_key in self.months_covered


@dataclass(frozen=True)
class Product:
    """Inventory product domain entity."""

    id: int
    name: str
    category: Optional[str]
    price: Decimal
    stock_quantity: int
    min_stock_level: int

    @property
    def is_low_stock(self) -> bool:
        return self.stock_quantity <= self.min_stock_level


@dataclass(frozen=True)
class Sale:
    """One committed sale line."""

    id: int
    product_id: int
    quantity: int
    total_price: Decimal
    method: PaymentMethod
    sold_at: datetime


@dataclass(frozen=True)
class Staff:
    """Staff member domain entity."""

    id: int
    name: str
    role: str
    staff_code: str
    schedule: Optional[str]
    salary: Decimal


@dataclass(frozen=True)
class AttendanceRecord:
    """Staff check-in for one calendar day."""

    id: int
    staff_id: int
    date: date
    check_in_time: datetime
    status: str = "present"


@dataclass(frozen=True)
class AttendanceEntry:
    """Attendance record joined with the staff member it belongs to."""

    record: AttendanceRecord
    staff_name: str
    staff_role: str


@dataclass(frozen=True)
class AccessLog:
    """Client entrance log entry."""

    id: int
    client_id: int
    timestamp: datetime
    admin_id: Optional[str]


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of a client entrance scan."""

    client: Client
    granted: bool
    log: AccessLog


@dataclass(frozen=True)
class CartLine:
    """Requested quantity of one product in a point-of-sale cart."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class SaleReceipt:
    """Result of a committed cart."""

    sales: tuple[Sale, ...]
    total: Decimal


@dataclass(frozen=True)
class PeriodBucket:
    """Revenue and enrollments collected in one period."""

    revenue: Decimal = Decimal("0")
    enrollments: int = 0


@dataclass(frozen=True)
class MetricsReport:
    """Per-period metrics over an inclusive date range."""

    range_start: date
    range_end: date
    per_period: dict[PeriodKey, PeriodBucket]
    total_revenue: Decimal
    total_enrollments: int

    def cumulative_revenue(self) -> list[tuple[PeriodKey, Decimal]]:
        running = Decimal("0")
        result = []
        for key, bucket in self.per_period.items():
            running += bucket.revenue
            result.append((key, running))
        return result


@dataclass(frozen=True)
class DashboardMetrics:
    """Headline numbers for the front-desk dashboard."""

    as_of: date
    active_clients: int
    overdue_clients: int
    new_clients_this_month: int
    revenue_this_month: Decimal


@dataclass(frozen=True)
class DailyClosing:
    """Snapshot of one day's cash-in, handed to the closing report."""

    day: date
    operator: Optional[str]
    payments: tuple[Payment, ...] = field(default_factory=tuple)
    sales: tuple[Sale, ...] = field(default_factory=tuple)
    payments_total: Decimal = Decimal("0")
    sales_total: Decimal = Decimal("0")
    overdue_total: Decimal = Decimal("0")

    @property
    def total_received(self) -> Decimal:
        return self.payments_total + self.sales_total
