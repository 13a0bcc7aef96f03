"""Shared pytest fixtures for gymledger tests."""

import tempfile
import os
import random
from datetime import date, datetime
from decimal import Decimal
import pytest

from gymledger.database.factories import create_sqlite_database
from gymledger.domain.entities import Client, ClientStatus, Payment, PaymentMethod
from gymledger.domain.attendance import AttendanceService
from gymledger.domain.client import ClientService
from gymledger.domain.metrics import MetricsService
from gymledger.domain.period import PeriodKey
from gymledger.domain.product import ProductService
from gymledger.domain.reconciliation import ReconciliationService
from gymledger.domain.sales import SaleService
from gymledger.domain.staff import StaffService

OPERATOR = "frontdesk"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path, principal=OPERATOR)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def client_service(temp_db):
    """Create a ClientService with a temporary database."""
    return ClientService(temp_db)


@pytest.fixture
def reconciliation_service(temp_db):
    """Create a ReconciliationService with a temporary database."""
    return ReconciliationService(temp_db)


@pytest.fixture
def metrics_service(temp_db):
    """Create a MetricsService with a temporary database."""
    return MetricsService(temp_db)


@pytest.fixture
def product_service(temp_db):
    """Create a ProductService with a temporary database."""
    return ProductService(temp_db)


@pytest.fixture
def sale_service(temp_db):
    """Create a SaleService with a temporary database."""
    return SaleService(temp_db)


@pytest.fixture
def staff_service(temp_db):
    """Create a StaffService with a seeded random source."""
    return StaffService(temp_db, rng=random.Random(7))


@pytest.fixture
def attendance_service(temp_db):
    """Create an AttendanceService with a temporary database."""
    return AttendanceService(temp_db)


@pytest.fixture
def sample_client(client_service):
    """Client enrolled mid-March 2024 paying 100 a month."""
    client_id = client_service.create_client(
        full_name="Ana Souza",
        enrollment_date=date(2024, 3, 15),
        monthly_fee=Decimal("100.00"),
        email="ana@example.com",
    )
    return client_service.get_client(client_id)


@pytest.fixture
def sample_product(product_service):
    """Product with five units in stock."""
    product_id = product_service.create_product(
        name="Whey Protein", price=Decimal("15.00"), stock_quantity=5, min_stock_level=2
    )
    return product_service.get_product(product_id)


@pytest.fixture
def sample_staff(staff_service):
    """Staff member with check-in code 1234."""
    staff_id = staff_service.create_staff(
        name="Carla Dias", role="Instructor", schedule="Mon-Fri 08-17", staff_code="1234"
    )
    return staff_service.get_staff(staff_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def _make_client(
    client_id: int = 1,
    enrollment_date: date = date(2024, 3, 15),
    status: ClientStatus = ClientStatus.ACTIVE,
    monthly_fee: Decimal = Decimal("100.00"),
) -> Client:
    """Build a Client entity without touching the store."""
    return Client(
        id=client_id,
        full_name=f"Client {client_id}",
        email=None,
        phone=None,
        enrollment_date=enrollment_date,
        monthly_fee=monthly_fee,
        status=status,
        created_at=datetime(2024, 1, 1),
    )


def _make_payment(
    months: list[str],
    client_id: int = 1,
    payment_id: int = 1,
    amount: Decimal = Decimal("100.00"),
    payment_date: date = date(2024, 3, 15),
) -> Payment:
    """Build a Payment entity without touching the store."""
    return Payment(
        id=payment_id,
        client_id=client_id,
        amount=amount,
        payment_date=payment_date,
        months_covered=tuple(sorted(PeriodKey.parse(m) for m in months)),
        method=PaymentMethod.CASH,
        created_by=OPERATOR,
        created_at=datetime(2024, 1, 1),
    )


@pytest.fixture
def make_client():
    """Factory for in-memory Client entities."""
    return _make_client


@pytest.fixture
def make_payment():
    """Factory for in-memory Payment entities."""
    return _make_payment
