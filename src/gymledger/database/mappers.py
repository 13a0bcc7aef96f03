"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so storage details (string enums,
the payment_periods child table) never leak into the domain.
"""

from decimal import Decimal

from gymledger.domain import entities as domain
from gymledger.domain.period import PeriodKey
from gymledger.database.models import (
    AccessLog as ORMAccessLog,
    AttendanceRecord as ORMAttendanceRecord,
    Client as ORMClient,
    Payment as ORMPayment,
    Product as ORMProduct,
    Sale as ORMSale,
    Staff as ORMStaff,
)


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        full_name=orm_client.full_name,
        email=orm_client.email,
        phone=orm_client.phone,
        enrollment_date=orm_client.enrollment_date,
        monthly_fee=Decimal(orm_client.monthly_fee),
        status=domain.ClientStatus(orm_client.status),
        created_at=orm_client.created_at,
    )


def payment_to_domain(orm_payment: ORMPayment) -> domain.Payment:
    """Convert SQLAlchemy Payment model to domain Payment entity."""
    return domain.Payment(
        id=orm_payment.id,
        client_id=orm_payment.client_id,
        amount=Decimal(orm_payment.amount),
        payment_date=orm_payment.payment_date,
        months_covered=tuple(
            sorted(PeriodKey.parse(period.period_key) for period in orm_payment.periods)
        ),
        method=domain.PaymentMethod(orm_payment.method),
        created_by=orm_payment.created_by,
        created_at=orm_payment.created_at,
    )


def product_to_domain(orm_product: ORMProduct) -> domain.Product:
    """Convert SQLAlchemy Product model to domain Product entity."""
    return domain.Product(
        id=orm_product.id,
        name=orm_product.name,
        category=orm_product.category,
        price=Decimal(orm_product.price),
        stock_quantity=orm_product.stock_quantity,
        min_stock_level=orm_product.min_stock_level,
    )


def sale_to_domain(orm_sale: ORMSale) -> domain.Sale:
    """Convert SQLAlchemy Sale model to domain Sale entity."""
    return domain.Sale(
        id=orm_sale.id,
        product_id=orm_sale.product_id,
        quantity=orm_sale.quantity,
        total_price=Decimal(orm_sale.total_price),
        method=domain.PaymentMethod(orm_sale.method),
        sold_at=orm_sale.sold_at,
    )


def staff_to_domain(orm_staff: ORMStaff) -> domain.Staff:
    """Convert SQLAlchemy Staff model to domain Staff entity."""
    return domain.Staff(
        id=orm_staff.id,
        name=orm_staff.name,
        role=orm_staff.role,
        staff_code=orm_staff.staff_code,
        schedule=orm_staff.schedule,
        salary=Decimal(orm_staff.salary),
    )


def attendance_to_domain(orm_record: ORMAttendanceRecord) -> domain.AttendanceRecord:
    """Convert SQLAlchemy AttendanceRecord model to domain AttendanceRecord entity."""
    return domain.AttendanceRecord(
        id=orm_record.id,
        staff_id=orm_record.staff_id,
        date=orm_record.date,
        check_in_time=orm_record.check_in_time,
        status=orm_record.status,
    )


def attendance_entry_to_domain(
    orm_record: ORMAttendanceRecord, orm_staff: ORMStaff
) -> domain.AttendanceEntry:
    """Convert an attendance row and its staff row to a domain AttendanceEntry."""
    return domain.AttendanceEntry(
        record=attendance_to_domain(orm_record),
        staff_name=orm_staff.name,
        staff_role=orm_staff.role,
    )


def access_log_to_domain(orm_log: ORMAccessLog) -> domain.AccessLog:
    """Convert SQLAlchemy AccessLog model to domain AccessLog entity."""
    return domain.AccessLog(
        id=orm_log.id,
        client_id=orm_log.client_id,
        timestamp=orm_log.timestamp,
        admin_id=orm_log.admin_id,
    )
