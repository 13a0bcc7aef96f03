"""SQLAlchemy models for gymledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    CheckConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Client(Base):
    """Gym client model."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    full_name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    enrollment_date = Column(Date, nullable=False)
    monthly_fee = Column(Numeric(10, 2), nullable=False)
    status = Column(String, default="active", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (CheckConstraint("monthly_fee >= 0", name="ck_client_fee"),)

    # Relationships
    payments = relationship("Payment", back_populates="client", cascade="all, delete-orphan")
    access_logs = relationship("AccessLog", back_populates="client", cascade="all, delete-orphan")


class Payment(Base):
    """Monthly-fee payment model."""

    __tablename__ = "payments"

    id = Column(Integer, primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    payment_date = Column(Date, nullable=False)
    method = Column(String, nullable=False)
    created_by = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (CheckConstraint("amount > 0", name="ck_payment_amount"),)

    # Relationships
    client = relationship("Client", back_populates="payments")
    periods = relationship(
        "PaymentPeriod",
        back_populates="payment",
        cascade="all, delete-orphan",
        order_by="PaymentPeriod.period_key",
    )


class PaymentPeriod(Base):
    """One month covered by a payment."""

    __tablename__ = "payment_periods"

    id = Column(Integer, primary_key=True)
    payment_id = Column(Integer, ForeignKey("payments.id"), nullable=False)
    period_key = Column(String(7), nullable=False)

    __table_args__ = (UniqueConstraint("payment_id", "period_key", name="uq_payment_period"),)

    # Relationships
    payment = relationship("Payment", back_populates="periods")


class Product(Base):
    """Inventory product model."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    stock_quantity = Column(Integer, default=0, nullable=False)
    min_stock_level = Column(Integer, default=0, nullable=False)

    __table_args__ = (
        CheckConstraint("stock_quantity >= 0", name="ck_product_stock"),
        CheckConstraint("price >= 0", name="ck_product_price"),
    )

    # Relationships
    sales = relationship("Sale", back_populates="product", cascade="all, delete-orphan")


class Sale(Base):
    """Point-of-sale line model."""

    __tablename__ = "product_sales"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    method = Column(String, nullable=False)
    sold_at = Column(DateTime, nullable=False)

    __table_args__ = (CheckConstraint("quantity > 0", name="ck_sale_quantity"),)

    # Relationships
    product = relationship("Product", back_populates="sales")


class Staff(Base):
    """Staff member model."""

    __tablename__ = "staff"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False)
    staff_code = Column(String, unique=True, nullable=False)
    schedule = Column(String, nullable=True)
    salary = Column(Numeric(10, 2), default=0, nullable=False)

    # Relationships
    attendance = relationship(
        "AttendanceRecord", back_populates="staff", cascade="all, delete-orphan"
    )


class AttendanceRecord(Base):
    """Staff check-in model."""

    __tablename__ = "staff_attendance"

    id = Column(Integer, primary_key=True)
    staff_id = Column(Integer, ForeignKey("staff.id"), nullable=False)
    date = Column(Date, nullable=False)
    check_in_time = Column(DateTime, nullable=False)
    status = Column(String, default="present", nullable=False)

    # One check-in per staff member per day
    __table_args__ = (UniqueConstraint("staff_id", "date", name="uq_staff_attendance_day"),)

    # Relationships
    staff = relationship("Staff", back_populates="attendance")


class AccessLog(Base):
    """Client entrance log model."""

    __tablename__ = "access_logs"

    id = Column(Integer, primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    timestamp = Column(DateTime, nullable=False)
    admin_id = Column(String, nullable=True)

    # Relationships
    client = relationship("Client", back_populates="access_logs")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
