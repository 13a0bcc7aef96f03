"""Tests for staff functionality."""

import random
import pytest
from datetime import datetime
from decimal import Decimal

from gymledger.domain.errors import (
    DependencyError,
    DuplicateStaffCodeError,
    NotFoundError,
    ReferencedByHistoryError,
    ValidationError,
)
from gymledger.domain.staff import StaffService, generate_staff_code


def test_create_staff_with_code(staff_service, sample_staff):
    """Test creating a staff member with an explicit code."""
    assert sample_staff.name == "Carla Dias"
    assert sample_staff.role == "Instructor"
    assert sample_staff.staff_code == "1234"
    assert sample_staff.schedule == "Mon-Fri 08-17"
    assert sample_staff.salary == Decimal("0")


def test_create_staff_generates_four_digit_code(temp_db):
    service = StaffService(temp_db, rng=random.Random(42))
    staff_id = service.create_staff(name="Davi Rocha", role="Reception", salary=Decimal("2100.00"))

    staff = service.get_staff(staff_id)
    assert staff.staff_code == generate_staff_code(random.Random(42))
    assert len(staff.staff_code) == 4
    assert staff.staff_code.isdigit()
    assert staff.salary == Decimal("2100.00")


def test_duplicate_code_rejected(staff_service, sample_staff):
    with pytest.raises(DuplicateStaffCodeError):
        staff_service.create_staff(name="Other", role="Cleaner", staff_code="1234")


def test_duplicate_code_rejected_by_store(temp_db, sample_staff):
    with pytest.raises(DuplicateStaffCodeError):
        temp_db.create_staff(name="Other", role="Cleaner", staff_code="1234")
    # The session is usable after the failed insert
    assert len(temp_db.list_staff()) == 1


def test_blank_name_or_role_rejected(staff_service):
    with pytest.raises(ValidationError):
        staff_service.create_staff(name=" ", role="Instructor")
    with pytest.raises(ValidationError):
        staff_service.create_staff(name="Eva", role="")


def test_delete_staff_without_history(staff_service, sample_staff):
    staff_service.delete_staff(sample_staff.id)
    assert staff_service.get_staff(sample_staff.id) is None


def test_delete_staff_with_attendance_is_blocked(
    staff_service, attendance_service, sample_staff
):
    attendance_service.check_in("1234", datetime(2024, 6, 10, 8, 0))

    with pytest.raises(ReferencedByHistoryError) as excinfo:
        staff_service.delete_staff(sample_staff.id)

    assert isinstance(excinfo.value, DependencyError)
    assert "1 attendance record" in str(excinfo.value)
    assert staff_service.get_staff(sample_staff.id) is not None


def test_delete_staff_cascade_removes_attendance(
    temp_db, staff_service, attendance_service, sample_staff
):
    attendance_service.check_in("1234", datetime(2024, 6, 10, 8, 0))

    staff_service.delete_staff(sample_staff.id, cascade=True)

    assert staff_service.get_staff(sample_staff.id) is None
    assert temp_db.get_staff_attendance_count(sample_staff.id) == 0


def test_delete_missing_staff(staff_service):
    with pytest.raises(NotFoundError):
        staff_service.delete_staff(999)
