"""Staff domain service."""

import logging
import random
from typing import Optional
from decimal import Decimal

from gymledger.database.base import Database
from gymledger.domain.entities import Staff as StaffEntity
from gymledger.domain.errors import (
    DuplicateStaffCodeError,
    NotFoundError,
    ReferencedByHistoryError,
    ValidationError,
    duplicate_staff_code,
    staff_delete_blocked,
    staff_not_found,
)

logger = logging.getLogger(__name__)

# Attempts at drawing an unused random check-in code
CODE_ATTEMPTS = 20


def generate_staff_code(rng: Optional[random.Random] = None) -> str:
    """Draw a random four-digit check-in code."""
    rng = rng or random.Random()
    return str(rng.randint(1000, 9999))


class StaffService:
    """Service for managing staff members."""

    def __init__(self, db: Database, rng: Optional[random.Random] = None):
        """Initialize staff service.

        Args:
            db: Database instance
            rng: Random source for generated staff codes
        """
        self.db = db
        self.rng = rng or random.Random()

    def _unused_code(self) -> str:
        for _ in range(CODE_ATTEMPTS):
            code = generate_staff_code(self.rng)
            if self.db.get_staff_by_code(code) is None:
                return code
        raise DuplicateStaffCodeError(
            f"Could not find an unused staff code after {CODE_ATTEMPTS} attempts"
        )

    def create_staff(
        self,
        name: str,
        role: str,
        schedule: Optional[str] = None,
        salary: Decimal = Decimal("0"),
        staff_code: Optional[str] = None,
    ) -> int:
        """Create a staff member.

        Args:
            name: Staff member name
            role: Job role
            schedule: Free-text schedule
            salary: Monthly salary
            staff_code: Check-in code; a random four-digit code if None

        Returns:
            Staff ID

        Raises:
            ValidationError: If name, role or code is blank
            DuplicateStaffCodeError: If the code is already in use
        """
        if not name or not name.strip():
            raise ValidationError("Staff name cannot be empty")
        if not role or not role.strip():
            raise ValidationError("Staff role cannot be empty")

        if staff_code is None:
            staff_code = self._unused_code()
        else:
            staff_code = staff_code.strip()
            if not staff_code:
                raise ValidationError("Staff code cannot be empty")
            if self.db.get_staff_by_code(staff_code) is not None:
                raise DuplicateStaffCodeError(duplicate_staff_code(staff_code))

        staff_id = self.db.create_staff(
            name=name.strip(),
            role=role.strip(),
            staff_code=staff_code,
            schedule=schedule,
            salary=salary,
        )
        logger.info("Created staff member %s (%s) with code %s", staff_id, name, staff_code)
        return staff_id

    def get_staff(self, staff_id: int) -> Optional[StaffEntity]:
        """Get staff member by ID."""
        return self.db.get_staff(staff_id)

    def list_staff(self) -> list[StaffEntity]:
        """List all staff members."""
        return self.db.list_staff()

    def delete_staff(self, staff_id: int, cascade: bool = False) -> None:
        """Delete a staff member.

        Args:
            staff_id: Staff ID to delete
            cascade: Also delete the member's attendance records

        Raises:
            NotFoundError: If the staff member doesn't exist
            ReferencedByHistoryError: If attendance exists and cascade is False
        """
        if self.db.get_staff(staff_id) is None:
            raise NotFoundError(staff_not_found(staff_id))

        attendance_count = self.db.get_staff_attendance_count(staff_id)
        if attendance_count > 0 and not cascade:
            raise ReferencedByHistoryError(staff_delete_blocked(staff_id, attendance_count))

        self.db.delete_staff(staff_id)
        logger.info(
            "Deleted staff member %s with %d attendance record(s)", staff_id, attendance_count
        )
