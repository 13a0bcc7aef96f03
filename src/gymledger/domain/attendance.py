"""Staff attendance ledger.

The ledger only ever holds the current day. Records of other days are purged
whenever today's attendance is read, so no scheduled cleanup is needed.
"""

import logging
from datetime import date, datetime

from gymledger.database.base import Database
from gymledger.domain.entities import AttendanceEntry, AttendanceRecord
from gymledger.domain.errors import (
    AlreadyCheckedInError,
    UnknownStaffCodeError,
    already_checked_in,
    unknown_staff_code,
)

logger = logging.getLogger(__name__)


class AttendanceService:
    """Service for staff check-ins."""

    def __init__(self, db: Database):
        """Initialize attendance service.

        Args:
            db: Database instance
        """
        self.db = db

    def check_in(self, staff_code: str, now: datetime) -> AttendanceRecord:
        """Check a staff member in for the day of ``now``.

        Args:
            staff_code: Check-in code typed at the terminal
            now: Check-in timestamp

        Returns:
            The new AttendanceRecord

        Raises:
            UnknownStaffCodeError: If no staff member has the code
            AlreadyCheckedInError: If the member already checked in that day
        """
        staff = self.db.get_staff_by_code(staff_code.strip())
        if staff is None:
            logger.info("Rejected check-in with unknown code %r", staff_code)
            raise UnknownStaffCodeError(unknown_staff_code(staff_code))

        today = now.date()
        if self.db.get_attendance(staff.id, today) is not None:
            raise AlreadyCheckedInError(already_checked_in(staff.name, today))

        # The (staff, date) unique constraint rejects a concurrent duplicate.
        self.db.create_attendance(staff.id, today, now)
        logger.info("Checked in %s (%s) at %s", staff.name, staff.staff_code, now.isoformat())
        return self.db.get_attendance(staff.id, today)

    def purge_stale(self, today: date) -> int:
        """Delete every record not dated today. Safe to call repeatedly."""
        deleted = self.db.purge_attendance_except(today)
        if deleted:
            logger.info("Purged %d attendance record(s) not dated %s", deleted, today.isoformat())
        return deleted

    def todays_attendance(self, today: date) -> list[AttendanceEntry]:
        """Return today's check-ins, purging older records first."""
        self.purge_stale(today)
        return self.db.list_attendance(today)
