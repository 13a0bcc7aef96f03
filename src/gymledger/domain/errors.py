"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class InsufficientStockError(ConflictError):
    """A sale line asks for more units than are in stock."""

    def __init__(self, product_id: int, requested: int, available: int | None = None):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(insufficient_stock(product_id, requested, available))


class AlreadyCheckedInError(ConflictError):
    """Staff member already has an attendance record for the day."""


class DuplicateStaffCodeError(ConflictError):
    """Staff code is already assigned to another staff member."""


class UnknownStaffCodeError(NotFoundError):
    """No staff member has the given check-in code."""


class ReferencedByHistoryError(DependencyError):
    """Record is referenced by history that a delete would discard."""


class StoreUnavailableError(Exception):
    """The persistent store could not be reached or timed out.

    Deliberately not a DomainError: callers decide whether a retry is safe.
    """


def client_not_found(client_id: int) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def product_not_found(product_id: int) -> str:
    """Return message for missing product."""
    return f"Product {product_id} not found"


def staff_not_found(staff_id: int) -> str:
    """Return message for missing staff member."""
    return f"Staff member {staff_id} not found"


def unknown_staff_code(staff_code: str) -> str:
    """Return message for a check-in code nobody owns."""
    return f"Unknown staff code '{staff_code}'"


def already_checked_in(staff_name: str, day) -> str:
    """Return message for a repeated check-in on the same day."""
    return f"{staff_name} already checked in on {day.isoformat()}"


def duplicate_staff_code(staff_code: str) -> str:
    """Return message for a staff code that is already taken."""
    return f"Staff code '{staff_code}' is already in use"


def insufficient_stock(product_id: int, requested: int, available: int | None) -> str:
    """Return message when a sale line exceeds available stock."""
    if available is None:
        return f"Insufficient stock for product {product_id}: requested {requested}"
    return (
        f"Insufficient stock for product {product_id}: "
        f"requested {requested}, available {available}"
    )


def staff_delete_blocked(staff_id: int, attendance_count: int) -> str:
    """Return message when staff member has attendance history."""
    return (
        f"Cannot delete staff member {staff_id}: it has {attendance_count} "
        f"attendance record{'s' if attendance_count != 1 else ''}. "
        "Pass cascade to delete them as well."
    )
