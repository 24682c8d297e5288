"""Customer domain exceptions.

Raised by the service and store layers. The API layer registers one
handler per class and turns them into HTTP responses, see
``contactbook.api.error_handlers``.
"""
from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Violation:
    """A single failed validation rule for one field."""
    field: str
    message: str


class CustomerError(Exception):
    """Base class for all customer errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CustomerValidationError(CustomerError):
    """The submission broke one or more field rules. Nothing was written."""

    def __init__(self, violations: list[Violation]):
        super().__init__("Customer data is invalid.")
        self.violations = list(violations)


class CustomerNotFound(CustomerError):
    """No customer with the given ID exists."""

    def __init__(self, customer_id: UUID):
        super().__init__(f"Customer with ID {customer_id} not found.")
        self.customer_id = customer_id


class ConcurrencyConflict(CustomerError):
    """The stored row changed (or vanished) between read and write."""

    def __init__(self, customer_id: UUID):
        super().__init__(f"Customer with ID {customer_id} was modified by another request.")
        self.customer_id = customer_id


class StorageFailure(CustomerError):
    """Any other persistence fault. The message is safe to show to callers."""
