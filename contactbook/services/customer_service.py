"""Customer operations: validate, map, persist.

The functions here are the only way the API touches a CustomerStore. Each
one is a single synchronous exchange with the store; nothing is kept
between calls.

Errors:
    - CustomerValidationError before any store call, so nothing is written
    - CustomerNotFound / ConcurrencyConflict from the store, passed through
    - anything else the store raises becomes StorageFailure, including a
      failed commit: writes are committed here, before the response is built
"""
from contextlib import contextmanager
from datetime import datetime
from uuid import UUID

from contactbook.core.exceptions import CustomerError, StorageFailure
from contactbook.core.logging import get_logger
from contactbook.crud.customer_crud import CustomerStore
from contactbook.db.models import Customer
from contactbook.schemas.customer_schemas import CustomerSubmission
from contactbook.services.customer_mapper import build_customer
from contactbook.services.customer_validation import ensure_valid

logger = get_logger(__name__)


@contextmanager
def storage_errors(action: str):
    """Re-raises unexpected store exceptions as StorageFailure."""
    try:
        yield
    except CustomerError:
        raise
    except Exception as e:
        logger.error(f"Storage failure while {action}: {e}", exc_info=True)
        raise StorageFailure(f"An error occurred while {action}.") from e


def list_customers(store: CustomerStore) -> list[Customer]:
    with storage_errors("fetching customers"):
        return list(store.list())


def get_customer(store: CustomerStore, customer_id: UUID) -> Customer | None:
    with storage_errors(f"fetching customer {customer_id}"):
        return store.get(customer_id)


def create_customer(store: CustomerStore, submission: CustomerSubmission, now: datetime | None = None) -> Customer:
    """Validates the submission and stores it as a new customer with a fresh id."""
    ensure_valid(submission, now)
    customer = build_customer(submission)
    with storage_errors("creating a customer"):
        customer = store.add(customer)
        store.commit()
    return customer


def update_customer(
        store: CustomerStore,
        customer_id: UUID,
        submission: CustomerSubmission,
        now: datetime | None = None
) -> Customer:
    """
    Replaces every field of an existing customer. The id never changes.
    Raises CustomerNotFound if there is no customer with ``customer_id``.
    """
    ensure_valid(submission, now)
    replacement = build_customer(submission, customer_id=customer_id)
    with storage_errors(f"updating customer {customer_id}"):
        customer = store.replace(replacement)
        store.commit()
    return customer


def delete_customer(store: CustomerStore, customer_id: UUID) -> None:
    """Removes a customer for good. Raises CustomerNotFound if it is already gone."""
    with storage_errors(f"deleting customer {customer_id}"):
        store.remove(customer_id)
        store.commit()
