# contactbook/crud/customer_crud.py
from typing import Protocol
from uuid import UUID

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from contactbook.core.exceptions import ConcurrencyConflict, CustomerNotFound
from contactbook.db.models import Customer
from contactbook.services.customer_mapper import copy_customer_fields


class CustomerStore(Protocol):
    """
    The persistence contract the customer service depends on.

    The service calls ``commit`` once after each successful write.

    ``replace`` and ``remove`` raise CustomerNotFound for an unknown id;
    neither is ever a silent no-op.
    """

    def list(self) -> list[Customer]: ...

    def get(self, customer_id: UUID) -> Customer | None: ...

    def add(self, customer: Customer) -> Customer: ...

    def replace(self, customer: Customer) -> Customer: ...

    def remove(self, customer_id: UUID) -> None: ...

    def commit(self) -> None: ...


class SqlCustomerStore:
    """
    CustomerStore over a SQLAlchemy session.

    Writes are flushed so that stale-version and integrity errors surface
    inside the call; the service then calls ``commit`` while the request is
    still being handled, so a failed commit is reported to the client.
    """

    def __init__(self, db: Session):
        self.db = db

    def list(self) -> list[Customer]:
        """Fetches every customer, oldest first."""
        return self.db.query(Customer).order_by(Customer.created_at, Customer.id).all()

    def get(self, customer_id: UUID) -> Customer | None:
        return self.db.query(Customer).filter(Customer.id == customer_id).first()

    def add(self, customer: Customer) -> Customer:
        self.db.add(customer)
        self.db.flush()
        return customer

    def replace(self, customer: Customer) -> Customer:
        """Copies every mutable field of ``customer`` onto the stored row with the same id."""
        db_customer = self.get(customer.id)
        if db_customer is None:
            raise CustomerNotFound(customer.id)

        copy_customer_fields(customer, db_customer)
        try:
            self.db.flush()
        except StaleDataError as e:
            self.db.rollback()
            raise ConcurrencyConflict(customer.id) from e
        return db_customer

    def remove(self, customer_id: UUID) -> None:
        db_customer = self.get(customer_id)
        if db_customer is None:
            raise CustomerNotFound(customer_id)

        self.db.delete(db_customer)
        try:
            self.db.flush()
        except StaleDataError as e:
            self.db.rollback()
            raise ConcurrencyConflict(customer_id) from e

    def commit(self) -> None:
        """Commits the flushed writes; the session is rolled back if that fails."""
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
