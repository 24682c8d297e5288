"""Shared test fixtures.

    - DATABASE_URL points at a throwaway SQLite database before the app is imported
    - ``store`` is an in-memory CustomerStore; ``client`` serves the API on top of it
    - ``engine`` / ``db_session`` / ``sql_client`` run against in-memory SQLite
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

from datetime import datetime
from uuid import UUID

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from contactbook.api.v1.dependencies import get_customer_store
from contactbook.core.exceptions import CustomerNotFound
from contactbook.db.models import Base, Customer
from contactbook.db.session import get_db
from contactbook.main import app
from contactbook.schemas.customer_schemas import CustomerSubmission
from contactbook.services.customer_mapper import copy_customer_fields


class InMemoryCustomerStore:
    """CustomerStore kept in a dict, with the same not-found contract as the SQL one."""

    def __init__(self):
        self.customers: dict[UUID, Customer] = {}
        self.commits = 0

    def list(self) -> list[Customer]:
        return list(self.customers.values())

    def get(self, customer_id: UUID) -> Customer | None:
        return self.customers.get(customer_id)

    def add(self, customer: Customer) -> Customer:
        if customer.id in self.customers:
            raise ValueError(f"Duplicate customer id {customer.id}")
        self.customers[customer.id] = customer
        return customer

    def replace(self, customer: Customer) -> Customer:
        existing = self.customers.get(customer.id)
        if existing is None:
            raise CustomerNotFound(customer.id)
        return copy_customer_fields(customer, existing)

    def remove(self, customer_id: UUID) -> None:
        if customer_id not in self.customers:
            raise CustomerNotFound(customer_id)
        del self.customers[customer_id]

    def commit(self) -> None:
        self.commits += 1


@pytest.fixture
def customer_payload() -> dict:
    """A valid submission as a client would send it."""
    return {
        "first_name": "John",
        "last_name": "Doe",
        "street_name": "Elm Street",
        "house_number": "123b",
        "apartment_number": "4B",
        "postal_code": "12-345",
        "town": "Springfield",
        "phone_number": "+1-555-1234",
        "date_of_birth": "1985-05-15T00:00:00",
    }


@pytest.fixture
def make_submission(customer_payload):
    """Builds a CustomerSubmission from the valid payload plus overrides."""
    def _make(**overrides) -> CustomerSubmission:
        data = {**customer_payload, "date_of_birth": datetime(1985, 5, 15)}
        data.update(overrides)
        return CustomerSubmission(**data)
    return _make


@pytest.fixture
def store() -> InMemoryCustomerStore:
    return InMemoryCustomerStore()


@pytest.fixture
def client(store):
    """API client whose customer store is the in-memory fake."""
    app.dependency_overrides[get_customer_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sql_client(session_factory):
    """API client backed by the real SQLAlchemy store on in-memory SQLite."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
