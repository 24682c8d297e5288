"""SqlCustomerStore against SQLite, including the optimistic version check."""
from datetime import date
from uuid import uuid4

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from contactbook.core.exceptions import ConcurrencyConflict, CustomerNotFound
from contactbook.crud.customer_crud import SqlCustomerStore
from contactbook.db.models import Base, Customer
from contactbook.services.customer_mapper import build_customer


@pytest.fixture
def sql_store(db_session):
    return SqlCustomerStore(db_session)


def test_list_of_an_empty_table_is_empty(sql_store):
    assert sql_store.list() == []


def test_add_then_get_and_list(sql_store, db_session, make_submission):
    customer = sql_store.add(build_customer(make_submission()))
    db_session.commit()

    fetched = sql_store.get(customer.id)
    assert fetched.first_name == "John"
    assert fetched.date_of_birth == date(1985, 5, 15)
    assert fetched.version == 1
    assert [c.id for c in sql_store.list()] == [customer.id]


def test_get_unknown_id_is_none(sql_store):
    assert sql_store.get(uuid4()) is None


def test_replace_overwrites_fields_and_bumps_the_version(sql_store, db_session, make_submission):
    customer = sql_store.add(build_customer(make_submission()))
    db_session.commit()

    sql_store.replace(build_customer(make_submission(first_name="Jane", apartment_number=None), customer_id=customer.id))
    db_session.commit()

    stored = db_session.query(Customer).filter(Customer.id == customer.id).one()
    assert stored.first_name == "Jane"
    assert stored.apartment_number is None
    assert stored.version == 2


def test_replace_unknown_id_raises_not_found(sql_store, make_submission):
    with pytest.raises(CustomerNotFound):
        sql_store.replace(build_customer(make_submission(), customer_id=uuid4()))

    assert sql_store.list() == []


def test_remove_twice_raises_not_found(sql_store, db_session, make_submission):
    customer = sql_store.add(build_customer(make_submission()))
    db_session.commit()

    sql_store.remove(customer.id)
    db_session.commit()
    assert sql_store.get(customer.id) is None

    with pytest.raises(CustomerNotFound):
        sql_store.remove(customer.id)


def test_image_bytes_are_stored(sql_store, db_session, make_submission):
    customer = sql_store.add(build_customer(make_submission(image="aGVsbG8=")))
    db_session.commit()
    db_session.expire_all()

    assert sql_store.get(customer.id).image == b"hello"


def test_stale_replace_raises_concurrency_conflict(tmp_path, make_submission):
    # A file database so that each session gets its own connection
    engine = create_engine(f"sqlite:///{tmp_path / 'customers.db'}")
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    with Session() as seed:
        customer_id = SqlCustomerStore(seed).add(build_customer(make_submission())).id
        seed.commit()

    first, second = Session(), Session()
    try:
        first_store = SqlCustomerStore(first)
        assert first_store.get(customer_id).version == 1

        second_store = SqlCustomerStore(second)
        second_store.replace(build_customer(make_submission(first_name="Jane"), customer_id=customer_id))
        second.commit()

        with pytest.raises(ConcurrencyConflict):
            first_store.replace(build_customer(make_submission(first_name="Joan"), customer_id=customer_id))
    finally:
        first.close()
        second.close()

    with Session() as check:
        stored = check.query(Customer).filter(Customer.id == customer_id).one()
        assert stored.first_name == "Jane"
        assert stored.version == 2
    engine.dispose()


def test_stale_remove_raises_concurrency_conflict(tmp_path, make_submission):
    engine = create_engine(f"sqlite:///{tmp_path / 'customers.db'}")
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    with Session() as seed:
        customer_id = SqlCustomerStore(seed).add(build_customer(make_submission())).id
        seed.commit()

    first, second = Session(), Session()
    try:
        first_store = SqlCustomerStore(first)
        assert first_store.get(customer_id).version == 1

        second_store = SqlCustomerStore(second)
        second_store.replace(build_customer(make_submission(first_name="Jane"), customer_id=customer_id))
        second.commit()

        with pytest.raises(ConcurrencyConflict):
            first_store.remove(customer_id)
    finally:
        first.close()
        second.close()

    with Session() as check:
        stored = check.query(Customer).filter(Customer.id == customer_id).one()
        assert stored.first_name == "Jane"
    engine.dispose()


def test_failed_commit_rolls_the_write_back(sql_store, db_session, make_submission, monkeypatch):
    customer = sql_store.add(build_customer(make_submission()))

    def fail():
        raise RuntimeError("commit failed")
    monkeypatch.setattr(db_session, "commit", fail)

    with pytest.raises(RuntimeError):
        sql_store.commit()

    monkeypatch.undo()
    assert sql_store.get(customer.id) is None
    assert sql_store.list() == []
