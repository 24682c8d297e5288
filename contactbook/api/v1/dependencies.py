# contactbook/api/v1/dependencies.py
from fastapi import Depends
from sqlalchemy.orm import Session

from contactbook.crud.customer_crud import CustomerStore, SqlCustomerStore
from contactbook.db.session import get_db


def get_customer_store(db: Session = Depends(get_db)) -> CustomerStore:
    """
    Provides the customer store for one request, bound to that request's session.
    Tests override this dependency with an in-memory store.
    """
    return SqlCustomerStore(db)
