# contactbook/db/models.py

import uuid
from sqlalchemy import (
    Column,
    String,
    Date,
    DateTime,
    Integer,
    LargeBinary,
    Uuid,
    func
)
from sqlalchemy.orm import declarative_base

from contactbook.utils.dates import calculate_age

Base = declarative_base()


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    street_name = Column(String(50), nullable=False)
    house_number = Column(String(10), nullable=False)
    apartment_number = Column(String(10), nullable=True)
    postal_code = Column(String(6), nullable=False)
    town = Column(String(50), nullable=False)
    phone_number = Column(String, nullable=False)
    # Stored as the UTC calendar date, see services.customer_mapper
    date_of_birth = Column(Date, nullable=False)
    image = Column(LargeBinary, nullable=True)

    # Optimistic lock: UPDATE/DELETE statements are filtered on this value
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}

    @property
    def age(self) -> int:
        return calculate_age(self.date_of_birth)

    def __repr__(self):
        return f"<Customer id={self.id} name={self.first_name} {self.last_name}>"
