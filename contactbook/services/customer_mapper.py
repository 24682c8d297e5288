# contactbook/services/customer_mapper.py
import uuid
from uuid import UUID

from contactbook.db.models import Customer
from contactbook.schemas.customer_schemas import CustomerSubmission
from contactbook.utils.dates import to_utc_date

# Everything a submission may change. The id, the version counter and the
# timestamps are owned by the store.
MUTABLE_FIELDS = (
    "first_name",
    "last_name",
    "street_name",
    "house_number",
    "apartment_number",
    "postal_code",
    "town",
    "phone_number",
    "date_of_birth",
    "image",
)


def build_customer(submission: CustomerSubmission, customer_id: UUID | None = None) -> Customer:
    """
    Maps a validated submission onto a new, unsaved Customer.

    Without ``customer_id`` a fresh UUID is assigned (creation). With it, the
    result is the full replacement for that existing customer (update).
    """
    return Customer(
        id=customer_id if customer_id is not None else uuid.uuid4(),
        first_name=submission.first_name,
        last_name=submission.last_name,
        street_name=submission.street_name,
        house_number=submission.house_number,
        apartment_number=submission.apartment_number,
        postal_code=submission.postal_code,
        town=submission.town,
        phone_number=submission.phone_number,
        date_of_birth=to_utc_date(submission.date_of_birth),
        image=submission.image,
    )


def copy_customer_fields(source: Customer, target: Customer) -> Customer:
    """Overwrites every mutable field of ``target`` with the one from ``source``."""
    for field in MUTABLE_FIELDS:
        setattr(target, field, getattr(source, field))
    return target
