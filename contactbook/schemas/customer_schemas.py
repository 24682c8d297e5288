# contactbook/schemas/customer_schemas.py
import base64
from pydantic import BaseModel, Base64Bytes, Field, field_validator
from uuid import UUID
from datetime import date, datetime


class CustomerBase(BaseModel):
    first_name: str | None = Field(None, description="Given name, 2 to 50 characters.")
    last_name: str | None = Field(None, description="Family name, 2 to 50 characters.")
    street_name: str | None = Field(None, description="Street name, 2 to 50 characters.")
    house_number: str | None = Field(None, description="House number, 1 to 10 characters, e.g. '123b'.")
    apartment_number: str | None = Field(None, description="Optional apartment number, up to 10 characters.")
    postal_code: str | None = Field(None, description="Postal code in the XX-XXX format.", examples=["12-345"])
    town: str | None = Field(None, description="Town name, 2 to 50 characters.")
    phone_number: str | None = Field(None, description="Phone number, e.g. '+1-555-1234'.")


# Properties to receive on customer creation and replacement.
# Field rules live in services.customer_validation so that every broken rule
# is reported at once; the schema only fixes the shape.
class CustomerSubmission(CustomerBase):
    date_of_birth: datetime | None = Field(None, description="Date of birth; must lie in the past.")
    image: Base64Bytes | None = Field(None, description="Optional base64 encoded image, at most 5 MiB decoded.")


class ViolationRead(BaseModel):
    field: str
    message: str


class CustomerRead(CustomerBase):
    id: UUID
    date_of_birth: date
    age: int = Field(..., description="Completed years, computed on every read.")
    image: str | None = Field(None, description="Base64 encoded image, if one was uploaded.")

    @field_validator("image", mode="before")
    @classmethod
    def encode_image(cls, value):
        if isinstance(value, (bytes, bytearray)):
            return base64.b64encode(value).decode("ascii")
        return value

    class Config:
        from_attributes = True


class ErrorRead(BaseModel):
    detail: str


class ValidationErrorRead(ErrorRead):
    errors: list[ViolationRead] = []
