"""Field rules for customer submissions.

Every rule is a ``Rule(field, message, check)``. ``validate_customer`` walks
the whole table and returns every violation it finds, so a client sees all
of its mistakes in one response.

A blank required field produces only its "is required" violation; the
other rules of that field are not run against a missing value. A blank
optional field is skipped entirely.
"""
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from contactbook.core.exceptions import CustomerValidationError, Violation
from contactbook.schemas.customer_schemas import CustomerSubmission
from contactbook.utils.dates import as_aware, as_utc, utc_now

MAX_IMAGE_BYTES = 5 * 1024 * 1024

POSTAL_CODE_PATTERN = re.compile(r"\d{2}-\d{3}", re.ASCII)
# Optional leading '+', digit groups joined by a single space, dash or dot,
# and an optional "x123" / "ext. 123" suffix. A parenthesised group may sit
# directly against its neighbours; two plain digit groups always need a
# separator, so every repetition starts on a different character and the
# match stays linear.
PHONE_NUMBER_PATTERN = re.compile(
    r"(\+\s?)?(\(\d+\)|\d+)([\s.\-](\(\d+\)|\d+)|\(\d+\)|(?<=\))\d+)*(\s?(x|ext\.?)\s?\d+)?",
    re.ASCII | re.IGNORECASE,
)
MAX_PHONE_NUMBER_LENGTH = 30


@dataclass(frozen=True)
class Rule:
    field: str
    message: str
    check: Callable[[Any, datetime], bool]


def _length_between(low: int, high: int) -> Callable[[Any, datetime], bool]:
    return lambda value, now: low <= len(value) <= high


def _matches(pattern: re.Pattern) -> Callable[[Any, datetime], bool]:
    return lambda value, now: pattern.fullmatch(value) is not None


def _plausible_phone_number(value: str, now: datetime) -> bool:
    return len(value) <= MAX_PHONE_NUMBER_LENGTH and PHONE_NUMBER_PATTERN.fullmatch(value) is not None


def _in_the_past(value: datetime, now: datetime) -> bool:
    return as_aware(value) < now


REQUIRED_MESSAGES = {
    "first_name": "First name is required.",
    "last_name": "Last name is required.",
    "street_name": "Street name is required.",
    "house_number": "House number is required.",
    "postal_code": "Postal code is required.",
    "town": "Town is required.",
    "phone_number": "Phone number is required.",
    "date_of_birth": "Date of birth is required.",
}

RULES: tuple[Rule, ...] = (
    Rule("first_name", "First name must be between 2 and 50 characters.", _length_between(2, 50)),
    Rule("last_name", "Last name must be between 2 and 50 characters.", _length_between(2, 50)),
    Rule("street_name", "Street name must be between 2 and 50 characters.", _length_between(2, 50)),
    Rule("house_number", "House number must be between 1 and 10 characters.", _length_between(1, 10)),
    Rule("apartment_number", "Apartment number cannot be longer than 10 characters.", _length_between(0, 10)),
    Rule("postal_code", "Postal code must be in the format XX-XXX.", _matches(POSTAL_CODE_PATTERN)),
    Rule("town", "Town name must be between 2 and 50 characters.", _length_between(2, 50)),
    Rule("phone_number", "Phone number is not valid.", _plausible_phone_number),
    Rule("date_of_birth", "Date of birth must be in the past.", _in_the_past),
    Rule("image", "Image cannot be larger than 5 MiB.", lambda value, now: len(value) <= MAX_IMAGE_BYTES),
)

FIELD_ORDER = tuple(dict.fromkeys(rule.field for rule in RULES))


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def validate_customer(submission: CustomerSubmission, now: datetime | None = None) -> list[Violation]:
    """
    Runs every rule against ``submission`` and returns the violations in
    field order. An empty list means the submission is valid.

    ``now`` defaults to the current UTC time; pass it explicitly to get a
    repeatable result.
    """
    now = as_utc(now) if now is not None else utc_now()
    violations: list[Violation] = []

    for field in FIELD_ORDER:
        value = getattr(submission, field)
        if _is_blank(value):
            if field in REQUIRED_MESSAGES:
                violations.append(Violation(field, REQUIRED_MESSAGES[field]))
            continue
        for rule in RULES:
            if rule.field == field and not rule.check(value, now):
                violations.append(Violation(field, rule.message))

    return violations


def ensure_valid(submission: CustomerSubmission, now: datetime | None = None) -> None:
    """Raises CustomerValidationError carrying every violation, if there are any."""
    violations = validate_customer(submission, now)
    if violations:
        raise CustomerValidationError(violations)
