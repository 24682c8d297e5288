# contactbook/utils/dates.py
from datetime import date, datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utc_now().date()


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def as_aware(value: datetime) -> datetime:
    """
    Labels a naive datetime as UTC and leaves aware ones alone.

    Unlike ``as_utc`` this never shifts the value, so it cannot overflow at
    the edges of the datetime range. Aware datetimes compare correctly across
    offsets without conversion.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_utc_date(value: date | datetime) -> date:
    """
    The calendar date of a date of birth, exactly as the client wrote it.

    The offset only labels the value; "1985-05-15T00:00:00+02:00" is still
    May 15th.
    """
    if isinstance(value, datetime):
        return value.date()
    return value


def calculate_age(date_of_birth: date, today: date | None = None) -> int:
    """
    Completed years between ``date_of_birth`` and ``today``.

    The age goes up on the anniversary, not on January 1st. Someone born on
    February 29th has their anniversary on March 1st in non-leap years.
    """
    today = today or utc_today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age
