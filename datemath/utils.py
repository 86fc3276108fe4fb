import calendar
from datetime import datetime, timezone


def utc_now():
    return datetime.now(tz=timezone.utc)


def normalize_instant(date_obj):
    """Return ``date_obj`` as an aware UTC datetime at millisecond resolution.

    Naive datetimes are taken to already be in UTC.
    """
    if not isinstance(date_obj, datetime):
        raise TypeError("Expected a datetime (%r given)" % type(date_obj))

    if date_obj.tzinfo is None:
        date_obj = date_obj.replace(tzinfo=timezone.utc)
    else:
        date_obj = date_obj.astimezone(timezone.utc)

    return date_obj.replace(microsecond=date_obj.microsecond // 1000 * 1000)


def count_leap_years(first_year, second_year):
    """Count leap years in the inclusive range spanned by the two years."""
    low, high = sorted((first_year, second_year))
    return calendar.leapdays(low, high + 1)


def to_milliseconds(delta):
    return (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds // 1000
