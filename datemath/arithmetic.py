"""
Add/Subtract engine.

Months are stepped on the calendar with day-of-month rollover (Jan 31 + 1
month is the 2nd or 3rd of March). Every other unit is converted to a fixed
number of milliseconds; years use a nominal 365-day length and are then
corrected for the leap days they cross.
"""

import calendar
import logging
from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta

from .operations import Add, Operator, Subtract, Unit
from .utils import count_leap_years

logger = logging.getLogger(__name__)

DAY_MS = 86400000

UNIT_MILLISECONDS = {
    Unit.SECOND: 1000,
    Unit.MINUTE: 60000,
    Unit.HOUR: 3600000,
    Unit.DAY: DAY_MS,
    Unit.WEEK: 7 * DAY_MS,
    Unit.YEAR: 365 * DAY_MS,
}


def shift(instant: datetime, operation) -> datetime:
    """
    Apply an Add or Subtract operation to ``instant``.

    Args:
        instant: Aware UTC datetime
        operation: An :class:`Add` or :class:`Subtract`

    Returns:
        The shifted instant
    """
    if not isinstance(operation, (Add, Subtract)):
        raise TypeError("shift() only handles Add and Subtract (%r given)" % (operation,))

    sign = 1 if operation.operator is Operator.ADD else -1

    if operation.unit is Unit.MONTH:
        return step_months(instant, sign * operation.amount)

    result = instant + timedelta(
        milliseconds=sign * operation.amount * UNIT_MILLISECONDS[operation.unit]
    )

    if operation.unit is Unit.YEAR:
        result = correct_leap_days(instant, result, operation.operator)

    return result


def step_months(instant: datetime, months: int) -> datetime:
    """Move the month field by ``months``, letting the day overflow into the next month."""
    first_of_month = instant.replace(day=1) + relativedelta(months=months)
    return first_of_month + timedelta(days=instant.day - 1)


def correct_leap_days(original: datetime, naive: datetime, operator: Operator) -> datetime:
    """
    Correct a nominal-year shift for the leap days it ignored.

    Every leap year between the original and the naive year (inclusive)
    is worth one day. When the original year is itself a leap year, its
    Feb 29 only counts when it lies ahead of the original date in the
    direction of travel: after February when adding, before March when
    subtracting.
    """
    leap_days = count_leap_years(original.year, naive.year)
    original_is_leap = calendar.isleap(original.year)

    if operator is Operator.ADD:
        if original_is_leap and original.month > 2:
            leap_days -= 1
        corrected = naive + timedelta(days=leap_days)
    else:
        if original_is_leap and original.month < 3:
            leap_days -= 1
        corrected = naive - timedelta(days=leap_days)

    logger.debug(f"Leap correction of {leap_days} day(s) for {original.isoformat()} {operator.value}y")
    return corrected
