"""
Rounding engine.

``round_to(instant, unit)`` snaps an instant to whichever boundary of its
enclosing calendar period is nearer; an instant exactly halfway goes to
the upper boundary. Weeks start on Monday. All boundaries are UTC.

Each unit is described by the start of the period containing an instant
and the length of that period, so the upper boundary is only built when
it is the answer.
"""

import calendar
import logging
from datetime import datetime, timedelta
from typing import Tuple

from .errors import UnsupportedUnitError
from .operations import Unit

logger = logging.getLogger(__name__)


def _second_period(instant):
    return instant.replace(microsecond=0), timedelta(seconds=1)


def _minute_period(instant):
    return instant.replace(second=0, microsecond=0), timedelta(minutes=1)


def _hour_period(instant):
    return instant.replace(minute=0, second=0, microsecond=0), timedelta(hours=1)


def _day_period(instant):
    return instant.replace(hour=0, minute=0, second=0, microsecond=0), timedelta(days=1)


def _week_period(instant):
    day_start, _ = _day_period(instant)
    # weekday() is 0 for Monday
    return day_start - timedelta(days=instant.weekday()), timedelta(weeks=1)


def _month_period(instant):
    day_start, _ = _day_period(instant)
    days_in_month = calendar.monthrange(instant.year, instant.month)[1]
    return day_start.replace(day=1), timedelta(days=days_in_month)


def _year_period(instant):
    day_start, _ = _day_period(instant)
    days_in_year = 366 if calendar.isleap(instant.year) else 365
    return day_start.replace(month=1, day=1), timedelta(days=days_in_year)


PERIODS = {
    Unit.SECOND: _second_period,
    Unit.MINUTE: _minute_period,
    Unit.HOUR: _hour_period,
    Unit.DAY: _day_period,
    Unit.WEEK: _week_period,
    Unit.MONTH: _month_period,
    Unit.YEAR: _year_period,
}


def get_period(instant: datetime, unit: Unit) -> Tuple[datetime, timedelta]:
    """
    Get the start and the length of the ``unit`` period containing ``instant``.

    Raises:
        UnsupportedUnitError: If ``unit`` is not a known :class:`Unit`
    """
    period = PERIODS.get(unit)
    if period is None:
        raise UnsupportedUnitError(unit)
    return period(instant)


def get_bounds(instant: datetime, unit: Unit) -> Tuple[datetime, datetime]:
    """Get the start of the ``unit`` period containing ``instant`` and the start of the next one."""
    lower, length = get_period(instant, unit)
    return lower, lower + length


def round_to(instant: datetime, unit: Unit) -> datetime:
    lower, length = get_period(instant, unit)
    lower_diff = instant - lower
    if length - lower_diff <= lower_diff:
        result = lower + length
    else:
        result = lower
    logger.debug(f"Rounded {instant.isoformat()} to {result.isoformat()} (/{unit.value})")
    return result
