__version__ = "0.1.0"

from .conf import Settings, SettingValidationError, apply_settings
from .calculator import DateCalculator, date_calculator
from .errors import (
    DateMathError,
    NoNowFormat,
    ParseError,
    OutOfRangeError,
    UnsupportedUnitError,
)
from .operations import Operation, Add, Subtract, Round, Unit, Operator
from .tokenizer import tokenize


@apply_settings
def parse(expression, clock=None, settings=None):
    """Evaluate a date-math expression and return the instant it denotes.

    An expression is ``now`` followed by any number of ``+<n><unit>`` or
    ``-<n><unit>`` steps and an optional final ``/<unit>`` rounding, where
    unit is one of ``s m h d w M y``.

    :param expression:
        A date-math expression, e.g. ``"now-1d"``, ``"now-4d-4h"``, ``"now-1y/y"``.
    :type expression: str

    :param clock:
        A zero-argument callable returning the current ``datetime``. Read once per call.
        Inject a fixed clock for deterministic results.
    :type clock: callable

    :param settings:
        Configure customized behavior using settings defined in :mod:`datemath.conf.Settings`.
    :type settings: dict

    :return: An aware UTC ``datetime`` with millisecond resolution.
    :rtype: datetime.datetime

    :raises:
        ``NoNowFormat``: expression does not start with ``now``,
        ``ParseError``: the operations after ``now`` are malformed,
        ``SettingValidationError``: A provided setting is not valid.

    Example usage::

        >>> import datemath
        >>> from datetime import datetime, timezone
        >>> anchor = lambda: datetime(2020, 5, 1, tzinfo=timezone.utc)
        >>> datemath.parse("now-4d-4h", clock=anchor)
        datetime.datetime(2020, 4, 26, 20, 0, tzinfo=datetime.timezone.utc)
        >>> datemath.parse("now/y", clock=anchor)
        datetime.datetime(2020, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    return _get_calculator(clock, settings).parse(expression)


@apply_settings
def stringify(date_obj, clock=None, settings=None):
    """Express ``date_obj`` as a date-math expression relative to now.

    The result parses back to ``date_obj`` under the same anchor.

    :return: An expression such as ``"now-4d-4h"``, or ``"now"``.
    :rtype: str
    """
    return _get_calculator(clock, settings).stringify(date_obj)


def _get_calculator(clock, settings):
    if clock is None and settings._default:
        return date_calculator
    return DateCalculator(clock=clock, settings=settings)
