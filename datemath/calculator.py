import logging
from functools import reduce

from .arithmetic import UNIT_MILLISECONDS
from .conf import apply_settings, check_settings
from .errors import DateMathError, NoNowFormat, OutOfRangeError
from .operations import Unit
from .tokenizer import tokenize
from .utils import normalize_instant, to_milliseconds, utc_now

logger = logging.getLogger(__name__)

NOW = "now"


class DateCalculator:
    """
    Evaluates date-math expressions such as ``now-1y/y`` against an anchor instant.

    :param clock:
        A zero-argument callable returning the current ``datetime``. It is read
        exactly once per :meth:`parse` or :meth:`stringify` call. Defaults to
        the UTC wall clock.
    :type clock: callable

    :param settings:
        Configure customized behavior using settings defined in :mod:`datemath.conf.Settings`.
    :type settings: dict

    :raises:
        ``TypeError``: clock is not callable,
        ``SettingValidationError``: A provided setting is not valid.
    """

    @apply_settings
    def __init__(self, clock=None, settings=None):
        if clock is not None and not callable(clock):
            raise TypeError("clock argument must be callable (%r given)" % type(clock))

        check_settings(settings)

        self.clock = clock or utc_now
        self._settings = settings

    def get_anchor(self):
        """Read the anchor instant: ``RELATIVE_BASE`` if set, otherwise the clock."""
        if self._settings.RELATIVE_BASE is not None:
            return normalize_instant(self._settings.RELATIVE_BASE)
        return normalize_instant(self.clock())

    def parse(self, expression):
        """
        Evaluate ``expression`` and return the resulting instant.

        The anchor is captured once and every operation is folded over it
        from left to right.

            >>> from datetime import datetime, timezone
            >>> calc = DateCalculator(clock=lambda: datetime(2020, 5, 1, tzinfo=timezone.utc))
            >>> calc.parse("now-1y/y")
            datetime.datetime(2019, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)

        :raises: ``NoNowFormat``, ``ParseError``, ``OutOfRangeError``
        """
        if not isinstance(expression, str):
            raise TypeError("Input type must be str")

        anchor = self.get_anchor()

        if expression == NOW:
            return self._finalize(anchor)

        if not expression.startswith(NOW):
            raise NoNowFormat(expression)

        def step(instant, operation):
            result = operation.apply(instant)
            logger.debug(f"{operation}: {instant.isoformat()} -> {result.isoformat()}")
            return result

        try:
            operations = tokenize(expression[len(NOW):], expression)
            result = reduce(step, operations, anchor)
        except DateMathError:
            raise
        except (OverflowError, ValueError) as e:
            raise OutOfRangeError(expression) from e

        return self._finalize(result)

    def stringify(self, date_obj):
        """
        Express ``date_obj`` relative to the anchor as a canonical expression.

        The difference is split greedily over the ``STRINGIFY_UNITS`` setting,
        largest unit first, so ``parse(stringify(d)) == d`` for the same anchor.

            >>> from datetime import datetime, timezone
            >>> calc = DateCalculator(clock=lambda: datetime(2020, 5, 1, tzinfo=timezone.utc))
            >>> calc.stringify(datetime(2020, 4, 26, 20, tzinfo=timezone.utc))
            'now-4d-4h'

        :raises: ``ValueError`` if the difference is not a whole number of seconds.
        """
        instant = normalize_instant(date_obj)
        anchor = self.get_anchor()

        difference = to_milliseconds(instant - anchor)
        if difference == 0:
            return NOW

        if difference % UNIT_MILLISECONDS[Unit.SECOND]:
            raise ValueError(
                "%s is not a whole number of seconds away from %s"
                % (instant.isoformat(), anchor.isoformat())
            )

        sign = "+" if difference > 0 else "-"
        remaining = abs(difference)
        parts = [NOW]
        for char in self._settings.STRINGIFY_UNITS:
            unit_ms = UNIT_MILLISECONDS[Unit(char)]
            amount, remaining = divmod(remaining, unit_ms)
            if amount:
                parts.append(f"{sign}{amount}{char}")

        if remaining:
            raise ValueError(
                "STRINGIFY_UNITS %r cannot express %s exactly"
                % (self._settings.STRINGIFY_UNITS, instant.isoformat())
            )

        return "".join(parts)

    def _finalize(self, instant):
        if not self._settings.RETURN_AS_TIMEZONE_AWARE:
            return instant.replace(tzinfo=None)
        return instant


date_calculator = DateCalculator()
