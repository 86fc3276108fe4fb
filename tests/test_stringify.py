"""
Tests for turning instants back into date-math expressions.
"""

import pytest
from datetime import datetime, timedelta, timezone

import datemath


ANCHOR = datetime(2020, 5, 1, tzinfo=timezone.utc)


def fixed_clock():
    return ANCHOR


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestStringify:
    """Tests for canonical expressions relative to the anchor."""

    @pytest.mark.parametrize("instant, expected", [
        (ANCHOR, "now"),
        (utc(2020, 4, 30), "now-1d"),
        (utc(2020, 5, 2), "now+1d"),
        (utc(2020, 4, 26, 20), "now-4d-4h"),
        (utc(2019, 1, 1), "now-69w-3d"),
        (utc(2020, 5, 1, 1, 30, 15), "now+1h+30m+15s"),
        (utc(2020, 5, 15), "now+2w"),
    ])
    def test_stringify(self, instant, expected):
        """Test the greedy largest-unit-first decomposition."""
        assert datemath.stringify(instant, clock=fixed_clock) == expected

    @pytest.mark.parametrize("instant", [
        utc(2019, 1, 1),
        utc(2020, 4, 26, 20),
        utc(2031, 7, 19, 3, 4, 5),
        utc(1999, 12, 31, 23, 59, 59),
        ANCHOR,
    ])
    def test_round_trip(self, instant):
        """Test that parsing the expression gives back the instant."""
        expression = datemath.stringify(instant, clock=fixed_clock)
        assert datemath.parse(expression, clock=fixed_clock) == instant

    def test_custom_units(self):
        """Test that STRINGIFY_UNITS limits the units used."""
        result = datemath.stringify(utc(2019, 1, 1), clock=fixed_clock, settings={"STRINGIFY_UNITS": "dhms"})
        assert result == "now-486d"

    def test_naive_instant_is_taken_as_utc(self):
        """Test that a naive instant is treated as UTC."""
        assert datemath.stringify(datetime(2020, 4, 30), clock=fixed_clock) == "now-1d"

    def test_sub_second_difference_rejected(self):
        """Test that a difference with milliseconds cannot be expressed."""
        with pytest.raises(ValueError):
            datemath.stringify(ANCHOR + timedelta(milliseconds=1500), clock=fixed_clock)

    def test_units_that_cannot_express_difference(self):
        """Test that a remainder smaller than the smallest configured unit is rejected."""
        with pytest.raises(ValueError):
            datemath.stringify(ANCHOR + timedelta(minutes=30), clock=fixed_clock, settings={"STRINGIFY_UNITS": "h"})

    def test_non_datetime_rejected(self):
        """Test that only datetimes can be stringified."""
        with pytest.raises(TypeError):
            datemath.stringify("2020-05-01", clock=fixed_clock)
