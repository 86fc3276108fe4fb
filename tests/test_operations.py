"""
Tests for the typed Add/Subtract/Round operations.
"""

import dataclasses

import pytest
from datetime import datetime, timezone

from datemath.operations import Add, Operation, Operator, Round, Subtract, Unit


ANCHOR = datetime(2020, 5, 1, tzinfo=timezone.utc)


class TestFromToken:
    """Tests for building operations from raw tokens."""

    @pytest.mark.parametrize("token, expected", [
        ("+12h", Add(unit=Unit.HOUR, amount=12)),
        ("-3w", Subtract(unit=Unit.WEEK, amount=3)),
        ("-0s", Subtract(unit=Unit.SECOND, amount=0)),
        ("+1M", Add(unit=Unit.MONTH, amount=1)),
        ("+1m", Add(unit=Unit.MINUTE, amount=1)),
        ("/M", Round(unit=Unit.MONTH)),
    ])
    def test_from_token(self, token, expected):
        """Test that each token maps to the matching operation."""
        assert Operation.from_token(token) == expected

    def test_operator(self):
        """Test that the first character selects the operator."""
        assert Operation.from_token("+1d").operator is Operator.ADD
        assert Operation.from_token("-1d").operator is Operator.SUBTRACT
        assert Operation.from_token("/d").operator is Operator.ROUND


class TestOperation:
    """Tests for operation behavior."""

    def test_str_gives_token(self):
        """Test that str() renders the expression token."""
        assert str(Add(unit=Unit.HOUR, amount=12)) == "+12h"
        assert str(Subtract(unit=Unit.YEAR, amount=1)) == "-1y"
        assert str(Round(unit=Unit.WEEK)) == "/w"

    def test_immutable(self):
        """Test that operations cannot be changed after construction."""
        operation = Add(unit=Unit.DAY, amount=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            operation.amount = 2

    def test_apply(self):
        """Test that apply() dispatches to arithmetic or rounding."""
        assert Subtract(unit=Unit.DAY, amount=1).apply(ANCHOR) == datetime(2020, 4, 30, tzinfo=timezone.utc)
        assert Add(unit=Unit.MONTH, amount=1).apply(ANCHOR) == datetime(2020, 6, 1, tzinfo=timezone.utc)
        assert Round(unit=Unit.YEAR).apply(ANCHOR) == datetime(2020, 1, 1, tzinfo=timezone.utc)

    def test_apply_does_not_mutate(self):
        """Test that apply() leaves its input instant untouched."""
        anchor = datetime(2020, 5, 1, tzinfo=timezone.utc)
        Add(unit=Unit.DAY, amount=1).apply(anchor)
        assert anchor == ANCHOR
