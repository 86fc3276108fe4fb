class DateMathError(ValueError):
    """Base class for errors raised while evaluating a date-math expression."""


class NoNowFormat(DateMathError):
    """Raised when an expression does not start with ``now``."""

    def __init__(self, expression):
        self.expression = expression
        super().__init__("Expression must start with 'now': %r" % expression)


class ParseError(DateMathError):
    """Raised when the operations after ``now`` cannot be tokenized."""

    def __init__(self, expression):
        self.expression = expression
        super().__init__("Unable to parse date-math expression: %r" % expression)


class OutOfRangeError(DateMathError):
    def __init__(self, expression):
        self.expression = expression
        super().__init__("Expression %r leaves the supported date range" % expression)


class UnsupportedUnitError(DateMathError):
    """Raised when a unit outside the known set reaches the rounding engine.

    The tokenizer only lets through valid units, so seeing this error
    means an Operation was built by hand with a bad unit.
    """

    def __init__(self, unit):
        self.unit = unit
        super().__init__("Unsupported rounding unit: %r" % (unit,))
