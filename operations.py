"""
Operations for PocketCalc
Binary operations, error kinds and number formatting shared by the engine and history
"""
import math
import re
from decimal import Decimal
from enum import Enum

import config


class Operation(Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"

    @property
    def symbol(self):
        return _SYMBOLS[self]

    def apply(self, first, second):
        """Apply the operation; raises ZeroDivisionError on a zero divisor"""
        if self is Operation.ADD:
            return first + second
        if self is Operation.SUBTRACT:
            return first - second
        if self is Operation.MULTIPLY:
            return first * second
        if second == 0:
            raise ZeroDivisionError("Division by zero")
        return first / second

    @classmethod
    def coerce(cls, value):
        """Return the Operation for value (member or value string), or None"""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


_SYMBOLS = {
    Operation.ADD: "+",
    Operation.SUBTRACT: "-",
    Operation.MULTIPLY: "×",
    Operation.DIVIDE: "÷",
}


class ErrorKind(Enum):
    DIVIDE_BY_ZERO = "Cannot divide by zero"
    OVERFLOW = "Overflow"
    UNDERFLOW = "Underflow"
    INVALID_INPUT = "Invalid input"
    ERROR = "Error"

    @property
    def message(self):
        return self.value


ERROR_MESSAGES = frozenset(kind.message for kind in ErrorKind)

PLAIN_NUMBER = re.compile(r"-?\d*\.?\d*")


def parse_operand(text):
    """Parse pending input into a finite float, or None if it is not a number"""
    if not text or text in ERROR_MESSAGES:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def round_display(value):
    """Round to the display digit cap (like toPrecision, not string truncation)"""
    return float(f"{value:.{config.MAX_DISPLAY_DIGITS}g}")


def format_number(value):
    """Format an operand for the display"""
    value = round_display(value)
    if value == 0:
        # avoid "-0"
        return "0"
    if abs(value) >= 1e21:
        return repr(value)
    # shortest repr digits, written out without exponent
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def is_plain_number(text):
    """True if text is a positional number that further digits can extend"""
    return PLAIN_NUMBER.fullmatch(text) is not None


def classify(value):
    """Return the ErrorKind for an out-of-range result, or None if it is displayable"""
    if not math.isfinite(value) or abs(value) > config.OVERFLOW_THRESHOLD:
        return ErrorKind.OVERFLOW
    if value != 0 and abs(value) < config.UNDERFLOW_THRESHOLD:
        return ErrorKind.UNDERFLOW
    return None
