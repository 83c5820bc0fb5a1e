"""
Basic arithmetic over arrays of numbers.

Every operation takes the precision it should run at and builds its own
decimal context, so nothing here reads or mutates decimal.getcontext().
Results keep the full configured precision; no post-rounding is applied.
"""

import logging
from decimal import Context, Decimal, InvalidOperation, MAX_EMAX, MIN_EMIN
from typing import Iterable, List, Union

from .config import DIVIDE_BY_ZERO_TEXT, ROUNDING
from .errors import InvalidArgumentError
from .formatting import format_decimal

Number = Union[int, float, str, Decimal]


def decimal_context(precision: int) -> Context:
    """Create a decimal context with the given significant digits."""
    return Context(prec=precision, rounding=ROUNDING, Emax=MAX_EMAX, Emin=MIN_EMIN)


def to_decimal(value: Number) -> Decimal:
    """Convert a JSON number to Decimal through its shortest repr.

    Floats go through repr() so 0.1 becomes Decimal("0.1") rather than the
    exact binary expansion of the float.
    """
    value = _parse_number(value)
    if not value.is_finite():
        raise InvalidArgumentError(f"Expected a finite number, got {value}")
    return value


def _parse_number(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Expected a number, got {value!r}")
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation:
            raise InvalidArgumentError(f"Expected a number, got {value!r}")
    raise InvalidArgumentError(f"Expected a number, got {value!r}")


def to_decimals(values: Iterable[Number]) -> List[Decimal]:
    return [to_decimal(v) for v in values]


def add(numbers: Iterable[Number], precision: int) -> str:
    """Sum the numbers left to right, starting from 0."""
    context = decimal_context(precision)
    total = Decimal(0)
    for number in to_decimals(numbers):
        total = context.add(total, number)
    return format_decimal(total)


def subtract(numbers: Iterable[Number], precision: int) -> str:
    """Subtract every following number from the first.

    Raises:
        InvalidArgumentError: If no numbers are given.
    """
    values = to_decimals(numbers)
    if not values:
        raise InvalidArgumentError("Subtraction requires at least one number")
    context = decimal_context(precision)
    result = values[0]
    for number in values[1:]:
        result = context.subtract(result, number)
    return format_decimal(result)


def multiply(numbers: Iterable[Number], precision: int) -> str:
    """Multiply the numbers together, starting from 1."""
    context = decimal_context(precision)
    product = Decimal(1)
    for number in to_decimals(numbers):
        product = context.multiply(product, number)
    return format_decimal(product)


def divide(numbers: Iterable[Number], precision: int) -> str:
    """Divide the first number by each following number in turn.

    A zero anywhere among the divisors yields the "Cannot divide by zero"
    text as a normal result instead of an error.

    Raises:
        InvalidArgumentError: If fewer than two numbers are given.
    """
    values = to_decimals(numbers)
    if len(values) < 2:
        raise InvalidArgumentError("Division requires at least two numbers")

    numerator, divisors = values[0], values[1:]
    if any(d.is_zero() for d in divisors):
        logging.debug(f"Division by zero among {len(divisors)} divisor(s)")
        return DIVIDE_BY_ZERO_TEXT

    context = decimal_context(precision)
    result = numerator
    for divisor in divisors:
        result = context.divide(result, divisor)
    return format_decimal(result)
