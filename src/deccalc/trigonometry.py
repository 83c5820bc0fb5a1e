"""
Trigonometric and hyperbolic functions over arrays of values.

Evaluation happens in a private mpmath context whose decimal precision is the
calculator's precision at call time. Results are then rounded to
TRANSCENDENTAL_PLACES fractional digits (asinh excepted) and returned as a
single string for one input or as a JSON array of strings otherwise.
"""

import logging
from decimal import Decimal
from typing import Callable, Iterable, Optional, Union

from mpmath import MPContext

from .arithmetic import Number, to_decimals
from .config import TAN_EPSILON, TAN_UNDEFINED_TEXT
from .domain import AngleMode
from .errors import DomainError, InvalidArgumentError
from .formatting import format_decimal, format_vector, round_places


def mp_context(precision: int) -> MPContext:
    """Create an mpmath context working at the given significant digits."""
    ctx = MPContext()
    ctx.dps = precision
    return ctx


def parse_mode(mode: Union[str, AngleMode]) -> AngleMode:
    try:
        return AngleMode(mode)
    except ValueError:
        raise InvalidArgumentError(
            f"Invalid angle mode: {mode!r}. Expected 'radians' or 'degrees'"
        )


def _to_text(ctx: MPContext, value, precision: int, rounded: bool = True) -> str:
    result = Decimal(ctx.nstr(value, precision))
    if rounded:
        result = round_places(result)
    return format_decimal(result)


def _evaluate(
    values: Iterable[Number],
    precision: int,
    function: str,
    domain_check: Optional[Callable[[Decimal], None]] = None,
    rounded: bool = True,
) -> str:
    """Apply the named mpmath function to every value.

    All values are domain-checked before anything is evaluated, so a bad
    element fails the whole call.
    """
    numbers = to_decimals(values)
    if domain_check:
        for number in numbers:
            domain_check(number)

    ctx = mp_context(precision)
    evaluate = getattr(ctx, function)
    results = [
        _to_text(ctx, evaluate(ctx.mpf(str(number))), precision, rounded)
        for number in numbers
    ]
    return format_vector(results)


def _angles(ctx: MPContext, angles: Iterable[Number], mode: AngleMode) -> list:
    radians = [ctx.mpf(str(angle)) for angle in to_decimals(angles)]
    if mode is AngleMode.DEGREES:
        radians = [angle * ctx.pi / 180 for angle in radians]
    return radians


def _circular(
    angles: Iterable[Number], mode: Union[str, AngleMode], precision: int, function: str
) -> str:
    mode = parse_mode(mode)
    ctx = mp_context(precision)
    evaluate = getattr(ctx, function)
    results = [
        _to_text(ctx, evaluate(angle), precision) for angle in _angles(ctx, angles, mode)
    ]
    return format_vector(results)


# --- Circular functions -----------------------------------------------------


def sin(angles: Iterable[Number], mode: Union[str, AngleMode], precision: int) -> str:
    return _circular(angles, mode, precision, "sin")


def cos(angles: Iterable[Number], mode: Union[str, AngleMode], precision: int) -> str:
    return _circular(angles, mode, precision, "cos")


def tan(angles: Iterable[Number], mode: Union[str, AngleMode], precision: int) -> str:
    """Tangent of each angle.

    Where |cos(angle)| < TAN_EPSILON the element is the text
    "Undefined (angle is π/2 + nπ)" instead of a number.
    """
    mode = parse_mode(mode)
    ctx = mp_context(precision)
    epsilon = ctx.mpf(str(TAN_EPSILON))

    results = []
    for angle in _angles(ctx, angles, mode):
        cosine = ctx.cos(angle)
        if abs(cosine) < epsilon:
            logging.debug(f"Tangent undefined, |cos| = {ctx.nstr(abs(cosine), 5)}")
            results.append(TAN_UNDEFINED_TEXT)
        else:
            results.append(_to_text(ctx, ctx.sin(angle) / cosine, precision))
    return format_vector(results)


# --- Inverse circular functions ---------------------------------------------


def _check_unit_interval(value: Decimal) -> None:
    if not -1 <= value <= 1:
        raise DomainError("Domain error: input value must be between -1 and 1")


def asin(values: Iterable[Number], precision: int) -> str:
    return _evaluate(values, precision, "asin", _check_unit_interval)


def acos(values: Iterable[Number], precision: int) -> str:
    return _evaluate(values, precision, "acos", _check_unit_interval)


def atan(values: Iterable[Number], precision: int) -> str:
    return _evaluate(values, precision, "atan")


# --- Hyperbolic functions ---------------------------------------------------


def sinh(values: Iterable[Number], precision: int) -> str:
    return _evaluate(values, precision, "sinh")


def cosh(values: Iterable[Number], precision: int) -> str:
    return _evaluate(values, precision, "cosh")


def tanh(values: Iterable[Number], precision: int) -> str:
    return _evaluate(values, precision, "tanh")


def asinh(values: Iterable[Number], precision: int) -> str:
    """Inverse hyperbolic sine at full precision, without fixed-place rounding."""
    return _evaluate(values, precision, "asinh", rounded=False)


def _check_acosh_domain(value: Decimal) -> None:
    if value < 1:
        raise DomainError(
            "Domain error: input value must be greater than or equal to 1"
        )


def acosh(values: Iterable[Number], precision: int) -> str:
    return _evaluate(values, precision, "acosh", _check_acosh_domain)


def _check_atanh_domain(value: Decimal) -> None:
    if not -1 < value < 1:
        raise DomainError(
            "Domain error: input value must be between -1 and 1 (exclusive)"
        )


def atanh(values: Iterable[Number], precision: int) -> str:
    return _evaluate(values, precision, "atanh", _check_atanh_domain)
