"""
Formatting utilities for DecCalc.

Two concerns live here: turning Decimal results into the text a tool returns,
and drawing results in the terminal for the `deccalc call` command.
"""

import json
import re
import shutil
from decimal import Context, Decimal
from enum import Enum
from typing import Any, List, Sequence, Union

from colorama import Fore, Style

from .config import ROUNDING, TO_EXP_NEG, TO_EXP_POS, TRANSCENDENTAL_PLACES

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


# --- Decimal text -----------------------------------------------------------


def format_decimal(value: Decimal) -> str:
    """Render a Decimal the way arbitrary-precision decimal libraries print it.

    Trailing zeros are dropped and negative zero prints as "0". Values whose
    decimal exponent lies in (TO_EXP_NEG, TO_EXP_POS) are written in plain
    notation; anything else uses "<mantissa>e<sign><exponent>", e.g. "2e+50".

    Args:
        value: The value to render.

    Returns:
        str: The textual form of value.
    """
    if value.is_nan():
        return "NaN"
    if value.is_infinite():
        return "-Infinity" if value.is_signed() else "Infinity"
    if value.is_zero():
        return "0"

    sign, digits, exponent = value.as_tuple()
    coefficient = "".join(str(d) for d in digits).rstrip("0")
    exponent += len(digits) - len(coefficient)
    sci_exponent = exponent + len(coefficient) - 1

    if sci_exponent <= TO_EXP_NEG or sci_exponent >= TO_EXP_POS:
        mantissa = coefficient[0]
        if len(coefficient) > 1:
            mantissa += "." + coefficient[1:]
        exp_sign = "+" if sci_exponent >= 0 else "-"
        text = f"{mantissa}e{exp_sign}{abs(sci_exponent)}"
    elif exponent >= 0:
        text = coefficient + "0" * exponent
    else:
        point = len(coefficient) + exponent
        if point > 0:
            text = coefficient[:point] + "." + coefficient[point:]
        else:
            text = "0." + "0" * -point + coefficient

    return "-" + text if sign else text


def round_places(value: Decimal, places: int = TRANSCENDENTAL_PLACES) -> Decimal:
    """Round value to a fixed number of fractional digits, half away from zero.

    The rounding is independent of the configured precision: the working
    context is sized to hold every integer digit plus the requested places.
    """
    if not value.is_finite() or value.as_tuple().exponent >= -places:
        return value
    digits = max(value.adjusted(), 0) + places + 2
    context = Context(prec=digits, rounding=ROUNDING)
    return context.quantize(value, Decimal(1).scaleb(-places))


def format_vector(results: Sequence[str]) -> str:
    """Render per-element results: a lone result as itself, otherwise a JSON array."""
    if len(results) == 1:
        return results[0]
    return json.dumps(list(results), ensure_ascii=False)


# --- Terminal output --------------------------------------------------------


class BoxStyle(Enum):
    """Colour scheme of a printed box."""

    RESULT = Fore.GREEN
    SENTINEL = Fore.YELLOW
    ERROR = Fore.RED
    INFO = Fore.CYAN


def get_terminal_width(default: int = 80) -> int:
    """Return the terminal width, capped to keep boxes readable."""
    return min(shutil.get_terminal_size((default, 24)).columns, 120)


def visible_length(text: str) -> int:
    """Length of text as displayed, ignoring ANSI colour codes."""
    return len(ANSI_ESCAPE.sub("", text))


def format_value(value: Any) -> str:
    """Format an argument value for display."""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def print_box(
    title: str,
    lines: Union[str, List[str]],
    style: BoxStyle = BoxStyle.INFO,
    width: int = None,
) -> None:
    """
    Print lines inside a coloured box.

    Args:
        title: Title shown in the top border
        lines: A string (split on newlines) or a list of lines
        style: Colour scheme
        width: Box width (defaults to the terminal width)
    """
    if isinstance(lines, str):
        lines = lines.splitlines() or [""]
    width = width or get_terminal_width()
    inner = width - 4
    color = style.value

    top_label = f" {title} "
    top = "┌─" + top_label + "─" * max(inner - visible_length(top_label), 0) + "─┐"
    print(color + top + Style.RESET_ALL)
    for line in lines:
        while True:
            chunk, line = line[:inner], line[inner:]
            padding = " " * (inner - visible_length(chunk))
            print(color + "│ " + Style.RESET_ALL + chunk + padding + color + " │" + Style.RESET_ALL)
            if not line:
                break
    print(color + "└" + "─" * (width - 2) + "┘" + Style.RESET_ALL)


def print_tool_result(tool_name: str, arguments: dict, content: str, style: BoxStyle) -> None:
    """Print a tool invocation and its result."""
    args_text = ", ".join(f"{k}={format_value(v)}" for k, v in arguments.items())
    print(f"{Fore.CYAN}-> {tool_name}({args_text}){Style.RESET_ALL}")
    print_box(tool_name, content, style=style)
