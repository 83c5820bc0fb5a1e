"""
Configuration for DecCalc.

Defaults live here as module constants; a few of them can be overridden from
the environment through get_settings(), and the CLI overrides those in turn.
"""

import os
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

SERVER_NAME = "Calculator"

# Significant digits used by arithmetic until set_precision changes it
DEFAULT_PRECISION = 20

# Largest precision accepted by set_precision and DECCALC_PRECISION
MAX_PRECISION = 1000

# Decimal arithmetic rounds half away from zero
ROUNDING = ROUND_HALF_UP

# Transcendental results are rounded to this many fractional digits
TRANSCENDENTAL_PLACES = 15

# |cos(angle)| below this makes the tangent undefined
TAN_EPSILON = Decimal("1e-15")

# Decimal exponents outside (TO_EXP_NEG, TO_EXP_POS) are shown in e-notation
TO_EXP_NEG = -7
TO_EXP_POS = 21

DEFAULT_LOG_DIR = "logs"

# Sentinel texts returned as successful results
DIVIDE_BY_ZERO_TEXT = "Cannot divide by zero"
TAN_UNDEFINED_TEXT = "Undefined (angle is π/2 + nπ)"


@dataclass
class Settings:
    """Resolved runtime settings."""

    precision: int = DEFAULT_PRECISION
    log_dir: str = DEFAULT_LOG_DIR


def _parse_precision(raw: str) -> int:
    try:
        precision = int(raw)
    except ValueError:
        raise ValueError(f"Invalid DECCALC_PRECISION: {raw!r} is not an integer")
    if not 1 <= precision <= MAX_PRECISION:
        raise ValueError(
            f"Invalid DECCALC_PRECISION: {precision} must be between 1 and {MAX_PRECISION}"
        )
    return precision


def get_settings(
    precision: Optional[int] = None,
    log_dir: Optional[str] = None,
) -> Settings:
    """
    Resolve settings from explicit overrides, then environment, then defaults.

    Args:
        precision: Initial precision (overrides DECCALC_PRECISION)
        log_dir: Log directory (overrides DECCALC_LOG_DIR)

    Returns:
        Settings instance

    Raises:
        ValueError: If an environment value is malformed
    """
    if precision is None:
        raw = os.getenv("DECCALC_PRECISION", "").strip()
        precision = _parse_precision(raw) if raw else DEFAULT_PRECISION
    elif not 1 <= precision <= MAX_PRECISION:
        raise ValueError(
            f"Invalid precision: {precision} must be between 1 and {MAX_PRECISION}"
        )

    if log_dir is None:
        log_dir = os.getenv("DECCALC_LOG_DIR", "").strip() or DEFAULT_LOG_DIR

    return Settings(precision=precision, log_dir=log_dir)
