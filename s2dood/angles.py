"""
Angle and number formatting helpers.

SC2 stores doodad orientation in radians with the opposite winding and a half
turn offset from what triggers expect. radians_to_degrees() reproduces the
editor's conversion exactly; do not replace it with math.degrees().
"""

import math
import re
from decimal import Decimal

from .constants import ANGLE_PRECISION

# Longest numeric prefix the editor accepts, e.g. "1.5e3" in "1.5e3px"
_NUMERIC_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_float(text: str) -> float:
    """
    Read a number the way the editor's own tooling does.

    Leading whitespace is skipped and the longest numeric prefix is used
    ("12.5abc" -> 12.5). Text with no numeric prefix reads as NaN, so a bad
    attribute never stops a conversion.
    """
    match = _NUMERIC_PREFIX.match(text.lstrip())
    if match is None:
        return math.nan
    return float(match.group(0).replace("Infinity", "inf"))


def _non_finite(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def wrap_angle(angle: float) -> float:
    """Wrap an angle in degrees into (-180, 180]. Non-finite angles wrap to NaN."""
    if not math.isfinite(angle):
        return math.nan
    angle = math.fmod(angle, 360.0)
    # Positive remainder, so that 0 <= angle < 360
    angle = (angle + 360.0) % 360.0
    # Minimum absolute value residue, so that -180 < angle <= 180
    if angle > 180.0:
        angle -= 360.0
    return angle


def radians_to_degrees(angle: float) -> float:
    """Convert an editor angle in radians to wrapped trigger degrees."""
    return wrap_angle((angle - math.pi) / math.pi * -180.0 + 180.0)


def to_precision(value: float, digits: int = ANGLE_PRECISION) -> str:
    """
    Format a number with a fixed count of significant digits.

    Matches ECMAScript Number.prototype.toPrecision: fixed notation unless the
    decimal exponent is below -6 or at least ``digits``, in which case the
    result is exponential (``1.2345678e-7``). Zero keeps its trailing zeros.

    Args:
        value: Number to format
        digits: Significant digits (1-100)

    Returns:
        Formatted text
    """
    if not math.isfinite(value):
        return _non_finite(value)
    if value == 0:
        return "0" if digits == 1 else "0." + "0" * (digits - 1)

    # Let the e-format do the rounding, then read back the exponent
    mantissa, exponent_text = f"{value:.{digits - 1}e}".split("e")
    exponent = int(exponent_text)

    if exponent < -6 or exponent >= digits:
        sign = "+" if exponent >= 0 else "-"
        return f"{mantissa}e{sign}{abs(exponent)}"

    return f"{value:.{digits - 1 - exponent}f}"


def format_number(value: float) -> str:
    """
    Format a float with the shortest text that reads back to it.

    Integral values drop the fractional part (``102`` rather than ``102.0``).
    """
    if not math.isfinite(value):
        return _non_finite(value)
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if "e" not in text:
        return text

    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), "f")

    mantissa, exponent_text = text.split("e")
    exponent = int(exponent_text)
    sign = "+" if exponent >= 0 else "-"
    return f"{mantissa}e{sign}{abs(exponent)}"
