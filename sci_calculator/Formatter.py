# Formatter.py
"""Renders a result as a canonical, locale-independent string.

Rounding works on the exact binary value of the float via Decimal, with a
fixed 12-significant-digit context, so the output never depends on the
global Decimal context or the current locale.
"""

import math
from decimal import Decimal, Context, ROUND_HALF_UP

SIGNIFICANT_DIGITS = 12
SCIENTIFIC_UPPER = 1e9
SCIENTIFIC_LOWER = 1e-6
ZERO_SNAP = 1e-12
ERROR_TEXT = "Error"

_context = Context(prec=SIGNIFICANT_DIGITS, rounding=ROUND_HALF_UP)


def round_significant(value):
    """Round a float to 12 significant digits, trailing zeros stripped."""
    return _context.plus(Decimal(value)).normalize(_context)


def plain_string(number):
    # 'f' never switches to exponent notation, unlike str(Decimal)
    return format(number, "f")


def format_value(value):
    if not math.isfinite(value):
        return ERROR_TEXT

    adjusted = 0.0 if abs(value) < ZERO_SNAP else value
    abs_value = abs(adjusted)
    if abs_value == 0.0:
        return "0"

    if abs_value >= SCIENTIFIC_UPPER or abs_value < SCIENTIFIC_LOWER:
        exponent = math.floor(math.log10(abs_value))
        mantissa = round_significant(adjusted / 10.0 ** exponent)

        # rounding can carry the mantissa to 10; log10 can be one off near powers of ten
        if abs(mantissa) >= 10:
            mantissa = _context.divide(mantissa, Decimal(10)).normalize(_context)
            exponent += 1
        elif abs(mantissa) < 1:
            mantissa = _context.multiply(mantissa, Decimal(10)).normalize(_context)
            exponent -= 1

        return f"{plain_string(mantissa)}e{exponent}"

    return plain_string(round_significant(adjusted))
