# ScientificEngine
"""Scientific functions: trigonometry, logarithms, roots and exp.

Each function validates its domain and raises MathDomainError instead of
letting math raise ValueError or return inf/nan.
"""

import math
from enum import Enum

from . import Tokens as T
from . import error as E

ZERO_EPSILON = 1e-12


class AngleMode(Enum):
    DEG = "DEG"
    RAD = "RAD"


def to_radians(angle_mode, value):
    if angle_mode is AngleMode.DEG:
        return math.radians(value)
    return value


def from_radians(angle_mode, value):
    if angle_mode is AngleMode.DEG:
        return math.degrees(value)
    return value


def isSCT(function, number, angle_mode):  # Sin / Cos / Tan
    clean_number = to_radians(angle_mode, number)

    if function is T.FunctionId.SIN:
        return math.sin(clean_number)
    elif function is T.FunctionId.COS:
        return math.cos(clean_number)
    else:
        # tan(90°), tan(270°), ... : cos is zero up to float error
        if abs(math.cos(clean_number)) < ZERO_EPSILON:
            raise E.MathDomainError(f"tan({number}) is undefined.", code="2005")
        return math.tan(clean_number)


def isArcSCT(function, number, angle_mode):  # asin / acos / atan
    if function is T.FunctionId.ATAN:
        return from_radians(angle_mode, math.atan(number))

    if number < -1 or number > 1:
        raise E.MathDomainError(f"{function.value}({number}) is outside [-1, 1].", code="2004")
    if function is T.FunctionId.ASIN:
        return from_radians(angle_mode, math.asin(number))
    return from_radians(angle_mode, math.acos(number))


def isLog(number, base=None):
    if number <= 0:
        raise E.MathDomainError(f"Logarithm of {number}.", code="2001")

    if base is None:
        return math.log10(number)
    if base <= 0 or abs(base - 1.0) < ZERO_EPSILON:
        raise E.MathDomainError(f"Invalid Number or Base in Logarithm: {base}", code="2002")
    return math.log(number) / math.log(base)


def isLn(number):
    if number <= 0:
        raise E.MathDomainError(f"Logarithm of {number}.", code="2001")
    return math.log(number)


def isRoot(number):
    if number < 0:
        raise E.MathDomainError(f"Square root of {number}.", code="2003")
    return math.sqrt(number)


def isE(number):
    try:
        return math.exp(number)
    except OverflowError:
        raise E.MathDomainError(f"exp({number}) is too large.", code="3026")


def unknown_function(function, args, angle_mode):
    """Apply `function` to `args` (already in left-to-right order)."""
    if function in (T.FunctionId.SIN, T.FunctionId.COS, T.FunctionId.TAN):
        ergebnis = isSCT(function, args[0], angle_mode)

    elif function in (T.FunctionId.ASIN, T.FunctionId.ACOS, T.FunctionId.ATAN):
        ergebnis = isArcSCT(function, args[0], angle_mode)

    elif function is T.FunctionId.LOG:
        ergebnis = isLog(*args)

    elif function is T.FunctionId.LN:
        ergebnis = isLn(args[0])

    elif function is T.FunctionId.SQRT:
        ergebnis = isRoot(args[0])

    elif function is T.FunctionId.ABS:
        ergebnis = abs(args[0])

    elif function is T.FunctionId.EXP:
        ergebnis = isE(args[0])

    else:
        raise E.ExpressionSyntaxError(f"Unknown function: {function}", code="2007")

    if not math.isfinite(ergebnis):
        raise E.MathDomainError(f"{function.value}{tuple(args)} is not finite.", code="2006")
    return ergebnis
