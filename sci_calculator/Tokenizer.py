# Tokenizer.py
"""Converts a raw input string into a flat list of lexical tokens.

Single pass, no backtracking. Structural checks (paren balance, operand
placement) are left to the Parser; the Tokenizer only rejects characters and
words it cannot classify.
"""

import logging

from . import Tokens as T
from . import error as E

logger = logging.getLogger(__name__)

DIGITS = "0123456789"

# Multiplication and division each accept two glyphs
SYMBOLS = {
    "(": T.LEFT_PAREN,
    ")": T.RIGHT_PAREN,
    ",": T.COMMA,
    "+": T.OperatorSymbol(T.RawOperator.PLUS),
    "-": T.OperatorSymbol(T.RawOperator.MINUS),
    "*": T.OperatorSymbol(T.RawOperator.MULTIPLY),
    "×": T.OperatorSymbol(T.RawOperator.MULTIPLY),
    "/": T.OperatorSymbol(T.RawOperator.DIVIDE),
    "÷": T.OperatorSymbol(T.RawOperator.DIVIDE),
    "^": T.OperatorSymbol(T.RawOperator.POWER),
    "!": T.OperatorSymbol(T.RawOperator.FACTORIAL),
}

PI_GLYPH = "π"


def is_letter(char):
    return char.isascii() and char.isalpha()


def read_number(text, start):
    """Read a numeral starting at `start`; return (value, index after the numeral)."""
    b = start
    has_dot = False  # Only one dot allowed in a numeric literal
    while b < len(text) and (text[b] in DIGITS or text[b] == "."):
        if text[b] == ".":
            if has_dot:
                raise E.ExpressionSyntaxError("Double decimal point.", code="3008")
            has_dot = True
        b += 1

    numeral = text[start:b]
    if numeral == ".":
        raise E.ExpressionSyntaxError(f"Malformed number: {numeral}", code="3011")
    return float(numeral), b


def classify_word(word):
    normalized = word.lower()
    if normalized == "ans":
        return T.ANSWER_REF
    if normalized == "pi":
        return T.ConstantToken(T.ConstantId.PI)
    if normalized == "e":
        return T.ConstantToken(T.ConstantId.E)

    function = T.FunctionId.from_name(normalized)
    if function is None:
        raise E.ExpressionSyntaxError(f"Unknown identifier: {word}", code="3001")
    return T.FunctionName(function)


def tokenize(text):
    """Scan `text` left to right and return its lexical tokens.

    Raises ExpressionSyntaxError on a malformed numeral, an unknown word or an
    unexpected character.
    """
    tokens = []
    b = 0

    while b < len(text):
        current_char = text[b]

        # --- Whitespace (ignored) ---
        if current_char.isspace():
            b += 1

        # --- Numbers: digits and decimal separator ---
        elif current_char in DIGITS or current_char == ".":
            value, b = read_number(text, b)
            tokens.append(T.NumberToken(value))

        # --- Constant π ---
        elif current_char == PI_GLYPH:
            tokens.append(T.ConstantToken(T.ConstantId.PI))
            b += 1

        # --- Parentheses, comma, operators ---
        elif current_char in SYMBOLS:
            tokens.append(SYMBOLS[current_char])
            b += 1

        # --- Words: ans, constants, function names ---
        elif is_letter(current_char):
            start = b
            while b < len(text) and is_letter(text[b]):
                b += 1
            tokens.append(classify_word(text[start:b]))

        else:
            raise E.ExpressionSyntaxError(f"Unexpected character: {current_char!r}", code="3000")

    logger.debug("Tokens: %s", tokens)
    return tokens
