# input_rules.py
"""Editing rules for the expression text built up from key presses."""

import string

START_OPERATORS = ["+", "÷", "×", "^", "!"]

FUNCTION_TOKENS = [
    "sin(",
    "cos(",
    "tan(",
    "asin(",
    "acos(",
    "atan(",
    "ln(",
    "log(",
    "sqrt(",
    "abs(",
    "exp(",
]

CONSTANT_TOKENS = ["ANS", "π", "pi", "e"]

# Longest first, so "asin(" is stripped before "sin(" could match
_STRIPPABLE = sorted(FUNCTION_TOKENS + CONSTANT_TOKENS + START_OPERATORS + [")"],
                     key=len, reverse=True)

# Keyboard characters accepted as direct input, '*' and '/' shown as on the keypad
TYPED_CHARACTERS = "0123456789.+-*/^!(),π" + string.ascii_letters
TYPED_ALIASES = {"*": "×", "/": "÷"}


def typed_key_to_input(text):
    """Map one typed character to expression text, or None if it is not accepted."""
    if len(text) != 1 or text not in TYPED_CHARACTERS:
        return None
    return TYPED_ALIASES.get(text, text)


def apply_input_rules(expression, text, ans_literal="ANS"):
    """Append `text` to `expression`.

    On an empty expression an operator that needs a left operand continues
    from the previous answer: "+" becomes "ANS+".
    """
    if not expression.strip():
        if text in START_OPERATORS:
            return ans_literal + text
        return text

    return expression + text


def smart_backspace(expression, ans_literal="ANS"):
    """Remove the last token of `expression` rather than its last character."""
    if not expression:
        return expression

    # Drop an auto-filled "ANS)" payload after a function opener first
    auto_ans_suffix = ans_literal + ")"
    if expression.endswith(auto_ans_suffix):
        without_payload = expression[:-len(auto_ans_suffix)]
        if any(without_payload.endswith(token) for token in FUNCTION_TOKENS):
            return without_payload

    for token in _STRIPPABLE:
        if expression.endswith(token):
            return expression[:-len(token)]

    return expression[:-1]
