# Parser.py
"""Shunting-yard conversion of lexical tokens into postfix (RPN) order.

Scan state
----------
- markers:      stack of LeftParenMarker / OperatorMarker / FunctionMarker
- paren_stack:  one ParenContext per open '(' (function call or grouping)
- expecting_operand:      True when the next token must start an operand
- pending_function_paren: True right after a function name, until its '('

Every sequence returned by to_postfix() reduces to exactly one value when
replayed on a stack machine; anything else is rejected with
ExpressionSyntaxError.
"""

import logging
from dataclasses import dataclass

from . import Tokens as T
from . import error as E

logger = logging.getLogger(__name__)


# -----------------------------
# Marker stack entries
# -----------------------------

@dataclass(frozen=True)
class LeftParenMarker:
    pass


@dataclass(frozen=True)
class OperatorMarker:
    operator: T.Operator


@dataclass(frozen=True)
class FunctionMarker:
    function: T.FunctionId


@dataclass
class ParenContext:
    function: T.FunctionId = None
    arg_count: int = 1  # the first argument needs no comma

    @property
    def is_function(self):
        return self.function is not None


LEFT_PAREN_MARKER = LeftParenMarker()


def _syntax(message, code):
    return E.ExpressionSyntaxError(message, code=code)


def _pop_operators_to_paren(markers, output):
    """Emit operators down to (not including) the nearest left paren.

    Returns False when no left paren is on the stack.
    """
    while markers:
        top = markers[-1]
        if isinstance(top, LeftParenMarker):
            return True
        if isinstance(top, FunctionMarker):
            raise _syntax("Function without '('.", "3010")
        output.append(T.RpnOperator(markers.pop().operator))
    return False


def to_postfix(tokens):
    """Convert a lexical token list into a postfix token list."""
    output = []
    markers = []
    paren_stack = []
    expecting_operand = True
    pending_function_paren = False

    for token in tokens:
        if pending_function_paren and not isinstance(token, T.LeftParen):
            raise _syntax("Function name must be followed by '('.", "3012")

        # --- Operands ---
        if isinstance(token, (T.NumberToken, T.ConstantToken, T.AnswerRef)):
            if not expecting_operand:
                raise _syntax(f"Unexpected Token: {token}", "3011")
            if isinstance(token, T.NumberToken):
                output.append(T.RpnNumber(token.value))
            elif isinstance(token, T.ConstantToken):
                output.append(T.RpnNumber(token.constant.value))
            else:
                output.append(T.RPN_ANSWER)
            expecting_operand = False

        # --- Function names ---
        elif isinstance(token, T.FunctionName):
            if not expecting_operand:
                raise _syntax(f"Unexpected Token: {token.function.value}", "3011")
            markers.append(FunctionMarker(token.function))
            pending_function_paren = True

        # --- Opening parenthesis ---
        elif isinstance(token, T.LeftParen):
            if not expecting_operand:
                raise _syntax("Unexpected Token: (", "3011")
            top = markers[-1] if markers else None
            if pending_function_paren and isinstance(top, FunctionMarker):
                paren_stack.append(ParenContext(function=top.function))
            else:
                paren_stack.append(ParenContext())
            markers.append(LEFT_PAREN_MARKER)
            expecting_operand = True
            pending_function_paren = False

        # --- Closing parenthesis ---
        elif isinstance(token, T.RightParen):
            if expecting_operand:
                raise _syntax("Missing Number before ')'.", "3015")
            if not _pop_operators_to_paren(markers, output):
                raise _syntax("Missing '('.", "3010")
            markers.pop()
            context = paren_stack.pop()

            if context.is_function:
                function_marker = markers.pop()
                if not context.function.accepts(context.arg_count):
                    raise _syntax(
                        f"Wrong number of arguments for function: {context.function.value}"
                        f" ({context.arg_count})", "3013")
                output.append(T.RpnFunctionCall(function_marker.function, context.arg_count))
            expecting_operand = False

        # --- Argument separator ---
        elif isinstance(token, T.Comma):
            if not paren_stack or not paren_stack[-1].is_function:
                raise _syntax("',' outside of a function call.", "3014")
            if expecting_operand:
                raise _syntax("Missing Number before ','.", "3015")
            _pop_operators_to_paren(markers, output)
            paren_stack[-1].arg_count += 1
            expecting_operand = True

        # --- Operators ---
        elif isinstance(token, T.OperatorSymbol):
            operator = T.Operator.from_raw(
                token.symbol,
                is_prefix=expecting_operand and token.symbol is not T.RawOperator.FACTORIAL)
            if operator is None:
                raise _syntax(f"Operator cannot be used here: {token.symbol.value}", "3004")

            if operator.position is T.OperatorPosition.PREFIX:
                if not expecting_operand:
                    raise _syntax(f"Operator cannot be used here: {token.symbol.value}", "3004")
            elif expecting_operand:
                raise _syntax(f"Missing Number before {token.symbol.value}", "3015")

            # A prefix operator has no left operand, so nothing on the stack is complete yet.
            # Popping here would turn "2^-3" into a stack underflow instead of 2^(-3).
            if operator.position is not T.OperatorPosition.PREFIX:
                while markers and isinstance(markers[-1], OperatorMarker) \
                        and operator.pops(markers[-1].operator):
                    output.append(T.RpnOperator(markers.pop().operator))

            markers.append(OperatorMarker(operator))
            expecting_operand = operator.position is not T.OperatorPosition.POSTFIX

        else:
            raise _syntax(f"Unexpected Token: {token}", "3011")

    # --- End of input ---
    if pending_function_paren:
        raise _syntax("Function name must be followed by '('.", "3012")
    if expecting_operand:
        raise _syntax("Missing Number.", "3015")

    while markers:
        top = markers.pop()
        if isinstance(top, OperatorMarker):
            output.append(T.RpnOperator(top.operator))
        else:
            raise _syntax("Missing ')'.", "3009")

    logger.debug("Postfix: %s", output)
    return output
