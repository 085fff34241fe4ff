# Evaluator.py
"""Executes a postfix token list on an explicit value stack."""

import math

from . import ScientificEngine
from . import Tokens as T
from . import error as E

ZERO_EPSILON = ScientificEngine.ZERO_EPSILON
MAX_FACTORIAL = 170  # 171! overflows a double


def factorial(value):
    if not math.isfinite(value) or value < 0:
        raise E.MathDomainError(f"Factorial of {value}.", code="3017")
    rounded = round(value)
    if abs(value - rounded) > ZERO_EPSILON:
        raise E.MathDomainError(f"Factorial of non-integer {value}.", code="3017")
    if rounded > MAX_FACTORIAL:
        raise E.MathDomainError(f"Factorial of {value} is too large.", code="3026")

    result = 1.0
    for i in range(2, rounded + 1):
        result *= i
        if not math.isfinite(result):
            raise E.MathDomainError(f"Factorial of {value} is too large.", code="3026")
    return result


def apply_unary(operator, operand):
    if operator.kind is T.OperatorKind.UNARY_MINUS:
        return -operand
    if operator.kind is T.OperatorKind.FACTORIAL:
        return factorial(operand)
    raise E.ExpressionSyntaxError(f"Unknown operator: {operator.kind}", code="3004")


def apply_binary(operator, left, right):
    kind = operator.kind

    if kind is T.OperatorKind.ADD:
        result = left + right
    elif kind is T.OperatorKind.SUBTRACT:
        result = left - right
    elif kind is T.OperatorKind.MULTIPLY:
        result = left * right
    elif kind is T.OperatorKind.DIVIDE:
        if abs(right) < ZERO_EPSILON:
            raise E.MathDomainError("Division by zero", code="3003")
        result = left / right
    elif kind is T.OperatorKind.POWER:
        try:
            result = math.pow(left, right)
        except OverflowError:
            raise E.MathDomainError(f"{left}^{right} is too large.", code="3026")
        except ValueError:
            # negative base with fractional exponent, or 0 to a negative power
            raise E.MathDomainError(f"{left}^{right} is undefined.", code="2006")
    else:
        raise E.ExpressionSyntaxError(f"Unknown operator: {kind}", code="3004")

    if not math.isfinite(result):
        raise E.MathDomainError("Number too big.", code="3026")
    return result


def evaluate_postfix(tokens, angle_mode, last_answer):
    """Replay `tokens` and return the single remaining value.

    Binary operators pop right then left. Function arguments are restored to
    their written order before the call.
    """
    stack = []

    for token in tokens:
        if isinstance(token, T.RpnNumber):
            stack.append(token.value)

        elif isinstance(token, T.RpnAnswer):
            stack.append(last_answer)

        elif isinstance(token, T.RpnOperator):
            operator = token.operator
            if len(stack) < operator.arity:
                raise E.ExpressionSyntaxError("Missing Number.", code="3015")
            if operator.arity == 1:
                stack.append(apply_unary(operator, stack.pop()))
            else:
                right = stack.pop()
                left = stack.pop()
                stack.append(apply_binary(operator, left, right))

        elif isinstance(token, T.RpnFunctionCall):
            if len(stack) < token.arg_count:
                raise E.ExpressionSyntaxError("Missing Number.", code="3015")
            args = stack[len(stack) - token.arg_count:]
            del stack[len(stack) - token.arg_count:]
            stack.append(ScientificEngine.unknown_function(token.function, args, angle_mode))

        else:
            raise E.ExpressionSyntaxError(f"Unexpected Token: {token}", code="3011")

    if len(stack) != 1:
        raise E.ExpressionSyntaxError(f"{len(stack)} values left on the stack.", code="3016")

    result = stack[0]
    if not math.isfinite(result):
        raise E.MathDomainError("Number too big.", code="3026")
    return result
