# Tokens.py
"""Token and operator types shared by the tokenizer, parser and evaluator.

Two token families exist:
- Lexical tokens, produced by the Tokenizer in reading order.
- Postfix (RPN) tokens, produced by the Parser and executed by the Evaluator.

Every token is an immutable value object.
"""

import math
from dataclasses import dataclass
from enum import Enum


# -----------------------------
# Operators
# -----------------------------

class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"


class OperatorPosition(Enum):
    PREFIX = "prefix"
    INFIX = "infix"
    POSTFIX = "postfix"


class RawOperator(Enum):
    """Operator glyph as read from the input, before unary/binary resolution."""
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"
    FACTORIAL = "!"


class OperatorKind(Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    UNARY_MINUS = "unary_minus"
    POWER = "power"
    FACTORIAL = "factorial"


@dataclass(frozen=True)
class Operator:
    kind: OperatorKind
    precedence: int
    associativity: Associativity
    position: OperatorPosition
    arity: int

    @classmethod
    def of(cls, kind):
        return OPERATORS[kind]

    @classmethod
    def from_raw(cls, raw, is_prefix):
        """Resolve a raw glyph to an operator, or None if it has no such form.

        Only '-' has a prefix form; '!' is postfix and never prefix.
        """
        if is_prefix:
            if raw is RawOperator.MINUS:
                return OPERATORS[OperatorKind.UNARY_MINUS]
            return None
        return OPERATORS[_BINARY_OR_POSTFIX[raw]]

    def pops(self, other):
        """True if `other` (on the marker stack) must be emitted before this operator is pushed."""
        if self.associativity is Associativity.LEFT:
            return self.precedence <= other.precedence
        return self.precedence < other.precedence


OPERATORS = {
    OperatorKind.ADD: Operator(OperatorKind.ADD, 1, Associativity.LEFT, OperatorPosition.INFIX, 2),
    OperatorKind.SUBTRACT: Operator(OperatorKind.SUBTRACT, 1, Associativity.LEFT, OperatorPosition.INFIX, 2),
    OperatorKind.MULTIPLY: Operator(OperatorKind.MULTIPLY, 2, Associativity.LEFT, OperatorPosition.INFIX, 2),
    OperatorKind.DIVIDE: Operator(OperatorKind.DIVIDE, 2, Associativity.LEFT, OperatorPosition.INFIX, 2),
    OperatorKind.UNARY_MINUS: Operator(OperatorKind.UNARY_MINUS, 3, Associativity.RIGHT, OperatorPosition.PREFIX, 1),
    OperatorKind.POWER: Operator(OperatorKind.POWER, 4, Associativity.RIGHT, OperatorPosition.INFIX, 2),
    OperatorKind.FACTORIAL: Operator(OperatorKind.FACTORIAL, 5, Associativity.LEFT, OperatorPosition.POSTFIX, 1),
}

_BINARY_OR_POSTFIX = {
    RawOperator.PLUS: OperatorKind.ADD,
    RawOperator.MINUS: OperatorKind.SUBTRACT,
    RawOperator.MULTIPLY: OperatorKind.MULTIPLY,
    RawOperator.DIVIDE: OperatorKind.DIVIDE,
    RawOperator.POWER: OperatorKind.POWER,
    RawOperator.FACTORIAL: OperatorKind.FACTORIAL,
}


# -----------------------------
# Functions and constants
# -----------------------------

class FunctionId(Enum):
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    LN = "ln"
    LOG = "log"
    SQRT = "sqrt"
    ABS = "abs"
    EXP = "exp"

    @property
    def min_args(self):
        return 1

    @property
    def max_args(self):
        # log(x) is base 10, log(x, base) is any base
        return 2 if self is FunctionId.LOG else 1

    def accepts(self, arg_count):
        return self.min_args <= arg_count <= self.max_args

    @classmethod
    def from_name(cls, name):
        try:
            return cls(name)
        except ValueError:
            return None


class ConstantId(Enum):
    PI = math.pi
    E = math.e


# -----------------------------
# Lexical tokens (Tokenizer output)
# -----------------------------

@dataclass(frozen=True)
class NumberToken:
    value: float


@dataclass(frozen=True)
class OperatorSymbol:
    symbol: RawOperator


@dataclass(frozen=True)
class FunctionName:
    function: FunctionId


@dataclass(frozen=True)
class ConstantToken:
    constant: ConstantId


@dataclass(frozen=True)
class AnswerRef:
    pass


@dataclass(frozen=True)
class LeftParen:
    pass


@dataclass(frozen=True)
class RightParen:
    pass


@dataclass(frozen=True)
class Comma:
    pass


ANSWER_REF = AnswerRef()
LEFT_PAREN = LeftParen()
RIGHT_PAREN = RightParen()
COMMA = Comma()


# -----------------------------
# Postfix tokens (Parser output)
# -----------------------------

@dataclass(frozen=True)
class RpnNumber:
    value: float


@dataclass(frozen=True)
class RpnAnswer:
    pass


@dataclass(frozen=True)
class RpnOperator:
    operator: Operator


@dataclass(frozen=True)
class RpnFunctionCall:
    function: FunctionId
    arg_count: int


RPN_ANSWER = RpnAnswer()
