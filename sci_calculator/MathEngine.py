# MathEngine.py
"""
Core calculation engine for the Scientific Calculator.

Pipeline
--------
1) Tokenizer: converts a raw input string into a flat list of tokens.
2) Parser: shunting-yard conversion into postfix (RPN) order.
3) Evaluator: replays the postfix list on a value stack.
4) Formatter: renders the result with 12 significant digits.

evaluate() never raises for bad input: the first failure of any stage is
returned as an Error outcome and later stages are skipped.
"""

import logging
from dataclasses import dataclass

from . import Evaluator
from . import Formatter
from . import Parser
from . import Tokenizer
from . import error as E
from .ScientificEngine import AngleMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Success:
    value: float
    formatted: str


@dataclass(frozen=True)
class Error:
    kind: E.ErrorKind
    code: str = "9999"
    message: str = ""


def evaluate(expression, angle_mode=AngleMode.DEG, last_answer=0.0):
    """Main API: tokenize → parse → evaluate → format.

    Returns Success(value, formatted) or Error(kind, code, message).
    """
    try:
        tokens = Tokenizer.tokenize(expression)
        postfix = Parser.to_postfix(tokens)
        value = Evaluator.evaluate_postfix(postfix, angle_mode, last_answer)
    except E.CalculatorError as e:
        logger.debug("Error %s in %r: %s", e.code, expression, e.message)
        return Error(e.kind, e.code, e.message)

    return Success(value, Formatter.format_value(value))
