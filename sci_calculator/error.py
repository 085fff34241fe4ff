from enum import Enum


class ErrorKind(Enum):
    SYNTAX = "syntax"
    MATH = "math"


class CalculatorError(Exception):
    kind = None

    def __init__(self, message, code="9999"):
        super().__init__(message)
        self.message = message
        self.code = code


class ExpressionSyntaxError(CalculatorError):
    kind = ErrorKind.SYNTAX


class MathDomainError(CalculatorError):
    kind = ErrorKind.MATH


def describe(code):
    """Return the table message for an error code."""
    return ERROR_MESSAGES.get(code, ERROR_MESSAGES["9999"])


Error_Dictionary = {

    "2": "Scientific Calculation Error",
    "3": "Calculator Error",
    "4": "UI Error",
    "5": "Configuration Error",

}

# Error codes are structured in:
# 1. Digit: Main Error
# 2. Digit: Category
# 3. and 4. Digit: Error Number


ERROR_MESSAGES = {
    "2001": "Logarithm of a non-positive number.",
    "2002": "Invalid base in logarithm.",
    "2003": "Square root of a negative number.",
    "2004": "asin/acos argument outside [-1, 1].",
    "2005": "Tangent is undefined for this angle.",
    "2006": "Function result is not a finite number.",
    "2007": "Unknown function: ",  # + function

    "3000": "Unexpected character: ",  # + character
    "3001": "Unknown identifier: ",  # + identifier
    "3003": "Division by Zero",
    "3004": "Operator cannot be used here: ",  # + operator
    "3008": "More than one '.' in one number.",
    "3009": "Missing ')'. ",
    "3010": "Missing '('. ",
    "3011": "Unexpected Token: ",  # + token
    "3012": "Function name must be followed by '('.",
    "3013": "Wrong number of arguments for function: ",  # + function
    "3014": "',' outside of a function call.",
    "3015": "Missing Number.",
    "3016": "Invalid expression: stack did not reduce to one value.",
    "3017": "Invalid factorial operand.",
    "3026": "Number too big.",

    "4002": "Calculation already Running!",

    "5001": "Settings could not be saved.",
    "5002": "History could not be saved.",

    "9999": "Unexpected Error: ",  # + error
}
