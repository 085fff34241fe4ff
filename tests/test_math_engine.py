from concurrent.futures import ThreadPoolExecutor

import pytest

from sci_calculator import MathEngine
from sci_calculator.error import ERROR_MESSAGES, ErrorKind
from sci_calculator.ScientificEngine import AngleMode


def assert_success(expression, expected, angle_mode=AngleMode.DEG, last_answer=0.0):
    outcome = MathEngine.evaluate(expression, angle_mode, last_answer)
    assert isinstance(outcome, MathEngine.Success), f"{expression!r} gave {outcome}"
    assert outcome.formatted == expected


def assert_error(expression, kind, angle_mode=AngleMode.DEG, last_answer=0.0):
    outcome = MathEngine.evaluate(expression, angle_mode, last_answer)
    assert isinstance(outcome, MathEngine.Error), f"{expression!r} gave {outcome}"
    assert outcome.kind is kind


@pytest.mark.parametrize(
    ("expression", "expected"),
    [
        ("1+2*3", "7"),
        ("(1+2)*3", "9"),
        ("2^3^2", "512"),
        ("-3^2", "-9"),
        ("(-3)^2", "9"),
        ("2^-3", "0.125"),
        ("--5", "5"),
        ("2*-3", "-6"),
        ("5!", "120"),
        ("0!", "1"),
        ("3!!", "720"),
        ("sin(30)", "0.5"),
        ("cos(0)", "1"),
        ("tan(45)", "1"),
        ("asin(0.5)", "30"),
        ("acos(1)", "0"),
        ("atan(1)", "45"),
        ("ln(e)", "1"),
        ("log(1000)", "3"),
        ("log(8,2)", "3"),
        ("log(1,10)", "0"),
        ("sqrt(9)", "3"),
        ("sqrt(abs(-16))", "4"),
        ("abs(-3.5)", "3.5"),
        ("exp(1)", "2.71828182846"),
        ("1/3", "0.333333333333"),
        ("(2+3)*(4-1)", "15"),
        ("π+e", "5.85987448205"),
        ("-0.0000004", "-4e-7"),
        ("10000000000", "1e10"),
        ("6 ÷ 4 × 2", "3"),
        ("  2 +\t2 ", "4"),
    ],
)
def test_expressions(expression: str, expected: str) -> None:
    assert_success(expression, expected)


def test_radian_mode() -> None:
    assert_success("sin(pi/2)", "1", angle_mode=AngleMode.RAD)
    assert_success("cos(π)", "-1", angle_mode=AngleMode.RAD)
    assert_success("sin(pi)", "0", angle_mode=AngleMode.RAD)
    assert_success("atan(1)*4", "3.14159265359", angle_mode=AngleMode.RAD)


def test_angle_mode_does_not_affect_other_functions() -> None:
    assert_success("sqrt(16)+log(100)", "6", angle_mode=AngleMode.RAD)


def test_answer_register() -> None:
    assert_success("ANS+5", "5", last_answer=0.0)
    assert_success("ANS*3", "12", last_answer=4.0)
    assert_success("ans^2", "6.25", last_answer=-2.5)


def test_success_carries_the_raw_value() -> None:
    outcome = MathEngine.evaluate("ANS*3", AngleMode.DEG, 4.0)
    assert outcome == MathEngine.Success(12.0, "12")


@pytest.mark.parametrize(
    "expression",
    [
        "3.2!",
        "sin(30)!",
        "(-1)!",
        "171!",
        "tan(90)",
        "2/0",
        "1/(3-3)",
        "sqrt(-1)",
        "asin(2)",
        "acos(-2)",
        "log(1,1)",
        "log(0)",
        "ln(-1)",
        "10^400",
        "(-8)^(1/3)",
        "exp(1000)",
    ],
)
def test_math_errors(expression: str) -> None:
    assert_error(expression, ErrorKind.MATH)


@pytest.mark.parametrize(
    "expression",
    [
        "",
        "(1+2",
        "1+2)",
        "sin()",
        "1++2",
        "1**2",
        "2*",
        "foo(1)",
        "sin 30",
        "1e5",
        "1.2.3",
        "2 $ 3",
        "sqrt(1,2)",
    ],
)
def test_syntax_errors(expression: str) -> None:
    assert_error(expression, ErrorKind.SYNTAX)


@pytest.mark.parametrize("expression", ["2/0", "(1+2", "3.2!", "foo", "log(1,1)", "sqrt(1,2)"])
def test_errors_carry_a_known_code(expression: str) -> None:
    outcome = MathEngine.evaluate(expression)
    assert outcome.code in ERROR_MESSAGES
    assert outcome.message


def test_division_by_zero_code() -> None:
    assert MathEngine.evaluate("2/0").code == "3003"


def test_defaults_are_degrees_and_zero_answer() -> None:
    assert MathEngine.evaluate("sin(90)+ANS").formatted == "1"


def test_concurrent_calls_are_independent() -> None:
    expressions = [f"{n}!+ANS" for n in range(20)] * 5
    answers = [float(n) for n in range(100)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(lambda pair: MathEngine.evaluate(pair[0], AngleMode.DEG, pair[1]),
                                 zip(expressions, answers)))

    expected = [MathEngine.evaluate(e, AngleMode.DEG, a) for e, a in zip(expressions, answers)]
    assert outcomes == expected
