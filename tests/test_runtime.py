import math

import pytest

from safecalc.errors import ErrorKind
from safecalc.runtime import CalcRuntimeError, _divide, evaluate_postfix
from safecalc.tokenizer import Token, TokenType

PLUS = Token(TokenType.PLUS, "+")
MINUS = Token(TokenType.MINUS, "-")
STAR = Token(TokenType.STAR, "*")
SLASH = Token(TokenType.SLASH, "/")
NEG = Token(TokenType.UNARY_MINUS, "-")


def num(lexeme: str) -> Token:
    return Token(TokenType.NUMBER, lexeme)


@pytest.mark.parametrize(
    "postfix, expected",
    [
        pytest.param([num("4")], 4.0),
        pytest.param([num("4"), NEG], -4.0),
        pytest.param([num("7"), num("2"), MINUS], 5.0, id="operand-order-for-subtraction"),
        pytest.param([num("7"), num("2"), SLASH], 3.5, id="operand-order-for-division"),
        pytest.param([num("2"), num("3"), num("4"), STAR, PLUS], 14.0),
        pytest.param([num("0.1"), num("0.2"), PLUS], 0.1 + 0.2),
    ],
)
def test_evaluate_postfix(postfix: list[Token], expected: float) -> None:
    assert evaluate_postfix(postfix) == expected


@pytest.mark.parametrize(
    "postfix, expected_kind",
    [
        pytest.param([], ErrorKind.MALFORMED_EXPRESSION),
        pytest.param([num("1"), num("2")], ErrorKind.MALFORMED_EXPRESSION),
        pytest.param([NEG], ErrorKind.STACK_UNDERFLOW),
        pytest.param([num("1"), PLUS], ErrorKind.STACK_UNDERFLOW),
        pytest.param([num("2"), PLUS, num("3"), PLUS], ErrorKind.STACK_UNDERFLOW),
        pytest.param([num("1"), Token(TokenType.BRACKET_OPEN, "(")], ErrorKind.UNKNOWN_OPERATOR),
        pytest.param([num("5"), num("0"), SLASH], ErrorKind.NON_FINITE_RESULT),
        pytest.param([num("0"), num("0"), SLASH], ErrorKind.NON_FINITE_RESULT),
        pytest.param([num("9" * 400)], ErrorKind.NON_FINITE_RESULT, id="huge-literal"),
        pytest.param(
            [num("1" + "0" * 200), num("1" + "0" * 200), STAR, num("1" + "0" * 200), STAR],
            ErrorKind.NON_FINITE_RESULT,
            id="overflow-to-infinity",
        ),
    ],
)
def test_evaluate_postfix_errors(postfix: list[Token], expected_kind: ErrorKind) -> None:
    with pytest.raises(CalcRuntimeError) as exc_info:
        evaluate_postfix(postfix)
    assert exc_info.value.kind is expected_kind


def test_intermediate_infinity_may_vanish() -> None:
    # 1 / (1 / 0) = 1 / inf = 0, same as plain IEEE-754 arithmetic
    assert evaluate_postfix([num("1"), num("1"), num("0"), SLASH, SLASH]) == 0.0


@pytest.mark.parametrize(
    "a, b, expected",
    [
        pytest.param(1.0, 0.0, math.inf),
        pytest.param(-1.0, 0.0, -math.inf),
        pytest.param(1.0, -0.0, -math.inf),
        pytest.param(-1.0, -0.0, math.inf),
        pytest.param(6.0, 3.0, 2.0),
    ],
)
def test_divide_follows_ieee(a: float, b: float, expected: float) -> None:
    assert _divide(a, b) == expected


def test_divide_zero_by_zero_is_nan() -> None:
    assert math.isnan(_divide(0.0, 0.0))
