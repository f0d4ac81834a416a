import math
from typing import Callable

from safecalc.errors import CalcError, ErrorKind
from safecalc.tokenizer import Token, TokenType


class CalcRuntimeError(CalcError):
    pass


BinaryOperationImpl = Callable[[float, float], float]


def _divide(a: float, b: float) -> float:
    # IEEE-754 semantics instead of ZeroDivisionError
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


BINARY_OPERATION_IMPLS: dict[TokenType, BinaryOperationImpl] = {
    TokenType.PLUS: lambda a, b: a + b,
    TokenType.MINUS: lambda a, b: a - b,
    TokenType.STAR: lambda a, b: a * b,
    TokenType.SLASH: _divide,
}


def evaluate_postfix(tokens: list[Token]) -> float:
    stack: list[float] = []
    for token in tokens:
        if token.type is TokenType.NUMBER:
            stack.append(float(token.lexeme))
        elif token.type is TokenType.UNARY_MINUS:
            if not stack:
                raise CalcRuntimeError("Negation is missing its operand", kind=ErrorKind.STACK_UNDERFLOW)
            stack.append(-stack.pop())
        elif token.type in BINARY_OPERATION_IMPLS:
            if len(stack) < 2:
                raise CalcRuntimeError(f"{token.lexeme!r} needs two operands", kind=ErrorKind.STACK_UNDERFLOW)
            b = stack.pop()
            a = stack.pop()
            stack.append(BINARY_OPERATION_IMPLS[token.type](a, b))
        else:
            raise CalcRuntimeError(f"Unexpected token in postfix input: {token}", kind=ErrorKind.UNKNOWN_OPERATOR)

    if len(stack) != 1:
        raise CalcRuntimeError(
            f"Expected exactly one value after evaluation, got {len(stack)}",
            kind=ErrorKind.MALFORMED_EXPRESSION,
        )
    result = stack[0]
    if not math.isfinite(result):
        raise CalcRuntimeError(f"Result is not a finite number: {result}", kind=ErrorKind.NON_FINITE_RESULT)
    return result
