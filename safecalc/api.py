"""Public evaluation API - turns raw text into a structured outcome without raising."""

from dataclasses import dataclass, field
from typing import Any

from safecalc.errors import CalcError, ErrorKind
from safecalc.formatting import format_number
from safecalc.logging_config import get_logger
from safecalc.parser import to_postfix
from safecalc.runtime import evaluate_postfix
from safecalc.tokenizer import TokenType, is_operator, tokenize

logger = get_logger("api")

EMPTY_EXPRESSION_REASON = "Empty expression"
INCOMPLETE_EXPRESSION_REASON = "Incomplete expression"
INVALID_EXPRESSION_REASON = "Invalid expression"
MATH_ERROR_REASON = "Math error (division by zero?)"


@dataclass(frozen=True)
class Success:
    value: float
    result: str
    ok: bool = field(default=True, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"ok": True, "result": self.result}


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    reason: str
    ok: bool = field(default=False, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"ok": False, "error": self.reason}


Outcome = Success | Failure


def evaluate(code: str, allow_partial: bool = False) -> Outcome:
    """Evaluate an arithmetic expression over + - * / and parentheses.

    Args:
        code: Raw user input, e.g. "(2+3)*4"
        allow_partial: Report an expression that ends with an operator or an
            opening bracket as incomplete instead of invalid (live preview
            while typing)

    Returns:
        Success with the numeric value and its display string, or Failure with
        the internal error kind and a user-facing reason. Structural errors
        all share the "Invalid expression" reason; only empty input, partial
        input and non-finite results get their own.
    """
    try:
        tokens = tokenize(code)
        if not tokens:
            return Failure(kind=ErrorKind.EMPTY_EXPRESSION, reason=EMPTY_EXPRESSION_REASON)

        last = tokens[-1]
        if allow_partial and (is_operator(last) or last.type is TokenType.BRACKET_OPEN):
            return Failure(kind=ErrorKind.INCOMPLETE_EXPRESSION, reason=INCOMPLETE_EXPRESSION_REASON)

        value = evaluate_postfix(to_postfix(tokens))
    except CalcError as e:
        logger.debug("Evaluation of %r failed: %s: %s", code, e.kind, e.errmsg)
        if e.kind is ErrorKind.NON_FINITE_RESULT:
            return Failure(kind=e.kind, reason=MATH_ERROR_REASON)
        return Failure(kind=e.kind, reason=INVALID_EXPRESSION_REASON)

    return Success(value=value, result=format_number(value))
