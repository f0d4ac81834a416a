from dataclasses import dataclass

from safecalc.errors import CalcError, ErrorKind
from safecalc.tokenizer import Token, TokenType, is_operator, untokenize


@dataclass
class ParserError(CalcError):
    tokens: list[Token]
    error_token_idx: int

    def __str__(self) -> str:
        caret_idx = len(untokenize(self.tokens[: self.error_token_idx + 1])) - 1
        return "\n".join([f"Parser error: {self.errmsg}", untokenize(self.tokens), " " * max(caret_idx, 0) + "^"])


OPERATOR_PRECEDENCE = {
    TokenType.PLUS: 1,
    TokenType.MINUS: 1,
    TokenType.STAR: 2,
    TokenType.SLASH: 2,
    TokenType.UNARY_MINUS: 3,
}


def get_op_precedence(op: TokenType) -> int:
    return OPERATOR_PRECEDENCE[op]


def is_left_assoc(op: TokenType) -> bool:
    return op is not TokenType.UNARY_MINUS


def to_postfix(tokens: list[Token]) -> list[Token]:
    """Shunting-yard conversion of infix tokens into postfix (RPN) order.

    The operator stack keeps indices into ``tokens`` so that errors can point
    at the offending bracket.
    """
    output: list[Token] = []
    stack: list[int] = []
    for i, token in enumerate(tokens):
        if token.type is TokenType.NUMBER:
            output.append(token)
        elif token.type is TokenType.BRACKET_OPEN:
            stack.append(i)
        elif token.type is TokenType.BRACKET_CLOSE:
            while stack and tokens[stack[-1]].type is not TokenType.BRACKET_OPEN:
                output.append(tokens[stack.pop()])
            if not stack:
                raise ParserError(
                    "Closing bracket without a matching opening one",
                    kind=ErrorKind.MISMATCHED_PARENTHESES,
                    tokens=tokens,
                    error_token_idx=i,
                )
            stack.pop()
        elif is_operator(token):
            curr_precedence = get_op_precedence(token.type)
            while stack and is_operator(tokens[stack[-1]]):
                prev_precedence = get_op_precedence(tokens[stack[-1]].type)
                if prev_precedence > curr_precedence or (
                    prev_precedence == curr_precedence and is_left_assoc(token.type)
                ):
                    output.append(tokens[stack.pop()])
                else:
                    break
            stack.append(i)
        else:
            raise ParserError(
                f"Unexpected token {token}",
                kind=ErrorKind.UNKNOWN_OPERATOR,
                tokens=tokens,
                error_token_idx=i,
            )

    while stack:
        i = stack.pop()
        if tokens[i].type in (TokenType.BRACKET_OPEN, TokenType.BRACKET_CLOSE):
            raise ParserError(
                "Unclosed bracket",
                kind=ErrorKind.MISMATCHED_PARENTHESES,
                tokens=tokens,
                error_token_idx=i,
            )
        output.append(tokens[i])

    return output
