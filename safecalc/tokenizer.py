import enum
import re
from dataclasses import dataclass

from safecalc.errors import CalcError, ErrorKind, PrintableEnum


@dataclass
class TokenizerError(CalcError):
    code: str
    error_char_idx: int

    def __str__(self) -> str:
        print_start_idx = max(0, self.error_char_idx - 10)
        print_ellipsis_pre = print_start_idx > 0
        print_end_idx = min(len(self.code), self.error_char_idx + 10)
        print_ellipsis_post = print_end_idx < len(self.code)
        return "\n".join(
            [
                f"[Tokenizer error] {self.errmsg}",
                (
                    ("..." if print_ellipsis_pre else "")
                    + f"{self.code[print_start_idx:print_end_idx]}"
                    + ("..." if print_ellipsis_post else "")
                ),
                " " * (self.error_char_idx - print_start_idx + (3 if print_ellipsis_pre else 0)) + "^",
            ]
        )


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    UNARY_MINUS = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


OPERATOR_TOKEN_TYPES = frozenset(
    {
        TokenType.PLUS,
        TokenType.MINUS,
        TokenType.STAR,
        TokenType.SLASH,
        TokenType.UNARY_MINUS,
    }
)


def is_operator(token: Token) -> bool:
    return token.type in OPERATOR_TOKEN_TYPES


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
}

NUMBER_RE = re.compile(r"[0-9]+(\.[0-9]+)?|\.[0-9]+")
WHITESPACE_RE = re.compile(r"\s+")


def _is_valid_in_number(s: str) -> bool:
    return "0" <= s <= "9" or s == "."


def _is_unary_position(tokens: list[Token]) -> bool:
    return not tokens or tokens[-1].type is TokenType.BRACKET_OPEN or is_operator(tokens[-1])


def tokenize(code: str) -> list[Token]:
    """Whitespace is removed up front, so error indices refer to the compacted code"""
    code = WHITESPACE_RE.sub("", code)
    i = 0
    tokens: list[Token] = []
    while i < len(code):
        if _is_valid_in_number(code[i]):
            number_end_idx = i + 1
            while number_end_idx < len(code) and _is_valid_in_number(code[number_end_idx]):
                number_end_idx += 1
            lexeme = code[i:number_end_idx]
            if NUMBER_RE.fullmatch(lexeme) is None:
                raise TokenizerError(
                    f"Malformed number: {lexeme!r}",
                    kind=ErrorKind.MALFORMED_NUMBER,
                    code=code,
                    error_char_idx=i,
                )
            tokens.append(Token(type=TokenType.NUMBER, lexeme=lexeme))
            i = number_end_idx - 1  # to account for += 1 later
        elif code[i] in SINGLE_CHAR_TOKENS:
            token_type = SINGLE_CHAR_TOKENS[code[i]]
            if token_type is TokenType.MINUS and _is_unary_position(tokens):
                token_type = TokenType.UNARY_MINUS
            tokens.append(Token(type=token_type, lexeme=code[i]))
        else:
            raise TokenizerError(
                f"Unexpected character: {code[i]!r}",
                kind=ErrorKind.INVALID_CHARACTER,
                code=code,
                error_char_idx=i,
            )
        i += 1

    return tokens


def untokenize(tokens: list[Token]) -> str:
    # ( 1 + - 2 ) => (1 + -2)
    result = ""
    for i, token in enumerate(tokens):
        glued = (
            i == 0
            or tokens[i - 1].type in (TokenType.UNARY_MINUS, TokenType.BRACKET_OPEN)
            or token.type is TokenType.BRACKET_CLOSE
        )
        result += token.lexeme if glued else " " + token.lexeme
    return result
