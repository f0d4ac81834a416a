import enum
from dataclasses import dataclass


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


class ErrorKind(PrintableEnum):
    INVALID_CHARACTER = enum.auto()
    MALFORMED_NUMBER = enum.auto()
    MISMATCHED_PARENTHESES = enum.auto()
    STACK_UNDERFLOW = enum.auto()
    MALFORMED_EXPRESSION = enum.auto()
    UNKNOWN_OPERATOR = enum.auto()
    NON_FINITE_RESULT = enum.auto()
    INCOMPLETE_EXPRESSION = enum.auto()
    EMPTY_EXPRESSION = enum.auto()


@dataclass
class CalcError(Exception):
    """Base for errors raised by the pipeline stages, caught at the api boundary"""

    errmsg: str
    kind: ErrorKind

    def __str__(self) -> str:
        return f"[{self.kind}] {self.errmsg}"
