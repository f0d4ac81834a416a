"""In-memory model of the calculator keypad: input guards, live preview and history."""

import re
import time
from dataclasses import dataclass, field
from typing import Optional

from safecalc.api import Failure, Outcome, Success, evaluate
from safecalc.config import HISTORY_LIMIT
from safecalc.logging_config import get_logger

logger = get_logger("session")

OPERATOR_KEYS = "+-*/"
NUMBER_KEYS = "0123456789."
INPUT_KEYS = NUMBER_KEYS + OPERATOR_KEYS + "()"
CLEAR_KEYS = ("Escape", "AC")

_SEGMENT_SEPARATOR_RE = re.compile(r"[-+*/()]")


@dataclass(frozen=True)
class HistoryEntry:
    expr: str
    result: str
    ts: float = field(default_factory=time.time)


@dataclass
class Session:
    history_limit: int = HISTORY_LIMIT
    expression: str = ""
    last_result: str = ""
    error: str = ""
    preview: str = ""
    history: list[HistoryEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.history_limit < 1:
            raise ValueError(f"history_limit must be at least 1, got {self.history_limit}")

    def press(self, key: str) -> None:
        """Handle a single key, the way the keypad and keyboard feed input."""
        self.error = ""

        if key in CLEAR_KEYS:
            self.expression = ""
            self.last_result = ""
            self.preview = ""
            return

        if key == "Backspace":
            self.expression = self.expression[:-1]
            self._refresh_preview()
            return

        if key == "Enter":
            self.commit()
            return

        if len(key) != 1 or key not in INPUT_KEYS:
            return

        # After a result: a number starts over, an operator continues from it
        if self.last_result and not self.expression:
            if key in NUMBER_KEYS:
                self.last_result = ""
            elif key in OPERATOR_KEYS:
                self.expression = self.last_result
                self.last_result = ""

        if key in OPERATOR_KEYS:
            if not self.expression and key != "-":
                return
            if self.expression and self.expression[-1] in OPERATOR_KEYS:
                return

        if key == ".":
            segment = _SEGMENT_SEPARATOR_RE.split(self.expression)[-1]
            if "." in segment:
                return

        self.expression += key
        self._refresh_preview()

    def type_text(self, text: str) -> None:
        for key in text:
            self.press(key)

    def submit(self, text: str) -> Optional[Outcome]:
        """Replace the pending expression with ``text`` and commit it.

        A leading operator continues from the previous result.
        """
        text = text.strip()
        if text and text[0] in OPERATOR_KEYS and self.last_result:
            text = self.last_result + text
        self.expression = text
        return self.commit()

    def commit(self) -> Optional[Outcome]:
        if not self.expression.strip():
            return None

        outcome = evaluate(self.expression)
        if isinstance(outcome, Failure):
            self.error = outcome.reason
            return outcome

        logger.info("%s = %s", self.expression, outcome.result)
        self.last_result = outcome.result
        self.preview = ""
        self.history.insert(0, HistoryEntry(expr=self.expression, result=outcome.result))
        del self.history[self.history_limit :]
        self.expression = ""
        return outcome

    def reuse(self, index: int) -> None:
        """Append the result of a history entry to the current expression.

        Indices outside the history are ignored.
        """
        if not 0 <= index < len(self.history):
            return
        self.expression += self.history[index].result
        self.last_result = ""
        self.error = ""
        self._refresh_preview()

    def clear_history(self) -> None:
        self.history.clear()

    def _refresh_preview(self) -> None:
        if not self.expression.strip():
            self.preview = ""
            return
        outcome = evaluate(self.expression, allow_partial=True)
        # the previous preview stays on screen while the expression is incomplete
        if isinstance(outcome, Success):
            self.preview = outcome.result
